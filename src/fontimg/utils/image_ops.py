"""Image helpers: color parsing and PNG encoding."""

import io
import logging
from pathlib import Path

from PIL import Image, ImageColor

from fontimg.core.exceptions import InvalidColorError

logger = logging.getLogger(__name__)

Color = str | tuple[int, ...]


def parse_color(color: Color, mode: str = "RGBA") -> tuple[int, ...] | int:
    """
    Convert a color specification to a pixel value for an image mode.

    Args:
        color: Color name, hex/rgb()/hsl() string, or an RGB(A) tuple
        mode: Target Pillow image mode

    Returns:
        Pixel value suitable for ImageDraw fills in ``mode``
    """
    if isinstance(color, tuple):
        if mode == "RGBA" and len(color) == 3:
            return (*color, 255)
        return color
    try:
        return ImageColor.getcolor(color, mode)
    except (ValueError, AttributeError) as e:
        raise InvalidColorError(str(color)) from e


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def save_png(image: Image.Image, output_path: str | Path) -> Path:
    """Write an image to a PNG file, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(encode_png(image))
    logger.info(f"Saved {image.size[0]}x{image.size[1]} image to {output_path}")
    return output_path
