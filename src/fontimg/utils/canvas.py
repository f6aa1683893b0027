"""
Drawing surface for preview images.

Draw calls are recorded in millimetre coordinates (y grows downwards) and
only turned into pixels by :meth:`Canvas.rasterize`. Items are painted in
z-index order, so something drawn late with a low z-index ends up behind
earlier items.
"""

import logging
import math
from dataclasses import dataclass

from PIL import Image, ImageDraw

from fontimg.fonts.family import MM_PER_INCH, Face

from .image_ops import parse_color

logger = logging.getLogger(__name__)

DEFAULT_MODE = "RGBA"


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in millimetres."""

    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    def translate(self, dx: float, dy: float) -> "Rect":
        return Rect(self.x0 + dx, self.y0 + dy, self.x1 + dx, self.y1 + dy)

    def union(self, other: "Rect") -> "Rect":
        return Rect(
            min(self.x0, other.x0),
            min(self.y0, other.y0),
            max(self.x1, other.x1),
            max(self.y1, other.y1),
        )


def rectangle(width: float, height: float) -> Rect:
    """A rectangle path with its top-left corner at the origin."""
    return Rect(0.0, 0.0, width, height)


def _pixels(mm: float, resolution: float) -> int:
    # half pixels round up, so a full-canvas path covers every pixel
    return math.floor(mm * resolution + 0.5)


class TextBox:
    """A single line of text set in one face, anchored at its top-left corner."""

    def __init__(self, face: Face, text: str):
        self.face = face
        self.text = text
        self.width, self.height = face.measure(text)
        # raised text starts above the anchor
        self.top = min(0.0, face.baseline_offset())

    def bounds(self) -> Rect:
        return Rect(0.0, self.top, self.width, self.top + self.height)


@dataclass
class _Item:
    z_index: int
    order: int
    x: float
    y: float
    fill: str | tuple
    text: TextBox | None = None
    path: Rect | None = None

    def bounds(self) -> Rect:
        shape = self.text.bounds() if self.text is not None else self.path
        return shape.translate(self.x, self.y)


class Canvas:
    """A resizable drawing surface."""

    def __init__(self, width: float = 100.0, height: float = 100.0):
        self.width = width
        self.height = height
        self._items: list[_Item] = []

    def __len__(self) -> int:
        return len(self._items)

    def _add(self, item: _Item) -> None:
        item.order = len(self._items)
        self._items.append(item)

    def bounds(self) -> Rect:
        """Union of everything drawn so far (empty rect at the origin when blank)."""
        if not self._items:
            return Rect(0.0, 0.0, 0.0, 0.0)
        bounds = self._items[0].bounds()
        for item in self._items[1:]:
            bounds = bounds.union(item.bounds())
        return bounds

    def fit(self, margin: float) -> None:
        """Resize the canvas to the drawn content plus a margin on every side."""
        bounds = self.bounds()
        dx, dy = margin - bounds.x0, margin - bounds.y0
        for item in self._items:
            item.x += dx
            item.y += dy
        self.width = bounds.width + 2 * margin
        self.height = bounds.height + 2 * margin

    def size(self) -> tuple[float, float]:
        return self.width, self.height

    def rasterize(self, dpi: float, mode: str = DEFAULT_MODE) -> Image.Image:
        """
        Paint the canvas into a new image.

        Args:
            dpi: Output resolution in dots per inch
            mode: Pillow image mode of the result

        Returns:
            The rendered image
        """
        resolution = dpi / MM_PER_INCH  # pixels per millimetre
        width = _pixels(self.width, resolution)
        height = _pixels(self.height, resolution)
        image = Image.new(mode, (max(width, 1), max(height, 1)))
        draw = ImageDraw.Draw(image)

        for item in sorted(self._items, key=lambda i: (i.z_index, i.order)):
            x, y = item.x * resolution, item.y * resolution
            if item.path is not None:
                path = item.path.translate(item.x, item.y)
                box = [
                    _pixels(path.x0, resolution),
                    _pixels(path.y0, resolution),
                    _pixels(path.x1, resolution) - 1,
                    _pixels(path.y1, resolution) - 1,
                ]
                if box[2] >= box[0] and box[3] >= box[1]:
                    draw.rectangle(box, fill=parse_color(item.fill, mode))
            else:
                face = item.text.face
                draw.text(
                    (x, y + face.baseline_shift(dpi)),
                    item.text.text,
                    font=face.pil_font(dpi),
                    fill=parse_color(face.fill, mode),
                    anchor="la",
                    features=face.features,
                )

        logger.debug(f"Rasterized {len(self._items)} items into {image.size[0]}x{image.size[1]}")
        return image


class Context:
    """Drawing state (fill color and z-index) for a canvas."""

    def __init__(self, canvas: Canvas):
        self.canvas = canvas
        self.fill: str | tuple = "black"
        self.z_index = 0
        self._closed = False

    def set_fill_color(self, color: str | tuple) -> None:
        self.fill = color

    def set_z_index(self, z_index: int) -> None:
        self.z_index = z_index

    def size(self) -> tuple[float, float]:
        return self.canvas.size()

    def draw_text(self, x: float, y: float, text: TextBox) -> None:
        self._check_open()
        self.canvas._add(_Item(self.z_index, 0, x, y, self.fill, text=text))

    def draw_path(self, x: float, y: float, path: Rect) -> None:
        self._check_open()
        self.canvas._add(_Item(self.z_index, 0, x, y, self.fill, path=path))

    def close(self) -> None:
        self._closed = True

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("drawing context is closed")
