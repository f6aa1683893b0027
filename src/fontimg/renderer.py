"""
Preview Rasterizer
==================

Renders a font preview: the font's name, style and sample text laid out
one line under another on a background sized to fit the text.
"""

import logging
from typing import TYPE_CHECKING

from jinja2 import Template
from PIL import Image

from fontimg.core.models import REGULAR, FontStyle, FontVariant, TemplateData
from fontimg.utils.canvas import Canvas, Context, TextBox, rectangle
from fontimg.utils.image_ops import Color
from fontimg.utils.text_rendering import render_lines

if TYPE_CHECKING:
    from fontimg.fonts.manager import Font

logger = logging.getLogger(__name__)


def rasterize(
    font: "Font",
    template: Template | None = None,
    size: int = 48,
    style: FontStyle = REGULAR,
    variant: FontVariant = FontVariant.NORMAL,
    fg: Color = "black",
    bg: Color = "white",
    dpi: float = 100.0,
    margin: float = 5.0,
) -> Image.Image:
    """
    Rasterize a preview image of a font.

    Args:
        font: Font record to render
        template: Compiled text template; the built-in template when None
        size: Base font size in points
        style: Style to load and draw
        variant: Typographic variant of the text
        fg: Text color
        bg: Background color
        dpi: Output resolution in dots per inch
        margin: Space around the text in millimetres

    Returns:
        RGBA image of the preview

    Any failure (loading, template, drawing) propagates; no partial image is
    returned.
    """
    family = font.load(style)

    lines = render_lines(
        template,
        TemplateData(
            size=size,
            name=font.best_name(),
            style=font.style,
            sample_text=font.sample_text,
        ),
    )

    canvas = Canvas(100, 100)
    ctx = Context(canvas)
    ctx.set_z_index(1)
    ctx.set_fill_color(fg)

    y = 0.0
    for line in lines:
        face = family.face(line.size, fg, style, variant, dpi)
        text = TextBox(face, line.text)
        ctx.draw_text(0, y - text.top, text)
        y += text.height

    canvas.fit(margin)

    # drawn last, painted first
    ctx.set_z_index(-1)
    ctx.set_fill_color(bg)
    width, height = ctx.size()
    ctx.draw_path(0, 0, rectangle(width, height))
    ctx.close()

    image = canvas.rasterize(dpi)
    logger.info(
        f"Rendered {font.best_name()!r} ({len(lines)} lines) at {image.width}x{image.height}"
    )
    return image
