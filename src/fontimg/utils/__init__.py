"""Utility functions for preview text and image generation."""

from .canvas import Canvas, Context, Rect, TextBox, rectangle
from .image_ops import encode_png, parse_color, save_png
from .text_rendering import DEFAULT_TEMPLATE, break_lines, new_template, render_lines

__all__ = [
    "DEFAULT_TEMPLATE",
    "Canvas",
    "Context",
    "Rect",
    "TextBox",
    "break_lines",
    "encode_png",
    "new_template",
    "parse_color",
    "rectangle",
    "render_lines",
    "save_png",
]
