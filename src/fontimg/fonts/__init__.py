"""Font Management Module
======================

This module locates fonts (by path, directory or installed family name),
loads them and reads their names for preview rendering.
"""

from .family import Face, FontFamily
from .manager import Font, LoadState, match_font, new_font, open_fonts
from .models import FontMetadata
from .system import SystemFontIndex, default_font_dirs, default_index
from .utils import is_font_file, parse_style, title_case

__all__ = [
    "Face",
    "Font",
    "FontFamily",
    "FontMetadata",
    "LoadState",
    "SystemFontIndex",
    "default_font_dirs",
    "default_index",
    "is_font_file",
    "match_font",
    "new_font",
    "open_fonts",
    "parse_style",
    "title_case",
]
