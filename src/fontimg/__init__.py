"""fontimg
=======

Preview images of font files (ttf, otf, woff, ...): the font's family name,
style and sample text rendered onto a fitted canvas.
"""

__version__ = "1.0.0"

from .core.config import RenderConfig
from .core.exceptions import FontImgError, FontLoadError, FontNotFoundError
from .core.models import FontStyle, FontVariant, TemplateData
from .fonts import Font, SystemFontIndex, open_fonts, title_case
from .renderer import rasterize
from .utils.text_rendering import break_lines, new_template

__all__ = [
    "Font",
    "FontImgError",
    "FontLoadError",
    "FontNotFoundError",
    "FontStyle",
    "FontVariant",
    "RenderConfig",
    "SystemFontIndex",
    "TemplateData",
    "break_lines",
    "new_template",
    "open_fonts",
    "rasterize",
    "title_case",
]
