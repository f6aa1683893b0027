"""Core components for font preview rendering."""

from .config import RenderConfig
from .exceptions import (
    ConfigurationError,
    FontDirectoryError,
    FontImgError,
    FontLoadError,
    FontNotFoundError,
    ValidationError,
)
from .models import (
    BOLD,
    BOLD_ITALIC,
    ITALIC,
    REGULAR,
    FontStyle,
    FontVariant,
    FontWeight,
    Line,
    TemplateData,
)

__all__ = [
    "BOLD",
    "BOLD_ITALIC",
    "ITALIC",
    "REGULAR",
    "ConfigurationError",
    "FontDirectoryError",
    "FontImgError",
    "FontLoadError",
    "FontNotFoundError",
    "FontStyle",
    "FontVariant",
    "FontWeight",
    "Line",
    "RenderConfig",
    "TemplateData",
    "ValidationError",
]
