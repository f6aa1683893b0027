"""Custom exceptions for the font preview system."""

from typing import Any


class FontImgError(Exception):
    """Base exception for all fontimg errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class ValidationError(FontImgError):
    """Exception raised for input validation errors."""


class ConfigurationError(FontImgError):
    """Exception raised for configuration errors."""


class FontNotFoundError(FontImgError):
    """Exception raised when no font can be located for a name."""

    def __init__(self, name: str):
        super().__init__(f"unable to locate font {name!r}", details={"name": name})
        self.name = name


class FontDirectoryError(FontImgError):
    """Exception raised when a font directory cannot be read."""

    def __init__(self, path: str, error: Exception):
        super().__init__(f"unable to open directory {path!r}: {error}", details={"path": path})
        self.path = path


class FontLoadError(FontImgError):
    """Exception raised when a font record has no source to load from."""

    def __init__(self):
        super().__init__("font buffer and path not set")


class InvalidStyleError(ValidationError):
    """Exception raised for an unknown font style name."""

    def __init__(self, style: str):
        super().__init__(f"Invalid font style: {style}")


class InvalidVariantError(ValidationError):
    """Exception raised for an unknown font variant name."""

    def __init__(self, variant: str):
        super().__init__(f"Invalid font variant: {variant}")


class InvalidColorError(ValidationError):
    """Exception raised for a color specification Pillow cannot parse."""

    def __init__(self, color: str):
        super().__init__(f"Invalid color: {color}")
