"""
Font Records and Locator
========================

A Font record identifies a font by file path or in-memory data and lazily
reads its names the first time it is loaded. The locator resolves a name
(a file, a directory of fonts, or an installed family) to Font records.
"""

import logging
import os
import threading
from enum import Enum
from pathlib import Path
from typing import IO

import yaml
from PIL import Image

from fontimg.core.exceptions import FontDirectoryError, FontLoadError, FontNotFoundError
from fontimg.core.models import REGULAR, FontStyle, FontVariant

from .family import FontFamily
from .models import FontMetadata
from .system import SystemFontIndex, default_index
from .utils import is_font_file, parse_style, title_case

logger = logging.getLogger(__name__)


class LoadState(Enum):
    """Whether a Font record has read its name table yet."""

    UNLOADED = "unloaded"
    LOADED = "loaded"


class Font:
    """
    A font to preview.

    Exactly one of ``buf`` and ``path`` is used as the source; ``buf`` wins
    when both are set. ``name``, ``style`` and ``sample_text`` are filled
    from the font's name table on the first successful :meth:`load`.
    """

    def __init__(
        self,
        buf: bytes | None = None,
        path: str = "",
        family: str = "",
        style: str = "",
        index: int = 0,
    ):
        self.buf = buf
        self.path = str(path) if path else ""
        self.family = family
        self.name = ""
        self.style = style
        self.sample_text = ""
        self.index = index
        self._lock = threading.Lock()
        self._state = LoadState.UNLOADED

    @classmethod
    def from_path(cls, path: str | Path) -> "Font":
        """Create a font record for a file, named after the file stem."""
        return cls.from_bytes(None, path)

    @classmethod
    def from_bytes(cls, buf: bytes | None, path: str | Path = "") -> "Font":
        """Create a font record from in-memory data (path is informational)."""
        return cls(buf=buf, path=str(path) if path else "", family=title_case(Path(path).stem))

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def loaded(self) -> bool:
        return self._state is LoadState.LOADED

    def best_name(self) -> str:
        """Return the name from the font's name table, else the family."""
        if self.name:
            return self.name
        return self.family

    def __str__(self) -> str:
        name = self.best_name()
        if self.style:
            name += f" ({self.style})"
        return f"{name!r}: {self.path}"

    def __repr__(self) -> str:
        return f"Font(path={self.path!r}, family={self.family!r}, style={self.style!r})"

    def summary(self) -> dict[str, str]:
        """Short description of the font for reports."""
        return {"path": self.path, "family": self.best_name(), "style": self.style}

    def write_yaml(self, stream: IO[str]) -> None:
        """Write the summary as a YAML document."""
        yaml.safe_dump(
            self.summary(), stream, explicit_start=True, sort_keys=False, allow_unicode=True
        )

    def load(self, style: FontStyle = REGULAR) -> FontFamily:
        """
        Load the font data for a style.

        Args:
            style: Style the loaded font is registered under

        Returns:
            A FontFamily holding the parsed font

        Raises:
            FontLoadError: Neither buf nor path is set
        """
        family = FontFamily(self.family)
        if self.buf is not None:
            family.load_font(self.buf, self.index, style)
        elif self.path:
            family.load_font_file(self.path, style, self.index)
        else:
            raise FontLoadError()

        self._extract_names(family, style)
        return family

    def ensure_loaded(self, style: FontStyle = REGULAR) -> "Font":
        """Read the name table if that has not happened yet."""
        if not self.loaded:
            self.load(style)
        return self

    def _extract_names(self, family: FontFamily, style: FontStyle) -> None:
        """Populate name, style and sample text exactly once."""
        if self._state is LoadState.LOADED:
            return
        with self._lock:
            if self._state is LoadState.LOADED:
                return
            names = family.names(style)
            if names.family:
                self.name = names.family
            if names.subfamily:
                self.style = str(parse_style(names.subfamily))
            if names.sample_text:
                self.sample_text = names.sample_text
            self._state = LoadState.LOADED
            source = self.path or "<buffer>"
            logger.debug(f"Read names for {source}: {self.best_name()} {self.style}")

    def rasterize(
        self,
        template=None,
        size: int = 48,
        style: FontStyle = REGULAR,
        variant: FontVariant = FontVariant.NORMAL,
        fg: str | tuple = "black",
        bg: str | tuple = "white",
        dpi: float = 100.0,
        margin: float = 5.0,
    ) -> Image.Image:
        """Render a preview image of the font; see :func:`fontimg.renderer.rasterize`."""
        from fontimg.renderer import rasterize

        return rasterize(self, template, size, style, variant, fg, bg, dpi, margin)


def new_font(metadata: FontMetadata) -> Font:
    """Create a font record for an indexed system font."""
    family = metadata.family
    if not family:
        family = title_case(Path(metadata.path).stem)
    return Font(path=metadata.path, family=family, style=str(metadata.style), index=metadata.index)


def match_font(
    name: str, style: FontStyle = REGULAR, index: SystemFontIndex | None = None
) -> Font | None:
    """Create a font record for the installed font best matching a name."""
    if index is None:
        index = default_index()
    metadata = index.match(name, style)
    if metadata is None:
        return None
    return new_font(metadata)


def _scan_directory(path: str) -> list[Font]:
    try:
        with os.scandir(path) as entries:
            names = [entry.name for entry in entries if not entry.is_dir(follow_symlinks=False)]
    except OSError as e:
        raise FontDirectoryError(path, e) from e

    fonts = [Font.from_path(os.path.join(path, name)) for name in names if is_font_file(name)]
    fonts.sort(key=lambda font: font.family.lower())
    return fonts


def open_fonts(
    name: str | Path, style: FontStyle = REGULAR, index: SystemFontIndex | None = None
) -> list[Font]:
    """
    Locate fonts by file path, directory or installed family name.

    Args:
        name: A font file, a directory of fonts (not searched recursively)
            or a family/style query for the system font index
        style: Style used when matching installed fonts
        index: Index of installed fonts; the process-wide default index is
            built on first use when omitted

    Returns:
        A non-empty list of font records

    Raises:
        FontNotFoundError: Nothing matched
        FontDirectoryError: The directory could not be read
    """
    name = str(name)
    fonts: list[Font] = []

    if os.path.isdir(name):
        fonts = _scan_directory(name)
        logger.debug(f"Found {len(fonts)} fonts in {name}")
    elif os.path.exists(name):
        fonts = [Font.from_path(name)]
    else:
        font = match_font(name, style, index)
        if font is not None:
            fonts.append(font)

    if not fonts:
        raise FontNotFoundError(name)
    return fonts
