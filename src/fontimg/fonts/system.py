"""
System Font Index
=================

Index of the fonts installed on the local machine. The index is built once
by scanning the standard font directories and is read-only afterwards, so a
single instance can be shared between callers and threads.
"""

import logging
import os
import platform
import threading
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import ClassVar

from fontimg.core.exceptions import ConfigurationError
from fontimg.core.models import REGULAR, FontStyle

from .models import FontMetadata
from .utils import get_font_info, is_font_file, normalize_family

logger = logging.getLogger(__name__)


def default_font_dirs(system: str | None = None) -> list[Path]:
    """Get system font directories based on operating system."""
    system = (system or platform.system()).lower()
    directories = []

    if system == "windows":
        directories.extend(
            [
                Path(os.environ.get("WINDIR", "C:\\Windows")) / "Fonts",
                Path(os.environ.get("LOCALAPPDATA", "")) / "Microsoft" / "Windows" / "Fonts",
            ]
        )

    elif system == "darwin":  # macOS
        directories.extend(
            [
                Path("/System/Library/Fonts"),
                Path("/Library/Fonts"),
                Path.home() / "Library" / "Fonts",
            ]
        )

    else:  # Linux and other Unix-like systems
        data_home = os.environ.get("XDG_DATA_HOME")
        data_dir = Path(data_home) if data_home else Path.home() / ".local" / "share"
        directories.extend(
            [
                Path("/usr/share/fonts"),
                Path("/usr/local/share/fonts"),
                Path.home() / ".fonts",
                data_dir / "fonts",
            ]
        )

    # Filter to existing directories
    return [d for d in directories if d.exists() and d.is_dir()]


class SystemFontIndex:
    """
    Read-only index of installed fonts keyed by family and style.

    Build one with :meth:`build` (or construct it from metadata records) and
    pass it to the locator explicitly.
    """

    GENERIC_FAMILIES: ClassVar[dict[str, list[str]]] = {
        "serif": ["DejaVu Serif", "Times New Roman", "Times", "Liberation Serif", "Noto Serif"],
        "sans-serif": ["DejaVu Sans", "Arial", "Helvetica", "Liberation Sans", "Noto Sans"],
        "monospace": [
            "DejaVu Sans Mono",
            "Courier New",
            "Courier",
            "Liberation Mono",
            "Noto Sans Mono",
        ],
        "cursive": ["Comic Sans MS", "Comic Neue", "URW Chancery L", "Apple Chancery"],
        "fantasy": ["Impact", "Papyrus", "Luminari"],
        "system-ui": ["Segoe UI", "San Francisco", "Cantarell", "Ubuntu", "DejaVu Sans"],
    }

    def __init__(self, fonts: Iterable[FontMetadata] = ()):
        self._families: dict[str, dict[FontStyle, FontMetadata]] = {}
        self._names: dict[str, FontMetadata] = {}
        self._generics = {
            normalize_family(generic): candidates
            for generic, candidates in self.GENERIC_FAMILIES.items()
        }

        for font in fonts:
            styles = self._families.setdefault(normalize_family(font.family), {})
            # first font seen for a family/style wins
            styles.setdefault(font.style, font)
            if font.name:
                self._names.setdefault(normalize_family(font.name), font)

        logger.debug(f"SystemFontIndex holds {len(self._families)} families")

    @classmethod
    def build(cls, font_dirs: Iterable[str | Path] | None = None) -> "SystemFontIndex":
        """
        Scan font directories recursively and build an index.

        Args:
            font_dirs: Directories to scan; defaults to the platform font directories

        Returns:
            The populated index
        """
        directories = [Path(d) for d in font_dirs] if font_dirs is not None else default_font_dirs()
        logger.debug(f"Font directories: {directories}")

        fonts: list[FontMetadata] = []
        for font_dir in directories:
            fonts.extend(cls._scan_font_directory(font_dir))

        logger.info(f"Indexed {len(fonts)} system fonts from {len(directories)} directories")
        return cls(fonts)

    @staticmethod
    def _scan_font_directory(font_dir: Path) -> list[FontMetadata]:
        """Scan a font directory for font files."""
        fonts = []

        try:
            font_files = sorted(p for p in font_dir.rglob("*") if is_font_file(p.name))
        except PermissionError:
            logger.debug(f"Permission denied accessing {font_dir}")
            return fonts
        except OSError as e:
            logger.warning(f"Error scanning {font_dir}: {e}")
            return fonts

        for font_file in font_files:
            if not font_file.is_file():
                continue
            try:
                for info in get_font_info(font_file):
                    fonts.append(
                        FontMetadata(
                            path=str(font_file),
                            family=info["family"],
                            style=info["style"],
                            name=info["name"],
                            index=info["index"],
                        )
                    )
            except Exception as e:
                # unreadable or corrupt files are left out of the index
                logger.debug(f"Failed to process font {font_file}: {e}")

        return fonts

    def match(self, name: str, style: FontStyle = REGULAR) -> FontMetadata | None:
        """
        Find the installed font that best matches a family name and style.

        Args:
            name: Family name, full font name or generic family (e.g. "sans-serif")
            style: Requested style

        Returns:
            FontMetadata if found, None otherwise
        """
        key = normalize_family(name)

        styles = self._families.get(key)
        if styles:
            if style in styles:
                return styles[style]
            return min(styles.values(), key=lambda md: (style.distance(md.style), md.style.weight))

        if key in self._names:
            return self._names[key]

        for candidate in self._generics.get(key, []):
            font = self.match(candidate, style)
            if font is not None:
                logger.debug(f"Using {font.family} for generic family {name}")
                return font

        return None

    def families(self) -> list[str]:
        """List the indexed family names."""
        names = {font.family for styles in self._families.values() for font in styles.values()}
        return sorted(names, key=str.lower)

    def fonts(self, family: str) -> list[FontMetadata]:
        """List the indexed fonts of one family, ordered by weight then italic."""
        styles = self._families.get(normalize_family(family), {})
        return sorted(styles.values(), key=lambda md: (md.style.weight, md.style.italic))

    def __len__(self) -> int:
        return sum(len(styles) for styles in self._families.values())

    def __iter__(self) -> Iterator[FontMetadata]:
        for styles in self._families.values():
            yield from styles.values()

    def __contains__(self, name: str) -> bool:
        return normalize_family(name) in self._families


_default_lock = threading.Lock()
_default_outcome: SystemFontIndex | Exception | None = None


def default_index() -> SystemFontIndex:
    """
    Return the process-wide index of the platform font directories.

    The index is built on first use, at most once per process. The outcome of
    that build is kept. After a failure every caller gets a new
    ConfigurationError chained to the original exception.
    """
    global _default_outcome

    with _default_lock:
        if _default_outcome is None:
            try:
                _default_outcome = SystemFontIndex.build()
            except Exception as e:
                logger.exception("Failed to build the system font index")
                _default_outcome = e

    if isinstance(_default_outcome, Exception):
        raise ConfigurationError(
            "system font index unavailable", details={"error": str(_default_outcome)}
        ) from _default_outcome
    return _default_outcome
