"""
Font Utilities
==============

Utility functions for font file detection, name-table extraction, style
parsing and family-name normalization.
"""

import io
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from fontTools.ttLib import TTCollection, TTFont

from fontimg.core.exceptions import InvalidStyleError
from fontimg.core.models import FontStyle, FontWeight

logger = logging.getLogger(__name__)

# Recognized font file extensions
FONT_EXTENSION_RE = re.compile(r"\.(ttf|ttc|otf|woff|woff2|sfnt)$", re.IGNORECASE)

COLLECTION_EXTENSIONS = {".ttc", ".otc"}

WEB_FONT_SIGNATURES = (b"wOFF", b"wOF2")

# OpenType name table IDs
NAME_FONT_FAMILY = 1
NAME_FONT_SUBFAMILY = 2
NAME_FULL_NAME = 4
NAME_SAMPLE_TEXT = 19

_SPACE_RE = re.compile(r"\s+")

# Longer keywords first so "semibold" is not read as "bold"
_WEIGHT_KEYWORDS = [
    ("extralight", FontWeight.EXTRA_LIGHT),
    ("ultralight", FontWeight.EXTRA_LIGHT),
    ("extrabold", FontWeight.EXTRA_BOLD),
    ("ultrabold", FontWeight.EXTRA_BOLD),
    ("semibold", FontWeight.SEMI_BOLD),
    ("demibold", FontWeight.SEMI_BOLD),
    ("hairline", FontWeight.THIN),
    ("regular", FontWeight.REGULAR),
    ("normal", FontWeight.REGULAR),
    ("medium", FontWeight.MEDIUM),
    ("heavy", FontWeight.BLACK),
    ("black", FontWeight.BLACK),
    ("light", FontWeight.LIGHT),
    ("thin", FontWeight.THIN),
    ("bold", FontWeight.BOLD),
    ("book", FontWeight.REGULAR),
    ("roman", FontWeight.REGULAR),
]

_ITALIC_KEYWORDS = ("italic", "oblique", "slanted", "inclined")


@dataclass
class FontNames:
    """Strings read from a font's name table."""

    family: str | None = None
    subfamily: str | None = None
    full_name: str | None = None
    sample_text: str | None = None


def is_font_file(name: str | Path) -> bool:
    """Report whether a file name carries a recognized font extension."""
    return FONT_EXTENSION_RE.search(str(name)) is not None


def normalize_family(name: str) -> str:
    """Return a normalised font family key suitable for lookups."""
    return "".join(ch for ch in name.casefold() if ch not in {" ", "-", "_"})


def title_case(name: str) -> str:
    """
    Turn a file stem such as ``"myFontName123"`` into ``"My Font Name"``.

    Spaces are inserted at lowercase-to-uppercase boundaries and before a
    capital that follows a capital when the next character is lowercase
    (``"ABCWord"`` becomes ``"ABC Word"``). Non-letters become spaces,
    whitespace is collapsed and the first letter of every word is
    upper-cased.
    """
    chars = list(name)
    out: list[str] = []
    prev = ""
    for i, c in enumerate(chars):
        if prev.islower() and c.isupper():
            out.append(" ")
        elif not c.isalpha():
            c = " "
        following = chars[i + 1] if i + 1 < len(chars) else ""
        if prev.isupper() and c.isupper() and following.islower():
            out.append(" ")
        out.append(c)
        prev = c
    words = _SPACE_RE.sub(" ", "".join(out).strip()).split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def parse_style(style_name: str | None, strict: bool = False) -> FontStyle:
    """
    Parse a subfamily or style name into a FontStyle.

    Args:
        style_name: Name such as "Bold Italic", "SemiBold" or "Light Oblique"
        strict: Raise InvalidStyleError when nothing in the name is recognized

    Returns:
        Parsed FontStyle; unrecognized names map to Regular unless strict
    """
    compact = re.sub(r"[\s_\-]+", "", (style_name or "").casefold())

    italic = any(keyword in compact for keyword in _ITALIC_KEYWORDS)
    weight = None
    for keyword, weight_value in _WEIGHT_KEYWORDS:
        if keyword in compact:
            weight = weight_value
            break

    if strict and compact and weight is None and not italic:
        raise InvalidStyleError(style_name)

    return FontStyle(weight or FontWeight.REGULAR, italic)


def _get_font_name(name_table, name_id: int) -> str | None:
    """Extract a name string from the name table, preferring English."""
    for record in name_table.names:
        if record.nameID == name_id and record.langID in (0, 1033):
            return record.toUnicode()

    for record in name_table.names:
        if record.nameID == name_id:
            return record.toUnicode()

    return None


def read_font_names(font: TTFont) -> FontNames:
    """Read family, subfamily, full name and sample text from a parsed font."""
    if "name" not in font:
        return FontNames()
    name_table = font["name"]
    return FontNames(
        family=_get_font_name(name_table, NAME_FONT_FAMILY),
        subfamily=_get_font_name(name_table, NAME_FONT_SUBFAMILY),
        full_name=_get_font_name(name_table, NAME_FULL_NAME),
        sample_text=_get_font_name(name_table, NAME_SAMPLE_TEXT),
    )


def open_ttfont(source: bytes | str | Path, font_number: int = 0) -> TTFont:
    """Open a font (or one face of a collection) with fontTools."""
    if isinstance(source, bytes):
        return TTFont(io.BytesIO(source), fontNumber=font_number, lazy=True)
    return TTFont(str(source), fontNumber=font_number, lazy=True)


def get_font_info(font_path: str | Path) -> list[dict]:
    """
    Extract name-table information for every face in a font file.

    Args:
        font_path: Path to a font file or collection

    Returns:
        One dictionary per face with name, family, style and index keys
    """
    font_path = Path(font_path)
    if font_path.suffix.lower() in COLLECTION_EXTENSIONS:
        container = TTCollection(str(font_path), lazy=True)
        faces = list(container.fonts)
    else:
        container = TTFont(str(font_path), lazy=True)
        faces = [container]

    # faces of a collection share one file handle
    info = []
    with container:
        for index, face in enumerate(faces):
            names = read_font_names(face)
            info.append(
                {
                    "name": names.full_name or names.family or font_path.stem,
                    "family": names.family or "",
                    "style": parse_style(names.subfamily),
                    "index": index,
                }
            )
    return info


def to_sfnt(data: bytes) -> bytes:
    """Return plain SFNT data, decompressing WOFF and WOFF2 payloads."""
    if data[:4] not in WEB_FONT_SIGNATURES:
        return data

    font = TTFont(io.BytesIO(data))
    font.flavor = None
    output = io.BytesIO()
    font.save(output)
    logger.debug(f"Decompressed web font ({len(data)} -> {output.tell()} bytes)")
    return output.getvalue()
