"""
Loaded font families and sized faces.

A FontFamily holds the parsed font data for one or more styles. A Face is
one style of a family at a given size, color and variant, and knows how to
measure text and produce the Pillow font used to draw it.
"""

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path

from fontTools.ttLib import TTFont
from PIL import ImageFont, features

from fontimg.core.models import REGULAR, FontStyle, FontVariant

from .utils import FontNames, open_ttfont, read_font_names, to_sfnt

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4

# Size and baseline shift (in em of the scaled face) for sub/superscript
SCRIPT_SCALE = 0.583
SUBSCRIPT_SHIFT = 0.33
SUPERSCRIPT_SHIFT = -0.33


def has_raqm() -> bool:
    """Report whether Pillow was built with the raqm shaping library."""
    return bool(features.check_feature("raqm"))


@dataclass
class LoadedFont:
    """Raw SFNT data for one style of a family."""

    data: bytes
    index: int = 0


@dataclass
class Face:
    """One style of a font family at a fixed size."""

    font: LoadedFont
    size: float  # points
    fill: str | tuple = "black"
    style: FontStyle = REGULAR
    variant: FontVariant = FontVariant.NORMAL
    dpi: float = POINTS_PER_INCH
    _fonts: dict = field(default_factory=dict, repr=False)

    @property
    def scaled_size(self) -> float:
        """Point size after applying the variant."""
        if self.variant in (FontVariant.SUBSCRIPT, FontVariant.SUPERSCRIPT):
            return self.size * SCRIPT_SCALE
        return self.size

    @property
    def features(self) -> list[str] | None:
        """OpenType features to request from the shaper, if any."""
        if self.variant == FontVariant.SMALLCAPS and has_raqm():
            return ["smcp"]
        return None

    def pil_font(self, dpi: float | None = None) -> ImageFont.FreeTypeFont:
        """Return the Pillow font for this face rendered at a resolution."""
        dpi = dpi or self.dpi
        if dpi not in self._fonts:
            pixel_size = self.scaled_size * dpi / POINTS_PER_INCH
            self._fonts[dpi] = ImageFont.truetype(
                io.BytesIO(self.font.data), pixel_size, index=self.font.index
            )
        return self._fonts[dpi]

    def baseline_shift(self, dpi: float | None = None) -> float:
        """Vertical offset in pixels applied when drawing sub/superscript."""
        dpi = dpi or self.dpi
        em = self.scaled_size * dpi / POINTS_PER_INCH
        if self.variant == FontVariant.SUBSCRIPT:
            return em * SUBSCRIPT_SHIFT
        if self.variant == FontVariant.SUPERSCRIPT:
            return em * SUPERSCRIPT_SHIFT
        return 0.0

    def baseline_offset(self) -> float:
        """Baseline shift in millimetres, negative when the text is raised."""
        return self.baseline_shift() * MM_PER_INCH / self.dpi

    def measure(self, text: str) -> tuple[float, float]:
        """Return the (width, height) of a line of text in millimetres."""
        font = self.pil_font()
        ascent, descent = font.getmetrics()
        width = font.getlength(text, features=self.features) if text else 0.0
        height = ascent + descent + abs(self.baseline_shift())
        scale = MM_PER_INCH / self.dpi
        return width * scale, height * scale


class FontFamily:
    """A font family with one loaded font per style."""

    def __init__(self, name: str):
        self.name = name
        self._fonts: dict[FontStyle, LoadedFont] = {}

    def load_font(self, data: bytes, index: int, style: FontStyle) -> None:
        """
        Load a font for a style from in-memory data.

        WOFF and WOFF2 data is decompressed to SFNT first. Pillow errors
        (OSError for unreadable data) propagate to the caller.
        """
        sfnt = to_sfnt(data)
        # parse once so unreadable data fails here rather than while drawing
        ImageFont.truetype(io.BytesIO(sfnt), 16, index=index)
        self._fonts[style] = LoadedFont(sfnt, index)
        logger.debug(f"Loaded {style} style of {self.name} ({len(sfnt)} bytes)")

    def load_font_file(self, path: str | Path, style: FontStyle, index: int = 0) -> None:
        """Load a font for a style from a file."""
        self.load_font(Path(path).read_bytes(), index, style)

    @property
    def styles(self) -> list[FontStyle]:
        return list(self._fonts)

    def _resolve(self, style: FontStyle) -> LoadedFont:
        if not self._fonts:
            raise ValueError(f"font family {self.name!r} has no loaded fonts")
        if style in self._fonts:
            return self._fonts[style]
        closest = min(self._fonts, key=lambda s: (style.distance(s), s.weight))
        logger.debug(f"Style {style} not loaded for {self.name}, using {closest}")
        return self._fonts[closest]

    def ttfont(self, style: FontStyle = REGULAR) -> TTFont:
        """Parse the font for a style with fontTools."""
        font = self._resolve(style)
        return open_ttfont(font.data, font.index)

    def names(self, style: FontStyle = REGULAR) -> FontNames:
        """Read the name table strings of the font for a style."""
        font = self.ttfont(style)
        try:
            return read_font_names(font)
        finally:
            font.close()

    def face(
        self,
        size: float,
        fill: str | tuple = "black",
        style: FontStyle = REGULAR,
        variant: FontVariant = FontVariant.NORMAL,
        dpi: float = POINTS_PER_INCH,
    ) -> Face:
        """Build a face of the family at a size in points."""
        return Face(self._resolve(style), size, fill, style, variant, dpi)
