"""Data models shared by the locator, template engine and rasterizer."""

from dataclasses import dataclass
from enum import Enum, IntEnum

from pydantic import BaseModel, Field

from .exceptions import InvalidVariantError


class FontWeight(IntEnum):
    """OpenType weight classes."""

    THIN = 100
    EXTRA_LIGHT = 200
    LIGHT = 300
    REGULAR = 400
    MEDIUM = 500
    SEMI_BOLD = 600
    BOLD = 700
    EXTRA_BOLD = 800
    BLACK = 900


WEIGHT_NAMES = {
    FontWeight.THIN: "Thin",
    FontWeight.EXTRA_LIGHT: "ExtraLight",
    FontWeight.LIGHT: "Light",
    FontWeight.REGULAR: "Regular",
    FontWeight.MEDIUM: "Medium",
    FontWeight.SEMI_BOLD: "SemiBold",
    FontWeight.BOLD: "Bold",
    FontWeight.EXTRA_BOLD: "ExtraBold",
    FontWeight.BLACK: "Black",
}


@dataclass(frozen=True)
class FontStyle:
    """A font style: weight plus italic flag."""

    weight: FontWeight = FontWeight.REGULAR
    italic: bool = False

    def __str__(self) -> str:
        name = WEIGHT_NAMES[self.weight]
        if not self.italic:
            return name
        if self.weight == FontWeight.REGULAR:
            return "Italic"
        return f"{name} Italic"

    @property
    def is_bold(self) -> bool:
        return self.weight >= FontWeight.BOLD

    def distance(self, other: "FontStyle") -> int:
        """Distance used to pick the closest available style.

        A differing italic flag always costs more than any weight difference.
        """
        penalty = 1000 if self.italic != other.italic else 0
        return penalty + abs(int(self.weight) - int(other.weight))


REGULAR = FontStyle()
BOLD = FontStyle(FontWeight.BOLD)
ITALIC = FontStyle(italic=True)
BOLD_ITALIC = FontStyle(FontWeight.BOLD, italic=True)


class FontVariant(Enum):
    """Typographic variant applied when building a face."""

    NORMAL = "normal"
    SMALLCAPS = "smallcaps"
    SUBSCRIPT = "subscript"
    SUPERSCRIPT = "superscript"

    @classmethod
    def parse(cls, value: "str | FontVariant") -> "FontVariant":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "").replace("_", "")
        for variant in cls:
            if variant.value == key:
                return variant
        raise InvalidVariantError(str(value))


class TemplateData(BaseModel):
    """Values available to the preview text template."""

    size: int = Field(..., gt=0, description="Requested font size in points")
    name: str = Field("", description="Display name of the font")
    style: str = Field("", description="Style name of the font")
    sample_text: str = Field("", description="Sample text embedded in the font")


class Line(BaseModel):
    """One line of preview text and the font size it is drawn at."""

    text: str
    size: int
