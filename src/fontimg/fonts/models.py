"""
Font data models and types.
"""

from dataclasses import dataclass, field
from pathlib import Path

from fontimg.core.models import REGULAR, FontStyle


@dataclass(frozen=True)
class FontMetadata:
    """Font metadata information for one face of an installed font file."""

    path: str
    family: str
    style: FontStyle = field(default=REGULAR)
    name: str = ""
    index: int = 0  # face index inside a collection

    @property
    def filename(self) -> str:
        """Get the font filename."""
        return Path(self.path).name

    @property
    def extension(self) -> str:
        """Get the font file extension."""
        return Path(self.path).suffix.lower()

    def __str__(self) -> str:
        return f"{self.family} {self.style} ({self.filename})"
