"""
Pytest configuration and fixtures for font preview tests.

Test fonts are generated on the fly with fontTools' FontBuilder: every
printable ASCII character is a plain box, which keeps rendering
deterministic and independent of the fonts installed on the machine.
"""

import io
import tempfile
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTCollection, TTFont

from fontimg.fonts import system

UNITS_PER_EM = 1000
ASCENT = 800
DESCENT = -200
ADVANCE = 500

WEIGHT_CLASSES = {"Regular": 400, "Italic": 400, "Bold": 700, "Bold Italic": 700, "Light": 300}


def _box_glyph(x0: int, y0: int, x1: int, y1: int):
    pen = TTGlyphPen(None)
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()
    return pen.glyph()


def build_test_font(
    family: str = "Test Sans",
    style: str = "Regular",
    sample_text: str | None = None,
    flavor: str | None = None,
) -> bytes:
    """Build a small TrueType font and return its file data."""
    chars = [chr(code) for code in range(0x20, 0x7F)]
    glyph_names = {ord(c): f"uni{ord(c):04X}" for c in chars}
    glyph_order = [".notdef", *glyph_names.values()]

    glyphs = {}
    metrics = {}
    for name in glyph_order:
        if name == "uni0020":
            glyphs[name] = TTGlyphPen(None).glyph()
            metrics[name] = (ADVANCE, 0)
        else:
            glyphs[name] = _box_glyph(50, 0, 450, 700)
            metrics[name] = (ADVANCE, 50)

    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(glyph_names)
    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    fb.setupOS2(
        sTypoAscender=ASCENT,
        sTypoDescender=DESCENT,
        usWinAscent=ASCENT,
        usWinDescent=-DESCENT,
        usWeightClass=WEIGHT_CLASSES.get(style, 400),
    )

    names = {
        "familyName": family,
        "styleName": style,
        "fullName": f"{family} {style}",
        "psName": f"{family.replace(' ', '')}-{style.replace(' ', '')}",
        "version": "Version 1.000",
    }
    if sample_text:
        names["sampleText"] = sample_text
    fb.setupNameTable(names)
    fb.setupPost()
    fb.font["head"].created = 0
    fb.font["head"].modified = 0

    if flavor:
        fb.font.flavor = flavor

    buffer = io.BytesIO()
    fb.save(buffer)
    return buffer.getvalue()


def write_test_font(path: Path, **kwargs) -> Path:
    """Write a generated test font to a file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(build_test_font(**kwargs))
    return path


def write_test_collection(path: Path, styles: list[str], family: str = "Test Sans") -> Path:
    """Write a TrueType collection holding one face per style."""
    collection = TTCollection()
    collection.fonts = [
        TTFont(io.BytesIO(build_test_font(family=family, style=style))) for style in styles
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    collection.save(str(path))
    return path


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture(scope="session")
def font_bytes():
    """Data of a regular test font."""
    return build_test_font()


@pytest.fixture
def font_file(temp_dir):
    """A regular test font on disk."""
    return write_test_font(temp_dir / "testSans-Regular.ttf")


@pytest.fixture
def bold_font_file(temp_dir):
    """A bold test font on disk."""
    return write_test_font(temp_dir / "testSans-Bold.ttf", style="Bold")


@pytest.fixture
def sample_font_file(temp_dir):
    """A test font carrying sample text in its name table."""
    return write_test_font(temp_dir / "sampler.ttf", family="Sampler", sample_text="Hello Sample")


@pytest.fixture
def fonts_dir(temp_dir):
    """
    A directory of fonts as a user would have it: several font files in
    mixed case, files with other extensions and a nested directory.
    """
    fonts = temp_dir / "fonts"
    write_test_font(fonts / "zebraSans.ttf", family="Zebra Sans")
    write_test_font(fonts / "alphaSerif.otf", family="Alpha Serif")
    write_test_font(fonts / "Mono-Bold.TTF", family="Mono", style="Bold")
    write_test_font(fonts / "webFont.woff", family="Web Font", flavor="woff")
    (fonts / "README.txt").write_text("not a font")
    (fonts / "preview.png").write_bytes(b"\x89PNG")
    write_test_font(fonts / "nested" / "hidden.ttf", family="Hidden")
    return fonts


@pytest.fixture
def system_fonts_dir(temp_dir):
    """A font directory laid out like an installed font tree."""
    root = temp_dir / "system"
    write_test_font(root / "dejavu" / "DejaVuSans.ttf", family="DejaVu Sans")
    write_test_font(root / "dejavu" / "DejaVuSans-Bold.ttf", family="DejaVu Sans", style="Bold")
    write_test_font(root / "dejavu" / "DejaVuSerif.ttf", family="DejaVu Serif")
    write_test_font(root / "other" / "Light.ttf", family="Only Light", style="Light")
    write_test_collection(root / "other" / "Pair.ttc", ["Regular", "Italic"], family="Pair")
    (root / "other" / "broken.ttf").write_bytes(b"definitely not a font")
    return root


@pytest.fixture
def reset_default_index(monkeypatch):
    """Forget the process-wide system font index for one test."""
    monkeypatch.setattr(system, "_default_outcome", None)
    yield
    monkeypatch.setattr(system, "_default_outcome", None)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: end-to-end tests that render real fonts")
