"""Shared fixtures: small fonts built in memory with fontTools' FontBuilder."""

from collections.abc import Callable
from io import BytesIO
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTCollection, TTFont, newTable
from fontTools.ttLib.tables.sbixGlyph import Glyph as SbixGlyph
from fontTools.ttLib.tables.sbixStrike import Strike
from PIL import Image

# Glyph ids of the test font
GID_NOTDEF = 0
GID_SQUARE = 1
GID_TWO_SQUARES = 2
GID_EMPTY = 3
GID_EMOJI = 4

GLYPH_ORDER = [".notdef", "square", "twosquares", "empty", "emoji"]

SQUARE_BOUNDS = (100, 0, 600, 700)
EMOJI_ORIGIN = (0, -8)


def _rect(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int) -> None:
    pen.moveTo((x0, y0))
    pen.lineTo((x1, y0))
    pen.lineTo((x1, y1))
    pen.lineTo((x0, y1))
    pen.closePath()


def _rect_glyph(*rects: tuple[int, int, int, int]):
    pen = TTGlyphPen(None)
    for rect in rects:
        _rect(pen, *rect)
    return pen.glyph()


def png_bytes(size: int, color: tuple[int, int, int, int] = (255, 0, 0, 255)) -> bytes:
    """Encode a solid square PNG."""
    buffer = BytesIO()
    Image.new("RGBA", (size, size), color).save(buffer, format="PNG")
    return buffer.getvalue()


def build_font(
    *,
    units_per_em: int = 1000,
    ascent: int = 800,
    descent: int = -200,
    line_gap: int = 0,
    typo: tuple[int, int, int] | None = None,
    win: tuple[int, int] = (800, 200),
    fs_selection: int = 0x40,
    os2_version: int = 4,
    weight_class: int = 400,
    width_class: int = 5,
    style_name: str = "Regular",
    italic_angle: float = 0.0,
    sbix_ppems: tuple[int, ...] = (),
    variable: bool = False,
) -> bytes:
    """Build a TrueType font and return its bytes.

    Glyphs: .notdef and two outline glyphs, an empty glyph, and an
    "emoji" glyph whose only content is an sbix PNG in every strike
    listed in sbix_ppems.
    """
    typo_ascender, typo_descender, typo_line_gap = typo or (ascent, descent, line_gap)

    fb = FontBuilder(units_per_em, isTTF=True)
    fb.setupGlyphOrder(GLYPH_ORDER)
    fb.setupCharacterMap({0x41: "square", 0x42: "twosquares", 0x20: "empty", 0x1F600: "emoji"})
    fb.setupGlyf(
        {
            ".notdef": _rect_glyph((50, 0, 450, 700)),
            "square": _rect_glyph(SQUARE_BOUNDS),
            "twosquares": _rect_glyph((0, 0, 200, 200), (300, 300, 500, 500)),
            "empty": TTGlyphPen(None).glyph(),
            "emoji": TTGlyphPen(None).glyph(),
        }
    )
    # Left side bearings must equal each outline's xMin or renderers shift it
    left_bearings = {".notdef": 50, "square": SQUARE_BOUNDS[0]}
    fb.setupHorizontalMetrics({name: (700, left_bearings.get(name, 0)) for name in GLYPH_ORDER})
    fb.setupHorizontalHeader(ascent=ascent, descent=descent, lineGap=line_gap)
    fb.setupOS2(
        version=os2_version,
        usWeightClass=weight_class,
        usWidthClass=width_class,
        fsSelection=fs_selection,
        sTypoAscender=typo_ascender,
        sTypoDescender=typo_descender,
        sTypoLineGap=typo_line_gap,
        usWinAscent=win[0],
        usWinDescent=win[1],
    )
    fb.setupNameTable({"familyName": "Glyphcache Test", "styleName": style_name})
    fb.setupPost(italicAngle=italic_angle)
    fb.setupMaxp()

    if variable:
        fb.setupFvar([("wght", 100, 400, 900, "Weight")], [])

    if sbix_ppems:
        sbix = newTable("sbix")
        for ppem in sbix_ppems:
            strike = Strike(ppem=ppem, resolution=72)
            strike.glyphs["emoji"] = SbixGlyph(
                glyphName="emoji",
                graphicType="png ",
                imageData=png_bytes(ppem),
                originOffsetX=EMOJI_ORIGIN[0],
                originOffsetY=EMOJI_ORIGIN[1],
            )
            sbix.strikes[ppem] = strike
        fb.font["sbix"] = sbix

    buffer = BytesIO()
    fb.save(buffer)
    return buffer.getvalue()


def build_collection(*fonts: bytes) -> bytes:
    """Pack several fonts into a TrueType collection."""
    collection = TTCollection()
    collection.fonts = [TTFont(BytesIO(data)) for data in fonts]
    buffer = BytesIO()
    collection.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def font_factory() -> Callable[..., bytes]:
    """Return the font builder so tests can vary tables."""
    return build_font


@pytest.fixture
def font_bytes() -> bytes:
    """A plain outline font (1000 UPM, ascent 800, descent -200)."""
    return build_font()


@pytest.fixture
def emoji_font_bytes() -> bytes:
    """An outline font with sbix strikes at 20 and 40 ppem."""
    return build_font(sbix_ppems=(20, 40))


@pytest.fixture
def font_file(tmp_path: Path, font_bytes: bytes) -> Path:
    """The plain outline font written to disk."""
    path = tmp_path / "Test-Regular.ttf"
    path.write_bytes(font_bytes)
    return path


@pytest.fixture
def emoji_font_file(tmp_path: Path, emoji_font_bytes: bytes) -> Path:
    """The sbix font written to disk."""
    path = tmp_path / "TestEmoji.ttf"
    path.write_bytes(emoji_font_bytes)
    return path


@pytest.fixture
def collection_factory() -> Callable[..., bytes]:
    """Return the collection packer."""
    return build_collection
