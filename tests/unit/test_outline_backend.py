"""Unit tests for the fontTools outline backend."""

from io import BytesIO

import pytest
from PIL import Image

from glyphcache.backends.outline import OutlineBackend, best_strike_size, png_size
from glyphcache.domain import PathVerb
from glyphcache.exceptions import FontParseError

GID_SQUARE = 1
GID_TWO_SQUARES = 2
GID_EMPTY = 3
GID_EMOJI = 4

FS_ITALIC = 1 << 0
FS_BOLD = 1 << 5
FS_REGULAR = 1 << 6
FS_USE_TYPO_METRICS = 1 << 7
FS_OBLIQUE = 1 << 9


@pytest.fixture
def backend() -> OutlineBackend:
    return OutlineBackend()


def _metrics(backend: OutlineBackend, data: bytes):
    return backend.read_metrics(backend.parse(data, 0))


class TestParse:
    """Tests for OutlineBackend.parse."""

    def test_parse(self, backend: OutlineBackend, font_bytes: bytes):
        """Test a font parses into a face handle."""
        face = backend.parse(font_bytes, 0)

        assert face.face_index == 0
        assert face.glyph_name(GID_SQUARE) == "square"
        assert face.glyph_name(99) is None

    def test_parse_garbage(self, backend: OutlineBackend):
        """Test garbage is reported as FontParseError."""
        with pytest.raises(FontParseError):
            backend.parse(b"garbage!" * 4, 0)

    def test_truncated_last_table(self, backend: OutlineBackend, font_bytes: bytes):
        """Test a font cut short inside a table that is never decompiled is rejected."""
        with pytest.raises(FontParseError, match="extends past the end"):
            backend.parse(font_bytes[: len(font_bytes) - 10], 0)


class TestVerticalMetrics:
    """Tests for ascender, descender and line height selection."""

    def test_hhea_metrics(self, backend: OutlineBackend, font_factory):
        """Test hhea values are used by default."""
        raw = _metrics(
            backend, font_factory(ascent=750, descent=-250, line_gap=90, typo=(700, -300, 0))
        )

        assert raw.units_per_em == 1000
        assert raw.ascender == 750
        assert raw.descender == -250
        assert raw.height == 1090
        assert raw.glyph_count == 5

    def test_typo_metrics_when_flagged(self, backend: OutlineBackend, font_factory):
        """Test USE_TYPO_METRICS switches to the OS/2 typo values."""
        raw = _metrics(
            backend,
            font_factory(
                ascent=750,
                descent=-250,
                typo=(700, -300, 100),
                fs_selection=FS_REGULAR | FS_USE_TYPO_METRICS,
            ),
        )

        assert raw.ascender == 700
        assert raw.descender == -300
        assert raw.height == 1100

    def test_zero_hhea_falls_back_to_typo(self, backend: OutlineBackend, font_factory):
        """Test zero hhea values fall back to the OS/2 typo values."""
        raw = _metrics(backend, font_factory(ascent=0, descent=0, typo=(880, -120, 0)))

        assert raw.ascender == 880
        assert raw.descender == -120
        assert raw.height == 1000

    def test_zero_hhea_and_typo_fall_back_to_win(self, backend: OutlineBackend, font_factory):
        """Test win values are the last resort."""
        raw = _metrics(
            backend, font_factory(ascent=0, descent=0, typo=(0, 0, 0), win=(950, 250))
        )

        assert raw.ascender == 950
        assert raw.descender == -250
        assert raw.height == 1200


class TestStyleClassification:
    """Tests for OS/2 and post based style bits."""

    def test_regular(self, backend: OutlineBackend, font_bytes: bytes):
        """Test the default font is regular and upright."""
        raw = _metrics(backend, font_bytes)

        assert raw.regular
        assert not raw.italic
        assert not raw.bold
        assert not raw.oblique
        assert not raw.variable
        assert raw.weight == 400
        assert raw.width == 5

    def test_bold_italic_bits(self, backend: OutlineBackend, font_factory):
        """Test fsSelection bold and italic bits."""
        raw = _metrics(backend, font_factory(fs_selection=FS_BOLD | FS_ITALIC, weight_class=700))

        assert raw.bold
        assert raw.italic
        assert not raw.regular
        assert raw.weight == 700

    def test_italic_angle(self, backend: OutlineBackend, font_factory):
        """Test a slanted post table marks the font italic."""
        raw = _metrics(backend, font_factory(fs_selection=0, italic_angle=-12.0))
        assert raw.italic

    def test_oblique_needs_os2_version_4(self, backend: OutlineBackend, font_factory):
        """Test the oblique bit is only honoured from OS/2 version 4."""
        assert _metrics(backend, font_factory(fs_selection=FS_OBLIQUE, os2_version=4)).oblique
        assert not _metrics(backend, font_factory(fs_selection=FS_OBLIQUE, os2_version=3)).oblique

    def test_variable(self, backend: OutlineBackend, font_factory):
        """Test an fvar table marks the font variable."""
        assert _metrics(backend, font_factory(variable=True)).variable

    @pytest.mark.parametrize(
        ("weight_class", "width_class", "expected"),
        [(100, 1, (100, 1)), (900, 9, (900, 9)), (0, 0, (400, 5)), (400, 12, (400, 5))],
    )
    def test_weight_width_classes(
        self, backend: OutlineBackend, font_factory, weight_class, width_class, expected
    ):
        """Test weight and width classes are read and kept in range."""
        raw = _metrics(backend, font_factory(weight_class=weight_class, width_class=width_class))
        assert (raw.weight, raw.width) == expected


class TestOutlineExtraction:
    """Tests for extract_glyph_outline."""

    def test_square(self, backend: OutlineBackend, font_bytes: bytes):
        """Test a one-contour glyph and its bounds."""
        face = backend.parse(font_bytes, 0)

        path, bbox = backend.extract_glyph_outline(face, GID_SQUARE)

        assert path.contour_count() == 1
        assert path.commands[0].verb is PathVerb.MOVE_TO
        assert path.commands[-1].verb is PathVerb.CLOSE
        assert {cmd.verb for cmd in path} <= {PathVerb.MOVE_TO, PathVerb.LINE_TO, PathVerb.CLOSE}
        assert (bbox.x_min, bbox.y_min, bbox.x_max, bbox.y_max) == (100, 0, 600, 700)

    def test_two_contours(self, backend: OutlineBackend, font_bytes: bytes):
        """Test every contour is emitted."""
        face = backend.parse(font_bytes, 0)

        path, bbox = backend.extract_glyph_outline(face, GID_TWO_SQUARES)

        assert path.contour_count() == 2
        assert (bbox.x_min, bbox.y_min, bbox.x_max, bbox.y_max) == (0, 0, 500, 500)

    def test_empty_glyph(self, backend: OutlineBackend, font_bytes: bytes):
        """Test a glyph with no contours has no outline."""
        face = backend.parse(font_bytes, 0)
        assert backend.extract_glyph_outline(face, GID_EMPTY) is None

    def test_out_of_range(self, backend: OutlineBackend, font_bytes: bytes):
        """Test a glyph id past the glyph count has no outline."""
        face = backend.parse(font_bytes, 0)
        assert backend.extract_glyph_outline(face, 500) is None


class TestRasterExtraction:
    """Tests for extract_glyph_raster and strike selection."""

    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(16, 20), (20, 20), (21, 40), (40, 40), (100, 40), (1, 20)],
    )
    def test_best_strike_size(self, requested: int, expected: int):
        """Test the smallest strike covering the request wins, else the largest."""
        assert best_strike_size([40, 20], requested) == expected

    def test_best_strike_size_no_strikes(self):
        """Test no strikes means no choice."""
        assert best_strike_size([], 16) is None

    def test_png_size(self):
        """Test the PNG header is read for the image size."""
        buffer = BytesIO()
        Image.new("RGBA", (12, 9)).save(buffer, format="PNG")
        assert png_size(buffer.getvalue()) == (12, 9)

    def test_sbix_strike(self, backend: OutlineBackend, emoji_font_bytes: bytes):
        """Test an sbix PNG is reported with its strike placement."""
        face = backend.parse(emoji_font_bytes, 0)

        strike = backend.extract_glyph_raster(face, GID_EMOJI, 30)

        assert strike is not None
        assert strike.image_format == "png"
        assert strike.pixels_per_em == 40
        assert (strike.width, strike.height) == (40, 40)
        assert (strike.x, strike.y) == (0, -8)
        assert strike.data.startswith(b"\x89PNG")

    def test_sbix_glyph_without_bitmap(self, backend: OutlineBackend, emoji_font_bytes: bytes):
        """Test outline glyphs in an sbix font have no strike."""
        face = backend.parse(emoji_font_bytes, 0)
        assert backend.extract_glyph_raster(face, GID_SQUARE, 20) is None

    def test_no_bitmap_tables(self, backend: OutlineBackend, font_bytes: bytes):
        """Test fonts without bitmap tables report no strike."""
        face = backend.parse(font_bytes, 0)
        assert backend.extract_glyph_raster(face, GID_EMOJI, 20) is None
