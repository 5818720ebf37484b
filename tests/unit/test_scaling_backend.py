"""Unit tests for the FreeType scaling backend and its shared context."""

import gc

import pytest

freetype = pytest.importorskip("freetype")

from glyphcache.backends import STRETCH_WIDTH_CLASSES, width_class_for_stretch  # noqa: E402
from glyphcache.backends.scale_context import ScaleContext  # noqa: E402
from glyphcache.backends.scaling import (  # noqa: E402
    FontStyle,
    ScalingBackend,
    approximate_attributes,
)
from glyphcache.config import BackendConfig, BackendKind, GlyphCacheSettings  # noqa: E402
from glyphcache.core import TextContext  # noqa: E402
from glyphcache.domain import PathVerb  # noqa: E402
from glyphcache.exceptions import FontParseError  # noqa: E402

GID_SQUARE = 1
GID_TWO_SQUARES = 2
GID_EMPTY = 3
GID_EMOJI = 4


@pytest.fixture
def backend() -> ScalingBackend:
    return ScalingBackend(ScaleContext(max_faces=2))


@pytest.fixture
def context() -> TextContext:
    settings = GlyphCacheSettings(backend=BackendConfig(kind=BackendKind.SCALING))
    return TextContext(settings)


class TestApproximateAttributes:
    """Tests for style-name based classification."""

    @pytest.mark.parametrize(
        ("style_name", "weight", "style", "stretch"),
        [
            ("Regular", 400, FontStyle.NORMAL, 1.0),
            ("Bold", 700, FontStyle.NORMAL, 1.0),
            ("SemiBold Italic", 600, FontStyle.ITALIC, 1.0),
            ("ExtraLight", 200, FontStyle.NORMAL, 1.0),
            ("Black Oblique", 900, FontStyle.OBLIQUE, 1.0),
            ("Bold Condensed", 700, FontStyle.NORMAL, 0.75),
            ("SemiCondensed", 400, FontStyle.NORMAL, 0.875),
            ("Ultra Expanded Light", 300, FontStyle.NORMAL, 2.0),
        ],
    )
    def test_style_names(self, style_name, weight, style, stretch):
        """Test weight, slant and stretch keywords."""
        attributes = approximate_attributes(style_name, 0, variable=False)

        assert attributes.weight == weight
        assert attributes.style is style
        assert attributes.stretch == stretch

    def test_style_flags_without_keywords(self):
        """Test FreeType style flags fill in when the name says nothing."""
        flags = freetype.FT_STYLE_FLAG_BOLD | freetype.FT_STYLE_FLAG_ITALIC

        attributes = approximate_attributes("Display", flags, variable=True)

        assert attributes.weight == 700
        assert attributes.style is FontStyle.ITALIC
        assert attributes.variable

    def test_unknown_name_is_normal(self):
        """Test an unrecognised style name is normal weight and stretch."""
        attributes = approximate_attributes("", 0, variable=False)

        assert attributes.weight == 400
        assert attributes.style is FontStyle.NORMAL
        assert attributes.stretch == 1.0


class TestWidthClassForStretch:
    """Tests for the stretch to width class table."""

    @pytest.mark.parametrize(("stretch", "width"), sorted(STRETCH_WIDTH_CLASSES.items()))
    def test_buckets(self, stretch: float, width: int):
        """Test each tabulated stretch maps to its class."""
        assert width_class_for_stretch(stretch) == width

    @pytest.mark.parametrize("stretch", [0.0, 0.7, 1.1, 3.0])
    def test_untabulated_is_normal(self, stretch: float):
        """Test other ratios map to the normal width class."""
        assert width_class_for_stretch(stretch) == 5


class TestScalingBackend:
    """Tests for parse, metrics and outline extraction."""

    def test_parse_garbage(self, backend: ScalingBackend):
        """Test FreeType errors are reported as FontParseError."""
        with pytest.raises(FontParseError):
            backend.parse(b"garbage!" * 4, 0)

    def test_truncated_last_table(self, backend: ScalingBackend, font_bytes: bytes):
        """Test a font cut short inside a table FreeType ignores is rejected."""
        with pytest.raises(FontParseError, match="extends past the end"):
            backend.parse(font_bytes[: len(font_bytes) - 10], 0)

    def test_table_directory_of_collection_face(
        self, backend: ScalingBackend, font_factory, collection_factory
    ):
        """Test the directory check reads the selected collection face."""
        data = collection_factory(font_factory(), font_factory(ascent=900))

        face = backend.parse(data, 1)

        assert face.metrics.ascent == 900

    def test_metrics(self, backend: ScalingBackend, font_bytes: bytes):
        """Test scaler metrics are converted with a positive descent."""
        face = backend.parse(font_bytes, 0)

        assert face.metrics.ascent == 800
        assert face.metrics.descent == 200
        assert face.metrics.leading == 0

        raw = backend.read_metrics(face)

        assert raw.units_per_em == 1000
        assert raw.ascender == 800
        assert raw.descender == -200
        assert raw.height == 1000
        assert raw.glyph_count == 5

    def test_regular_classification(self, backend: ScalingBackend, font_bytes: bytes):
        """Test a plain regular face classifies as regular."""
        raw = backend.read_metrics(backend.parse(font_bytes, 0))

        assert raw.regular
        assert not raw.bold
        assert not raw.italic
        assert raw.weight == 400
        assert raw.width == 5

    def test_bold_condensed_classification(self, backend: ScalingBackend, font_factory):
        """Test style name keywords drive weight and width."""
        data = font_factory(style_name="Bold Condensed")

        raw = backend.read_metrics(backend.parse(data, 0))

        assert raw.bold
        assert not raw.regular
        assert raw.weight == 700
        assert raw.width == 3

    def test_outline(self, backend: ScalingBackend, font_bytes: bytes):
        """Test outlines come back in font units with closed contours."""
        face = backend.parse(font_bytes, 0)

        path, bbox = backend.extract_glyph_outline(face, GID_SQUARE)

        assert path.contour_count() == 1
        assert path.commands[-1].verb is PathVerb.CLOSE
        assert (bbox.x_min, bbox.y_min, bbox.x_max, bbox.y_max) == (100, 0, 600, 700)

    def test_every_contour_closed(self, backend: ScalingBackend, font_bytes: bytes):
        """Test each contour ends with a close before the next move."""
        face = backend.parse(font_bytes, 0)

        path, _ = backend.extract_glyph_outline(face, GID_TWO_SQUARES)
        verbs = [cmd.verb for cmd in path]

        assert verbs.count(PathVerb.MOVE_TO) == 2
        assert verbs.count(PathVerb.CLOSE) == 2
        second_move = verbs.index(PathVerb.MOVE_TO, 1)
        assert verbs[second_move - 1] is PathVerb.CLOSE

    def test_empty_and_out_of_range(self, backend: ScalingBackend, font_bytes: bytes):
        """Test glyphs without contours or past the end have no outline."""
        face = backend.parse(font_bytes, 0)

        assert backend.extract_glyph_outline(face, GID_EMPTY) is None
        assert backend.extract_glyph_outline(face, 5000) is None

    def test_no_raster_support(self, backend: ScalingBackend, emoji_font_bytes: bytes):
        """Test bitmap strikes are never reported."""
        face = backend.parse(emoji_font_bytes, 0)

        assert not backend.supports_raster
        assert backend.extract_glyph_raster(face, GID_EMOJI, 20) is None


class TestScaleContext:
    """Tests for the shared scaling context lifecycle."""

    def test_refcount_follows_fonts(self, context: TextContext, font_bytes: bytes):
        """Test every live font holds one reference."""
        scale_context = context.backend.scale_context

        first = context.load_font(font_bytes)
        second = context.load_font(font_bytes)
        assert scale_context.refcount == 2

        first.glyph(first.face_ref(), GID_SQUARE)
        second.glyph(second.face_ref(), GID_SQUARE)
        assert scale_context.cached_face_count == 2

        del first
        gc.collect()
        assert scale_context.refcount == 1
        assert scale_context.cached_face_count == 1

        del second
        gc.collect()
        assert scale_context.refcount == 0
        assert scale_context.cached_face_count == 0

    def test_face_lru_is_bounded(self, backend: ScalingBackend, font_bytes: bytes):
        """Test the context keeps at most max_faces FreeType faces."""
        faces = [backend.parse(font_bytes, 0) for _ in range(3)]

        for face in faces:
            backend.extract_glyph_outline(face, GID_SQUARE)

        assert backend.scale_context.cached_face_count == 2

    def test_release_without_retain(self):
        """Test releasing an unused context is harmless."""
        scale_context = ScaleContext()
        scale_context.release()
        assert scale_context.refcount == 0

    def test_glyphs_identical_across_fonts(self, context: TextContext, font_bytes: bytes):
        """Test fonts sharing the context do not disturb each other's glyphs."""
        first = context.load_font(font_bytes)
        second = context.load_font(font_bytes)

        a = first.glyph(first.face_ref(), GID_SQUARE)
        b = second.glyph(second.face_ref(), GID_TWO_SQUARES)
        c = first.glyph(first.face_ref(), GID_TWO_SQUARES)

        assert a.path.contour_count() == 1
        assert b.path == c.path
