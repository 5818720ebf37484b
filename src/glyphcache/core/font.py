"""Font: parsed font bytes, font-wide metrics and a lazy glyph cache.

A Font is constructed once when the application registers font bytes.
Construction either fully succeeds or raises FontParseError; glyphs are
extracted one at a time on first lookup and cached for the Font's lifetime.
"""

import weakref
from typing import TYPE_CHECKING, Any

import structlog

from glyphcache.backends import FontBackend
from glyphcache.core.cache import GlyphCache
from glyphcache.core.rendering import select_glyph_rendering
from glyphcache.domain import FontFlags, FontMetrics, Glyph, GlyphMetrics, GlyphRendering
from glyphcache.exceptions import BackendUnavailableError, FontParseError
from glyphcache.utils import CacheStats, GlyphLogger

if TYPE_CHECKING:
    from glyphcache.core.context import TextContext

logger = structlog.get_logger("glyphcache.font")

MAX_GLYPH_ID = 0xFFFF


class Font:
    """A font face with lazily cached glyphs.

    Glyphs returned by glyph() are immutable and shared with the cache, so
    callers may hold on to them across further lookups.

    Example:
        context = TextContext()
        font = Font(data, 0, context)
        face = font.face_ref()
        glyph = font.glyph(face, 36)
        metrics = font.metrics(16.0)
    """

    def __init__(
        self,
        data: bytes | bytearray | memoryview,
        face_index: int,
        context: "TextContext",
    ) -> None:
        """Parse the font and read its metrics.

        Args:
            data: Whole font file (possibly a collection)
            face_index: Face to select within a collection
            context: Text context providing the active backend

        Raises:
            BackendUnavailableError: If the context has no backend
            FontParseError: If the data is not a usable font face
        """
        backend = context.backend
        if backend is None:
            raise BackendUnavailableError(context.settings.backend.kind.value)

        font_data = bytes(data)
        face = backend.parse(font_data, face_index)
        raw = backend.read_metrics(face)

        if raw.units_per_em <= 0:
            raise FontParseError(f"units per em is {raw.units_per_em}")

        self._data = font_data
        self._face_index = face_index
        self._units_per_em = raw.units_per_em
        self._glyph_count = raw.glyph_count
        self._metrics = FontMetrics(
            ascender=raw.ascender,
            descender=raw.descender,
            line_height=raw.height,
            flags=FontFlags.from_booleans(
                raw.regular, raw.italic, raw.bold, raw.oblique, raw.variable
            ),
            weight=raw.weight,
            width=raw.width,
        )
        self._backend = backend
        self._face = face
        self._rendering = context.settings.rendering
        self._glyphs = GlyphCache()
        self._glyph_logger = GlyphLogger(logger.bind(face_index=face_index))

        backend.acquire(face)
        self._finalizer = weakref.finalize(self, backend.release, face)

        logger.info(
            "Font constructed",
            backend=backend.name,
            face_index=face_index,
            units_per_em=self._units_per_em,
            glyph_count=self._glyph_count,
        )

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def face_index(self) -> int:
        return self._face_index

    @property
    def units_per_em(self) -> int:
        return self._units_per_em

    @property
    def glyph_count(self) -> int:
        return self._glyph_count

    @property
    def backend(self) -> FontBackend:
        return self._backend

    @property
    def stats(self) -> CacheStats:
        """Lookup statistics for this font."""
        return self._glyph_logger.stats

    @property
    def cached_glyph_count(self) -> int:
        return len(self._glyphs)

    @property
    def load_images(self) -> bool:
        """Whether embedded raster strikes are decoded for rendering."""
        return self._rendering.load_images

    @property
    def glyph_logger(self) -> GlyphLogger:
        return self._glyph_logger

    def face_ref(self) -> Any:
        """Return the backend face handle parsed at construction."""
        return self._face

    def scale(self, size: float) -> float:
        """Return the factor converting font design units to the given size."""
        return size / self._units_per_em

    def metrics(self, size: float) -> FontMetrics:
        """Return font metrics scaled to a size.

        Ascender, descender and line height are scaled; style flags, weight
        and width are classifications and are returned unchanged.

        Args:
            size: Requested size (pixels per em)

        Returns:
            Scaled FontMetrics
        """
        return self._metrics.scaled(self.scale(size))

    def unscaled_metrics(self) -> FontMetrics:
        """Return font metrics in font design units."""
        return self._metrics

    def glyph(self, face: Any, glyph_id: int) -> Glyph | None:
        """Look up a glyph, extracting and caching it on first use.

        Absent glyphs are not cached; looking them up again asks the
        backend again.

        Args:
            face: Face handle from face_ref()
            glyph_id: Backend glyph index (not a code point)

        Returns:
            The glyph, or None if the font cannot produce it

        Raises:
            GlyphCacheBusyError: If called while another lookup on this font
                is filling the cache
        """
        if not 0 <= glyph_id <= MAX_GLYPH_ID:
            return None

        cached = self._glyphs.get(glyph_id)
        if cached is not None:
            self._glyph_logger.log_hit(glyph_id)
            return cached

        return self._glyphs.get_or_insert(glyph_id, lambda: self._extract_glyph(face, glyph_id))

    def glyph_rendering_representation(
        self, face: Any, glyph_id: int, pixels_per_em: int
    ) -> GlyphRendering | None:
        """Decide how a glyph should be drawn at a pixel size.

        Args:
            face: Face handle from face_ref()
            glyph_id: Backend glyph index
            pixels_per_em: Target pixel size

        Returns:
            RenderAsImage for an embedded bitmap, RenderAsPath for an
            outline, or None if neither is available
        """
        return select_glyph_rendering(self, face, glyph_id, pixels_per_em)

    def _extract_glyph(self, face: Any, glyph_id: int) -> Glyph | None:
        self._glyph_logger.log_miss(glyph_id)

        outline = self._backend.extract_glyph_outline(face, glyph_id)
        if outline is not None:
            path, bbox = outline
            glyph = Glyph(
                path=path,
                metrics=GlyphMetrics(
                    width=bbox.width,
                    height=bbox.height,
                    bearing_x=bbox.x_min,
                    bearing_y=bbox.y_max,
                ),
            )
            self._glyph_logger.log_glyph_extracted(glyph_id, is_bitmap=False)
            return glyph

        if self._backend.supports_raster:
            strike = self._backend.extract_glyph_raster(
                face, glyph_id, self._rendering.metrics_pixels_per_em
            )
            if strike is not None:
                glyph = Glyph(path=None, metrics=strike.placement_metrics(self._units_per_em))
                self._glyph_logger.log_glyph_extracted(glyph_id, is_bitmap=True)
                return glyph

        self._glyph_logger.log_glyph_absent(glyph_id)
        return None

    def __repr__(self) -> str:
        return (
            f"Font(data=.., face_index={self._face_index}, "
            f"units_per_em={self._units_per_em}, metrics={self._metrics!r}, "
            f"glyphs={len(self._glyphs)})"
        )
