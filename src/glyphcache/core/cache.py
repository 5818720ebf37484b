"""Append-only glyph cache.

The cache maps glyph ids to immutable Glyph values. Entries are created on
first lookup and are never replaced or evicted: font bytes never change for
the lifetime of a Font, so a cached glyph stays valid forever.

Absent glyphs are not recorded, so looking up a missing glyph id asks the
backend again every time.
"""

import threading
from collections.abc import Callable

from glyphcache.domain import Glyph
from glyphcache.exceptions import GlyphCacheBusyError


class GlyphCache:
    """Glyph id to Glyph mapping with a single in-flight fill.

    Hits never block. A miss runs the extraction callable while holding a
    non-blocking lock; a second fill requested while one is running (from
    the same call stack or another thread) fails immediately with
    GlyphCacheBusyError instead of waiting.

    Example:
        cache = GlyphCache()
        glyph = cache.get_or_insert(36, lambda: extract(36))
    """

    def __init__(self) -> None:
        self._glyphs: dict[int, Glyph] = {}
        self._fill_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._glyphs)

    def __contains__(self, glyph_id: object) -> bool:
        return glyph_id in self._glyphs

    def get(self, glyph_id: int) -> Glyph | None:
        """Return the cached glyph without filling on a miss."""
        return self._glyphs.get(glyph_id)

    def get_or_insert(
        self, glyph_id: int, extract: Callable[[], Glyph | None]
    ) -> Glyph | None:
        """Return the cached glyph, extracting and inserting it on a miss.

        Args:
            glyph_id: Glyph to look up
            extract: Produces the glyph, or None if the font has no such glyph

        Returns:
            The cached or newly inserted glyph, or None if absent

        Raises:
            GlyphCacheBusyError: If another fill is already in flight
        """
        glyph = self._glyphs.get(glyph_id)
        if glyph is not None:
            return glyph

        if not self._fill_lock.acquire(blocking=False):
            raise GlyphCacheBusyError(glyph_id)
        try:
            glyph = self._glyphs.get(glyph_id)
            if glyph is not None:
                return glyph

            glyph = extract()
            if glyph is not None:
                glyph = self._glyphs.setdefault(glyph_id, glyph)
        finally:
            self._fill_lock.release()

        return glyph
