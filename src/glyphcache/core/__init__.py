"""Core font and glyph cache logic for glyphcache.

Key classes:
- TextContext: Settings plus the active font backend
- Font: Parsed font with scaled metrics and a lazy glyph cache
- GlyphCache: Append-only glyph id to Glyph mapping

Key functions:
- select_glyph_rendering: Choose bitmap or outline rendering for a glyph
- decode_raster_strike: Decode an embedded bitmap into an image
"""

from glyphcache.core.cache import GlyphCache
from glyphcache.core.context import TextContext
from glyphcache.core.font import Font
from glyphcache.core.rendering import decode_raster_strike, select_glyph_rendering

__all__ = [
    "Font",
    "GlyphCache",
    "TextContext",
    "decode_raster_strike",
    "select_glyph_rendering",
]
