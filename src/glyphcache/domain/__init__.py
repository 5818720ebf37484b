"""Domain models for glyphcache.

This module contains the value types exchanged between the font backends,
the glyph cache and the renderer. All models are:

- Immutable (frozen dataclasses), so cached glyphs can be shared freely
- Independent of fontTools and FreeType implementation details

Key classes:
- Path / PathBuilder: Glyph outline in font design units
- BoundingBox: Outline bounds
- GlyphMetrics: Placement metrics of one glyph
- Glyph: A cached glyph (outline or bitmap marker)
- RasterStrike: An embedded bitmap reported by a backend
- RenderAsPath / RenderAsImage: Rendering representations
- FontFlags / FontMetrics: Font-wide metrics and style classification
"""

from glyphcache.domain.glyph import (
    Glyph,
    GlyphMetrics,
    GlyphRendering,
    RasterStrike,
    RenderAsImage,
    RenderAsPath,
)
from glyphcache.domain.metrics import FontFlags, FontMetrics
from glyphcache.domain.path import BoundingBox, Path, PathBuilder, PathCommand, PathVerb

__all__: list[str] = [
    # Enums
    "FontFlags",
    "PathVerb",
    # Geometry
    "BoundingBox",
    "Path",
    "PathBuilder",
    "PathCommand",
    # Glyphs
    "Glyph",
    "GlyphMetrics",
    "GlyphRendering",
    "RasterStrike",
    "RenderAsImage",
    "RenderAsPath",
    # Font metrics
    "FontMetrics",
]
