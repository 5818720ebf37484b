"""Font I/O layer for glyphcache.

This module reads font files from disk and constructs Font objects from
them. Parsing itself is left to the active backend.

Key classes:
- FontReader: Load a font file and iterate its glyphs
"""

from glyphcache.io.reader import FontReader

__all__ = [
    "FontReader",
]
