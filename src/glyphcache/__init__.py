"""glyphcache - font faces and lazily cached glyphs for 2D renderers.

glyphcache turns a font file held in memory plus a glyph id into reusable
glyph geometry (a vector path) or a decoded bitmap (an embedded raster strike
such as a colour emoji), and turns a point size into scaled font metrics.
Two font-processing backends (fontTools and FreeType) sit behind a single
interface.

Example:
    >>> from glyphcache import TextContext
    >>> context = TextContext()
    >>> font = context.load_font(open("Roboto-Regular.ttf", "rb").read())
    >>> font.metrics(16.0).ascender
"""

from glyphcache.core import Font, TextContext
from glyphcache.exceptions import BackendUnavailableError, FontParseError

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = [
    "BackendUnavailableError",
    "Font",
    "FontParseError",
    "TextContext",
    "__author__",
    "__version__",
]
