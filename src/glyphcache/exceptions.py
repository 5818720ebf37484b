"""Exception hierarchy for glyphcache."""


class GlyphCacheError(Exception):
    """Base exception for all glyphcache errors."""

    pass


class FontError(GlyphCacheError):
    """Errors related to font construction or loading."""

    pass


class FontParseError(FontError):
    """Font bytes could not be turned into a usable font face."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to parse font: {reason}")


class BackendUnavailableError(FontParseError):
    """No font backend is configured or importable."""

    def __init__(self, requested: str = "auto") -> None:
        self.requested = requested
        super().__init__(f"no font backend available (requested '{requested}')")


class FontLoadError(FontError):
    """Error loading a font file from disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphError(GlyphCacheError):
    """Errors related to glyph lookup."""

    pass


class GlyphCacheBusyError(GlyphError):
    """A glyph cache fill was requested while another fill is in flight."""

    def __init__(self, glyph_id: int) -> None:
        self.glyph_id = glyph_id
        super().__init__(
            f"Glyph cache is busy; lookup of glyph {glyph_id} overlaps another cache fill"
        )
