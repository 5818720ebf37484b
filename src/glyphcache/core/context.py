"""Text context: settings plus the active font backend.

A TextContext is created once per renderer. It resolves the configured
backend kind to exactly one backend instance and hands it to every Font
constructed through it, so all of a renderer's fonts share one scaling
context when the FreeType backend is active.
"""

import structlog

from glyphcache.backends import FontBackend, select_backend
from glyphcache.config import GlyphCacheSettings, get_default_settings
from glyphcache.core.font import Font

logger = structlog.get_logger("glyphcache.context")


class TextContext:
    """Owns the active backend for a set of fonts.

    Example:
        context = TextContext()
        font = context.load_font(data)
    """

    def __init__(
        self,
        settings: GlyphCacheSettings | None = None,
        backend: FontBackend | None = None,
    ) -> None:
        """Initialize the context.

        Args:
            settings: Settings (defaults if None)
            backend: Explicit backend, bypassing settings.backend.kind
        """
        self.settings = settings or get_default_settings()
        if backend is None:
            backend = select_backend(
                self.settings.backend.kind,
                max_cached_faces=self.settings.scaling.max_cached_faces,
            )
        self.backend = backend

        logger.debug(
            "Text context created",
            backend=backend.name if backend is not None else None,
        )

    @property
    def has_backend(self) -> bool:
        return self.backend is not None

    def load_font(self, data: bytes | bytearray | memoryview, face_index: int = 0) -> Font:
        """Construct a Font from in-memory font bytes.

        Raises:
            FontParseError: If the font cannot be constructed
        """
        return Font(data, face_index, self)
