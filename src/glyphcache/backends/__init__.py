"""Font backends for glyphcache.

Two mutually exclusive backends implement the FontBackend capability:

- OutlineBackend (fontTools): outlines, embedded PNG raster strikes and
  style classification read from the font's tables
- ScalingBackend (freetype-py): outlines through a shared, stateful
  scaler with approximate style classification

Exactly one backend is active per TextContext. select_backend() resolves
the configured BackendKind against the libraries that can be imported.
"""

from importlib.util import find_spec

import structlog

from glyphcache.backends.base import (
    STRETCH_WIDTH_CLASSES,
    FontBackend,
    RawFontMetrics,
    width_class_for_stretch,
)
from glyphcache.config import BackendKind

logger = structlog.get_logger("glyphcache.backends")

OUTLINE_MODULE = "fontTools"
SCALING_MODULE = "freetype"


def backend_available(kind: BackendKind) -> bool:
    """Check whether the library behind a backend can be imported."""
    if kind is BackendKind.OUTLINE:
        return find_spec(OUTLINE_MODULE) is not None
    if kind is BackendKind.SCALING:
        return find_spec(SCALING_MODULE) is not None
    return False


def select_backend(kind: BackendKind, max_cached_faces: int = 8) -> FontBackend | None:
    """Create the backend for a configured kind.

    AUTO prefers the outline backend and falls back to the scaling backend.

    Args:
        kind: Configured backend kind
        max_cached_faces: Face cache size of the scaling backend's context

    Returns:
        A backend instance, or None if no backend is usable
    """
    candidates: tuple[BackendKind, ...]
    if kind is BackendKind.AUTO:
        candidates = (BackendKind.OUTLINE, BackendKind.SCALING)
    elif kind is BackendKind.NONE:
        candidates = ()
    else:
        candidates = (kind,)

    for candidate in candidates:
        if not backend_available(candidate):
            logger.debug("Backend library not importable", backend=candidate.value)
            continue

        if candidate is BackendKind.OUTLINE:
            from glyphcache.backends.outline import OutlineBackend

            return OutlineBackend()

        from glyphcache.backends.scale_context import ScaleContext
        from glyphcache.backends.scaling import ScalingBackend

        return ScalingBackend(ScaleContext(max_faces=max_cached_faces))

    logger.warning("No font backend available", requested=kind.value)
    return None


__all__ = [
    "STRETCH_WIDTH_CLASSES",
    "FontBackend",
    "RawFontMetrics",
    "backend_available",
    "select_backend",
    "width_class_for_stretch",
]
