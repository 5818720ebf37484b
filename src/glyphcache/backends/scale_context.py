"""Shared scaling context for the FreeType scaling backend.

Every font parsed by the scaling backend extracts glyphs through one
ScaleContext. The context keeps a small LRU of FreeType faces (the scaler's
scratch state lives in each face's glyph slot) and serialises extraction
with a lock, since a glyph slot cannot be loaded by two callers at once.
"""

import threading
from collections import OrderedDict
from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from io import BytesIO
from typing import Any

import freetype
import structlog

logger = structlog.get_logger("glyphcache.backends.scale_context")


class ScaleContext:
    """Reference-counted, lock-guarded cache of FreeType faces.

    Example:
        context = ScaleContext()
        context.retain()
        with context.scaler(key, data, 0) as face:
            face.load_glyph(3, freetype.FT_LOAD_NO_SCALE)
        context.release()
    """

    def __init__(self, max_faces: int = 8) -> None:
        """Initialize the context.

        Args:
            max_faces: Number of FreeType faces kept alive between extractions
        """
        self._max_faces = max_faces
        self._lock = threading.RLock()
        self._faces: OrderedDict[Hashable, Any] = OrderedDict()
        self._refcount = 0

    @property
    def refcount(self) -> int:
        return self._refcount

    @property
    def cached_face_count(self) -> int:
        return len(self._faces)

    def retain(self) -> "ScaleContext":
        """Register one more font using this context."""
        with self._lock:
            self._refcount += 1
        return self

    def release(self) -> None:
        """Drop one font's reference; tear down scratch state on the last one."""
        with self._lock:
            if self._refcount == 0:
                return
            self._refcount -= 1
            if self._refcount == 0:
                self._faces.clear()
                logger.debug("Scale context released")

    @contextmanager
    def scaler(self, key: Hashable, data: bytes, face_index: int) -> Iterator[Any]:
        """Borrow the FreeType face for one font exclusively.

        A second caller blocks until the first leaves the ``with`` block.

        Args:
            key: Identity of the font the face belongs to
            data: Font bytes used to create the face on a cache miss
            face_index: Face number inside a collection

        Yields:
            The freetype.Face for the font
        """
        with self._lock:
            face = self._faces.get(key)
            if face is None:
                face = freetype.Face(BytesIO(data), face_index)
                self._faces[key] = face
                while len(self._faces) > self._max_faces:
                    self._faces.popitem(last=False)
            else:
                self._faces.move_to_end(key)
            yield face

    def forget(self, key: Hashable) -> None:
        """Drop the cached face for one font."""
        with self._lock:
            self._faces.pop(key, None)
