"""Font reader for loading font files from disk.

This module provides the FontReader class for reading a font file into
memory and constructing a Font from it.
"""

from collections.abc import Iterator
from pathlib import Path

from glyphcache.core import Font, TextContext
from glyphcache.domain import Glyph
from glyphcache.exceptions import FontLoadError, FontParseError


class FontReader:
    """Loads a font file and exposes its glyphs.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            for glyph_id, glyph in reader.iter_glyphs():
                print(glyph_id, glyph.metrics)
    """

    def __init__(
        self,
        font_path: Path,
        face_index: int = 0,
        context: TextContext | None = None,
    ) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the font file
            face_index: Face to select within a collection
            context: Text context to construct the font with (a default one if None)
        """
        self._font_path = font_path
        self._face_index = face_index
        self._context = context
        self._font: Font | None = None

    def load(self) -> Font:
        """Read the file and construct the font.

        Returns:
            The constructed Font

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If the file cannot be read or parsed
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            data = self._font_path.read_bytes()
        except OSError as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

        if self._context is None:
            self._context = TextContext()

        try:
            self._font = self._context.load_font(data, self._face_index)
        except FontParseError as e:
            raise FontLoadError(str(self._font_path), e.reason) from e

        return self._font

    @property
    def font(self) -> Font:
        """Return the loaded font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")

        return self._font

    @property
    def units_per_em(self) -> int:
        """Return the font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self.font.units_per_em

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the face.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self.font.glyph_count

    def iter_glyphs(self) -> Iterator[tuple[int, Glyph]]:
        """Iterate over every glyph the font can produce.

        Glyph ids without an outline or bitmap are skipped.

        Yields:
            (glyph_id, Glyph) pairs in glyph id order

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self.font
        face = font.face_ref()

        for glyph_id in range(font.glyph_count):
            glyph = font.glyph(face, glyph_id)
            if glyph is not None:
                yield glyph_id, glyph

    def close(self) -> None:
        """Drop the loaded font."""
        self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
