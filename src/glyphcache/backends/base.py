"""Backend capability shared by every font-processing backend.

A backend knows how to parse font bytes into a face handle, read the face's
font-wide metrics, and extract individual glyphs. Font construction and the
glyph cache are written once against this interface; only parsing, metric
reading and glyph extraction differ between backends.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from io import BytesIO
from typing import Any, ClassVar

from fontTools.ttLib.sfnt import SFNTReader

from glyphcache.domain import BoundingBox, Path, RasterStrike
from glyphcache.exceptions import FontParseError

MIN_WEIGHT_CLASS = 1
MAX_WEIGHT_CLASS = 1000
DEFAULT_WEIGHT_CLASS = 400
DEFAULT_WIDTH_CLASS = 5

COLLECTION_TAG = b"ttcf"
WOFF2_TAG = b"wOF2"

# usWidthClass values keyed by stretch ratio
# https://learn.microsoft.com/en-us/typography/opentype/spec/os2#uswidthclass
STRETCH_WIDTH_CLASSES: dict[float, int] = {
    0.5: 1,  # ultra-condensed
    0.625: 2,  # extra-condensed
    0.75: 3,  # condensed
    0.875: 4,  # semi-condensed
    1.0: 5,  # normal
    1.125: 6,  # semi-expanded
    1.25: 7,  # expanded
    1.5: 8,  # extra-expanded
    2.0: 9,  # ultra-expanded
}


def width_class_for_stretch(stretch: float) -> int:
    """Map a stretch ratio to its usWidthClass bucket.

    Args:
        stretch: Width relative to normal (1.0)

    Returns:
        Width class 1-9; any ratio outside the table maps to 5
    """
    return STRETCH_WIDTH_CLASSES.get(stretch, DEFAULT_WIDTH_CLASS)


def normalize_weight_class(weight: int) -> int:
    """Keep a weight class inside 1-1000, falling back to 400."""
    if MIN_WEIGHT_CLASS <= weight <= MAX_WEIGHT_CLASS:
        return weight
    return DEFAULT_WEIGHT_CLASS


def normalize_width_class(width: int) -> int:
    """Keep a width class inside 1-9, falling back to 5."""
    if 1 <= width <= 9:
        return width
    return DEFAULT_WIDTH_CLASS


def check_table_directory(data: bytes, face_index: int) -> None:
    """Check that every table record of the selected face lies inside data.

    Backends decompile only the tables they need, so a font cut short inside a
    table they ignore would otherwise load.

    Args:
        data: Whole font file (possibly a collection)
        face_index: Face to select within a collection

    Raises:
        FontParseError: If the directory is unreadable or a table overruns data
    """
    # WOFF2 tables are stored as one compressed stream
    if data[:4] == WOFF2_TAG:
        return

    is_collection = data[:4] == COLLECTION_TAG
    try:
        reader = SFNTReader(
            BytesIO(data), checkChecksums=0, fontNumber=face_index if is_collection else -1
        )
    except Exception as e:
        raise FontParseError(f"unreadable table directory: {str(e) or type(e).__name__}") from e

    for tag, entry in reader.tables.items():
        if entry.offset + entry.length > len(data):
            raise FontParseError(f"table '{tag}' extends past the end of the data")


@dataclass(frozen=True)
class RawFontMetrics:
    """Font-wide values read from a face, in font design units.

    Attributes:
        units_per_em: Design grid resolution
        ascender: Distance above the baseline
        descender: Signed distance below the baseline (negative)
        height: Line height
        regular: Regular style bit
        italic: Italic style bit
        bold: Bold style bit
        oblique: Oblique style bit
        variable: Font exposes variation axes
        weight: Weight class
        width: Width class
        glyph_count: Number of glyphs in the face
    """

    units_per_em: int
    ascender: float
    descender: float
    height: float
    regular: bool
    italic: bool
    bold: bool
    oblique: bool
    variable: bool
    weight: int
    width: int
    glyph_count: int = 0


class FontBackend(ABC):
    """Pluggable font parsing implementation.

    Subclasses must never let a library exception escape from glyph
    extraction: a malformed glyph is reported as None so the rest of the
    font stays usable.
    """

    name: ClassVar[str] = "abstract"
    supports_raster: ClassVar[bool] = False

    @abstractmethod
    def parse(self, data: bytes, face_index: int) -> Any:
        """Parse font bytes into a backend face handle.

        Args:
            data: Whole font file (possibly a collection)
            face_index: Face to select within a collection

        Returns:
            Backend-specific face handle

        Raises:
            FontParseError: If the data is not a usable font face
        """

    @abstractmethod
    def read_metrics(self, face: Any) -> RawFontMetrics:
        """Read font-wide metrics and style classification.

        Raises:
            FontParseError: If required tables are missing or malformed
        """

    @abstractmethod
    def extract_glyph_outline(
        self, face: Any, glyph_id: int
    ) -> tuple[Path, BoundingBox] | None:
        """Extract the vector outline of one glyph.

        Returns:
            Outline and its bounds in font design units, or None
        """

    def extract_glyph_raster(
        self, face: Any, glyph_id: int, pixels_per_em: int
    ) -> RasterStrike | None:
        """Extract an embedded bitmap glyph for the closest strike size.

        Returns:
            RasterStrike, or None if the backend has no bitmap support
        """
        return None

    def acquire(self, face: Any) -> None:
        """Called once for every font constructed with this backend."""

    def release(self, face: Any) -> None:
        """Called once when a font constructed with this backend is dropped."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
