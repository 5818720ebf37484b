"""Outline backend built on fontTools.

This is the full-featured backend: vector outlines for TrueType and CFF
glyphs, embedded PNG raster strikes from sbix and CBDT/CBLC tables, and
style classification read directly from the OS/2 table.
"""

from io import BytesIO
from typing import Any

import structlog
from fontTools.pens.basePen import BasePen
from fontTools.pens.boundsPen import ControlBoundsPen
from fontTools.ttLib import TTFont
from PIL import Image

from glyphcache.backends.base import (
    COLLECTION_TAG,
    DEFAULT_WEIGHT_CLASS,
    DEFAULT_WIDTH_CLASS,
    FontBackend,
    RawFontMetrics,
    check_table_directory,
    normalize_weight_class,
    normalize_width_class,
)
from glyphcache.domain import BoundingBox, Path, PathBuilder, RasterStrike
from glyphcache.exceptions import FontParseError

logger = structlog.get_logger("glyphcache.backends.outline")

REQUIRED_TABLES = ("head", "hhea", "maxp")

# OS/2 fsSelection bits
FS_ITALIC = 1 << 0
FS_BOLD = 1 << 5
FS_REGULAR = 1 << 6
FS_USE_TYPO_METRICS = 1 << 7
FS_OBLIQUE = 1 << 9

SBIX_PNG = "png "
CBDT_PNG_EXTENSION = ".png"


class PathPen(BasePen):
    """fontTools pen that records drawing calls into a PathBuilder.

    BasePen splits multi-point quadratic and cubic segments into single
    segments, so the resulting Path holds one QUAD_TO / BEZIER_TO per curve.
    """

    def __init__(self, glyphSet: Any = None) -> None:
        super().__init__(glyphSet)
        self.builder = PathBuilder()

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.builder.move_to(pt[0], pt[1])

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.builder.line_to(pt[0], pt[1])

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.builder.quad_to(pt1[0], pt1[1], pt2[0], pt2[1])

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.builder.bezier_to(pt1[0], pt1[1], pt2[0], pt2[1], pt3[0], pt3[1])

    def _closePath(self) -> None:
        self.builder.close()


class OutlineFace:
    """A parsed fontTools face.

    Attributes:
        font: The fontTools TTFont
        face_index: Face number inside a collection
    """

    def __init__(self, font: TTFont, face_index: int) -> None:
        self.font = font
        self.face_index = face_index
        self._glyph_order: list[str] = font.getGlyphOrder()
        self._glyph_set: Any = None

    @property
    def glyph_set(self) -> Any:
        if self._glyph_set is None:
            self._glyph_set = self.font.getGlyphSet()
        return self._glyph_set

    def glyph_name(self, glyph_id: int) -> str | None:
        """Resolve a glyph id to its glyph name, or None if out of range."""
        if 0 <= glyph_id < len(self._glyph_order):
            return self._glyph_order[glyph_id]
        return None

    def __repr__(self) -> str:
        return f"OutlineFace(face_index={self.face_index}, glyphs={len(self._glyph_order)})"


def best_strike_size(sizes: list[int], pixels_per_em: int) -> int | None:
    """Pick the strike to use for a requested size.

    The smallest strike at least as large as the request wins; when every
    strike is smaller, the largest one is used.

    Args:
        sizes: Available strike sizes in pixels per em
        pixels_per_em: Requested size

    Returns:
        Chosen strike size, or None if there are no strikes
    """
    if not sizes:
        return None
    larger = [size for size in sizes if size >= pixels_per_em]
    if larger:
        return min(larger)
    return max(sizes)


def png_size(data: bytes) -> tuple[int, int]:
    """Read the pixel size from a PNG header without decoding it."""
    with Image.open(BytesIO(data)) as image:
        return image.size


def _bitmap_bearings(metrics: Any) -> tuple[int, int]:
    if hasattr(metrics, "horiBearingX"):
        return metrics.horiBearingX, metrics.horiBearingY
    return metrics.BearingX, metrics.BearingY


class OutlineBackend(FontBackend):
    """fontTools-backed outline and raster extraction."""

    name = "outline"
    supports_raster = True

    def parse(self, data: bytes, face_index: int) -> OutlineFace:
        if face_index < 0:
            raise FontParseError(f"face index {face_index} is negative")

        is_collection = data[:4] == COLLECTION_TAG
        if not is_collection and face_index != 0:
            raise FontParseError(
                f"face index {face_index} out of range for a single-face font"
            )

        check_table_directory(data, face_index)

        try:
            font = TTFont(BytesIO(data), fontNumber=face_index if is_collection else -1)
            for tag in REQUIRED_TABLES:
                font[tag]  # decompiles the table
            face = OutlineFace(font, face_index)
        except Exception as e:
            logger.warning(
                "Font parse failed",
                backend=self.name,
                face_index=face_index,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise FontParseError(str(e) or type(e).__name__) from e

        return face

    def read_metrics(self, face: OutlineFace) -> RawFontMetrics:
        font = face.font
        try:
            head = font["head"]
            hhea = font["hhea"]
            os2 = font.get("OS/2")
            post = font.get("post")
            glyph_count = font["maxp"].numGlyphs
        except Exception as e:
            raise FontParseError(f"unreadable metrics tables: {e}") from e

        fs_selection = os2.fsSelection if os2 is not None else 0

        if fs_selection & FS_USE_TYPO_METRICS:
            ascender = os2.sTypoAscender
            descender = os2.sTypoDescender
            line_gap = os2.sTypoLineGap
        else:
            ascender = hhea.ascent
            descender = hhea.descent
            line_gap = hhea.lineGap
            if os2 is not None:
                if ascender == 0:
                    ascender = os2.sTypoAscender or os2.usWinAscent
                if descender == 0:
                    descender = os2.sTypoDescender or -os2.usWinDescent
                if line_gap == 0:
                    line_gap = os2.sTypoLineGap

        italic_angle = post.italicAngle if post is not None else 0.0
        italic = bool(fs_selection & FS_ITALIC) or italic_angle != 0
        oblique = (
            os2 is not None
            and os2.version >= 4
            and not fs_selection & FS_ITALIC
            and bool(fs_selection & FS_OBLIQUE)
        )

        return RawFontMetrics(
            units_per_em=head.unitsPerEm,
            ascender=float(ascender),
            descender=float(descender),
            # descender is negative, so this difference already adds its magnitude
            height=float(ascender - descender + line_gap),
            regular=bool(fs_selection & FS_REGULAR),
            italic=italic,
            bold=bool(fs_selection & FS_BOLD),
            oblique=oblique,
            variable="fvar" in font,
            weight=(
                normalize_weight_class(os2.usWeightClass)
                if os2 is not None
                else DEFAULT_WEIGHT_CLASS
            ),
            width=(
                normalize_width_class(os2.usWidthClass)
                if os2 is not None
                else DEFAULT_WIDTH_CLASS
            ),
            glyph_count=glyph_count,
        )

    def extract_glyph_outline(
        self, face: OutlineFace, glyph_id: int
    ) -> tuple[Path, BoundingBox] | None:
        glyph_name = face.glyph_name(glyph_id)
        if glyph_name is None:
            return None

        try:
            glyph_set = face.glyph_set
            glyph = glyph_set[glyph_name]

            pen = PathPen(glyph_set)
            glyph.draw(pen)

            bounds_pen = ControlBoundsPen(glyph_set)
            glyph.draw(bounds_pen)
        except Exception as e:
            logger.debug(
                "Glyph outline extraction failed",
                glyph_id=glyph_id,
                glyph=glyph_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        if pen.builder.is_empty() or bounds_pen.bounds is None:
            return None

        x_min, y_min, x_max, y_max = bounds_pen.bounds
        return pen.builder.build(), BoundingBox(x_min, y_min, x_max, y_max)

    def extract_glyph_raster(
        self, face: OutlineFace, glyph_id: int, pixels_per_em: int
    ) -> RasterStrike | None:
        glyph_name = face.glyph_name(glyph_id)
        if glyph_name is None:
            return None

        font = face.font
        try:
            if "sbix" in font:
                return self._sbix_strike(font, glyph_name, pixels_per_em)
            if "CBDT" in font and "CBLC" in font:
                return self._cbdt_strike(font, glyph_name, pixels_per_em)
        except Exception as e:
            logger.debug(
                "Glyph raster extraction failed",
                glyph_id=glyph_id,
                glyph=glyph_name,
                error=str(e),
                error_type=type(e).__name__,
            )
        return None

    def _sbix_strike(
        self, font: TTFont, glyph_name: str, pixels_per_em: int
    ) -> RasterStrike | None:
        strikes = font["sbix"].strikes
        size = best_strike_size(list(strikes), pixels_per_em)
        if size is None:
            return None

        glyph = strikes[size].glyphs.get(glyph_name)
        if glyph is None or glyph.graphicType != SBIX_PNG or not glyph.imageData:
            return None

        width, height = png_size(glyph.imageData)
        return RasterStrike(
            data=bytes(glyph.imageData),
            image_format="png",
            x=glyph.originOffsetX,
            y=glyph.originOffsetY,
            width=width,
            height=height,
            pixels_per_em=size,
        )

    def _cbdt_strike(
        self, font: TTFont, glyph_name: str, pixels_per_em: int
    ) -> RasterStrike | None:
        cblc_strikes = font["CBLC"].strikes
        strike_indices = {
            strike.bitmapSizeTable.ppemY: index for index, strike in enumerate(cblc_strikes)
        }
        size = best_strike_size(list(strike_indices), pixels_per_em)
        if size is None:
            return None

        index = strike_indices[size]
        bitmap = font["CBDT"].strikeData[index].get(glyph_name)
        if bitmap is None or getattr(bitmap, "fileExtension", None) != CBDT_PNG_EXTENSION:
            return None

        image_data = bitmap.imageData
        metrics = getattr(bitmap, "metrics", None)
        if metrics is None:
            # Format 19 keeps its metrics in the CBLC index subtable
            for subtable in cblc_strikes[index].indexSubTables:
                if glyph_name in getattr(subtable, "names", ()):
                    metrics = getattr(subtable, "metrics", None)
                    break
        if metrics is None or not image_data:
            return None

        bearing_x, bearing_y = _bitmap_bearings(metrics)
        return RasterStrike(
            data=bytes(image_data),
            image_format="png",
            x=bearing_x,
            y=bearing_y - metrics.height,
            width=metrics.width,
            height=metrics.height,
            pixels_per_em=size,
        )
