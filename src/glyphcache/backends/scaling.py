"""Scaling backend built on FreeType (freetype-py).

This backend only produces vector outlines. Glyphs are loaded through a
stateful scaler that lives in the process-wide ScaleContext, and style
classification is approximated from the face's style name and style flags
rather than read from the OS/2 table.
"""

from dataclasses import dataclass
from enum import Enum, auto
from io import BytesIO
from typing import Any

import freetype
import structlog

from glyphcache.backends.base import (
    DEFAULT_WEIGHT_CLASS,
    FontBackend,
    RawFontMetrics,
    check_table_directory,
    width_class_for_stretch,
)
from glyphcache.backends.scale_context import ScaleContext
from glyphcache.domain import BoundingBox, Path, PathBuilder
from glyphcache.exceptions import FontParseError

logger = structlog.get_logger("glyphcache.backends.scaling")

NORMAL_STRETCH = 1.0
BOLD_WEIGHT = 700

LOAD_FLAGS = freetype.FT_LOAD_NO_SCALE | freetype.FT_LOAD_NO_HINTING | freetype.FT_LOAD_NO_BITMAP

# Compound keywords come before the words they contain
WEIGHT_KEYWORDS: tuple[tuple[str, int], ...] = (
    ("extralight", 200),
    ("ultralight", 200),
    ("semibold", 600),
    ("demibold", 600),
    ("extrabold", 800),
    ("ultrabold", 800),
    ("hairline", 100),
    ("thin", 100),
    ("light", 300),
    ("regular", 400),
    ("normal", 400),
    ("book", 400),
    ("medium", 500),
    ("bold", 700),
    ("heavy", 900),
    ("black", 900),
)

STRETCH_KEYWORDS: tuple[tuple[str, float], ...] = (
    ("ultracondensed", 0.5),
    ("extracondensed", 0.625),
    ("semicondensed", 0.875),
    ("condensed", 0.75),
    ("ultraexpanded", 2.0),
    ("extraexpanded", 1.5),
    ("semiexpanded", 1.125),
    ("expanded", 1.25),
)


class FontStyle(Enum):
    """Slant classification reported by the scaler."""

    NORMAL = auto()
    ITALIC = auto()
    OBLIQUE = auto()


@dataclass(frozen=True)
class ScalerAttributes:
    """Approximate style attributes of a face."""

    weight: int
    style: FontStyle
    stretch: float
    variable: bool


@dataclass(frozen=True)
class ScalerMetrics:
    """Vertical metrics as the scaler reports them.

    Ascent and descent are both positive distances from the baseline.
    """

    units_per_em: int
    ascent: float
    descent: float
    leading: float


@dataclass(frozen=True)
class ScalingFace:
    """Handle for a font parsed by the scaling backend.

    Attributes:
        key: Identity of the font inside the shared ScaleContext
        data: Font bytes
        face_index: Face number inside a collection
        glyph_count: Number of glyphs in the face
        style_name: Face style name as FreeType reports it
        style_flags: FreeType FT_STYLE_FLAG_* bits
        metrics: Vertical metrics reported by the scaler
        variable: Whether the face exposes variation axes
    """

    key: object
    data: bytes
    face_index: int
    glyph_count: int
    style_name: str
    style_flags: int
    metrics: ScalerMetrics
    variable: bool


def _normalize_style_name(style_name: str) -> str:
    return "".join(ch for ch in style_name.lower() if ch.isalnum())


def approximate_attributes(
    style_name: str, style_flags: int, variable: bool
) -> ScalerAttributes:
    """Approximate weight, slant and stretch from a face's style name.

    Args:
        style_name: Face style name (e.g. "Bold Condensed Italic")
        style_flags: FreeType FT_STYLE_FLAG_* bits
        variable: Whether the face exposes variation axes

    Returns:
        ScalerAttributes for the face
    """
    name = _normalize_style_name(style_name)

    weight = next((value for keyword, value in WEIGHT_KEYWORDS if keyword in name), None)
    if weight is None:
        weight = BOLD_WEIGHT if style_flags & freetype.FT_STYLE_FLAG_BOLD else DEFAULT_WEIGHT_CLASS

    if "oblique" in name:
        style = FontStyle.OBLIQUE
    elif style_flags & freetype.FT_STYLE_FLAG_ITALIC or "italic" in name:
        style = FontStyle.ITALIC
    else:
        style = FontStyle.NORMAL

    stretch = next(
        (value for keyword, value in STRETCH_KEYWORDS if keyword in name), NORMAL_STRETCH
    )

    return ScalerAttributes(weight=weight, style=style, stretch=stretch, variable=variable)



def _decode_name(value: bytes | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


class ScalingBackend(FontBackend):
    """FreeType-backed outline extraction through a shared ScaleContext."""

    name = "scaling"
    supports_raster = False

    def __init__(self, scale_context: ScaleContext | None = None) -> None:
        """Initialize the backend.

        Args:
            scale_context: Shared scaling context (a private one if None)
        """
        self.scale_context = scale_context or ScaleContext()

    def parse(self, data: bytes, face_index: int) -> ScalingFace:
        if face_index < 0:
            raise FontParseError(f"face index {face_index} is negative")

        check_table_directory(data, face_index)

        try:
            face = freetype.Face(BytesIO(data), face_index)
            ascent = float(face.ascender)
            descent = float(-face.descender)
            scaler_metrics = ScalerMetrics(
                units_per_em=face.units_per_EM,
                ascent=ascent,
                descent=descent,
                leading=float(face.height) - ascent - descent,
            )
            handle = ScalingFace(
                key=object(),
                data=data,
                face_index=face_index,
                glyph_count=face.num_glyphs,
                style_name=_decode_name(face.style_name),
                style_flags=face.style_flags,
                metrics=scaler_metrics,
                variable=bool(face.has_multiple_masters),
            )
        except Exception as e:
            logger.warning(
                "Font parse failed",
                backend=self.name,
                face_index=face_index,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise FontParseError(str(e) or type(e).__name__) from e

        return handle

    def read_metrics(self, face: ScalingFace) -> RawFontMetrics:
        attributes = approximate_attributes(face.style_name, face.style_flags, face.variable)
        metrics = face.metrics

        is_regular = (
            attributes.weight == DEFAULT_WEIGHT_CLASS
            and attributes.style is FontStyle.NORMAL
            and attributes.stretch == NORMAL_STRETCH
        )

        return RawFontMetrics(
            units_per_em=metrics.units_per_em,
            ascender=metrics.ascent,
            descender=-metrics.descent,
            # ascent and descent are both positive here, so this is a sum
            height=metrics.ascent + metrics.descent + metrics.leading,
            regular=is_regular,
            italic=attributes.style is FontStyle.ITALIC,
            bold=attributes.weight >= BOLD_WEIGHT,
            oblique=attributes.style is FontStyle.OBLIQUE,
            variable=attributes.variable,
            weight=attributes.weight,
            width=width_class_for_stretch(attributes.stretch),
            glyph_count=face.glyph_count,
        )

    def extract_glyph_outline(
        self, face: ScalingFace, glyph_id: int
    ) -> tuple[Path, BoundingBox] | None:
        if not 0 <= glyph_id < face.glyph_count:
            return None

        try:
            with self.scale_context.scaler(face.key, face.data, face.face_index) as ft_face:
                ft_face.load_glyph(glyph_id, LOAD_FLAGS)
                outline = ft_face.glyph.outline
                if outline.n_contours <= 0:
                    return None
                path = _outline_to_path(outline)
                cbox = outline.get_cbox()
        except Exception as e:
            logger.debug(
                "Glyph outline extraction failed",
                glyph_id=glyph_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        if path.is_empty():
            return None
        return path, BoundingBox(
            float(cbox.xMin), float(cbox.yMin), float(cbox.xMax), float(cbox.yMax)
        )

    def acquire(self, face: ScalingFace) -> None:
        self.scale_context.retain()

    def release(self, face: ScalingFace) -> None:
        self.scale_context.forget(face.key)
        self.scale_context.release()

    def __repr__(self) -> str:
        return f"ScalingBackend(refcount={self.scale_context.refcount})"


def _outline_to_path(outline: Any) -> Path:
    """Decompose a FreeType outline into a Path, closing every contour."""
    builder = PathBuilder()
    open_contour = False

    def move_to(p: Any, _ctx: Any) -> int:
        nonlocal open_contour
        if open_contour:
            builder.close()
        builder.move_to(float(p.x), float(p.y))
        open_contour = True
        return 0

    def line_to(p: Any, _ctx: Any) -> int:
        builder.line_to(float(p.x), float(p.y))
        return 0

    def conic_to(c: Any, p: Any, _ctx: Any) -> int:
        builder.quad_to(float(c.x), float(c.y), float(p.x), float(p.y))
        return 0

    def cubic_to(c1: Any, c2: Any, p: Any, _ctx: Any) -> int:
        builder.bezier_to(
            float(c1.x), float(c1.y), float(c2.x), float(c2.y), float(p.x), float(p.y)
        )
        return 0

    outline.decompose(move_to=move_to, line_to=line_to, conic_to=conic_to, cubic_to=cubic_to)
    if open_contour:
        builder.close()
    return builder.build()
