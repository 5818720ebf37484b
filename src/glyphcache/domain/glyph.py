"""Glyph representation and rendering variants.

This module defines the glyph domain model stored in a font's glyph cache,
the embedded raster strike reported by backends that parse bitmap tables,
and the two rendering representations handed to the renderer.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from glyphcache.domain.path import Path

if TYPE_CHECKING:
    from PIL.Image import Image


@dataclass(frozen=True, slots=True)
class GlyphMetrics:
    """Placement metrics of a glyph.

    All values are in font design units, whatever the glyph's representation.

    Attributes:
        width: Horizontal extent
        height: Vertical extent
        bearing_x: Offset from the origin to the left edge
        bearing_y: Offset from the baseline to the top edge
    """

    width: float
    height: float
    bearing_x: float
    bearing_y: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "bearing_x": self.bearing_x,
            "bearing_y": self.bearing_y,
        }


@dataclass(frozen=True)
class Glyph:
    """A cached glyph.

    Attributes:
        path: Vector outline, or None when the glyph renders as an image
        metrics: Placement metrics in font design units
    """

    path: Path | None
    metrics: GlyphMetrics

    def is_bitmap(self) -> bool:
        """Check if the glyph must be rendered from an embedded bitmap.

        Returns:
            True if the glyph has no outline, False otherwise
        """
        return self.path is None


@dataclass(frozen=True)
class RasterStrike:
    """An embedded bitmap glyph at one strike size.

    Attributes:
        data: Encoded image bytes
        image_format: Encoding of data (only "png" is reported)
        x: Left edge in pixels relative to the origin
        y: Bottom edge in pixels relative to the baseline
        width: Image width in pixels
        height: Image height in pixels
        pixels_per_em: Strike size the image was drawn for
    """

    data: bytes
    image_format: str
    x: int
    y: int
    width: int
    height: int
    pixels_per_em: int

    def placement_metrics(self, units_per_em: int) -> GlyphMetrics:
        """Scale the strike placement into font design units.

        Args:
            units_per_em: The owning font's units per em

        Returns:
            GlyphMetrics comparable with outline glyph metrics
        """
        if self.pixels_per_em != 0:
            scale = units_per_em / self.pixels_per_em
        else:
            scale = 1.0
        return GlyphMetrics(
            width=self.width * scale,
            height=self.height * scale,
            bearing_x=self.x * scale,
            bearing_y=(self.y + self.height) * scale,
        )


@dataclass(frozen=True)
class RenderAsPath:
    """Render the glyph by filling its outline."""

    path: Path


@dataclass(frozen=True)
class RenderAsImage:
    """Render the glyph by drawing a decoded bitmap."""

    image: "Image"


GlyphRendering = RenderAsPath | RenderAsImage
