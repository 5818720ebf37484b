"""Glyph rendering selector.

Decides, per call, whether a glyph is drawn from an embedded bitmap or by
filling its outline. Raster strikes are decoded fresh on every call; they
only occur in bitmap (typically emoji) fonts, so decoded images are not
cached.
"""

from io import BytesIO
from typing import TYPE_CHECKING, Any

from PIL import Image

from glyphcache.domain import GlyphRendering, RasterStrike, RenderAsImage, RenderAsPath

if TYPE_CHECKING:
    from glyphcache.core.font import Font

IMAGE_FORMATS = {"png": "PNG"}


def decode_raster_strike(strike: RasterStrike) -> Image.Image:
    """Decode a raster strike's bytes into an image.

    Args:
        strike: Strike reported by the backend

    Returns:
        Fully loaded PIL image

    Raises:
        OSError: If the bytes are not a decodable image of the strike's format
        ValueError: If the strike's format is not supported
    """
    pil_format = IMAGE_FORMATS.get(strike.image_format)
    if pil_format is None:
        raise ValueError(f"unsupported raster format '{strike.image_format}'")

    image = Image.open(BytesIO(strike.data), formats=[pil_format])
    image.load()
    return image


def select_glyph_rendering(
    font: "Font", face: Any, glyph_id: int, pixels_per_em: int
) -> GlyphRendering | None:
    """Choose the rendering representation of a glyph.

    1. If the backend has raster support, an embedded strike for the pixel
       size is decoded and returned as RenderAsImage.
    2. Otherwise the cached (or newly extracted) outline is returned as
       RenderAsPath.

    Args:
        font: Font that owns the glyph
        face: Face handle from font.face_ref()
        glyph_id: Backend glyph index
        pixels_per_em: Target pixel size

    Returns:
        RenderAsImage, RenderAsPath, or None for a glyph with neither
    """
    backend = font.backend
    if backend.supports_raster and font.load_images:
        strike = backend.extract_glyph_raster(face, glyph_id, pixels_per_em)
        if strike is not None:
            try:
                image = decode_raster_strike(strike)
            except (OSError, SyntaxError, ValueError) as e:
                font.glyph_logger.log_image_error(glyph_id, e)
            else:
                font.glyph_logger.log_image_decoded(glyph_id, strike.pixels_per_em, image.size)
                return RenderAsImage(image)

    glyph = font.glyph(face, glyph_id)
    if glyph is None or glyph.path is None:
        return None
    return RenderAsPath(glyph.path)
