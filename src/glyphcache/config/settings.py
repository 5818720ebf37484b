"""Configuration settings for glyphcache."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class BackendKind(str, Enum):
    """Font backend selection."""

    AUTO = "auto"
    OUTLINE = "outline"
    SCALING = "scaling"
    NONE = "none"


class BackendConfig(BaseModel):
    """Configuration for backend selection.

    AUTO prefers the outline backend (fontTools) and falls back to the
    scaling backend (FreeType). NONE disables font construction entirely.
    """

    kind: BackendKind = Field(
        default=BackendKind.AUTO,
        description="Font backend to use",
    )


class ScalingConfig(BaseModel):
    """Configuration for the shared scaling context."""

    max_cached_faces: int = Field(
        default=8,
        ge=1,
        le=64,
        description="FreeType faces kept alive in the shared scaling context",
    )


class RenderingConfig(BaseModel):
    """Configuration for glyph rendering representation."""

    load_images: bool = Field(
        default=True,
        description="Decode embedded raster strikes into images",
    )
    metrics_pixels_per_em: int = Field(
        default=65535,
        ge=1,
        le=65535,
        description="Strike size probed for placement metrics of bitmap-only glyphs",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphCacheSettings(BaseModel):
    """Main settings."""

    backend: BackendConfig = Field(default_factory=BackendConfig)
    scaling: ScalingConfig = Field(default_factory=ScalingConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphCacheSettings:
    """Get default settings."""
    return GlyphCacheSettings()
