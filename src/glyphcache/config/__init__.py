"""Configuration management for glyphcache.

This module provides configuration management using Pydantic models.
Configuration can be provided by the embedding application, via CLI
arguments, or left at the defaults.

Key classes:
- BackendConfig: Which font backend to use
- ScalingConfig: Shared scaling context settings
- RenderingConfig: Raster strike handling
- LoggingConfig: Logging settings
- GlyphCacheSettings: Main settings
"""

from glyphcache.config.settings import (
    BackendConfig,
    BackendKind,
    GlyphCacheSettings,
    LoggingConfig,
    RenderingConfig,
    ScalingConfig,
    get_default_settings,
)

__all__ = [
    "BackendConfig",
    "BackendKind",
    "GlyphCacheSettings",
    "LoggingConfig",
    "RenderingConfig",
    "ScalingConfig",
    "get_default_settings",
]
