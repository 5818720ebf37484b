"""Utility functions for glyphcache.

This module provides:

- Logging setup and configuration
- Per-font glyph lookup statistics
"""

from glyphcache.utils.logging import (
    CacheStats,
    GlyphLogger,
    configure_logging,
)

__all__ = [
    "CacheStats",
    "GlyphLogger",
    "configure_logging",
]
