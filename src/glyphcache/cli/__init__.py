"""Command-line interface for glyphcache.

This module provides the CLI using Typer with rich output for
inspecting font metrics and glyph lookups.

Key features:
- Font-wide metrics scaled to any size
- Per-glyph metrics and rendering representation
- Glyph cache statistics
"""

from glyphcache.cli.app import cli, main

__all__ = ["cli", "main"]
