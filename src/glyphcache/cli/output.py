"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from glyphcache.domain import FontMetrics, Glyph, GlyphRendering, RenderAsImage, RenderAsPath
from glyphcache.utils import CacheStats

console = Console()

SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Glyphcache[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, backend: str, glyph_count: int, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        backend: Name of the backend that parsed the font
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({backend} backend)")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def _style_names(metrics: FontMetrics) -> str:
    names = [
        name
        for name, enabled in (
            ("regular", metrics.regular),
            ("italic", metrics.italic),
            ("bold", metrics.bold),
            ("oblique", metrics.oblique),
            ("variable", metrics.variable),
        )
        if enabled
    ]
    return ", ".join(names) or "-"


def print_metrics(metrics: FontMetrics, size: float) -> None:
    """Print scaled font metrics as a table.

    Args:
        metrics: Metrics scaled to size
        size: Size the metrics were scaled to
    """
    table = Table(title=f"Metrics at {size:g} px/em", title_justify="left")
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Ascender", f"{metrics.ascender:.2f}")
    table.add_row("Descender", f"{metrics.descender:.2f}")
    table.add_row("Line height", f"{metrics.line_height:.2f}")
    table.add_row("Height", str(metrics.height))
    table.add_row("Weight", str(metrics.weight))
    table.add_row("Width class", str(metrics.width))
    table.add_row("Style", _style_names(metrics))

    console.print(table)


def _rendering_kind(rendering: GlyphRendering | None) -> str:
    if isinstance(rendering, RenderAsImage):
        width, height = rendering.image.size
        return f"image {width}x{height}"
    if isinstance(rendering, RenderAsPath):
        return f"path ({rendering.path.contour_count()} contours)"
    return "-"


def print_glyph_table(
    rows: list[tuple[int, Glyph | None, GlyphRendering | None]], pixels_per_em: int
) -> None:
    """Print per-glyph metrics and the chosen rendering.

    Args:
        rows: (glyph_id, glyph, rendering) triples
        pixels_per_em: Pixel size the renderings were selected for
    """
    table = Table(title=f"Glyphs at {pixels_per_em} px/em", title_justify="left")
    table.add_column("GID", justify="right")
    table.add_column("Width", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("Bearing X", justify="right")
    table.add_column("Bearing Y", justify="right")
    table.add_column("Rendering")

    for glyph_id, glyph, rendering in rows:
        if glyph is None:
            table.add_row(str(glyph_id), "-", "-", "-", "-", "[red]absent[/red]")
            continue
        m = glyph.metrics
        table.add_row(
            str(glyph_id),
            f"{m.width:.1f}",
            f"{m.height:.1f}",
            f"{m.bearing_x:.1f}",
            f"{m.bearing_y:.1f}",
            _rendering_kind(rendering),
        )

    console.print(table)


def print_cache_stats(stats: CacheStats, cached: int) -> None:
    """Print glyph cache statistics.

    Args:
        stats: Lookup statistics of the font
        cached: Number of glyphs currently cached
    """
    console.print(
        f"  {cached} cached {SYM_DOT} {stats.hits} hits {SYM_DOT} {stats.misses} misses "
        f"{SYM_DOT} {stats.absent} absent {SYM_DOT} {stats.images_decoded} images"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
