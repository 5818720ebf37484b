"""CLI application entry point for glyphcache.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from glyphcache import __version__
from glyphcache.cli.output import (
    console,
    print_cache_stats,
    print_error,
    print_font_info,
    print_glyph_table,
    print_header,
    print_metrics,
    print_step,
)
from glyphcache.config import BackendConfig, BackendKind, GlyphCacheSettings, LoggingConfig
from glyphcache.core import TextContext
from glyphcache.exceptions import FontLoadError, GlyphCacheError
from glyphcache.io import FontReader
from glyphcache.utils import configure_logging

app = typer.Typer(
    name="glyphcache",
    help="Inspect font metrics and cached glyphs.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Glyphcache[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Inspect font metrics and cached glyphs."""
    logging_config = LoggingConfig(log_file=log_file, log_level=log_level)
    configure_logging(
        log_file=logging_config.log_file,
        console_level=logging_config.log_level,
        file_level=logging_config.file_log_level,
    )
    ctx.obj = logging_config


def _load(
    ctx: typer.Context, font_path: Path, face_index: int, backend: BackendKind
) -> FontReader:
    """Validate the path and load the font, exiting with code 1 on failure."""
    if not font_path.exists():
        print_error(
            f"Input file not found: {font_path}",
            details=f"The file '{font_path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not font_path.is_file():
        print_error(
            f"Input path is not a file: {font_path}",
            details="Please provide a path to a font or font collection file.",
        )
        raise typer.Exit(code=1)

    settings = GlyphCacheSettings(
        backend=BackendConfig(kind=backend),
        logging=ctx.obj if isinstance(ctx.obj, LoggingConfig) else LoggingConfig(),
    )
    reader = FontReader(font_path, face_index=face_index, context=TextContext(settings))

    try:
        reader.load()
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)

    return reader


@app.command()
def info(
    ctx: typer.Context,
    font_path: Annotated[
        Path,
        typer.Argument(
            help="Path to a font or font collection file",
            show_default=False,
        ),
    ],
    size: Annotated[
        float,
        typer.Option(
            "--size",
            "-s",
            help="Size (pixels per em) to scale metrics to",
            min=0.0,
        ),
    ] = 16.0,
    face: Annotated[
        int,
        typer.Option(
            "--face",
            "-f",
            help="Face index within a collection",
            min=0,
        ),
    ] = 0,
    backend: Annotated[
        BackendKind,
        typer.Option(
            "--backend",
            "-b",
            help="Font backend to parse with",
        ),
    ] = BackendKind.AUTO,
) -> None:
    """Show font-wide metrics scaled to a size.

    Example:
        glyphcache info Roboto-Regular.ttf --size 24
    """
    print_header(__version__)
    reader = _load(ctx, font_path, face, backend)

    try:
        font = reader.font
        print_font_info(
            font_path=str(font_path),
            backend=font.backend.name,
            glyph_count=font.glyph_count,
            upm=font.units_per_em,
        )
        print_step("Metrics")
        print_metrics(font.metrics(size), size)
    finally:
        reader.close()


@app.command()
def glyphs(
    ctx: typer.Context,
    font_path: Annotated[
        Path,
        typer.Argument(
            help="Path to a font or font collection file",
            show_default=False,
        ),
    ],
    glyph_ids: Annotated[
        list[int],
        typer.Argument(
            help="Glyph indices to look up",
            show_default=False,
        ),
    ],
    ppem: Annotated[
        int,
        typer.Option(
            "--ppem",
            help="Pixel size used to choose between bitmap and outline",
            min=1,
        ),
    ] = 16,
    face: Annotated[
        int,
        typer.Option(
            "--face",
            "-f",
            help="Face index within a collection",
            min=0,
        ),
    ] = 0,
    backend: Annotated[
        BackendKind,
        typer.Option(
            "--backend",
            "-b",
            help="Font backend to parse with",
        ),
    ] = BackendKind.AUTO,
) -> None:
    """Look up glyphs by index and show their metrics.

    Example:
        glyphcache glyphs Roboto-Regular.ttf 36 37 38 --ppem 32
    """
    print_header(__version__)
    reader = _load(ctx, font_path, face, backend)

    try:
        font = reader.font
        face_ref = font.face_ref()
        rows = [
            (
                glyph_id,
                font.glyph(face_ref, glyph_id),
                font.glyph_rendering_representation(face_ref, glyph_id, ppem),
            )
            for glyph_id in glyph_ids
        ]
        print_glyph_table(rows, ppem)
        print_step("Cache")
        print_cache_stats(font.stats, font.cached_glyph_count)
    except GlyphCacheError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    finally:
        reader.close()


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
