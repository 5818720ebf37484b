"""Logging utilities for glyphcache."""

import logging
from dataclasses import dataclass
from pathlib import Path

import structlog

HANDLER_NAME = "glyphcache"


@dataclass
class CacheStats:
    """Statistics from glyph lookups on one font."""

    hits: int = 0
    misses: int = 0
    extracted: int = 0
    absent: int = 0
    images_decoded: int = 0

    @property
    def lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups served from the cache."""
        if self.lookups == 0:
            return 0.0
        return self.hits / self.lookups


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Reconfiguring replaces the handlers installed by a previous call
    for handler in [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]:
        root_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.set_name(HANDLER_NAME)
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphcache")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class GlyphLogger:
    """Logger for tracking glyph lookups and cache statistics of one font."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = CacheStats()

    def log_hit(self, glyph_id: int) -> None:
        """Record a cache hit."""
        self._stats.hits += 1

    def log_miss(self, glyph_id: int) -> None:
        """Log a cache miss about to call the backend."""
        self._logger.debug("Glyph cache miss", glyph_id=glyph_id)
        self._stats.misses += 1

    def log_glyph_extracted(self, glyph_id: int, is_bitmap: bool) -> None:
        """Log a glyph inserted into the cache."""
        self._logger.debug(
            "Glyph extracted",
            glyph_id=glyph_id,
            kind="bitmap" if is_bitmap else "outline",
        )
        self._stats.extracted += 1

    def log_glyph_absent(self, glyph_id: int) -> None:
        """Log a glyph the backend could not produce."""
        self._logger.debug("Glyph not found", glyph_id=glyph_id)
        self._stats.absent += 1

    def log_image_decoded(self, glyph_id: int, pixels_per_em: int, size: tuple[int, int]) -> None:
        """Log a raster strike decoded into an image."""
        self._logger.debug(
            "Raster strike decoded",
            glyph_id=glyph_id,
            pixels_per_em=pixels_per_em,
            width=size[0],
            height=size[1],
        )
        self._stats.images_decoded += 1

    def log_image_error(self, glyph_id: int, error: Exception) -> None:
        """Log a raster strike that failed to decode."""
        self._logger.warning(
            "Raster strike decode failed",
            glyph_id=glyph_id,
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def stats(self) -> CacheStats:
        """Get current lookup statistics."""
        return self._stats
