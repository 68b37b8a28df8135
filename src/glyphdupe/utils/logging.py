"""Logging utilities for glyphdupe."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by configure_logging, replaced on reconfiguration
_installed_handlers: list[logging.Handler] = []


@dataclass
class ProcessingStats:
    """Statistics from a comparison run."""

    fonts_total: int = 0
    fonts_loaded: int = 0
    fonts_failed: int = 0
    pairs_compared: int = 0
    candidate_pairs: int = 0
    merges: int = 0
    rejected_merges: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    font_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_font_time_ms(self) -> float | None:
        if not self.font_timings_ms:
            return None
        return sum(self.font_timings_ms) / len(self.font_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Console output goes to stderr so the report on stdout stays clean.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    # fontTools is chatty at INFO/DEBUG about table parsing
    logging.getLogger("fontTools").setLevel(logging.WARNING)

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

    logger = structlog.get_logger("glyphdupe")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class RunLogger:
    """Logger for tracking run progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        return self._logger

    def log_font_loaded(self, path: str, present: int, total: int, duration_ms: float) -> None:
        """Log a font whose probe glyphs were canonicalized."""
        self._logger.info(
            "Font canonicalized",
            path=path,
            present=present,
            total=total,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.fonts_loaded += 1
        self._stats.font_timings_ms.append(duration_ms)

    def log_font_failed(self, path: str, reason: str, traceback: str | None = None) -> None:
        """Log a font excluded from the run."""
        self._logger.warning(
            "Font excluded",
            path=path,
            reason=reason,
            traceback=traceback,
        )
        self._stats.fonts_failed += 1
        self._stats.errors.append((path, reason))

    def log_merge(self, members: tuple[Path, ...], matches: int, total: int) -> None:
        """Log an accepted group merge."""
        self._logger.debug(
            "Groups merged",
            members=[str(p) for p in members],
            matches=matches,
            total=total,
        )
        self._stats.merges += 1

    def log_merge_rejected(
        self,
        left: tuple[Path, ...],
        right: tuple[Path, ...],
        matches: int,
        required: int,
    ) -> None:
        """Log a merge refused because group-wide agreement fell short."""
        self._logger.debug(
            "Merge rejected",
            left=[str(p) for p in left],
            right=[str(p) for p in right],
            matches=matches,
            required=required,
        )
        self._stats.rejected_merges += 1

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
