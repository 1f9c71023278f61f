"""Logging utilities for curveflat."""

import logging
from dataclasses import dataclass
from pathlib import Path

import structlog

_HANDLER_TAG = "_curveflat_handler"


@dataclass
class SubdivisionStats:
    """Statistics from one subdivision run."""

    piece_count: int = 0
    max_depth_reached: int = 0
    depth_limit_hit: bool = False
    depth_limited_pieces: int = 0

    def record_piece(self, depth: int, limited: bool = False) -> None:
        """Account for one emitted piece."""
        self.piece_count += 1
        if depth > self.max_depth_reached:
            self.max_depth_reached = depth
        if limited:
            self.depth_limit_hit = True
            self.depth_limited_pieces += 1


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Replace handlers from an earlier call instead of stacking them
    for handler in [h for h in root_logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        root_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_TAG, True)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(console_handler, _HANDLER_TAG, True)
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

    logger = structlog.get_logger("curveflat")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class SubdivisionLogger:
    """Logger for tracking subdivision runs and their statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._runs: list[tuple[str, SubdivisionStats]] = []

    def log_run(self, operation: str, stats: SubdivisionStats, **context: object) -> None:
        """Log a completed flattening or reduction run."""
        self._logger.info(
            "Subdivision complete",
            operation=operation,
            pieces=stats.piece_count,
            max_depth=stats.max_depth_reached,
            depth_limit_hit=stats.depth_limit_hit,
            **context,
        )
        self._runs.append((operation, stats))

    def log_invalid_input(self, operation: str, error: Exception) -> None:
        """Log a rejected input."""
        self._logger.error(
            "Invalid input",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def total_pieces(self) -> int:
        """Total number of pieces emitted across all logged runs."""
        return sum(stats.piece_count for _, stats in self._runs)

    @property
    def runs(self) -> list[tuple[str, SubdivisionStats]]:
        """All logged runs, oldest first."""
        return list(self._runs)

