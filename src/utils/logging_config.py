"""Logging configuration for the portfolio site."""

import contextvars
import logging
import sys
import time
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Default log file location (project root / output / logs)
DEFAULT_LOG_FILE = Path(__file__).parent.parent.parent / "output" / "logs" / "portfolio.log"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "nicegui", "uvicorn.access")


# Correlation id of the current task; each NiceGUI client handler runs in its own task
CorrelationId: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "CorrelationId", default=None
)


class ContextFilter(logging.Filter):
    """Add context information to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add correlation ID to log record if available."""
        record.correlation_id = CorrelationId.get() or "-"
        return True


# Global context filter instance
_context_filter = ContextFilter()


class FlushingRotatingFileHandler(RotatingFileHandler):
    """RotatingFileHandler that flushes immediately after each log."""

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()


def _suppress_noisy_loggers() -> None:
    """Set third-party loggers to WARNING to reduce noise."""
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(level: str = "INFO", log_file: str | None = "default") -> None:
    """Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: File path for logs. "default" uses output/logs/portfolio.log,
                  None disables file logging.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] [%(correlation_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Filter must be on HANDLERS, not logger, for child logger records
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(_context_filter)
    root_logger.addHandler(console_handler)

    if log_file == "default":
        log_path: Path | None = DEFAULT_LOG_FILE
    elif log_file:
        log_path = Path(log_file)
    else:
        log_path = None

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Max 5MB per file, keep 3 backups
        file_handler = FlushingRotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(_context_filter)
        root_logger.addHandler(file_handler)

        root_logger.info("Logging to file: %s (max 5MB, 3 backups)", log_path)

    _suppress_noisy_loggers()


def set_log_level(level: str) -> None:
    """Change the level of the root logger and all its handlers.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers:
        handler.setLevel(log_level)
    _suppress_noisy_loggers()
    root_logger.info("Log level set to %s", logging.getLevelName(log_level))


@contextmanager
def log_context(correlation_id: str | None = None) -> Generator[str]:
    """Context manager for setting correlation ID in logs.

    Args:
        correlation_id: Optional correlation ID. If not provided, generates a new UUID.

    Yields:
        The correlation ID being used.

    Example:
        with log_context("approve-42"):
            logger.info("Approving comment")  # Will include correlation_id in log
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())[:8]

    token = CorrelationId.set(correlation_id)
    try:
        yield correlation_id
    finally:
        CorrelationId.reset(token)


@contextmanager
def log_performance(logger: logging.Logger, operation: str) -> Generator[None]:
    """Context manager for logging operation duration.

    Args:
        logger: Logger instance to use
        operation: Name of the operation being timed
    """
    start_time = time.perf_counter()
    logger.debug("%s: Starting", operation)
    try:
        yield
    except Exception as e:
        duration = time.perf_counter() - start_time
        logger.error("%s: Failed after %.2fs - %s", operation, duration, e)
        raise
    else:
        duration = time.perf_counter() - start_time
        logger.debug("%s: Completed in %.2fs", operation, duration)
