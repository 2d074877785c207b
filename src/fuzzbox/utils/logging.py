"""Structured logging setup for fuzzbox."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from fuzzbox.config.schema import LoggingConfig

# Package-level logger
logger = logging.getLogger("fuzzbox")


class JSONFormatter(logging.Formatter):
    """JSON formatter for machine-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        if hasattr(record, "extra") and isinstance(record.extra, dict):
            log_data.update(record.extra)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter with optional colors."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, appending any structured context."""
        level = record.levelname
        message = record.getMessage()

        extra = getattr(record, "extra", None)
        if isinstance(extra, dict) and extra:
            context = " ".join(f"{key}={value}" for key, value in extra.items())
            message = f"{message} [{context}]"

        if self.use_color:
            color = self.COLORS.get(level, "")
            return f"{color}{level:8}{self.RESET} {record.name}: {message}"
        return f"{level:8} {record.name}: {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    json_format: bool = False,
    use_color: bool = True,
) -> logging.Logger:
    """Configure logging for fuzzbox.

    The library never calls this itself; applications opt in.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file path for logging.
        json_format: Use JSON format for logs.
        use_color: Use colors in console output.

    Returns:
        Configured logger instance.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    logger.setLevel(numeric_level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)

    if json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(ConsoleFormatter(use_color=use_color))

    logger.addHandler(console_handler)

    # File handler (always JSON for parsing)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    # Don't propagate to root logger
    logger.propagate = False

    return logger


def configure_from(config: LoggingConfig) -> logging.Logger:
    """Configure logging from a loaded ``LoggingConfig``."""
    return setup_logging(
        level=config.level,
        log_file=config.file,
        json_format=config.json_format,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a module.

    Args:
        name: Module name (e.g., 'fuzzbox.search.engine').

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """Log a message with additional context.

    The context is attached to the record as ``record.extra``.

    Args:
        logger: Logger instance.
        level: Log level (e.g., logging.INFO).
        message: Log message.
        **context: Additional key-value pairs to include.
    """
    if not logger.isEnabledFor(level):
        return
    record = logger.makeRecord(
        logger.name,
        level,
        "(unknown)",
        0,
        message,
        (),
        None,
    )
    record.extra = context  # noqa: attr assignment for extra context
    logger.handle(record)
