"""Centralized logging configuration for the Vilkas harness."""

import logging
import sys
from enum import Enum
from typing import Any, Dict, Optional, Union

LOGGER_PREFIX = "vilkas-harness"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries whose per-connection chatter drowns the call log below DEBUG
NOISY_LOGGERS = ("urllib3", "requests")


class LogLevel(str, Enum):
    """Log level enum for the harness."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def parse(cls, value: Union["LogLevel", str]) -> "LogLevel":
        """Parse a level name case-insensitively, falling back to INFO."""
        if isinstance(value, LogLevel):
            return value
        try:
            return cls(value.upper())
        except ValueError:
            return cls.INFO

    @property
    def numeric(self) -> int:
        return getattr(logging, self.value)


def configure_logging(
    level: Union[LogLevel, str] = LogLevel.INFO,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """Configure logging for a harness run.

    Log records go to stderr so that stdout only carries command output
    (such as the JSON run report).

    Args:
        level: Log level (default: INFO)
        log_file: Optional file path to also write logs to
        log_format: Optional custom log format
    """
    level = LogLevel.parse(level)
    formatter = logging.Formatter(log_format or DEFAULT_FORMAT)

    handlers: list = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level.numeric, handlers=handlers, force=True)

    noisy_level = logging.DEBUG if level == LogLevel.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``vilkas-harness`` namespace.

    Args:
        name: Logger name (typically a dotted component name)

    Returns:
        Logger instance
    """
    if name == "__main__":
        name = LOGGER_PREFIX
    elif not name.startswith(LOGGER_PREFIX):
        name = f"{LOGGER_PREFIX}.{name}"

    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: Optional[Exception] = None,
    level: LogLevel = LogLevel.ERROR,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Log an exception with consistent formatting.

    Tracebacks are only attached at ERROR and above.

    Args:
        logger: Logger instance
        message: Error message
        exc: Exception object (if available)
        level: Log level (default: ERROR)
        extra: Additional context to include in the log
    """
    if exc is not None:
        message = f"{message}: {exc}"
    logger.log(
        level.numeric,
        message,
        exc_info=exc if level in (LogLevel.ERROR, LogLevel.CRITICAL) else None,
        extra=extra,
    )
