"""
Logging setup for Pantry.

The engine modules only create module loggers; handlers are installed by
whoever embeds the engine, or by the ``pantry`` CLI through
``setup_logging``.
"""

import logging
import sys
import time
from typing import Any, Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# HTTP and SDK loggers pulled in by the brand classifiers.
CLASSIFIER_LOGGERS = ("urllib3", "requests", "httpx", "httpcore", "openai")


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name on a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        color = self.COLORS.get(original)
        if color:
            record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def resolve_level(level: str) -> int:
    """Map a level name to its numeric value.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    name = level.upper()
    if name not in LEVELS:
        raise ValueError(f"Unknown log level {level!r}, expected one of {LEVELS}")
    return getattr(logging, name)


def setup_logging(level: str = "WARNING", colored: bool = True) -> logging.Logger:
    """Install a single stderr handler on the root logger.

    Calling it again replaces the previous handler, so the CLI can
    re-apply a level once the config file has been read.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        colored: Color level names when stderr is a terminal

    Returns:
        Configured root logger
    """
    numeric_level = resolve_level(level)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    if colored and sys.stderr.isatty():
        handler.setFormatter(ColoredFormatter(LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    return root_logger


def configure_library_logging(quiet: bool = False) -> None:
    """Keep classifier transport logs at WARNING unless ``quiet`` is False."""
    library_level = logging.WARNING if quiet else logging.INFO
    for logger_name in CLASSIFIER_LOGGERS:
        logging.getLogger(logger_name).setLevel(library_level)


class PerformanceLogger:
    """Context manager that logs how long a block took.

    Example:
        >>> with PerformanceLogger("Duplicate check", logger, level="DEBUG"):
        ...     decision = detector.check_for_duplicate("milk", items)
    """

    def __init__(
        self, operation: str, logger: Optional[logging.Logger] = None, level: str = "INFO"
    ):
        self.operation = operation
        self.logger = logger or logging.getLogger(__name__)
        self.level = resolve_level(level)
        self.start_time: Optional[float] = None
        self.elapsed: Optional[float] = None

    def __enter__(self) -> "PerformanceLogger":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.start_time is None:
            return
        self.elapsed = time.perf_counter() - self.start_time
        elapsed_ms = self.elapsed * 1000
        if exc_type is None:
            self.logger.log(self.level, f"{self.operation} took {elapsed_ms:.1f}ms")
        else:
            self.logger.error(f"{self.operation} failed after {elapsed_ms:.1f}ms: {exc_val}")
