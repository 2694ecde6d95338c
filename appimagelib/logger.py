"""Process-wide logger with a replaceable output callback."""

from __future__ import annotations

import enum
import sys
from collections.abc import Callable
from typing import Optional

__all__ = ["LogLevel", "Logger", "set_logger_callback"]


class LogLevel(enum.IntEnum):
    """Severity of a log message."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


LogCallback = Callable[[LogLevel, str], None]


def _default_log_function(level: LogLevel, message: str) -> None:
    print(f"{level.name}: {message}", file=sys.stderr)


class Logger:
    """Dispatches log messages to a callback; one shared instance serves the library."""

    _instance: Optional["Logger"] = None

    def __init__(self) -> None:
        self._log_function: LogCallback = _default_log_function

    def set_callback(self, callback: Optional[LogCallback]) -> None:
        """Route messages to ``callback``; ``None`` restores the default stderr output."""
        self._log_function = _default_log_function if callback is None else callback

    def log(self, level: LogLevel, message: str) -> None:
        """Emit ``message`` at ``level`` through the current callback."""
        self._log_function(level, message)

    @staticmethod
    def get_instance() -> "Logger":
        """Return the shared logger, creating it on first use."""
        if Logger._instance is None:
            Logger._instance = Logger()
        return Logger._instance

    @staticmethod
    def debug(message: str) -> None:
        """Log ``message`` at debug level on the shared logger."""
        Logger.get_instance().log(LogLevel.DEBUG, message)

    @staticmethod
    def info(message: str) -> None:
        """Log ``message`` at info level on the shared logger."""
        Logger.get_instance().log(LogLevel.INFO, message)

    @staticmethod
    def warning(message: str) -> None:
        """Log ``message`` at warning level on the shared logger."""
        Logger.get_instance().log(LogLevel.WARNING, message)

    @staticmethod
    def error(message: str) -> None:
        """Log ``message`` at error level on the shared logger."""
        Logger.get_instance().log(LogLevel.ERROR, message)


def set_logger_callback(callback: Optional[LogCallback]) -> None:
    """Set the callback of the shared logger."""
    Logger.get_instance().set_callback(callback)