"""
Logger interface.

Implementations provide ``log``; the level helpers and the per-logger
context are shared.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional


class LogLevel(Enum):
    """Standard log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def numeric(self) -> int:
        """Numeric level as understood by the logging module."""
        return logging.getLevelName(self.value)

    @classmethod
    def parse(cls, value: Any) -> "LogLevel":
        """Parse a level from its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().upper())


class LoggerInterface(ABC):
    """
    Interface for logging implementations.

    Keyword arguments passed to any log method are recorded as structured
    context next to the message, merged over the context set with
    ``add_context``.
    """

    def __init__(self):
        self._context: Dict[str, Any] = {}

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        context: Dict[str, Any],
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Emit one record.

        Args:
            level: Record level
            message: Human-readable message
            context: Bound context merged with the call's keyword arguments
            exc_info: Exception to attach, if any
        """

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log(LogLevel.DEBUG, message, {**self._context, **kwargs})

    def info(self, message: str, **kwargs: Any) -> None:
        self.log(LogLevel.INFO, message, {**self._context, **kwargs})

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log(LogLevel.WARNING, message, {**self._context, **kwargs})

    def error(self, message: str, **kwargs: Any) -> None:
        self.log(LogLevel.ERROR, message, {**self._context, **kwargs})

    def exception(self, message: str, exc_info: Optional[BaseException] = None, **kwargs: Any) -> None:
        """Log at ERROR with the exception's type, message and traceback attached."""
        self.log(LogLevel.ERROR, message, {**self._context, **kwargs}, exc_info=exc_info)

    def add_context(self, **kwargs: Any) -> None:
        """Bind context data to all subsequent records of this logger."""
        self._context.update(kwargs)

    def clear_context(self) -> None:
        self._context.clear()

    def get_context(self) -> Dict[str, Any]:
        return self._context.copy()
