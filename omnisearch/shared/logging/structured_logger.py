"""
Structured logger implementation.

This module provides a structured logging implementation that
formats log messages as one JSON object per line.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from .logger_interface import LoggerInterface, LogLevel

ROOT_LOGGER_NAME = "omnisearch"
_HANDLER_NAME = "omnisearch-structured"


class StructuredLogger(LoggerInterface):
    """
    Structured logger implementation.

    Records are rendered to JSON here and emitted through the standard
    logging module, so level filtering and handlers stay configurable
    from the outside.
    """

    def __init__(self, name: str):
        super().__init__()
        self.name = name
        self._logger = logging.getLogger(name)

    def log(
        self,
        level: LogLevel,
        message: str,
        context: Dict[str, Any],
        exc_info: Optional[BaseException] = None
    ) -> None:
        if not self._logger.isEnabledFor(level.numeric):
            return

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level.value,
            "logger": self.name,
            "message": message,
            "context": context
        }

        if exc_info:
            log_entry["exception"] = {
                "type": exc_info.__class__.__name__,
                "message": str(exc_info),
                "traceback": traceback.format_exception(
                    type(exc_info),
                    exc_info,
                    exc_info.__traceback__
                )
            }

        self._logger.log(level.numeric, json.dumps(log_entry, default=str))


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger for a module.

    Args:
        name: Logger name, usually ``__name__``

    Returns:
        StructuredLogger: Logger writing under the given name
    """
    return StructuredLogger(name)


def configure_logging(
    level: LogLevel = LogLevel.INFO,
    output: TextIO = sys.stdout
) -> logging.Logger:
    """
    Install the JSON line handler on the package logger.

    Calling it again replaces the previous handler instead of adding a
    second one.

    Args:
        level: Logging level
        output: Output stream for logs

    Returns:
        logging.Logger: The configured package logger
    """
    level = LogLevel.parse(level)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler(output)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter('%(message)s'))
    root.addHandler(handler)
    root.setLevel(level.numeric)
    return root
