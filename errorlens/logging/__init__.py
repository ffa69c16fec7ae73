"""
Logging module for errorlens.

This module provides a simple logging interface
that integrates with the error handling settings.

Limitations:
- Only console (stdout) logging is configured by setup_logger.
- Library loggers otherwise propagate to the application's logging configuration.
"""

from errorlens.logging.formatters import JsonFormatter
from errorlens.logging.manager import (
    Logger,
    LogLevel,
    ensure_logger,
    get_logger,
    setup_logger,
)

__all__ = [
    "Logger",
    "LogLevel",
    "get_logger",
    "ensure_logger",
    "setup_logger",
    "JsonFormatter",
]
