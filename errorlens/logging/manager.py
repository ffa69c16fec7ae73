"""
Basic logging configuration for errorlens.

This module provides a simple and consistent
logging setup for the library components.
"""

import logging
import sys
from enum import Enum
from typing import Optional

from errorlens.config.base import ErrorHandlingSettings
from errorlens.logging.formatters import JsonFormatter

# Type alias for Python's standard logger
Logger = logging.Logger


class LogLevel(str, Enum):
    """
    Enum for standard logging levels.

    This provides a type-safe way to specify log levels in code and configuration.
    """

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def from_string(cls, level: str) -> int:
        """
        Convert a string log level to the corresponding logging module constant.

        Args:
            level: The string representation of the log level

        Returns:
            The numeric log level from the logging module

        Example:
            ```python
            level = LogLevel.from_string("INFO")
            assert level == logging.INFO
            ```
        """
        level_map = {
            cls.DEBUG: logging.DEBUG,
            cls.INFO: logging.INFO,
            cls.WARNING: logging.WARNING,
            cls.ERROR: logging.ERROR,
            cls.CRITICAL: logging.CRITICAL,
        }
        name = level.value if isinstance(level, cls) else str(level).upper()
        return level_map.get(name, logging.INFO)


def setup_logger(
    name: str,
    level: str = "INFO",
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    debug: bool = False,
    json_format: bool = False,
) -> logging.Logger:
    """
    Create and configure a logger instance.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Log message format (ignored if json_format=True)
        debug: If True, sets level to DEBUG regardless of level parameter
        json_format: If True, outputs logs in JSON format

    Returns:
        Configured logger instance
    """
    log_level = LogLevel.from_string(level)
    if debug:
        log_level = logging.DEBUG

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove existing handlers
    logger.handlers.clear()

    formatter = JsonFormatter() if json_format else logging.Formatter(format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    return logger


def get_logger(
    name: str,
    settings: Optional[ErrorHandlingSettings] = None,
    json_format: bool = False,
) -> logging.Logger:
    """
    Get a logger instance.

    Loggers are left to propagate to the application's logging configuration;
    a console handler is only attached when debug mode is requested.

    Args:
        name: Logger name (usually __name__)
        settings: Optional error handling settings
        json_format: If True, outputs logs in JSON format when debug mode attaches a handler

    Returns:
        Logger instance
    """
    debug = False
    if settings is not None and hasattr(settings, "DEBUG"):
        debug = bool(settings.DEBUG)

    if debug:
        return setup_logger(name, debug=True, json_format=json_format)

    return logging.getLogger(name)


def ensure_logger(
    logger: Optional[logging.Logger] = None,
    name: Optional[str] = None,
    settings: Optional[ErrorHandlingSettings] = None,
    json_format: bool = False,
) -> logging.Logger:
    """
    Ensure a logger instance is available by either using the provided one or creating a new one.

    This function standardizes the logger fallback mechanism used throughout the library.

    Args:
        logger: An existing logger instance to use if provided
        name: Module name (usually __name__) for creating a new logger if needed
        settings: Optional error handling settings
        json_format: If True, outputs logs in JSON format when creating a new logger

    Returns:
        Either the provided logger or a newly created one
    """
    if logger:
        return logger

    if not name:
        raise ValueError("Module name must be provided when logger is not specified")

    return get_logger(name, settings, json_format)
