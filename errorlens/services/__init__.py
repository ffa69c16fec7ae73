"""
Exception handling services.

This module provides the facade orchestrating exception handling and the
post-processing services it sequences: response customizers and the
exception logging service.
"""

from errorlens.services.customizers import ErrorResponseCustomizer, TraceIdCustomizer
from errorlens.services.facade import ErrorHandlingFacade
from errorlens.services.logging import (
    DefaultLoggingFilter,
    LoggingFilter,
    LoggingService,
)

__all__ = [
    "DefaultLoggingFilter",
    "ErrorHandlingFacade",
    "ErrorResponseCustomizer",
    "LoggingFilter",
    "LoggingService",
    "TraceIdCustomizer",
]
