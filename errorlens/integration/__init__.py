"""
FastAPI integration for errorlens.

This module wires the exception handling facade into a FastAPI application
and writes its responses as JSON or RFC 9457 problem details.
"""

from errorlens.integration.manager import setup_errors
from errorlens.integration.middleware import ErrorHandlingMiddleware
from errorlens.integration.problem import ProblemDetailFactory, status_title
from errorlens.integration.serialization import ErrorResponseSerializer
from errorlens.integration.writer import ErrorResponseWriter

__all__ = [
    "ErrorHandlingMiddleware",
    "ErrorResponseSerializer",
    "ErrorResponseWriter",
    "ProblemDetailFactory",
    "setup_errors",
    "status_title",
]
