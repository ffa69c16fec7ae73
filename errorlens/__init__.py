"""
ErrorLens - Structured error responses for FastAPI applications.

This package converts any exception raised while serving a request into a
stable JSON error envelope with machine-parsable error codes, HTTP statuses
and per-field validation detail, without leaking internals on server errors.

Usage:
    from fastapi import FastAPI
    from errorlens import setup_errors

    app = FastAPI()
    setup_errors(app)
"""

__version__ = "0.1.0"

# Public API exports
from errorlens.config import ErrorHandlingSettings, SettingsHolder, get_settings
from errorlens.errors import (
    BadRequestError,
    FieldValidationError,
    TypeMismatchError,
    response_error_code,
    response_error_property,
    response_status,
)
from errorlens.factory import create_facade
from errorlens.handlers import ApiExceptionHandler
from errorlens.integration import setup_errors
from errorlens.schemas import ErrorResponse
from errorlens.services import ErrorHandlingFacade, ErrorResponseCustomizer
