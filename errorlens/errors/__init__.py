"""
Error declarations for errorlens.

This module provides the exception classes understood by the built-in
handlers and the registry through which application exceptions declare
custom codes, statuses and response properties.
"""

from errorlens.errors.exceptions import (
    BadRequestError,
    FieldValidationError,
    TypeMismatchError,
)
from errorlens.errors.metadata import (
    ErrorProperty,
    ExceptionMetadata,
    ExceptionMetadataRegistry,
    default_registry,
    response_error_code,
    response_error_property,
    response_status,
)

__all__ = [
    # Exception classes
    "BadRequestError",
    "FieldValidationError",
    "TypeMismatchError",
    # Metadata
    "ErrorProperty",
    "ExceptionMetadata",
    "ExceptionMetadataRegistry",
    "default_registry",
    "response_error_code",
    "response_error_property",
    "response_status",
]
