"""
Common schemas for errorlens.

This module provides reusable Pydantic schemas for error responses.

Limitations:
- Models are in-memory representations only; JSON naming is applied by the writer
"""

from errorlens.schemas.response import (
    ErrorResponse,
    FieldError,
    GlobalError,
    ParameterError,
    ProblemDetailResponse,
)

__all__ = [
    "ErrorResponse",
    "FieldError",
    "GlobalError",
    "ParameterError",
    "ProblemDetailResponse",
]
