"""
Response schemas.

This module provides the error envelope and the problem details envelope.
"""

from errorlens.schemas.response.error import (
    ErrorResponse,
    FieldError,
    GlobalError,
    ParameterError,
)
from errorlens.schemas.response.problem import ProblemDetailResponse

__all__ = [
    "ErrorResponse",
    "FieldError",
    "GlobalError",
    "ParameterError",
    "ProblemDetailResponse",
]
