"""
Mapping strategies for error codes, messages and HTTP statuses.

All three mappers share one precedence: exact override by exception type
name, then base class overrides (when enabled), then a default.
"""

from errorlens.mappers.code import (
    ErrorCodeMapper,
    to_all_caps,
    to_dot_separated,
    to_kebab_case,
    to_pascal_case,
)
from errorlens.mappers.message import ErrorMessageMapper
from errorlens.mappers.status import (
    HttpStatusFromExceptionMapper,
    HttpStatusMapper,
    StatusCodeAttributeMapper,
)

__all__ = [
    "ErrorCodeMapper",
    "ErrorMessageMapper",
    "HttpStatusMapper",
    "HttpStatusFromExceptionMapper",
    "StatusCodeAttributeMapper",
    "to_all_caps",
    "to_kebab_case",
    "to_pascal_case",
    "to_dot_separated",
]
