"""
Exception classes understood by the built-in handlers.

Application code can raise these to get structured validation, type mismatch
and bad request responses without registering custom handlers.
"""

from http import HTTPStatus
from typing import Any, Optional, Sequence


class FieldValidationError(Exception):
    """
    Exception raised when validation of one or more fields fails.

    Attributes:
        message: Human-readable error message
        fields: Names of the members that failed validation; empty for an object-level failure
        kind: Name of the failed validation rule (e.g. "Required", "EmailAddress")
        value: The rejected value
    """

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[Sequence[str]] = None,
        kind: Optional[str] = None,
        value: Any = None,
    ):
        self.message = message
        self.fields = list(fields or [])
        self.kind = kind
        self.value = value
        super().__init__(self.message)


class TypeMismatchError(ValueError):
    """
    Exception raised when a value cannot be converted to the expected type.

    Attributes:
        message: Human-readable error message
        parameter: Name of the offending parameter, if known
        value: The value that failed conversion
        expected_type: Name of the expected type
    """

    def __init__(
        self,
        message: str = "Type mismatch",
        parameter: Optional[str] = None,
        value: Any = None,
        expected_type: Optional[str] = None,
    ):
        self.message = message
        self.parameter = parameter
        self.value = value
        self.expected_type = expected_type
        super().__init__(self.message)


class BadRequestError(Exception):
    """
    Exception raised for malformed requests.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default: 400)
    """

    def __init__(
        self,
        message: str = "Bad request",
        status_code: int = HTTPStatus.BAD_REQUEST,
    ):
        self.message = message
        self.status_code = int(status_code)
        super().__init__(self.message)
