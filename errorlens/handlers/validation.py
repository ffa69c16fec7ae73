"""
Validation exception handlers.

This module converts validation failures into field, global and parameter
errors:

- RequestValidationHandler: FastAPI request model binding errors
- FieldValidationHandler: errorlens FieldValidationError raised by application code
- PydanticValidationHandler: pydantic ValidationError raised outside request binding

Every failure is classified into a validation kind (e.g. "Required",
"StringLength"). The composite key ``"<field>.<kind>"`` and the kind's
default code are routed through the code and message mappers, so both can be
overridden per field or per code through configuration.
"""

from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from errorlens.config.base import ErrorHandlingSettings
from errorlens.config.codes import DefaultErrorCodes
from errorlens.config.settings import SettingsHolder
from errorlens.errors.exceptions import FieldValidationError
from errorlens.errors.utils import format_location, to_camel_case
from errorlens.handlers.base import ConfiguredExceptionHandler
from errorlens.mappers import ErrorCodeMapper, ErrorMessageMapper
from errorlens.schemas.response import (
    ErrorResponse,
    FieldError,
    GlobalError,
    ParameterError,
)

DEFAULT_VALIDATION_KIND = "Validation"
DEFAULT_VALIDATION_MESSAGE = "Validation failed"

VALIDATION_KIND_CODES: Dict[str, str] = {
    "Required": DefaultErrorCodes.REQUIRED_NOT_NULL,
    "StringLength": DefaultErrorCodes.INVALID_SIZE,
    "MaxLength": DefaultErrorCodes.INVALID_SIZE,
    "MinLength": DefaultErrorCodes.INVALID_SIZE,
    "Range": DefaultErrorCodes.VALUE_OUT_OF_RANGE,
    "EmailAddress": DefaultErrorCodes.INVALID_EMAIL,
    "RegularExpression": DefaultErrorCodes.INVALID_PATTERN,
    "Url": DefaultErrorCodes.INVALID_URL,
    "CreditCard": DefaultErrorCodes.INVALID_CREDIT_CARD,
    "Json": DefaultErrorCodes.JSON_PARSE_ERROR,
    "Type": DefaultErrorCodes.TYPE_MISMATCH,
}

_PYDANTIC_KINDS: Dict[str, str] = {
    "missing": "Required",
    "string_too_short": "StringLength",
    "string_too_long": "StringLength",
    "too_short": "StringLength",
    "too_long": "StringLength",
    "string_pattern_mismatch": "RegularExpression",
    "json_invalid": "Json",
}

# Locations FastAPI reports for request parameters
_PARAMETER_SOURCES = frozenset({"query", "path", "header", "cookie"})


def validation_kind_code(kind: Optional[str]) -> str:
    """Return the default error code of a validation kind."""
    return VALIDATION_KIND_CODES.get(kind or "", DefaultErrorCodes.VALIDATION_FAILED)


def infer_validation_kind(message: Optional[str]) -> str:
    """
    Guess the validation kind from a free-text error message.

    This is a keyword heuristic and can misclassify unusual messages; it is
    only used when the failure carries no structured type.
    """
    if not message:
        return DEFAULT_VALIDATION_KIND

    msg = message.lower()

    if "required" in msg or "is required" in msg:
        return "Required"
    if "email" in msg and ("invalid" in msg or "valid" in msg):
        return "EmailAddress"
    if (
        "minimum length" in msg
        or "maximum length" in msg
        or "must be a string" in msg
    ):
        return "StringLength"
    if "between" in msg and ("must be" in msg or "range" in msg):
        return "Range"
    if "must be greater" in msg or "too low" in msg:
        return "Range"
    if "must be less" in msg or "too high" in msg:
        return "Range"
    if "regular expression" in msg or "pattern" in msg:
        return "RegularExpression"
    if "url" in msg and "valid" in msg:
        return "Url"
    if "credit card" in msg:
        return "CreditCard"
    if "json" in msg or ("invalid" in msg and "literal" in msg):
        return "Json"

    return DEFAULT_VALIDATION_KIND


def pydantic_validation_kind(error_type: str, message: Optional[str] = None) -> str:
    """
    Map a pydantic error type to a validation kind.

    Generic ``value_error``/``assertion_error`` failures fall back to
    :func:`infer_validation_kind` on the message.
    """
    kind = _PYDANTIC_KINDS.get(error_type)
    if kind is not None:
        return kind
    if error_type.startswith(("greater_than", "less_than")):
        return "Range"
    if error_type.startswith("url_"):
        return "Url"
    if error_type in ("value_error", "assertion_error"):
        return infer_validation_kind(message)
    if error_type.endswith(("_parsing", "_type")):
        return "Type"
    return DEFAULT_VALIDATION_KIND


class ValidationErrorHandler(ConfiguredExceptionHandler):
    """Shared field error construction for the validation handlers."""

    def __init__(
        self,
        code_mapper: ErrorCodeMapper,
        message_mapper: ErrorMessageMapper,
        settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None,
    ):
        super().__init__(settings)
        self.code_mapper = code_mapper
        self.message_mapper = message_mapper

    def create_validation_response(self, message: Optional[str]) -> ErrorResponse:
        return self.create_response(
            HTTPStatus.BAD_REQUEST,
            DefaultErrorCodes.VALIDATION_FAILED,
            self.built_in_message(DefaultErrorCodes.VALIDATION_FAILED, message),
        )

    def build_field_error(
        self, field: str, kind: str, message: str, rejected_value: Any = None
    ) -> FieldError:
        """
        Build a field error for one failed rule.

        Args:
            field: Field name or dotted path as reported by the validator
            kind: Validation kind of the failed rule
            message: Message reported by the validator
            rejected_value: The value that failed validation
        """
        settings = self.settings
        field_key = f"{field}.{kind}"
        default_code = validation_kind_code(kind)
        property_name = to_camel_case(field)

        return FieldError(
            code=self.code_mapper.get_field_error_code(field_key, default_code),
            property=property_name,
            message=self.message_mapper.get_field_error_message(
                field_key, default_code, message
            ),
            rejected_value=rejected_value if settings.INCLUDE_REJECTED_VALUES else None,
            path=property_name if settings.ADD_PATH_TO_ERROR else None,
        )

    def build_global_error(self, kind: str, message: str) -> GlobalError:
        default_code = validation_kind_code(kind)
        return GlobalError(
            code=self.code_mapper.get_field_error_code(default_code, default_code),
            message=self.message_mapper.get_field_error_message(
                default_code, default_code, message
            ),
        )

    def build_parameter_error(
        self, parameter: str, kind: str, message: str, rejected_value: Any = None
    ) -> ParameterError:
        field_key = f"{parameter}.{kind}"
        default_code = validation_kind_code(kind)
        return ParameterError(
            code=self.code_mapper.get_field_error_code(field_key, default_code),
            parameter=parameter,
            message=self.message_mapper.get_field_error_message(
                field_key, default_code, message
            ),
            rejected_value=(
                rejected_value if self.settings.INCLUDE_REJECTED_VALUES else None
            ),
        )

    def add_pydantic_error(
        self,
        response: ErrorResponse,
        error: Mapping[str, Any],
        location: Sequence[Union[str, int]],
    ) -> None:
        """Add one pydantic error dict to ``response`` as a field or global error."""
        message = error.get("msg") or DEFAULT_VALIDATION_MESSAGE
        error_type = error.get("type", "")
        kind = pydantic_validation_kind(error_type, message)

        field = format_location(location)
        if not field or error_type == "json_invalid":
            response.add_global_error(self.build_global_error(kind, message))
            return

        # The input of a missing field is its parent object
        rejected_value = None if kind == "Required" else error.get("input")
        response.add_field_error(
            self.build_field_error(field, kind, message, rejected_value)
        )


class RequestValidationHandler(ValidationErrorHandler):
    """
    Handles FastAPI request validation errors.

    Body errors become field errors; query, path, header and cookie errors
    become parameter errors; errors about the body as a whole become global
    errors.
    """

    order = 90

    def can_handle(self, exception: BaseException) -> bool:
        return isinstance(exception, RequestValidationError)

    def handle(self, exception: BaseException) -> ErrorResponse:
        validation_error = self.ensure_type(exception, RequestValidationError)
        response = self.create_validation_response(DEFAULT_VALIDATION_MESSAGE)

        for error in validation_error.errors():
            location = tuple(error.get("loc", ()))
            source = location[0] if location else None

            if source in _PARAMETER_SOURCES and len(location) > 1:
                message = error.get("msg") or DEFAULT_VALIDATION_MESSAGE
                kind = pydantic_validation_kind(error.get("type", ""), message)
                rejected_value = None if kind == "Required" else error.get("input")
                response.add_parameter_error(
                    self.build_parameter_error(
                        format_location(location[1:]), kind, message, rejected_value
                    )
                )
            elif source == "body":
                self.add_pydantic_error(response, error, location[1:])
            else:
                self.add_pydantic_error(response, error, location)

        return self.echo_status(response)


class FieldValidationHandler(ValidationErrorHandler):
    """
    Handles FieldValidationError.

    One field error is produced per failed member; a failure without members
    becomes a global error.
    """

    order = 100

    def can_handle(self, exception: BaseException) -> bool:
        return isinstance(exception, FieldValidationError)

    def handle(self, exception: BaseException) -> ErrorResponse:
        validation_error = self.ensure_type(exception, FieldValidationError)
        message = validation_error.message or DEFAULT_VALIDATION_MESSAGE
        kind = validation_error.kind or DEFAULT_VALIDATION_KIND

        response = self.create_validation_response(message)

        if validation_error.fields:
            for field in validation_error.fields:
                response.add_field_error(
                    self.build_field_error(field, kind, message, validation_error.value)
                )
        else:
            response.add_global_error(self.build_global_error(kind, message))

        return self.echo_status(response)


class PydanticValidationHandler(ValidationErrorHandler):
    """Handles pydantic ValidationError raised by application code."""

    order = 110

    def can_handle(self, exception: BaseException) -> bool:
        return isinstance(exception, PydanticValidationError)

    def handle(self, exception: BaseException) -> ErrorResponse:
        validation_error = self.ensure_type(exception, PydanticValidationError)
        response = self.create_validation_response(DEFAULT_VALIDATION_MESSAGE)

        for error in validation_error.errors(include_url=False):
            self.add_pydantic_error(response, error, tuple(error.get("loc", ())))

        return self.echo_status(response)
