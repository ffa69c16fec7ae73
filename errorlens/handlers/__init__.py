"""
Exception handlers.

Built-in handlers and their order (lower runs first):

- AggregateExceptionHandler (50): exception groups
- RequestValidationHandler (90): FastAPI request validation errors
- FieldValidationHandler (100): FieldValidationError
- PydanticValidationHandler (110): pydantic ValidationError
- JsonDecodeHandler (120): json.JSONDecodeError
- TypeMismatchHandler (130): TypeMismatchError
- BadRequestHandler (150): BadRequestError

Custom handlers default to order 1000. Unmatched exceptions go to the
DefaultFallbackHandler.
"""

from errorlens.handlers.aggregate import (
    AggregateExceptionHandler,
    flatten_exception_group,
)
from errorlens.handlers.base import (
    ApiExceptionHandler,
    ConfiguredExceptionHandler,
    FallbackApiExceptionHandler,
)
from errorlens.handlers.fallback import DefaultFallbackHandler
from errorlens.handlers.request import (
    BadRequestHandler,
    JsonDecodeHandler,
    TypeMismatchHandler,
    sanitize_message,
)
from errorlens.handlers.validation import (
    FieldValidationHandler,
    PydanticValidationHandler,
    RequestValidationHandler,
    ValidationErrorHandler,
    infer_validation_kind,
    pydantic_validation_kind,
    validation_kind_code,
)

__all__ = [
    # Capabilities
    "ApiExceptionHandler",
    "ConfiguredExceptionHandler",
    "FallbackApiExceptionHandler",
    # Handlers
    "AggregateExceptionHandler",
    "BadRequestHandler",
    "DefaultFallbackHandler",
    "FieldValidationHandler",
    "JsonDecodeHandler",
    "PydanticValidationHandler",
    "RequestValidationHandler",
    "TypeMismatchHandler",
    "ValidationErrorHandler",
    # Helpers
    "flatten_exception_group",
    "infer_validation_kind",
    "pydantic_validation_kind",
    "sanitize_message",
    "validation_kind_code",
]
