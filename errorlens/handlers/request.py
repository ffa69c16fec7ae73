"""
Malformed request handlers.
"""

import json
from http import HTTPStatus

from errorlens.config.codes import DefaultErrorCodes
from errorlens.errors.exceptions import BadRequestError, TypeMismatchError
from errorlens.handlers.base import ConfiguredExceptionHandler
from errorlens.schemas.response import ErrorResponse, ParameterError

JSON_NOT_READABLE_MESSAGE = "The request body could not be parsed as valid JSON"
BAD_REQUEST_MESSAGE = "Bad request"

# Fragments revealing framework internals in a request error message
_INTERNAL_MARKERS = ("Traceback", 'File "', "fastapi.", "starlette.", "pydantic.")
_INTERNAL_MARKERS_INSENSITIVE = ("failed to read", "unexpected end")


def sanitize_message(message: str) -> str:
    """Replace messages that expose framework internals with a generic one."""
    lowered = message.lower()
    if any(marker in message for marker in _INTERNAL_MARKERS) or any(
        marker in lowered for marker in _INTERNAL_MARKERS_INSENSITIVE
    ):
        return BAD_REQUEST_MESSAGE
    return message


class JsonDecodeHandler(ConfiguredExceptionHandler):
    """Handles JSON parsing failures."""

    order = 120

    def can_handle(self, exception: BaseException) -> bool:
        return isinstance(exception, json.JSONDecodeError)

    def handle(self, exception: BaseException) -> ErrorResponse:
        self.ensure_type(exception, json.JSONDecodeError)
        response = self.create_response(
            HTTPStatus.BAD_REQUEST,
            DefaultErrorCodes.MESSAGE_NOT_READABLE,
            self.built_in_message(
                DefaultErrorCodes.MESSAGE_NOT_READABLE, JSON_NOT_READABLE_MESSAGE
            ),
        )
        return self.echo_status(response)


class TypeMismatchHandler(ConfiguredExceptionHandler):
    """Handles values that could not be converted to the expected type."""

    order = 130

    def can_handle(self, exception: BaseException) -> bool:
        return isinstance(exception, TypeMismatchError)

    def handle(self, exception: BaseException) -> ErrorResponse:
        mismatch = self.ensure_type(exception, TypeMismatchError)
        message = self.built_in_message(DefaultErrorCodes.TYPE_MISMATCH, mismatch.message)
        response = self.create_response(
            HTTPStatus.BAD_REQUEST, DefaultErrorCodes.TYPE_MISMATCH, message
        )

        if mismatch.parameter:
            response.add_parameter_error(
                ParameterError(
                    code=DefaultErrorCodes.TYPE_MISMATCH,
                    parameter=mismatch.parameter,
                    message=mismatch.message,
                    rejected_value=(
                        mismatch.value if self.settings.INCLUDE_REJECTED_VALUES else None
                    ),
                )
            )

        return self.echo_status(response)


class BadRequestHandler(ConfiguredExceptionHandler):
    """Handles BadRequestError, keeping its status and sanitizing its message."""

    order = 150

    def can_handle(self, exception: BaseException) -> bool:
        return isinstance(exception, BadRequestError)

    def handle(self, exception: BaseException) -> ErrorResponse:
        bad_request = self.ensure_type(exception, BadRequestError)
        message = self.built_in_message(
            DefaultErrorCodes.BAD_REQUEST, sanitize_message(bad_request.message)
        )
        response = self.create_response(
            bad_request.status_code, DefaultErrorCodes.BAD_REQUEST, message
        )
        return self.echo_status(response)
