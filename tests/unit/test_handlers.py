"""
Unit tests for the built-in exception handlers.

Covers:
- Handler orders and can_handle predicates
- Validation handlers (request, field, pydantic) and field error derivation
- Malformed request handlers (JSON, type mismatch, bad request)
- Validation kind heuristics
- Wrong-type dispatch
"""

import json

import pytest
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field, ValidationError, field_validator

from errorlens.config import ErrorHandlingSettings
from errorlens.errors import BadRequestError, FieldValidationError, TypeMismatchError
from errorlens.handlers import (
    BadRequestHandler,
    FieldValidationHandler,
    JsonDecodeHandler,
    PydanticValidationHandler,
    RequestValidationHandler,
    TypeMismatchHandler,
    infer_validation_kind,
    pydantic_validation_kind,
    sanitize_message,
)
from errorlens.mappers import ErrorCodeMapper, ErrorMessageMapper


class Address(BaseModel):
    zip_code: str = Field(min_length=5)


class User(BaseModel):
    email: str
    age: int = Field(ge=18)
    address: Address


class Signup(BaseModel):
    password: str
    confirm: str

    @field_validator("confirm")
    @classmethod
    def passwords_match(cls, value):
        raise ValueError("Passwords must be between 8 and 64 characters")


def make_validation_handler(handler_cls, **settings):
    config = ErrorHandlingSettings(**settings)
    return handler_cls(ErrorCodeMapper(config), ErrorMessageMapper(config), config)


def pydantic_error(model, data):
    with pytest.raises(ValidationError) as exc_info:
        model.model_validate(data)
    return exc_info.value


def test_handler_orders():
    assert RequestValidationHandler.order == 90
    assert FieldValidationHandler.order == 100
    assert PydanticValidationHandler.order == 110
    assert JsonDecodeHandler.order == 120
    assert TypeMismatchHandler.order == 130
    assert BadRequestHandler.order == 150


@pytest.mark.parametrize(
    "handler",
    [
        make_validation_handler(FieldValidationHandler),
        JsonDecodeHandler(ErrorHandlingSettings()),
        BadRequestHandler(ErrorHandlingSettings()),
    ],
)
def test_wrong_type_dispatch_raises_type_error(handler):
    assert not handler.can_handle(RuntimeError("x"))
    with pytest.raises(TypeError):
        handler.handle(RuntimeError("x"))


class TestFieldValidationHandler:
    def test_field_errors_per_member(self):
        handler = make_validation_handler(FieldValidationHandler)
        exc = FieldValidationError(
            "Email is invalid", fields=["Email", "BackupEmail"], kind="EmailAddress", value="nope"
        )

        response = handler.handle(exc)

        assert response.http_status == 400
        assert response.code == "VALIDATION_FAILED"
        assert response.message == "Email is invalid"
        assert [e.property for e in response.field_errors] == ["email", "backupEmail"]
        first = response.field_errors[0]
        assert first.code == "INVALID_EMAIL"
        assert first.message == "Email is invalid"
        assert first.rejected_value == "nope"
        assert first.path == "email"

    def test_global_error_without_members(self):
        handler = make_validation_handler(FieldValidationHandler)
        response = handler.handle(FieldValidationError("Dates overlap"))

        assert response.field_errors is None
        assert response.global_errors[0].code == "VALIDATION_FAILED"
        assert response.global_errors[0].message == "Dates overlap"

    def test_global_error_uses_configured_overrides(self):
        handler = make_validation_handler(
            FieldValidationHandler,
            CODES={"VALUE_OUT_OF_RANGE": "DATES_OVERLAP"},
            MESSAGES={"VALUE_OUT_OF_RANGE": "Start must be before end"},
        )
        response = handler.handle(FieldValidationError("Dates overlap", kind="Range"))

        (global_error,) = response.global_errors
        assert global_error.code == "DATES_OVERLAP"
        assert global_error.message == "Start must be before end"

    def test_field_overrides_use_composite_key(self):
        handler = make_validation_handler(
            FieldValidationHandler,
            CODES={"email.Required": "EMAIL_REQUIRED"},
            MESSAGES={"email.Required": "Email is required"},
        )
        response = handler.handle(
            FieldValidationError("missing", fields=["email"], kind="Required")
        )

        assert response.field_errors[0].code == "EMAIL_REQUIRED"
        assert response.field_errors[0].message == "Email is required"

    def test_rejected_value_and_path_can_be_disabled(self):
        handler = make_validation_handler(
            FieldValidationHandler, INCLUDE_REJECTED_VALUES=False, ADD_PATH_TO_ERROR=False
        )
        response = handler.handle(
            FieldValidationError("bad", fields=["name"], kind="StringLength", value="x")
        )

        error = response.field_errors[0]
        assert error.code == "INVALID_SIZE"
        assert error.rejected_value is None
        assert error.path is None

    def test_built_in_message_override(self):
        handler = make_validation_handler(
            FieldValidationHandler, BUILT_IN_MESSAGES={"VALIDATION_FAILED": "Check your input"}
        )
        response = handler.handle(FieldValidationError("bad", fields=["name"]))
        assert response.message == "Check your input"

    def test_status_echo(self):
        handler = make_validation_handler(
            FieldValidationHandler, HTTP_STATUS_IN_JSON_RESPONSE=True
        )
        response = handler.handle(FieldValidationError("bad", fields=["name"]))
        assert response.status == 400


class TestPydanticValidationHandler:
    def test_field_errors_from_locations(self):
        handler = make_validation_handler(PydanticValidationHandler)
        exc = pydantic_error(User, {"age": 12, "address": {"zip_code": "12"}})

        response = handler.handle(exc)
        errors = {e.property: e for e in response.field_errors}

        assert response.code == "VALIDATION_FAILED"
        assert response.message == "Validation failed"
        assert errors["email"].code == "REQUIRED_NOT_NULL"
        assert errors["email"].rejected_value is None
        assert errors["age"].code == "VALUE_OUT_OF_RANGE"
        assert errors["age"].rejected_value == 12
        assert errors["address.zipCode"].code == "INVALID_SIZE"
        assert errors["address.zipCode"].path == "address.zipCode"

    def test_type_errors_map_to_type_mismatch(self):
        handler = make_validation_handler(PydanticValidationHandler)
        exc = pydantic_error(
            User, {"email": "a@b.c", "age": "old", "address": {"zip_code": "12345"}}
        )

        response = handler.handle(exc)
        assert response.field_errors[0].property == "age"
        assert response.field_errors[0].code == "TYPE_MISMATCH"

    def test_value_error_uses_message_heuristic(self):
        handler = make_validation_handler(PydanticValidationHandler)
        exc = pydantic_error(Signup, {"password": "x", "confirm": "y"})

        response = handler.handle(exc)
        assert response.field_errors[0].property == "confirm"
        assert response.field_errors[0].code == "VALUE_OUT_OF_RANGE"

    def test_model_level_errors_are_global(self):
        handler = make_validation_handler(PydanticValidationHandler)
        exc = pydantic_error(User, "not an object")

        response = handler.handle(exc)
        assert response.field_errors is None
        assert response.global_errors[0].code == "TYPE_MISMATCH"


class TestRequestValidationHandler:
    def test_locations_are_split_by_source(self):
        handler = make_validation_handler(RequestValidationHandler)
        exc = RequestValidationError(
            [
                {"type": "missing", "loc": ("body", "email"), "msg": "Field required", "input": {}},
                {
                    "type": "int_parsing",
                    "loc": ("query", "page"),
                    "msg": "Input should be a valid integer",
                    "input": "two",
                },
                {"type": "missing", "loc": ("header", "x-api-key"), "msg": "Field required", "input": None},
                {"type": "json_invalid", "loc": ("body", 12), "msg": "JSON decode error", "input": {}},
            ]
        )

        response = handler.handle(exc)

        assert response.http_status == 400
        assert response.code == "VALIDATION_FAILED"
        assert [(e.property, e.code) for e in response.field_errors] == [
            ("email", "REQUIRED_NOT_NULL")
        ]
        assert [(e.parameter, e.code, e.rejected_value) for e in response.parameter_errors] == [
            ("page", "TYPE_MISMATCH", "two"),
            ("x-api-key", "REQUIRED_NOT_NULL", None),
        ]
        assert response.global_errors[0].code == "JSON_PARSE_ERROR"

    def test_parameter_override_by_composite_key(self):
        handler = make_validation_handler(
            RequestValidationHandler, CODES={"page.Type": "PAGE_NOT_A_NUMBER"}
        )
        exc = RequestValidationError(
            [{"type": "int_parsing", "loc": ("query", "page"), "msg": "bad", "input": "x"}]
        )
        assert handler.handle(exc).parameter_errors[0].code == "PAGE_NOT_A_NUMBER"


class TestRequestHandlers:
    def test_json_decode_handler(self):
        handler = JsonDecodeHandler(ErrorHandlingSettings())
        with pytest.raises(json.JSONDecodeError) as exc_info:
            json.loads("{bad json")

        response = handler.handle(exc_info.value)
        assert response.http_status == 400
        assert response.code == "MESSAGE_NOT_READABLE"
        assert response.message == "The request body could not be parsed as valid JSON"

    def test_json_decode_built_in_message(self):
        handler = JsonDecodeHandler(
            ErrorHandlingSettings(BUILT_IN_MESSAGES={"MESSAGE_NOT_READABLE": "Unreadable"})
        )
        response = handler.handle(json.JSONDecodeError("x", "doc", 0))
        assert response.message == "Unreadable"

    def test_type_mismatch_handler(self):
        handler = TypeMismatchHandler(ErrorHandlingSettings())
        exc = TypeMismatchError("age must be a number", parameter="age", value="abc")

        response = handler.handle(exc)
        assert response.http_status == 400
        assert response.code == "TYPE_MISMATCH"
        assert response.message == "age must be a number"
        assert response.parameter_errors[0].parameter == "age"
        assert response.parameter_errors[0].rejected_value == "abc"

    def test_type_mismatch_without_parameter(self):
        handler = TypeMismatchHandler(ErrorHandlingSettings())
        response = handler.handle(TypeMismatchError("bad"))
        assert response.parameter_errors is None

    def test_bad_request_handler_keeps_status(self):
        handler = BadRequestHandler(ErrorHandlingSettings())
        response = handler.handle(BadRequestError("Payload too large", status_code=413))
        assert response.http_status == 413
        assert response.code == "BAD_REQUEST"
        assert response.message == "Payload too large"

    @pytest.mark.parametrize(
        "message",
        [
            "Failed to read the request body",
            "Unexpected end of request content",
            'Traceback (most recent call last): File "app.py"',
            "starlette.requests.ClientDisconnect",
        ],
    )
    def test_bad_request_messages_are_sanitized(self, message):
        assert sanitize_message(message) == "Bad request"

    def test_safe_bad_request_message_is_kept(self):
        assert sanitize_message("Missing boundary") == "Missing boundary"


class TestValidationKinds:
    """The message heuristic is a best effort classification, not a contract."""

    @pytest.mark.parametrize(
        "message,kind",
        [
            ("The Name field is required.", "Required"),
            ("Please enter a valid email address", "EmailAddress"),
            ("must be a string with a maximum length of 10", "StringLength"),
            ("Age must be between 18 and 99", "Range"),
            ("Value is too low", "Range"),
            ("does not match the pattern", "RegularExpression"),
            ("not a valid URL", "Url"),
            ("Invalid credit card number", "CreditCard"),
            ("invalid JSON literal", "Json"),
            ("something else entirely", "Validation"),
            ("", "Validation"),
            (None, "Validation"),
        ],
    )
    def test_infer_validation_kind(self, message, kind):
        assert infer_validation_kind(message) == kind

    @pytest.mark.parametrize(
        "error_type,kind",
        [
            ("missing", "Required"),
            ("string_too_short", "StringLength"),
            ("too_long", "StringLength"),
            ("greater_than_equal", "Range"),
            ("less_than", "Range"),
            ("string_pattern_mismatch", "RegularExpression"),
            ("url_parsing", "Url"),
            ("json_invalid", "Json"),
            ("int_parsing", "Type"),
            ("dict_type", "Type"),
            ("custom_rule", "Validation"),
        ],
    )
    def test_pydantic_validation_kind(self, error_type, kind):
        assert pydantic_validation_kind(error_type) == kind


def test_default_codes_are_all_produced_by_handlers():
    from errorlens.config import DefaultErrorCodes
    from errorlens.handlers.validation import VALIDATION_KIND_CODES

    declared = {
        value for name, value in vars(DefaultErrorCodes).items() if name.isupper()
    }
    produced = set(VALIDATION_KIND_CODES.values()) | {
        DefaultErrorCodes.INTERNAL_SERVER_ERROR,
        DefaultErrorCodes.VALIDATION_FAILED,
        DefaultErrorCodes.MESSAGE_NOT_READABLE,
        DefaultErrorCodes.BAD_REQUEST,
    }
    assert declared == produced
