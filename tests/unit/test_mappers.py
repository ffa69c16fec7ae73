"""
Unit tests for the code, message and status mappers.

Covers:
- Code generation strategies
- Override precedence (exact type, base classes, default)
- Field-level lookups
- Built-in HTTP status defaults and status extractors
"""

import asyncio

import pytest

from errorlens.config import ErrorCodeStrategy, ErrorHandlingSettings, SettingsHolder
from errorlens.errors.utils import type_full_name
from errorlens.mappers import (
    ErrorCodeMapper,
    ErrorMessageMapper,
    HttpStatusFromExceptionMapper,
    HttpStatusMapper,
    StatusCodeAttributeMapper,
    to_all_caps,
    to_dot_separated,
    to_kebab_case,
    to_pascal_case,
)


class ArgumentException(ValueError):
    pass


class UnauthorizedAccessException(PermissionError):
    pass


class KeyNotFoundException(KeyError):
    pass


class UserNotFoundException(Exception):
    pass


class InvalidOperationException(Exception):
    pass


class AdminUserNotFoundException(UserNotFoundException):
    pass


class TestCodeStrategies:
    def test_all_caps(self):
        assert to_all_caps("UserNotFoundException") == "USER_NOT_FOUND"

    def test_kebab_case(self):
        assert to_kebab_case("InvalidOperationException") == "invalid-operation"

    def test_pascal_case(self):
        assert to_pascal_case("InvalidOperationException") == "InvalidOperation"
        assert to_pascal_case("UserNotFoundException") == "UserNotFound"

    def test_dot_separated(self):
        assert to_dot_separated("InvalidOperationException") == "invalid.operation"

    @pytest.mark.parametrize(
        "strategy,expected",
        [
            (to_all_caps, "INTERNAL_ERROR"),
            (to_kebab_case, "internal-error"),
            (to_pascal_case, "InternalError"),
            (to_dot_separated, "internal.error"),
        ],
    )
    def test_bare_exception_name(self, strategy, expected):
        assert strategy("Exception") == expected

    def test_acronyms_are_split(self):
        assert to_all_caps("HTTPTimeoutException") == "HTTP_TIMEOUT"
        assert to_kebab_case("JSONParseError") == "json-parse-error"

    def test_names_without_suffix_are_kept(self):
        assert to_all_caps("ValueError") == "VALUE_ERROR"

    def test_full_qualified_name_strategy(self):
        mapper = ErrorCodeMapper(
            ErrorHandlingSettings(
                DEFAULT_ERROR_CODE_STRATEGY=ErrorCodeStrategy.FULL_QUALIFIED_NAME
            )
        )
        code = mapper.get_error_code(UserNotFoundException())
        assert code == type_full_name(UserNotFoundException)
        assert code.endswith(".UserNotFoundException")

    def test_builtin_full_qualified_name(self):
        mapper = ErrorCodeMapper(
            ErrorHandlingSettings(
                DEFAULT_ERROR_CODE_STRATEGY=ErrorCodeStrategy.FULL_QUALIFIED_NAME
            )
        )
        assert mapper.get_error_code(ValueError()) == "ValueError"


class TestErrorCodeMapper:
    def test_generated_codes(self):
        mapper = ErrorCodeMapper(ErrorHandlingSettings())
        assert mapper.get_error_code(ArgumentException("bad")) == "ARGUMENT"
        assert (
            mapper.get_error_code(UnauthorizedAccessException())
            == "UNAUTHORIZED_ACCESS"
        )
        assert mapper.get_error_code(KeyNotFoundException()) == "KEY_NOT_FOUND"

    @pytest.mark.parametrize("strategy", list(ErrorCodeStrategy))
    def test_override_wins_over_every_strategy(self, strategy):
        settings = ErrorHandlingSettings(
            DEFAULT_ERROR_CODE_STRATEGY=strategy,
            CODES={type_full_name(UserNotFoundException): "USER_MISSING"},
        )
        mapper = ErrorCodeMapper(settings)
        assert mapper.get_error_code(UserNotFoundException()) == "USER_MISSING"

    def test_base_class_override_requires_hierarchy_search(self):
        codes = {type_full_name(UserNotFoundException): "USER_MISSING"}
        without = ErrorCodeMapper(ErrorHandlingSettings(CODES=codes))
        with_search = ErrorCodeMapper(
            ErrorHandlingSettings(CODES=codes, SEARCH_SUPER_CLASS_HIERARCHY=True)
        )

        assert without.get_error_code(AdminUserNotFoundException()) == "ADMIN_USER_NOT_FOUND"
        assert with_search.get_error_code(AdminUserNotFoundException()) == "USER_MISSING"

    def test_builtin_base_class_override(self):
        mapper = ErrorCodeMapper(
            ErrorHandlingSettings(
                CODES={"ValueError": "INVALID_VALUE"},
                SEARCH_SUPER_CLASS_HIERARCHY=True,
            )
        )
        assert mapper.get_error_code(ArgumentException()) == "INVALID_VALUE"

    def test_field_error_code_precedence(self):
        mapper = ErrorCodeMapper(
            ErrorHandlingSettings(
                CODES={
                    "email.Required": "EMAIL_REQUIRED",
                    "REQUIRED_NOT_NULL": "MISSING",
                }
            )
        )
        assert mapper.get_field_error_code("email.Required", "REQUIRED_NOT_NULL") == "EMAIL_REQUIRED"
        assert mapper.get_field_error_code("name.Required", "REQUIRED_NOT_NULL") == "MISSING"
        assert mapper.get_field_error_code("name.Range", "VALUE_OUT_OF_RANGE") == "VALUE_OUT_OF_RANGE"

    def test_reads_latest_published_settings(self):
        holder = SettingsHolder(ErrorHandlingSettings())
        mapper = ErrorCodeMapper(holder)
        assert mapper.get_error_code(ArgumentException()) == "ARGUMENT"

        holder.publish(
            ErrorHandlingSettings(DEFAULT_ERROR_CODE_STRATEGY=ErrorCodeStrategy.KEBAB_CASE)
        )
        assert mapper.get_error_code(ArgumentException()) == "argument"


class TestErrorMessageMapper:
    def test_defaults_to_exception_text(self):
        mapper = ErrorMessageMapper(ErrorHandlingSettings())
        assert mapper.get_error_message(ArgumentException("bad")) == "bad"

    def test_empty_exception_text_is_none(self):
        mapper = ErrorMessageMapper(ErrorHandlingSettings())
        assert mapper.get_error_message(ArgumentException()) is None

    def test_override_and_base_class_override(self):
        settings = ErrorHandlingSettings(
            MESSAGES={type_full_name(UserNotFoundException): "No such user"},
            SEARCH_SUPER_CLASS_HIERARCHY=True,
        )
        mapper = ErrorMessageMapper(settings)
        assert mapper.get_error_message(UserNotFoundException("id 7")) == "No such user"
        assert mapper.get_error_message(AdminUserNotFoundException("id 7")) == "No such user"

    def test_field_error_message_precedence(self):
        mapper = ErrorMessageMapper(
            ErrorHandlingSettings(
                MESSAGES={
                    "email.Required": "Email is required",
                    "REQUIRED_NOT_NULL": "Value is required",
                }
            )
        )
        assert (
            mapper.get_field_error_message("email.Required", "REQUIRED_NOT_NULL", "x")
            == "Email is required"
        )
        assert (
            mapper.get_field_error_message("name.Required", "REQUIRED_NOT_NULL", "x")
            == "Value is required"
        )
        assert mapper.get_field_error_message("name.Range", "VALUE_OUT_OF_RANGE", "x") == "x"


class TestHttpStatusMapper:
    @pytest.mark.parametrize(
        "exception,expected",
        [
            (ArgumentException("bad"), 400),
            (TypeError("wrong"), 400),
            (UnauthorizedAccessException(), 401),
            (KeyNotFoundException("k"), 404),
            (FileNotFoundError(), 404),
            (TimeoutError(), 408),
            (NotImplementedError(), 501),
            (asyncio.CancelledError(), 499),
            (Exception("secret details"), 500),
        ],
    )
    def test_builtin_defaults(self, exception, expected):
        mapper = HttpStatusMapper(ErrorHandlingSettings())
        assert mapper.get_http_status(exception) == expected

    def test_caller_default(self):
        mapper = HttpStatusMapper(ErrorHandlingSettings())
        assert mapper.get_http_status(UserNotFoundException(), 503) == 503

    def test_override_wins_over_builtin_default(self):
        mapper = HttpStatusMapper(
            ErrorHandlingSettings(HTTP_STATUSES={"ValueError": 422})
        )
        assert mapper.get_http_status(ValueError()) == 422
        assert mapper.get_http_status(ArgumentException()) == 400

    def test_base_class_override(self):
        mapper = HttpStatusMapper(
            ErrorHandlingSettings(
                HTTP_STATUSES={type_full_name(UserNotFoundException): 404},
                SEARCH_SUPER_CLASS_HIERARCHY=True,
            )
        )
        assert mapper.get_http_status(AdminUserNotFoundException()) == 404

    def test_extractor_wins_over_configuration(self):
        class AlwaysTeapot(HttpStatusFromExceptionMapper):
            def get_http_status(self, exception):
                return 418

        mapper = HttpStatusMapper(
            ErrorHandlingSettings(HTTP_STATUSES={"ValueError": 422}), AlwaysTeapot()
        )
        assert mapper.get_http_status(ValueError()) == 418

    def test_status_code_attribute_mapper(self):
        class Conflict(Exception):
            status_code = 409

        class Invalid(Exception):
            status_code = "409"

        extractor = StatusCodeAttributeMapper()
        assert extractor.get_http_status(Conflict()) == 409
        assert extractor.get_http_status(Invalid()) is None

        mapper = HttpStatusMapper(ErrorHandlingSettings(), extractor)
        assert mapper.get_http_status(Conflict()) == 409
        assert mapper.get_http_status(Invalid()) == 500
