"""
Error code mapping.

Codes are resolved from the ``CODES`` table by exact exception type name,
then (optionally) by base class names, and finally generated from the
exception class name with the configured strategy.
"""

from typing import Optional, Union

from errorlens.config.base import ErrorHandlingSettings
from errorlens.config.settings import SettingsHolder, as_holder
from errorlens.config.strategies import ErrorCodeStrategy
from errorlens.errors.utils import iter_base_types, split_words, type_full_name

_EXCEPTION_SUFFIX = "Exception"


def _strip_exception_suffix(class_name: str) -> Optional[str]:
    """Strip a trailing "Exception"; None when the name is exactly "Exception"."""
    if class_name == _EXCEPTION_SUFFIX:
        return None
    if class_name.endswith(_EXCEPTION_SUFFIX):
        return class_name[: -len(_EXCEPTION_SUFFIX)]
    return class_name


def to_all_caps(class_name: str) -> str:
    """UserNotFoundException -> USER_NOT_FOUND"""
    name = _strip_exception_suffix(class_name)
    if name is None:
        return "INTERNAL_ERROR"
    code = split_words(name, "_").upper().lstrip("_")
    return code or "UNKNOWN_ERROR"


def to_kebab_case(class_name: str) -> str:
    """InvalidOperationException -> invalid-operation"""
    name = _strip_exception_suffix(class_name)
    if name is None:
        return "internal-error"
    code = split_words(name, "-").lower().lstrip("-")
    return code or "unknown-error"


def to_pascal_case(class_name: str) -> str:
    """InvalidOperationException -> InvalidOperation"""
    name = _strip_exception_suffix(class_name)
    if name is None:
        return "InternalError"
    return name or "UnknownError"


def to_dot_separated(class_name: str) -> str:
    """InvalidOperationException -> invalid.operation"""
    name = _strip_exception_suffix(class_name)
    if name is None:
        return "internal.error"
    code = split_words(name, ".").lower().lstrip(".")
    return code or "unknown.error"


_STRATEGIES = {
    ErrorCodeStrategy.ALL_CAPS: to_all_caps,
    ErrorCodeStrategy.KEBAB_CASE: to_kebab_case,
    ErrorCodeStrategy.PASCAL_CASE: to_pascal_case,
    ErrorCodeStrategy.DOT_SEPARATED: to_dot_separated,
}


class ErrorCodeMapper:
    """Maps exceptions and validation keys to error codes."""

    def __init__(
        self, settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None
    ):
        self._settings = as_holder(settings)

    def get_error_code(self, exception: BaseException) -> str:
        """
        Resolve the error code of an exception.

        Args:
            exception: The exception to map

        Returns:
            The configured code, a base class's configured code, or a generated code
        """
        settings = self._settings.get()
        exception_type = type(exception)
        type_name = type_full_name(exception_type)

        configured = settings.CODES.get(type_name)
        if configured is not None:
            return configured

        if settings.SEARCH_SUPER_CLASS_HIERARCHY:
            for base in iter_base_types(exception_type):
                configured = settings.CODES.get(type_full_name(base))
                if configured is not None:
                    return configured

        strategy = settings.DEFAULT_ERROR_CODE_STRATEGY
        if strategy == ErrorCodeStrategy.FULL_QUALIFIED_NAME:
            return type_name
        return _STRATEGIES.get(strategy, to_all_caps)(exception_type.__name__)

    def get_field_error_code(self, field_key: str, default_code: str) -> str:
        """
        Resolve the code of a field-level error.

        Args:
            field_key: Composite key such as ``"email.Required"``
            default_code: Code used when no override exists; also checked as a key

        Returns:
            The resolved error code
        """
        codes = self._settings.get().CODES

        configured = codes.get(field_key)
        if configured is not None:
            return configured

        configured = codes.get(default_code)
        if configured is not None:
            return configured

        return default_code
