"""
Configuration module for errorlens.

This module provides:
- ErrorHandlingSettings: immutable settings loaded from environment variables.
- SettingsHolder: atomically swappable snapshot reference for hot reloads.
- ErrorCodeStrategy / ExceptionLogging enums and the DefaultErrorCodes constants.

Example environment variables (to be placed in your consuming project's .env or environment):

ERROR_HANDLING_ENABLED=true
ERROR_HANDLING_DEFAULT_ERROR_CODE_STRATEGY="ALL_CAPS"  # ALL_CAPS, FULL_QUALIFIED_NAME, KEBAB_CASE, PASCAL_CASE, DOT_SEPARATED
ERROR_HANDLING_HTTP_STATUS_IN_JSON_RESPONSE=false
ERROR_HANDLING_SEARCH_SUPER_CLASS_HIERARCHY=false
ERROR_HANDLING_EXCEPTION_LOGGING="MESSAGE_ONLY"  # NONE, MESSAGE_ONLY, WITH_STACKTRACE
ERROR_HANDLING_HTTP_STATUSES='{"myapp.errors.UserNotFoundException": 404}'
ERROR_HANDLING_CODES='{"myapp.errors.UserNotFoundException": "USER_MISSING", "email.Required": "EMAIL_REQUIRED"}'
ERROR_HANDLING_MESSAGES='{"email.Required": "Email is required"}'
ERROR_HANDLING_LOG_LEVELS='{"404": "DEBUG", "4xx": "INFO"}'
ERROR_HANDLING_FALLBACK_MESSAGE="An unexpected error occurred"
"""

from .base import ErrorHandlingSettings, JsonFieldNames
from .codes import DefaultErrorCodes
from .settings import SettingsHolder, as_holder, get_settings
from .strategies import ErrorCodeStrategy, ExceptionLogging

__all__ = [
    "ErrorHandlingSettings",
    "JsonFieldNames",
    "DefaultErrorCodes",
    "SettingsHolder",
    "as_holder",
    "get_settings",
    "ErrorCodeStrategy",
    "ExceptionLogging",
]
