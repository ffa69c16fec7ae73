"""
Enumerations used by the error handling configuration.
"""

from enum import Enum


class ErrorCodeStrategy(str, Enum):
    """
    Strategy used to generate an error code from an exception class name
    when no explicit code is configured.

    Example for ``UserNotFoundException``:
        ALL_CAPS -> USER_NOT_FOUND
        FULL_QUALIFIED_NAME -> myapp.errors.UserNotFoundException
        KEBAB_CASE -> user-not-found
        PASCAL_CASE -> UserNotFound
        DOT_SEPARATED -> user.not.found
    """

    ALL_CAPS = "ALL_CAPS"
    FULL_QUALIFIED_NAME = "FULL_QUALIFIED_NAME"
    KEBAB_CASE = "KEBAB_CASE"
    PASCAL_CASE = "PASCAL_CASE"
    DOT_SEPARATED = "DOT_SEPARATED"


class ExceptionLogging(str, Enum):
    """Verbosity used when logging handled exceptions."""

    NONE = "NONE"
    MESSAGE_ONLY = "MESSAGE_ONLY"
    WITH_STACKTRACE = "WITH_STACKTRACE"
