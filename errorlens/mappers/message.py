"""
Error message mapping.
"""

from typing import Optional, Union

from errorlens.config.base import ErrorHandlingSettings
from errorlens.config.settings import SettingsHolder, as_holder
from errorlens.errors.utils import iter_base_types, type_full_name


class ErrorMessageMapper:
    """Maps exceptions and validation keys to error messages using the ``MESSAGES`` table."""

    def __init__(
        self, settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None
    ):
        self._settings = as_holder(settings)

    def get_error_message(self, exception: BaseException) -> Optional[str]:
        """
        Resolve the message of an exception.

        Falls back to ``str(exception)``; an empty string yields None.
        """
        settings = self._settings.get()
        exception_type = type(exception)

        configured = settings.MESSAGES.get(type_full_name(exception_type))
        if configured is not None:
            return configured

        if settings.SEARCH_SUPER_CLASS_HIERARCHY:
            for base in iter_base_types(exception_type):
                configured = settings.MESSAGES.get(type_full_name(base))
                if configured is not None:
                    return configured

        return str(exception) or None

    def get_field_error_message(
        self, field_key: str, default_code: str, default_message: str
    ) -> str:
        """
        Resolve the message of a field-level error.

        Checks ``field_key`` (e.g. ``"email.Required"``), then ``default_code``,
        then returns ``default_message``.
        """
        messages = self._settings.get().MESSAGES

        configured = messages.get(field_key)
        if configured is not None:
            return configured

        configured = messages.get(default_code)
        if configured is not None:
            return configured

        return default_message
