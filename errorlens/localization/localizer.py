"""
Error message localizers.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from errorlens.localization.language import get_language
from errorlens.localization.translations import TranslationManager


class ErrorMessageLocalizer(ABC):
    """Translates response messages by error code."""

    @abstractmethod
    def localize(self, code: str, message: Optional[str]) -> Optional[str]:
        """Return the localized top-level or global error message."""

    @abstractmethod
    def localize_field_error(
        self, code: str, field: str, message: Optional[str]
    ) -> Optional[str]:
        """Return the localized message of a field or parameter error."""


class NoOpErrorMessageLocalizer(ErrorMessageLocalizer):
    """Returns every message unchanged."""

    def localize(self, code: str, message: Optional[str]) -> Optional[str]:
        return message

    def localize_field_error(
        self, code: str, field: str, message: Optional[str]
    ) -> Optional[str]:
        return message


class TranslationErrorMessageLocalizer(ErrorMessageLocalizer):
    """
    Localizer backed by a TranslationManager.

    Messages are looked up by error code in the language of the current
    request. Field errors try ``"<code>.<field>"`` before the code. Messages
    without a translation are returned unchanged.
    """

    def __init__(
        self,
        manager: TranslationManager,
        language_provider: Callable[[], Optional[str]] = get_language,
    ):
        self.manager = manager
        self.language_provider = language_provider

    def localize(self, code: str, message: Optional[str]) -> Optional[str]:
        return self.manager.translate(code, message, self.language_provider())

    def localize_field_error(
        self, code: str, field: str, message: Optional[str]
    ) -> Optional[str]:
        language = self.language_provider()
        translated = self.manager.lookup(f"{code}.{field}", language)
        if translated is not None:
            return translated
        return self.manager.translate(code, message, language)
