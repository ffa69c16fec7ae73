"""
Localization of error messages.

Provides localizers that translate response messages by error code, the
translation catalogs they read from and the middleware detecting the
language of each request.
"""

from errorlens.localization.language import (
    LanguageConfig,
    LanguageMiddleware,
    detect_language,
    get_language,
    use_language,
)
from errorlens.localization.localizer import (
    ErrorMessageLocalizer,
    NoOpErrorMessageLocalizer,
    TranslationErrorMessageLocalizer,
)
from errorlens.localization.translations import TranslationManager

__all__ = [
    "ErrorMessageLocalizer",
    "LanguageConfig",
    "LanguageMiddleware",
    "NoOpErrorMessageLocalizer",
    "TranslationErrorMessageLocalizer",
    "TranslationManager",
    "detect_language",
    "get_language",
    "use_language",
]
