"""
Translation catalogs for error messages.

Catalogs are keyed by error code (or ``<code>.<field>`` for field errors)
and loaded per language from, in order of preference:

1. gettext ``.mo`` files: ``<translations_dir>/<lang>/LC_MESSAGES/errors.mo``
2. JSON files: ``<translations_dir>/<lang>.json``
3. In-memory catalogs passed to the constructor
"""

import gettext
import json
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Union

from errorlens.logging import Logger, ensure_logger

DEFAULT_DOMAIN = "errors"


class TranslationManager:
    """
    Manager for error message translations across multiple languages.

    Example:
        ```python
        manager = TranslationManager(
            default_language="en",
            supported_languages=["en", "de"],
            catalogs={"de": {"USER_NOT_FOUND": "Benutzer nicht gefunden"}},
        )
        manager.lookup("USER_NOT_FOUND", "de")  # "Benutzer nicht gefunden"
        manager.lookup("USER_NOT_FOUND", "en")  # None
        ```
    """

    def __init__(
        self,
        translations_dir: Union[str, Path, None] = None,
        default_language: str = "en",
        supported_languages: Optional[List[str]] = None,
        catalogs: Optional[Mapping[str, Mapping[str, str]]] = None,
        domain: str = DEFAULT_DOMAIN,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize the translation manager.

        Args:
            translations_dir: Directory containing translation files
            default_language: Language used when none is requested or the requested one is unsupported
            supported_languages: Supported language codes
            catalogs: In-memory catalogs per language
            domain: gettext domain of the ``.mo`` files
            logger: Optional logger
        """
        self.logger = ensure_logger(logger, __name__)
        self.translations_dir = Path(translations_dir) if translations_dir else None
        self.default_language = default_language
        self.domain = domain

        catalogs = catalogs or {}
        languages = list(supported_languages or [default_language])
        for language in catalogs:
            if language not in languages:
                languages.append(language)
        self.supported_languages = languages

        # gettext lookups per language
        self.translations: Dict[str, Callable[[str], str]] = {}
        # key/value catalogs per language
        self.translation_strings: Dict[str, Dict[str, str]] = {
            language: dict(strings) for language, strings in catalogs.items()
        }

        if self.translations_dir is not None:
            self._load_translations()

    def _load_translations(self) -> None:
        for language in self.supported_languages:
            try:
                translation = gettext.translation(
                    self.domain,
                    localedir=str(self.translations_dir),
                    languages=[language],
                )
                self.translations[language] = translation.gettext
                self.logger.debug(f"Loaded gettext translations for {language}")
                continue
            except OSError:
                pass

            json_path = self.translations_dir / f"{language}.json"
            if json_path.exists():
                try:
                    with open(json_path, "r", encoding="utf-8") as f:
                        strings = json.load(f)
                except (json.JSONDecodeError, OSError) as e:
                    self.logger.error(
                        f"Error loading JSON translations for {language}: {e}"
                    )
                    continue
                self.translation_strings.setdefault(language, {}).update(strings)
                self.logger.debug(f"Loaded JSON translations for {language}")
                continue

            if language not in self.translation_strings:
                self.logger.warning(f"No translations found for {language}")

    def resolve_language(self, language: Optional[str]) -> str:
        """Return ``language`` when supported, otherwise the default language."""
        if language and language in self.supported_languages:
            return language
        return self.default_language

    def lookup(self, key: str, language: Optional[str] = None) -> Optional[str]:
        """
        Look up the translation of ``key``.

        Args:
            key: Translation key (an error code or ``<code>.<field>``)
            language: Language code; the default language when missing or unsupported

        Returns:
            The translated text, or None when the catalog has no entry
        """
        language = self.resolve_language(language)

        gettext_lookup = self.translations.get(language)
        if gettext_lookup is not None:
            translated = gettext_lookup(key)
            if translated != key:
                return translated

        return self.translation_strings.get(language, {}).get(key)

    def translate(
        self, key: str, default: Optional[str], language: Optional[str] = None
    ) -> Optional[str]:
        """Translate ``key``, returning ``default`` when no translation exists."""
        translated = self.lookup(key, language)
        return translated if translated is not None else default
