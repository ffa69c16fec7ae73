"""
Request language detection.

The language of the current request is kept in a context variable so it
follows the request through async code and thread pool offloading.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, List, Optional

from fastapi import Request, Response
from pydantic import BaseModel, Field
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from errorlens.logging import get_logger

logger = get_logger(__name__)

_language: ContextVar[Optional[str]] = ContextVar("errorlens_language", default=None)


class LanguageConfig(BaseModel):
    """Configuration for request language detection."""

    default_language: str = Field(
        default="en",
        description="Default language code to use when no language is specified",
    )
    supported_languages: List[str] = Field(
        default=["en"], description="List of supported language codes"
    )
    cookie_name: str = Field(
        default="language",
        description="Name of the cookie holding the user's language preference",
    )
    header_name: str = Field(
        default="Accept-Language",
        description="Name of the header to check for language preference",
    )
    query_param_name: str = Field(
        default="lang",
        description="Name of the query parameter to check for language preference",
    )


def get_language() -> Optional[str]:
    """
    Get the language of the current request.

    Returns:
        The current language code, or None outside of a request
    """
    return _language.get()


@contextmanager
def use_language(language: Optional[str]) -> Iterator[None]:
    """Set the current language for the duration of the block."""
    token = _language.set(language)
    try:
        yield
    finally:
        _language.reset(token)


def detect_language(request: Request, config: LanguageConfig) -> str:
    """
    Detect the preferred language from the request.

    Checks the query parameter, then the cookie, then the Accept-Language
    header (exact match first, then the primary subtag), and falls back to
    the default language.
    """
    supported = config.supported_languages

    if config.query_param_name and config.query_param_name in request.query_params:
        lang = request.query_params[config.query_param_name]
        if lang in supported:
            return lang

    if config.cookie_name and config.cookie_name in request.cookies:
        lang = request.cookies[config.cookie_name]
        if lang in supported:
            return lang

    if config.header_name and config.header_name in request.headers:
        # e.g. "en-US,en;q=0.9,es;q=0.8"
        header = request.headers[config.header_name]
        langs = [lang.split(";")[0].strip() for lang in header.split(",")]

        for lang in langs:
            if lang in supported:
                return lang

        for lang in langs:
            code = lang.split("-")[0]
            if code in supported:
                return code

    return config.default_language


class LanguageMiddleware(BaseHTTPMiddleware):
    """
    Middleware making the request language available to error localization.

    The detected language is stored on ``request.state.language`` and in the
    context variable read by :func:`get_language`.
    """

    def __init__(self, app: ASGIApp, config: Optional[LanguageConfig] = None, **kwargs):
        super().__init__(app)
        self.config = config or LanguageConfig(**kwargs)
        logger.info(
            f"Language middleware initialized with default language "
            f"{self.config.default_language} and supported languages "
            f"{', '.join(self.config.supported_languages)}"
        )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        language = detect_language(request, self.config)
        request.state.language = language

        with use_language(language):
            return await call_next(request)
