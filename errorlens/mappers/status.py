"""
HTTP status mapping.

Resolution order:
1. A status extractor reading the status off the exception instance
2. The ``HTTP_STATUSES`` table by exact exception type name
3. The table by base class names (when SEARCH_SUPER_CLASS_HIERARCHY is on)
4. Built-in defaults for common exception types
5. The caller-supplied default
"""

import asyncio
import concurrent.futures
from abc import ABC, abstractmethod
from http import HTTPStatus
from typing import Optional, Sequence, Tuple, Type, Union

from errorlens.config.base import ErrorHandlingSettings
from errorlens.config.settings import SettingsHolder, as_holder
from errorlens.errors.utils import iter_base_types, type_full_name

CLIENT_CLOSED_REQUEST = 499

# Most specific types first
DEFAULT_STATUSES: Tuple[Tuple[Tuple[Type[BaseException], ...], int], ...] = (
    ((asyncio.CancelledError, concurrent.futures.CancelledError), CLIENT_CLOSED_REQUEST),
    ((NotImplementedError,), HTTPStatus.NOT_IMPLEMENTED),
    ((TimeoutError,), HTTPStatus.REQUEST_TIMEOUT),
    ((PermissionError,), HTTPStatus.UNAUTHORIZED),
    ((KeyError, FileNotFoundError), HTTPStatus.NOT_FOUND),
    ((ValueError, TypeError), HTTPStatus.BAD_REQUEST),
)


class HttpStatusFromExceptionMapper(ABC):
    """Reads an HTTP status directly from an exception instance."""

    @abstractmethod
    def get_http_status(self, exception: BaseException) -> Optional[int]:
        """Return the status carried by the exception, or None."""


class StatusCodeAttributeMapper(HttpStatusFromExceptionMapper):
    """
    Reads an integer status from an attribute of the exception.

    Matches exceptions such as ``starlette.exceptions.HTTPException`` that
    expose a ``status_code`` attribute.
    """

    def __init__(self, attributes: Sequence[str] = ("status_code", "http_status")):
        self.attributes = tuple(attributes)

    def get_http_status(self, exception: BaseException) -> Optional[int]:
        for attribute in self.attributes:
            value = getattr(exception, attribute, None)
            if isinstance(value, int) and not isinstance(value, bool):
                if 100 <= value <= 599:
                    return int(value)
        return None


class HttpStatusMapper:
    """Maps exceptions to HTTP status codes."""

    def __init__(
        self,
        settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None,
        extractor: Optional[HttpStatusFromExceptionMapper] = None,
    ):
        self._settings = as_holder(settings)
        self._extractor = extractor

    def get_http_status(
        self,
        exception: BaseException,
        default_status: int = HTTPStatus.INTERNAL_SERVER_ERROR,
    ) -> int:
        """
        Resolve the HTTP status of an exception.

        Args:
            exception: The exception to map
            default_status: Status returned when nothing else matches

        Returns:
            The HTTP status code
        """
        if self._extractor is not None:
            extracted = self._extractor.get_http_status(exception)
            if extracted is not None:
                return int(extracted)

        settings = self._settings.get()
        exception_type = type(exception)

        configured = settings.HTTP_STATUSES.get(type_full_name(exception_type))
        if configured is not None:
            return configured

        if settings.SEARCH_SUPER_CLASS_HIERARCHY:
            for base in iter_base_types(exception_type):
                configured = settings.HTTP_STATUSES.get(type_full_name(base))
                if configured is not None:
                    return configured

        for exception_types, status in DEFAULT_STATUSES:
            if isinstance(exception, exception_types):
                return int(status)

        return int(default_status)
