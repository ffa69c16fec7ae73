"""
Handler capabilities.

Every handler in the chain exposes an ``order`` (lower runs first), a
``can_handle`` predicate and a ``handle`` method producing an ErrorResponse.
Custom handlers registered by an application take part in the same chain.

Example:
    ```python
    class OutOfStockHandler(ApiExceptionHandler):
        order = 200

        def can_handle(self, exception):
            return isinstance(exception, OutOfStockError)

        def handle(self, exception):
            return self.create_response(409, "OUT_OF_STOCK", str(exception))
    ```
"""

from abc import ABC, abstractmethod
from typing import Optional, Type, TypeVar, Union

from errorlens.config.base import ErrorHandlingSettings
from errorlens.config.settings import SettingsHolder, as_holder
from errorlens.schemas.response import ErrorResponse

E = TypeVar("E", bound=BaseException)


class ApiExceptionHandler(ABC):
    """Base class for exception handlers."""

    order: int = 1000

    @abstractmethod
    def can_handle(self, exception: BaseException) -> bool:
        """Return True when this handler converts ``exception``."""

    @abstractmethod
    def handle(self, exception: BaseException) -> ErrorResponse:
        """Convert ``exception`` into an ErrorResponse."""

    @staticmethod
    def create_response(
        http_status: int, code: str, message: Optional[str]
    ) -> ErrorResponse:
        """Create a basic error response."""
        return ErrorResponse(code=code, message=message, http_status=int(http_status))

    def ensure_type(self, exception: BaseException, expected: Type[E]) -> E:
        """
        Guard against dispatching an exception this handler does not accept.

        Raises:
            TypeError: When ``exception`` is not an instance of ``expected``
        """
        if not isinstance(exception, expected):
            raise TypeError(
                f"{type(self).__name__} cannot handle exception of type "
                f"{type(exception).__name__}. Call can_handle first."
            )
        return exception

    def __repr__(self) -> str:
        return f"{type(self).__name__}(order={self.order})"


class ConfiguredExceptionHandler(ApiExceptionHandler):
    """
    Handler reading the active settings snapshot.

    Provides the shared finishing steps of the built-in handlers: top-level
    message overrides from ``BUILT_IN_MESSAGES`` and the status echo.
    """

    def __init__(
        self, settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None
    ):
        self._settings = as_holder(settings)

    @property
    def settings(self) -> ErrorHandlingSettings:
        return self._settings.get()

    def built_in_message(self, code: str, default: Optional[str]) -> Optional[str]:
        return self.settings.BUILT_IN_MESSAGES.get(code, default)

    def echo_status(self, response: ErrorResponse) -> ErrorResponse:
        if self.settings.HTTP_STATUS_IN_JSON_RESPONSE:
            response.status = response.http_status
        return response


class FallbackApiExceptionHandler(ABC):
    """Handler of last resort. ``handle`` must always succeed."""

    @abstractmethod
    def handle(self, exception: BaseException) -> ErrorResponse:
        """Convert any exception into an ErrorResponse."""
