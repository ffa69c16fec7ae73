"""
Exception handling facade.

The facade is the single entry point converting an exception into an
ErrorResponse. For every call it:

1. Pins one settings snapshot; re-raises the exception when disabled
2. Starts a telemetry span
3. Dispatches to the first matching handler (lowest order first) or the fallback
4. Replaces the message of any response with a status of 500 or more
5. Echoes the HTTP status into the body when configured
6. Applies customizers in registration order
7. Logs the exception
8. Localizes messages
9. Records telemetry

A failure in any of these steps is contained: both the failure and the
original exception are logged and a generic 500 response is returned.
"""

from http import HTTPStatus
from operator import attrgetter
from typing import Iterable, Optional, Tuple, Union

from errorlens.config.base import ErrorHandlingSettings
from errorlens.config.codes import DefaultErrorCodes
from errorlens.config.settings import SettingsHolder, as_holder
from errorlens.handlers.base import ApiExceptionHandler, FallbackApiExceptionHandler
from errorlens.localization.localizer import ErrorMessageLocalizer
from errorlens.logging import Logger, ensure_logger
from errorlens.schemas.response import ErrorResponse
from errorlens.services.customizers import ErrorResponseCustomizer
from errorlens.services.logging import LoggingService
from errorlens.telemetry.tracing import ErrorHandlingTelemetry


class ErrorHandlingFacade:
    """
    Orchestrates handlers, customizers, logging, localization and telemetry.

    Handlers are sorted once, at construction, by ascending ``order``; handlers
    sharing an order keep their registration order.
    """

    def __init__(
        self,
        handlers: Iterable[ApiExceptionHandler],
        fallback_handler: FallbackApiExceptionHandler,
        settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None,
        customizers: Iterable[ErrorResponseCustomizer] = (),
        logging_service: Optional[LoggingService] = None,
        localizer: Optional[ErrorMessageLocalizer] = None,
        telemetry: Optional[ErrorHandlingTelemetry] = None,
        logger: Optional[Logger] = None,
    ):
        self._handlers: Tuple[ApiExceptionHandler, ...] = tuple(
            sorted(handlers, key=attrgetter("order"))
        )
        self._fallback_handler = fallback_handler
        self._settings = as_holder(settings)
        self.customizers = tuple(customizers)
        self.logging_service = logging_service
        self.localizer = localizer
        self.telemetry = telemetry
        self.logger = ensure_logger(logger, __name__)

    @property
    def handlers(self) -> Tuple[ApiExceptionHandler, ...]:
        """Registered handlers in dispatch order."""
        return self._handlers

    @property
    def fallback_handler(self) -> FallbackApiExceptionHandler:
        return self._fallback_handler

    @property
    def settings_holder(self) -> SettingsHolder:
        return self._settings

    def find_handler(self, exception: BaseException) -> Optional[ApiExceptionHandler]:
        """Return the first handler accepting ``exception``, or None."""
        for handler in self._handlers:
            if handler.can_handle(exception):
                return handler
        return None

    def handle_exception(self, exception: BaseException) -> ErrorResponse:
        """
        Convert an exception into an error response.

        Args:
            exception: The exception raised while serving the request

        Returns:
            A complete ErrorResponse

        Raises:
            BaseException: The original exception, unchanged, when error handling is disabled
        """
        with self._settings.snapshot() as settings:
            if not settings.ENABLED:
                raise exception

            span = self.telemetry.start_span() if self.telemetry else None
            try:
                return self._handle(exception, settings, span)
            except Exception as failure:
                return self._contain_failure(exception, failure, settings, span)
            finally:
                if span is not None:
                    self.telemetry.end_span(span)

    def _handle(
        self, exception: BaseException, settings: ErrorHandlingSettings, span
    ) -> ErrorResponse:
        handler = self.find_handler(exception)
        if handler is not None:
            self.logger.debug(
                f"Dispatching {type(exception).__name__} to {type(handler).__name__}"
            )
            response = handler.handle(exception)
        else:
            self.logger.debug(
                f"No handler for {type(exception).__name__}, using fallback handler"
            )
            response = self._fallback_handler.handle(exception)

        if response.http_status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            response.message = settings.FALLBACK_MESSAGE

        if settings.HTTP_STATUS_IN_JSON_RESPONSE and response.status == 0:
            response.status = response.http_status

        for customizer in self.customizers:
            customizer.customize(response)

        self._log(exception, response)

        if self.localizer is not None:
            self._localize(response)

        if self.telemetry is not None:
            self.telemetry.record(span, exception, response)

        return response

    def _log(self, exception: BaseException, response: ErrorResponse) -> None:
        if self.logging_service is None:
            return
        try:
            self.logging_service.log_exception(exception, response)
        except Exception as exc:
            self.logger.debug(f"Exception logging failed: {exc}")

    def _localize(self, response: ErrorResponse) -> None:
        localizer = self.localizer
        response.message = localizer.localize(response.code, response.message)

        for field_error in response.field_errors or ():
            field_error.message = localizer.localize_field_error(
                field_error.code, field_error.property, field_error.message
            )
        for global_error in response.global_errors or ():
            global_error.message = localizer.localize(
                global_error.code, global_error.message
            )
        for parameter_error in response.parameter_errors or ():
            parameter_error.message = localizer.localize_field_error(
                parameter_error.code, parameter_error.parameter, parameter_error.message
            )

    def _contain_failure(
        self,
        exception: BaseException,
        failure: Exception,
        settings: ErrorHandlingSettings,
        span=None,
    ) -> ErrorResponse:
        self.logger.error(
            "Error in exception handling pipeline, returning default response",
            exc_info=(type(failure), failure, failure.__traceback__),
        )
        self.logger.error(
            f"Original exception: {type(exception).__name__}: {exception}",
            exc_info=(type(exception), exception, exception.__traceback__),
        )
        if self.telemetry is not None:
            self.telemetry.record_failure(span, exception, failure)

        response = ErrorResponse(
            code=DefaultErrorCodes.INTERNAL_SERVER_ERROR,
            message=settings.FALLBACK_MESSAGE,
            http_status=int(HTTPStatus.INTERNAL_SERVER_ERROR),
        )
        if settings.HTTP_STATUS_IN_JSON_RESPONSE:
            response.status = response.http_status
        return response
