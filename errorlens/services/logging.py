"""
Exception logging service.

Logs every handled exception as ``Exception handled: <code> - <message>``.
The level comes from LOG_LEVELS (exact status such as "404", then a status
class such as "4xx"), otherwise ERROR for 5xx, WARNING for 4xx and INFO for
anything else. Stack traces are added with ExceptionLogging.WITH_STACKTRACE or
when the status or exception type is listed for full stack traces.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Union

from errorlens.config.base import ErrorHandlingSettings
from errorlens.config.settings import SettingsHolder, as_holder
from errorlens.config.strategies import ExceptionLogging
from errorlens.errors.utils import type_full_name
from errorlens.logging import Logger, LogLevel, ensure_logger
from errorlens.schemas.response import ErrorResponse


class LoggingFilter(ABC):
    """Decides whether a handled exception is logged."""

    @abstractmethod
    def should_log(self, response: ErrorResponse, exception: BaseException) -> bool:
        """Return False to skip logging of this exception."""


class DefaultLoggingFilter(LoggingFilter):
    """Logs everything."""

    def should_log(self, response: ErrorResponse, exception: BaseException) -> bool:
        return True


class LoggingService:
    """Logs handled exceptions according to the active settings."""

    def __init__(
        self,
        settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None,
        filters: Iterable[LoggingFilter] = (),
        logger: Optional[Logger] = None,
    ):
        self._settings = as_holder(settings)
        self.filters = tuple(filters)
        self.logger = ensure_logger(logger, __name__)

    def log_exception(self, exception: BaseException, response: ErrorResponse) -> None:
        """
        Log a handled exception.

        Args:
            exception: The original exception
            response: The response produced for it
        """
        for logging_filter in self.filters:
            if not logging_filter.should_log(response, exception):
                return

        settings = self._settings.get()
        if settings.EXCEPTION_LOGGING == ExceptionLogging.NONE:
            return

        level = self.get_log_level(response.http_status, settings)
        include_stack_trace = (
            settings.EXCEPTION_LOGGING == ExceptionLogging.WITH_STACKTRACE
            or self.should_include_stack_trace(response.http_status, exception, settings)
        )

        exc_info = None
        if include_stack_trace:
            exc_info = (type(exception), exception, exception.__traceback__)

        self.logger.log(
            level,
            "Exception handled: %s - %s",
            response.code,
            response.message,
            exc_info=exc_info,
            extra={"error_code": response.code, "error_status": response.http_status},
        )

    @staticmethod
    def get_log_level(http_status: int, settings: ErrorHandlingSettings) -> int:
        status = str(http_status)

        level = settings.LOG_LEVELS.get(status)
        if level is None:
            level = settings.LOG_LEVELS.get(f"{status[0]}xx")
        if level is not None:
            return LogLevel.from_string(level)

        if http_status >= 500:
            return logging.ERROR
        if http_status >= 400:
            return logging.WARNING
        return logging.INFO

    @staticmethod
    def should_include_stack_trace(
        http_status: int, exception: BaseException, settings: ErrorHandlingSettings
    ) -> bool:
        status = str(http_status)
        statuses = settings.FULL_STACKTRACE_HTTP_STATUSES
        if status in statuses or f"{status[0]}xx" in statuses:
            return True
        return type_full_name(type(exception)) in settings.FULL_STACKTRACE_CLASSES
