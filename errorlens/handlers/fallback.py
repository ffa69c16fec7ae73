"""
Default fallback handler.
"""

from http import HTTPStatus
from typing import Optional, Union

from errorlens.config.base import ErrorHandlingSettings
from errorlens.config.settings import SettingsHolder, as_holder
from errorlens.errors.metadata import ExceptionMetadataRegistry, default_registry
from errorlens.handlers.base import FallbackApiExceptionHandler
from errorlens.logging import Logger, ensure_logger
from errorlens.mappers import ErrorCodeMapper, ErrorMessageMapper, HttpStatusMapper
from errorlens.schemas.response import ErrorResponse


class DefaultFallbackHandler(FallbackApiExceptionHandler):
    """
    Handles every exception no chain handler claimed.

    Declared metadata (code, status) wins over mapper output. Messages of
    responses with a status of 500 or more are replaced by FALLBACK_MESSAGE.
    Declared properties are copied when their value is not None or when the
    property is flagged to include nulls.
    """

    def __init__(
        self,
        code_mapper: ErrorCodeMapper,
        message_mapper: ErrorMessageMapper,
        status_mapper: HttpStatusMapper,
        settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None,
        registry: Optional[ExceptionMetadataRegistry] = None,
        logger: Optional[Logger] = None,
    ):
        self.code_mapper = code_mapper
        self.message_mapper = message_mapper
        self.status_mapper = status_mapper
        self._settings = as_holder(settings)
        self.registry = registry or default_registry
        self.logger = ensure_logger(logger, __name__)

    def handle(self, exception: BaseException) -> ErrorResponse:
        settings = self._settings.get()
        metadata = self.registry.get_metadata(type(exception))

        code = metadata.code or self.code_mapper.get_error_code(exception)
        if metadata.status is not None:
            http_status = metadata.status
        else:
            http_status = self.status_mapper.get_http_status(
                exception, HTTPStatus.INTERNAL_SERVER_ERROR
            )

        if http_status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            message = settings.FALLBACK_MESSAGE
        else:
            message = self.message_mapper.get_error_message(exception)

        response = ErrorResponse(code=code, message=message, http_status=http_status)

        for prop in metadata.properties:
            try:
                value = prop.accessor(exception)
            except AttributeError:
                self.logger.debug(
                    f"Property '{prop.name}' not available on {type(exception).__name__}"
                )
                value = None
            if value is not None or prop.include_if_null:
                response.add_property(prop.name, value)

        if settings.HTTP_STATUS_IN_JSON_RESPONSE:
            response.status = http_status

        return response
