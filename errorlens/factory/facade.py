"""
Facade factory.

This module assembles an ErrorHandlingFacade from settings: the mappers, the
built-in handlers, the exception group handler, the fallback handler and the
optional post-processing services.
"""

from typing import Iterable, List, Optional, Union

from errorlens.config.base import ErrorHandlingSettings
from errorlens.config.settings import SettingsHolder, as_holder
from errorlens.errors.metadata import ExceptionMetadataRegistry, default_registry
from errorlens.handlers import (
    AggregateExceptionHandler,
    ApiExceptionHandler,
    BadRequestHandler,
    DefaultFallbackHandler,
    FieldValidationHandler,
    JsonDecodeHandler,
    PydanticValidationHandler,
    RequestValidationHandler,
    TypeMismatchHandler,
)
from errorlens.localization.localizer import ErrorMessageLocalizer
from errorlens.logging import Logger, ensure_logger
from errorlens.mappers import (
    ErrorCodeMapper,
    ErrorMessageMapper,
    HttpStatusFromExceptionMapper,
    HttpStatusMapper,
)
from errorlens.services import (
    ErrorHandlingFacade,
    ErrorResponseCustomizer,
    LoggingFilter,
    LoggingService,
)
from errorlens.telemetry import ErrorHandlingTelemetry


def create_builtin_handlers(
    code_mapper: ErrorCodeMapper,
    message_mapper: ErrorMessageMapper,
    settings: SettingsHolder,
) -> List[ApiExceptionHandler]:
    """Create the built-in (non-group) handlers sharing one settings holder."""
    return [
        RequestValidationHandler(code_mapper, message_mapper, settings),
        FieldValidationHandler(code_mapper, message_mapper, settings),
        PydanticValidationHandler(code_mapper, message_mapper, settings),
        JsonDecodeHandler(settings),
        TypeMismatchHandler(settings),
        BadRequestHandler(settings),
    ]


def create_facade(
    settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None,
    *,
    handlers: Iterable[ApiExceptionHandler] = (),
    customizers: Iterable[ErrorResponseCustomizer] = (),
    localizer: Optional[ErrorMessageLocalizer] = None,
    logging_filters: Iterable[LoggingFilter] = (),
    status_extractor: Optional[HttpStatusFromExceptionMapper] = None,
    metadata_registry: Optional[ExceptionMetadataRegistry] = None,
    telemetry: Optional[ErrorHandlingTelemetry] = None,
    include_builtin_handlers: bool = True,
    logger: Optional[Logger] = None,
) -> ErrorHandlingFacade:
    """
    Create a fully wired ErrorHandlingFacade.

    Args:
        settings: Settings snapshot or holder; loaded from the environment when None
        handlers: Application handlers added to the built-in ones
        customizers: Response customizers, applied in the given order
        localizer: Optional message localizer
        logging_filters: Filters that can veto exception logging
        status_extractor: Reads an HTTP status directly from exceptions
        metadata_registry: Registry of declared exception metadata
        telemetry: Telemetry recorder; a default one is created when None
        include_builtin_handlers: Register the built-in handlers
        logger: Optional logger shared by the created components

    Returns:
        The configured facade

    Example:
        ```python
        facade = create_facade(
            ErrorHandlingSettings(HTTP_STATUS_IN_JSON_RESPONSE=True),
            customizers=[TraceIdCustomizer()],
        )
        response = facade.handle_exception(ValueError("bad input"))
        ```
    """
    holder = as_holder(settings)
    log = ensure_logger(logger, __name__, holder.get())

    code_mapper = ErrorCodeMapper(holder)
    message_mapper = ErrorMessageMapper(holder)
    status_mapper = HttpStatusMapper(holder, status_extractor)

    fallback = DefaultFallbackHandler(
        code_mapper,
        message_mapper,
        status_mapper,
        holder,
        registry=metadata_registry or default_registry,
        logger=logger,
    )

    all_handlers: List[ApiExceptionHandler] = []
    facade: Optional[ErrorHandlingFacade] = None

    if include_builtin_handlers:
        all_handlers.append(
            AggregateExceptionHandler(
                handlers_provider=lambda: facade.handlers,
                fallback_provider=lambda: facade.fallback_handler,
                logger=logger,
            )
        )
        all_handlers.extend(create_builtin_handlers(code_mapper, message_mapper, holder))
    all_handlers.extend(handlers)

    facade = ErrorHandlingFacade(
        all_handlers,
        fallback,
        holder,
        customizers=customizers,
        logging_service=LoggingService(holder, logging_filters, logger=logger),
        localizer=localizer,
        telemetry=telemetry or ErrorHandlingTelemetry(logger=logger),
        logger=logger,
    )

    log.info(
        f"Error handling facade created with {len(facade.handlers)} handlers: "
        f"{', '.join(type(h).__name__ for h in facade.handlers)}"
    )
    return facade
