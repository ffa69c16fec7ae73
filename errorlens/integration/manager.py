"""
Error handling setup for FastAPI applications.

This module provides the main entry point for configuring error handling
in a FastAPI application.
"""

from typing import Any, Optional, Union

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from errorlens.config.base import ErrorHandlingSettings
from errorlens.config.settings import SettingsHolder, as_holder, get_settings
from errorlens.factory import create_facade
from errorlens.integration.middleware import ErrorHandlingMiddleware
from errorlens.integration.writer import ErrorResponseWriter
from errorlens.logging import Logger, ensure_logger
from errorlens.services.facade import ErrorHandlingFacade


def setup_errors(
    app: FastAPI,
    settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None,
    logger: Optional[Logger] = None,
    facade: Optional[ErrorHandlingFacade] = None,
    **options: Any,
) -> ErrorHandlingFacade:
    """
    Configure error handling for a FastAPI application.

    Features:
    - Converts every unhandled exception into a structured error response
    - Converts request validation errors into field and parameter errors
    - Stores the facade on ``app.state.error_handling_facade``

    Limitations:
    - ``HTTPException`` responses keep FastAPI's default format
    - Must be called before the application starts serving requests

    Args:
        app: FastAPI application instance
        settings: Settings snapshot or holder; loaded from the environment when None
        logger: Optional logger
        facade: Preconfigured facade; created with ``create_facade`` when None
        **options: Keyword arguments passed to ``create_facade``

    Returns:
        The facade handling the application's exceptions

    Example:
        ```python
        app = FastAPI()
        setup_errors(app, ErrorHandlingSettings(HTTP_STATUS_IN_JSON_RESPONSE=True))
        ```
    """
    if facade is None:
        holder = as_holder(settings if settings is not None else get_settings())
        facade = create_facade(holder, logger=logger, **options)
    holder = facade.settings_holder
    log = ensure_logger(logger, __name__, holder.get())

    writer = ErrorResponseWriter(holder)
    app.state.error_handling_facade = facade

    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        if not holder.get().ENABLED:
            return await request_validation_exception_handler(request, exc)
        return writer.write(request, facade.handle_exception(exc))

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_middleware(ErrorHandlingMiddleware, facade=facade, writer=writer, logger=logger)

    log.info("Error handling configured")
    return facade
