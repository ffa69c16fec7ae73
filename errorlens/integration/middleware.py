"""
Middleware converting unhandled exceptions into error responses.
"""

from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from errorlens.integration.writer import ErrorResponseWriter
from errorlens.logging import Logger, ensure_logger
from errorlens.services.facade import ErrorHandlingFacade


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Middleware handing exceptions raised by the application to the facade.

    When error handling is disabled the exception propagates unchanged.
    """

    def __init__(
        self,
        app: ASGIApp,
        facade: ErrorHandlingFacade,
        writer: Optional[ErrorResponseWriter] = None,
        logger: Optional[Logger] = None,
    ):
        super().__init__(app)
        self.facade = facade
        self.writer = writer or ErrorResponseWriter(facade.settings_holder)
        self.logger = ensure_logger(logger, __name__)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            if not self.facade.settings_holder.get().ENABLED:
                raise
            self.logger.debug(
                f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}"
            )
            response = self.facade.handle_exception(exc)
            return self.writer.write(request, response)
