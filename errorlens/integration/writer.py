"""
HTTP response writer for error responses.
"""

from typing import Optional, Union

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from errorlens.config.base import ErrorHandlingSettings
from errorlens.config.settings import SettingsHolder, as_holder
from errorlens.integration.problem import ProblemDetailFactory
from errorlens.integration.serialization import ErrorResponseSerializer
from errorlens.schemas.response import ErrorResponse

PROBLEM_JSON = "application/problem+json"


class ErrorResponseWriter:
    """
    Writes an ErrorResponse as an HTTP JSON response.

    The transport status is always the response's ``http_status``. With
    USE_PROBLEM_DETAIL_FORMAT the body is an RFC 9457 envelope whose
    ``instance`` is the request path.
    """

    def __init__(
        self,
        settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None,
        problem_factory: Optional[ProblemDetailFactory] = None,
    ):
        self._settings = as_holder(settings)
        self.problem_factory = problem_factory or ProblemDetailFactory(self._settings)

    def write(self, request: Optional[Request], response: ErrorResponse) -> JSONResponse:
        settings = self._settings.get()

        if settings.USE_PROBLEM_DETAIL_FORMAT:
            instance = request.url.path if request is not None else None
            problem = self.problem_factory.create(response, instance=instance)
            return JSONResponse(
                status_code=response.http_status,
                content=jsonable_encoder(self.problem_factory.to_dict(problem)),
                media_type=PROBLEM_JSON,
            )

        serializer = ErrorResponseSerializer(settings.JSON_FIELD_NAMES)
        return JSONResponse(
            status_code=response.http_status,
            content=serializer.to_dict(response),
        )
