"""
Error response serialization.

Writes ErrorResponse objects as JSON using the configured field names.
Members are written in a fixed order (code, message, status, field errors,
global errors, parameter errors) followed by the custom properties, which
are written as top-level members. Absent values are omitted, and a property
named like a standard member is dropped.
"""

import json
from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder

from errorlens.config.base import JsonFieldNames
from errorlens.logging import get_logger
from errorlens.schemas.response import (
    ErrorResponse,
    FieldError,
    GlobalError,
    ParameterError,
)

logger = get_logger(__name__)


class ErrorResponseSerializer:
    """
    Converts ErrorResponse objects to and from their JSON representation.

    Example:
        ```python
        serializer = ErrorResponseSerializer(settings.JSON_FIELD_NAMES)
        body = serializer.dumps(response)
        same = serializer.loads(body)
        ```
    """

    def __init__(self, field_names: Optional[JsonFieldNames] = None):
        self.names = field_names or JsonFieldNames()

    def to_dict(self, response: ErrorResponse) -> Dict[str, Any]:
        names = self.names
        data: Dict[str, Any] = {names.CODE: response.code}

        if response.message is not None:
            data[names.MESSAGE] = response.message
        if response.status != 0:
            data[names.STATUS] = response.status
        if response.field_errors:
            data[names.FIELD_ERRORS] = [
                self.field_error_to_dict(error) for error in response.field_errors
            ]
        if response.global_errors:
            data[names.GLOBAL_ERRORS] = [
                self.global_error_to_dict(error) for error in response.global_errors
            ]
        if response.parameter_errors:
            data[names.PARAMETER_ERRORS] = [
                self.parameter_error_to_dict(error)
                for error in response.parameter_errors
            ]
        standard = self.standard_members()
        for name, value in (response.properties or {}).items():
            if name in standard:
                logger.warning(
                    f"Dropping property '{name}' of {response.code}: it clashes with a standard member"
                )
                continue
            data[name] = jsonable_encoder(value)

        return data

    def field_error_to_dict(self, error: FieldError) -> Dict[str, Any]:
        names = self.names
        data: Dict[str, Any] = {
            names.CODE: error.code,
            names.PROPERTY: error.property,
            names.MESSAGE: error.message,
        }
        if error.rejected_value is not None:
            data[names.REJECTED_VALUE] = jsonable_encoder(error.rejected_value)
        if error.path is not None:
            data[names.PATH] = error.path
        return data

    def global_error_to_dict(self, error: GlobalError) -> Dict[str, Any]:
        return {self.names.CODE: error.code, self.names.MESSAGE: error.message}

    def parameter_error_to_dict(self, error: ParameterError) -> Dict[str, Any]:
        names = self.names
        data: Dict[str, Any] = {
            names.CODE: error.code,
            names.PARAMETER: error.parameter,
            names.MESSAGE: error.message,
        }
        if error.rejected_value is not None:
            data[names.REJECTED_VALUE] = jsonable_encoder(error.rejected_value)
        return data

    def dumps(self, response: ErrorResponse) -> str:
        return json.dumps(self.to_dict(response), ensure_ascii=False)

    def from_dict(self, data: Dict[str, Any]) -> ErrorResponse:
        """
        Parse a serialized error response.

        Members that are not standard error response members become properties.
        """
        names = self.names
        status = data.get(names.STATUS, 0)
        response = ErrorResponse(
            code=data[names.CODE],
            message=data.get(names.MESSAGE),
            status=status,
            http_status=status or 500,
        )

        for item in data.get(names.FIELD_ERRORS) or []:
            response.add_field_error(
                FieldError(
                    code=item[names.CODE],
                    property=item[names.PROPERTY],
                    message=item[names.MESSAGE],
                    rejected_value=item.get(names.REJECTED_VALUE),
                    path=item.get(names.PATH),
                )
            )
        for item in data.get(names.GLOBAL_ERRORS) or []:
            response.add_global_error(
                GlobalError(code=item[names.CODE], message=item[names.MESSAGE])
            )
        for item in data.get(names.PARAMETER_ERRORS) or []:
            response.add_parameter_error(
                ParameterError(
                    code=item[names.CODE],
                    parameter=item[names.PARAMETER],
                    message=item[names.MESSAGE],
                    rejected_value=item.get(names.REJECTED_VALUE),
                )
            )

        standard = self.standard_members()
        for name, value in data.items():
            if name not in standard:
                response.add_property(name, value)

        return response

    def loads(self, text: str) -> ErrorResponse:
        return self.from_dict(json.loads(text))

    def standard_members(self) -> List[str]:
        """Names of the members written by the serializer itself."""
        names = self.names
        return [
            names.CODE,
            names.MESSAGE,
            names.STATUS,
            names.FIELD_ERRORS,
            names.GLOBAL_ERRORS,
            names.PARAMETER_ERRORS,
        ]
