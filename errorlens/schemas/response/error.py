"""
Error response schemas.

This module contains the error envelope produced for every handled exception
and its nested error entries.

Limitations:
- Wire field names and ordering are decided by the writer, not by these models
- ``http_status`` is internal and excluded from ``model_dump``
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FieldError(BaseModel):
    """
    Field-level validation error.

    Attributes:
        code: Validation error code (e.g. REQUIRED_NOT_NULL)
        property: Name of the property that failed validation
        message: Validation error message
        rejected_value: The value that failed validation
        path: Full property path for nested objects (e.g. address.zipCode)
    """

    code: str = Field(..., min_length=1, description="Validation error code")
    property: str = Field(
        ..., min_length=1, description="Property that failed validation"
    )
    message: str = Field(..., description="Validation error message")
    rejected_value: Any = Field(
        default=None, description="The value that failed validation"
    )
    path: Optional[str] = Field(
        default=None, description="Full property path for nested objects"
    )


class GlobalError(BaseModel):
    """Object-level validation error that is not tied to a single field."""

    code: str = Field(..., min_length=1, description="Error code")
    message: str = Field(..., description="Error message")


class ParameterError(BaseModel):
    """
    Request parameter validation error (query, path, header or cookie).

    Attributes:
        code: Validation error code
        parameter: Parameter name
        message: Error message
        rejected_value: The value that failed validation
    """

    code: str = Field(..., min_length=1, description="Validation error code")
    parameter: str = Field(..., min_length=1, description="Parameter name")
    message: str = Field(..., description="Error message")
    rejected_value: Any = Field(
        default=None, description="The value that failed validation"
    )


class ErrorResponse(BaseModel):
    """
    Error envelope returned for every handled exception.

    Collections stay ``None`` until the first entry is added, so an absent
    collection is never serialized as an empty array.

    Attributes:
        code: Error code (e.g. USER_NOT_FOUND)
        message: Human-readable error message
        http_status: HTTP status chosen by the handler (internal)
        status: Wire-facing copy of the HTTP status, 0 when absent
        field_errors: Field-level validation errors
        global_errors: Object-level validation errors
        parameter_errors: Request parameter errors
        properties: Additional properties added by metadata or customizers
    """

    model_config = ConfigDict(validate_assignment=False)

    code: str = Field(..., min_length=1, description="Error code")
    message: Optional[str] = Field(default=None, description="Error message")
    http_status: int = Field(
        default=500, exclude=True, description="HTTP status of the response"
    )
    status: int = Field(default=0, description="HTTP status echoed in the body")
    field_errors: Optional[List[FieldError]] = Field(
        default=None, description="Field-level validation errors"
    )
    global_errors: Optional[List[GlobalError]] = Field(
        default=None, description="Object-level validation errors"
    )
    parameter_errors: Optional[List[ParameterError]] = Field(
        default=None, description="Request parameter errors"
    )
    properties: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional response properties"
    )

    def add_property(self, name: str, value: Any) -> None:
        """Add or overwrite a custom property."""
        if self.properties is None:
            self.properties = {}
        self.properties[name] = value

    def add_field_error(self, field_error: FieldError) -> None:
        if self.field_errors is None:
            self.field_errors = []
        self.field_errors.append(field_error)

    def add_global_error(self, global_error: GlobalError) -> None:
        if self.global_errors is None:
            self.global_errors = []
        self.global_errors.append(global_error)

    def add_parameter_error(self, parameter_error: ParameterError) -> None:
        if self.parameter_errors is None:
            self.parameter_errors = []
        self.parameter_errors.append(parameter_error)
