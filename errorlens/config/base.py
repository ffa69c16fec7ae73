"""
Base configuration module for error handling.

This module provides the settings class read by every handler and mapper.
Settings are loaded from environment variables prefixed with ``ERROR_HANDLING_``
(or a ``.env`` file) and are immutable once created, so a single instance can be
shared between concurrent requests as a consistent snapshot.
"""

from typing import Dict, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from errorlens.config.strategies import ErrorCodeStrategy, ExceptionLogging

_LOG_LEVEL_NAMES = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class JsonFieldNames(BaseModel):
    """
    JSON property names used when an error response is written.

    Attributes:
        CODE: Property name for the error code
        MESSAGE: Property name for the error message
        STATUS: Property name for the HTTP status
        FIELD_ERRORS: Property name for the field errors array
        GLOBAL_ERRORS: Property name for the global errors array
        PARAMETER_ERRORS: Property name for the parameter errors array
        PROPERTY: Property name for the field name inside a field error
        REJECTED_VALUE: Property name for rejected values
        PATH: Property name for the property path inside a field error
        PARAMETER: Property name for the parameter name inside a parameter error
    """

    model_config = ConfigDict(frozen=True)

    CODE: str = "code"
    MESSAGE: str = "message"
    STATUS: str = "status"
    FIELD_ERRORS: str = "fieldErrors"
    GLOBAL_ERRORS: str = "globalErrors"
    PARAMETER_ERRORS: str = "parameterErrors"
    PROPERTY: str = "property"
    REJECTED_VALUE: str = "rejectedValue"
    PATH: str = "path"
    PARAMETER: str = "parameter"

    @model_validator(mode="after")
    def validate_names(self) -> "JsonFieldNames":
        """Ensure every field name is non-empty and unique."""
        failures = []
        seen = set()
        for attribute, value in self.model_dump().items():
            if not value or not value.strip():
                failures.append(
                    f"JSON_FIELD_NAMES.{attribute} must not be empty or whitespace."
                )
            elif value in seen:
                failures.append(
                    f"Duplicate JSON field name '{value}' in JSON_FIELD_NAMES configuration."
                )
            seen.add(value)

        if failures:
            raise ValueError(" ".join(failures))
        return self


class ErrorHandlingSettings(BaseSettings):
    """
    Settings for the exception handling pipeline.

    Attributes:
        ENABLED: Turn error handling on or off; when off the original exception is re-raised
        DEBUG: Enable debug logging for the library loggers
        DEFAULT_ERROR_CODE_STRATEGY: Strategy used to derive codes from exception names
        HTTP_STATUS_IN_JSON_RESPONSE: Echo the HTTP status into the response body
        SEARCH_SUPER_CLASS_HIERARCHY: Consult base classes when looking up overrides
        ADD_PATH_TO_ERROR: Include the property path in field errors
        INCLUDE_REJECTED_VALUES: Include rejected input values in field/parameter errors
        USE_PROBLEM_DETAIL_FORMAT: Write responses as RFC 9457 problem details
        PROBLEM_DETAIL_TYPE_PREFIX: Prefix of the problem ``type`` URI
        PROBLEM_DETAIL_CONVERT_TO_KEBAB_CASE: Kebab-case the code in the ``type`` URI
        EXCEPTION_LOGGING: Verbosity of exception logging
        HTTP_STATUSES: Exception type name to HTTP status overrides
        CODES: Exception type name (or ``field.kind`` key) to error code overrides
        MESSAGES: Exception type name (or ``field.kind`` key) to message overrides
        LOG_LEVELS: HTTP status (``"404"``) or class (``"4xx"``) to log level name
        FULL_STACKTRACE_HTTP_STATUSES: Statuses that always log a stack trace
        FULL_STACKTRACE_CLASSES: Exception type names that always log a stack trace
        JSON_FIELD_NAMES: Property names used on the wire
        FALLBACK_MESSAGE: Message used for every 5xx response
        BUILT_IN_MESSAGES: Error code to message overrides for built-in handlers
    """

    ENABLED: bool = Field(default=True, description="Enable error handling")
    DEBUG: bool = Field(default=False, description="Enable debug logging")
    DEFAULT_ERROR_CODE_STRATEGY: ErrorCodeStrategy = Field(
        default=ErrorCodeStrategy.ALL_CAPS,
        description="Strategy for generating error codes",
    )
    HTTP_STATUS_IN_JSON_RESPONSE: bool = Field(
        default=False, description="Include the HTTP status in the JSON body"
    )
    SEARCH_SUPER_CLASS_HIERARCHY: bool = Field(
        default=False, description="Search base classes for configured overrides"
    )
    ADD_PATH_TO_ERROR: bool = Field(
        default=True, description="Include the property path in field errors"
    )
    INCLUDE_REJECTED_VALUES: bool = Field(
        default=True, description="Include rejected values in validation errors"
    )
    USE_PROBLEM_DETAIL_FORMAT: bool = Field(
        default=False, description="Use the RFC 9457 problem details format"
    )
    PROBLEM_DETAIL_TYPE_PREFIX: str = Field(
        default="https://example.com/errors/",
        description="Type URI prefix for problem details",
    )
    PROBLEM_DETAIL_CONVERT_TO_KEBAB_CASE: bool = Field(
        default=True, description="Convert codes to kebab-case in the type URI"
    )
    EXCEPTION_LOGGING: ExceptionLogging = Field(
        default=ExceptionLogging.MESSAGE_ONLY,
        description="Exception logging verbosity",
    )
    HTTP_STATUSES: Dict[str, int] = Field(
        default_factory=dict, description="Exception type to HTTP status mappings"
    )
    CODES: Dict[str, str] = Field(
        default_factory=dict, description="Exception type or field key to code mappings"
    )
    MESSAGES: Dict[str, str] = Field(
        default_factory=dict,
        description="Exception type or field key to message mappings",
    )
    LOG_LEVELS: Dict[str, str] = Field(
        default_factory=dict, description="HTTP status to log level mappings"
    )
    FULL_STACKTRACE_HTTP_STATUSES: Set[str] = Field(
        default_factory=set, description="Statuses that force stack trace logging"
    )
    FULL_STACKTRACE_CLASSES: Set[str] = Field(
        default_factory=set,
        description="Exception types that force stack trace logging",
    )
    JSON_FIELD_NAMES: JsonFieldNames = Field(
        default_factory=JsonFieldNames, description="Custom JSON field names"
    )
    FALLBACK_MESSAGE: str = Field(
        default="An unexpected error occurred",
        description="Message used for unhandled 5xx server errors",
    )
    BUILT_IN_MESSAGES: Dict[str, str] = Field(
        default_factory=dict,
        description="Error code to message overrides for built-in handlers",
    )

    @field_validator("HTTP_STATUSES")
    def validate_http_statuses(cls, value):
        """Reject status codes outside of the HTTP range."""
        for type_name, status in value.items():
            if not 100 <= status <= 599:
                raise ValueError(
                    f"HTTP_STATUSES['{type_name}'] must be a valid HTTP status code, got {status}"
                )
        return value

    @field_validator("LOG_LEVELS", mode="before")
    def validate_log_levels(cls, value):
        """Normalize log level names and reject unknown ones."""
        if not value:
            return value
        normalized = {}
        for status, level in value.items():
            name = str(level).upper()
            if name not in _LOG_LEVEL_NAMES:
                raise ValueError(
                    f"LOG_LEVELS['{status}'] must be one of {sorted(_LOG_LEVEL_NAMES)}, got {level}"
                )
            normalized[str(status).lower()] = name
        return normalized

    model_config = SettingsConfigDict(
        env_prefix="ERROR_HANDLING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )
