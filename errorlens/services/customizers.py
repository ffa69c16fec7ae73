"""
Error response customizers.

Customizers run after a handler produced a response, in registration order,
and may add or overwrite response properties.
"""

from abc import ABC, abstractmethod

from opentelemetry import trace

from errorlens.schemas.response import ErrorResponse


class ErrorResponseCustomizer(ABC):
    """Post-processing hook enriching a finished error response."""

    @abstractmethod
    def customize(self, response: ErrorResponse) -> None:
        """Mutate ``response`` in place."""


class TraceIdCustomizer(ErrorResponseCustomizer):
    """Adds the current OpenTelemetry trace id to the response properties."""

    def __init__(self, property_name: str = "traceId"):
        self.property_name = property_name

    def customize(self, response: ErrorResponse) -> None:
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            response.add_property(
                self.property_name, trace.format_trace_id(span_context.trace_id)
            )
