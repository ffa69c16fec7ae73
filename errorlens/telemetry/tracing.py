"""
OpenTelemetry tracing for the exception handling pipeline.

Only the OpenTelemetry API is required. Without a configured SDK the global
tracer returns non-recording spans and every call here is a no-op.
"""

from http import HTTPStatus
from typing import Optional

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode, Tracer

from errorlens.errors.utils import type_full_name
from errorlens.logging import Logger, ensure_logger
from errorlens.schemas.response import ErrorResponse
from errorlens.telemetry.metrics import record_handled_exception, record_handler_failure

TRACER_NAME = "errorlens"
SPAN_NAME = "errorlens.handle_exception"


class ErrorHandlingTelemetry:
    """
    Span and metric recording for handled exceptions.

    Attributes:
        tracer: Tracer creating the spans; defaults to the global ``errorlens`` tracer
        record_metrics: Update the Prometheus counters
    """

    def __init__(
        self,
        tracer: Optional[Tracer] = None,
        record_metrics: bool = True,
        logger: Optional[Logger] = None,
    ):
        self.tracer = tracer or trace.get_tracer(TRACER_NAME)
        self.record_metrics = record_metrics
        self.logger = ensure_logger(logger, __name__)

    def start_span(self) -> Span:
        """Start the handling span. Never raises."""
        try:
            return self.tracer.start_span(SPAN_NAME)
        except Exception as exc:
            self.logger.debug(f"Could not start telemetry span: {exc}")
            return trace.INVALID_SPAN

    def record(
        self, span: Span, exception: BaseException, response: ErrorResponse
    ) -> None:
        """
        Attach the outcome of a handled exception to the span and the metrics.

        Args:
            span: Span returned by ``start_span``
            exception: The original exception
            response: The final error response
        """
        if self.record_metrics:
            record_handled_exception(response.code, response.http_status)

        if not span.is_recording():
            return

        span.set_attribute("error.code", response.code)
        span.set_attribute("exception.type", type_full_name(type(exception)))
        span.set_attribute("http.response.status_code", response.http_status)
        span.record_exception(exception)
        span.set_status(Status(StatusCode.ERROR, response.message))

    def record_failure(
        self, span: Optional[Span], exception: BaseException, failure: BaseException
    ) -> None:
        """
        Mark the span as failed after the pipeline itself raised. Never raises.

        Args:
            span: Span returned by ``start_span``, if any
            exception: The original exception
            failure: The exception raised by the pipeline
        """
        if self.record_metrics:
            record_handler_failure()

        if span is None or not span.is_recording():
            return

        try:
            span.set_attribute("exception.type", type_full_name(type(exception)))
            span.set_attribute(
                "http.response.status_code", int(HTTPStatus.INTERNAL_SERVER_ERROR)
            )
            span.record_exception(exception)
            span.record_exception(failure)
            span.set_status(
                Status(StatusCode.ERROR, "Exception handling pipeline failed")
            )
        except Exception as exc:
            self.logger.debug(f"Could not record pipeline failure on span: {exc}")

    def end_span(self, span: Span) -> None:
        """End the handling span. Never raises."""
        try:
            span.end()
        except Exception as exc:
            self.logger.debug(f"Could not end telemetry span: {exc}")
