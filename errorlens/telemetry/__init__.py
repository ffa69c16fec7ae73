"""
Telemetry for errorlens.

Tracing uses the OpenTelemetry API (span ``errorlens.handle_exception``);
metrics use prometheus_client:

- errorlens_handled_exceptions_total{code,status}
- errorlens_handler_failures_total
"""

from errorlens.telemetry.metrics import (
    HANDLED_EXCEPTIONS,
    HANDLER_FAILURES,
    record_handled_exception,
    record_handler_failure,
)
from errorlens.telemetry.tracing import SPAN_NAME, TRACER_NAME, ErrorHandlingTelemetry

__all__ = [
    "ErrorHandlingTelemetry",
    "HANDLED_EXCEPTIONS",
    "HANDLER_FAILURES",
    "SPAN_NAME",
    "TRACER_NAME",
    "record_handled_exception",
    "record_handler_failure",
]
