"""
Prometheus metrics for the exception handling pipeline.
"""

from prometheus_client import Counter

HANDLED_EXCEPTIONS = Counter(
    "errorlens_handled_exceptions",
    "Total count of exceptions converted into error responses",
    ["code", "status"],
)

HANDLER_FAILURES = Counter(
    "errorlens_handler_failures",
    "Total count of failures inside the exception handling pipeline",
)


def record_handled_exception(code: str, status: int) -> None:
    HANDLED_EXCEPTIONS.labels(code=code, status=str(status)).inc()


def record_handler_failure() -> None:
    HANDLER_FAILURES.inc()
