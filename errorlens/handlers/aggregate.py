"""
Exception group handler.

Unwraps ``ExceptionGroup``/``BaseExceptionGroup`` instances. A group holding a
single leaf exception (after flattening nested groups) is re-dispatched to the
rest of the handler chain; any other group goes to the fallback handler whole.
"""

import threading
from operator import attrgetter
from typing import Callable, Iterable, List, Optional, Tuple

from errorlens.handlers.base import ApiExceptionHandler, FallbackApiExceptionHandler
from errorlens.logging import Logger, ensure_logger
from errorlens.schemas.response import ErrorResponse

HandlersProvider = Callable[[], Iterable[ApiExceptionHandler]]
FallbackProvider = Callable[[], FallbackApiExceptionHandler]


def flatten_exception_group(group: BaseExceptionGroup) -> List[BaseException]:
    """Return the leaf exceptions of ``group``, unwrapping nested groups."""
    leaves: List[BaseException] = []
    for exception in group.exceptions:
        if isinstance(exception, BaseExceptionGroup):
            leaves.extend(flatten_exception_group(exception))
        else:
            leaves.append(exception)
    return leaves


class AggregateExceptionHandler(ApiExceptionHandler):
    """
    Handles exception groups.

    The handler chain contains this handler, so the chain and the fallback
    are obtained through provider callables on first use instead of at
    construction. Resolution happens exactly once, even under concurrent
    first calls.
    """

    order = 50

    def __init__(
        self,
        handlers_provider: HandlersProvider,
        fallback_provider: FallbackProvider,
        logger: Optional[Logger] = None,
    ):
        self._handlers_provider = handlers_provider
        self._fallback_provider = fallback_provider
        self._resolved: Optional[
            Tuple[Tuple[ApiExceptionHandler, ...], FallbackApiExceptionHandler]
        ] = None
        self._lock = threading.Lock()
        self.logger = ensure_logger(logger, __name__)

    def can_handle(self, exception: BaseException) -> bool:
        return isinstance(exception, BaseExceptionGroup)

    def handle(self, exception: BaseException) -> ErrorResponse:
        group = self.ensure_type(exception, BaseExceptionGroup)
        handlers, fallback = self._resolve()

        leaves = flatten_exception_group(group)
        if len(leaves) != 1:
            self.logger.debug(
                f"Exception group with {len(leaves)} leaves handed to the fallback"
            )
            return fallback.handle(group)

        leaf = leaves[0]
        for handler in handlers:
            if handler.can_handle(leaf):
                return handler.handle(leaf)
        return fallback.handle(leaf)

    def _resolve(
        self,
    ) -> Tuple[Tuple[ApiExceptionHandler, ...], FallbackApiExceptionHandler]:
        resolved = self._resolved
        if resolved is not None:
            return resolved

        with self._lock:
            if self._resolved is None:
                handlers = sorted(
                    (h for h in self._handlers_provider() if h is not self),
                    key=attrgetter("order"),
                )
                self._resolved = (tuple(handlers), self._fallback_provider())
                self.logger.debug(
                    f"Resolved {len(handlers)} handlers for exception group dispatch"
                )
            return self._resolved
