"""
Settings snapshot management.

Error handling settings may be reloaded while the application is running.
Readers must never observe two different snapshots while handling a single
exception, so settings are published as immutable snapshots through a
``SettingsHolder`` and pinned for the duration of a call with ``snapshot()``.
"""

import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional, Tuple, Union

from errorlens.config.base import ErrorHandlingSettings

# (holder, snapshot) pinned for the current call, if any
_pinned: ContextVar[Optional[Tuple["SettingsHolder", ErrorHandlingSettings]]] = ContextVar(
    "errorlens_pinned_settings", default=None
)


class SettingsHolder:
    """
    Atomically swappable reference to the current settings snapshot.

    Example:
        ```python
        holder = SettingsHolder(ErrorHandlingSettings())

        with holder.snapshot() as settings:
            ...  # every holder.get() in this context returns `settings`

        holder.publish(ErrorHandlingSettings(ENABLED=False))
        ```
    """

    def __init__(self, settings: Optional[ErrorHandlingSettings] = None):
        self._current = settings if settings is not None else ErrorHandlingSettings()
        self._lock = threading.Lock()

    def get(self) -> ErrorHandlingSettings:
        """
        Return the snapshot pinned for the current call, or the latest published one.
        """
        pinned = _pinned.get()
        if pinned is not None and pinned[0] is self:
            return pinned[1]
        return self._current

    def publish(self, settings: ErrorHandlingSettings) -> None:
        """Replace the current snapshot. Calls already in flight keep their own."""
        with self._lock:
            self._current = settings

    @contextmanager
    def snapshot(self) -> Iterator[ErrorHandlingSettings]:
        """
        Pin one snapshot for the current context.

        Nested calls reuse the snapshot pinned by the outermost call.
        """
        pinned = _pinned.get()
        if pinned is not None and pinned[0] is self:
            yield pinned[1]
            return

        settings = self._current
        token = _pinned.set((self, settings))
        try:
            yield settings
        finally:
            _pinned.reset(token)


def as_holder(
    settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None,
) -> SettingsHolder:
    """
    Normalize a settings argument into a ``SettingsHolder``.

    Args:
        settings: A holder, a settings snapshot, or None for settings loaded from the environment

    Returns:
        A SettingsHolder instance
    """
    if isinstance(settings, SettingsHolder):
        return settings
    return SettingsHolder(settings)


def get_settings() -> ErrorHandlingSettings:
    """
    Load error handling settings from the environment.

    Returns:
        ErrorHandlingSettings: A fresh snapshot built from environment variables
    """
    return ErrorHandlingSettings()
