import os

import pytest

from errorlens.config import ErrorHandlingSettings, SettingsHolder
from errorlens.errors.metadata import ExceptionMetadataRegistry
from errorlens.factory import create_facade
from errorlens.telemetry import ErrorHandlingTelemetry


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    # Keep settings independent of the environment running the tests
    for name in list(os.environ):
        if name.startswith("ERROR_HANDLING_"):
            monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def settings():
    return ErrorHandlingSettings()


@pytest.fixture
def holder(settings):
    return SettingsHolder(settings)


@pytest.fixture
def registry():
    """Isolated metadata registry so tests never touch the default one."""
    return ExceptionMetadataRegistry()


@pytest.fixture
def make_facade(registry):
    """Build a facade with an isolated registry and metrics-free telemetry."""

    def factory(settings=None, **options):
        options.setdefault("metadata_registry", registry)
        options.setdefault("telemetry", ErrorHandlingTelemetry(record_metrics=False))
        return create_facade(settings or ErrorHandlingSettings(), **options)

    return factory
