import os

import pytest

from jsonapi_errors.config import get_settings
from jsonapi_errors.kigen import ErrorTypeRegistry, kigen
from jsonapi_errors.registry import ErrorRegistry, registry


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    # Keep JSONAPI_ERRORS_* settings from the environment out of the tests
    for name in list(os.environ):
        if name.startswith("JSONAPI_ERRORS_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def error_types():
    """A freshly loaded error type registry."""
    types = ErrorTypeRegistry()
    types.load_errors()
    return types


@pytest.fixture
def unloaded_error_types():
    return ErrorTypeRegistry()


@pytest.fixture
def error_registry(error_types):
    """An empty mapping registry bound to a loaded error type registry."""
    return ErrorRegistry(error_types)


@pytest.fixture
def default_registry():
    """The module-level registry, loaded, and reset after the test."""
    kigen.load_errors()
    registry.reset()
    yield registry
    registry.reset()
