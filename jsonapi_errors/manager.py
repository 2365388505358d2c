"""
Setup entry points.

``configure()`` prepares a registry: it loads the catalog error types,
installs the exception mapping and sets the fallback. ``setup_errors()`` does
the same for a FastAPI application and registers the exception handlers.

Example:
    ```python
    app = FastAPI()
    setup_errors(
        app,
        mapping={LookupError: 404, PermissionError: "forbidden"},
    )
    ```
"""

import logging
from typing import Mapping, Optional

from fastapi import FastAPI

from jsonapi_errors.config import ErrorSettings, get_settings
from jsonapi_errors.exceptions import RegistryNotLoadedError
from jsonapi_errors.handlers import register_exception_handlers
from jsonapi_errors.logging import ensure_logger
from jsonapi_errors.registry import ErrorRegistry, ErrorTarget, registry as default_registry

_UNSET = object()


def configure(
    registry: Optional[ErrorRegistry] = None,
    settings: Optional[ErrorSettings] = None,
    *,
    mapping: Optional[Mapping[type, ErrorTarget]] = None,
    fallback=_UNSET,
    load_on_start: Optional[bool] = None,
) -> ErrorRegistry:
    """
    Configure a registry.

    Args:
        registry: Registry to configure, defaults to the module registry
        settings: Settings, loaded from the environment if not provided
        mapping: Exception class -> error type, status or code; replaces the
                 current mapping when given
        fallback: Error type, status or code; ``None`` clears it; defaults to
                  ``settings.FALLBACK``
        load_on_start: Load the catalog error types; defaults to
                       ``settings.LOAD_ON_START``

    Returns:
        The configured registry

    Raises:
        RegistryNotLoadedError: If a mapping or fallback needs the error types
                                and they are not loaded
        UnknownCatalogEntryError: If a mapping value or the fallback is unknown
    """
    registry = registry or default_registry
    settings = settings or get_settings()

    if load_on_start is None:
        load_on_start = settings.LOAD_ON_START
    if load_on_start:
        registry.error_types.load_errors()

    if fallback is _UNSET:
        fallback = settings.FALLBACK

    needs_types = bool(mapping) or fallback is not None
    if needs_types and not registry.error_types.is_loaded:
        raise RegistryNotLoadedError(
            "Error types must be loaded before a mapping or fallback is set; "
            "pass load_on_start=True or call load_errors() first"
        )

    if mapping is not None:
        registry.set_mapping(mapping)

    if fallback is None:
        registry.reset_fallback()
    else:
        registry.set_fallback(fallback)

    return registry


def setup_errors(
    app: FastAPI,
    settings: Optional[ErrorSettings] = None,
    logger: Optional[logging.Logger] = None,
    registry: Optional[ErrorRegistry] = None,
    mapping: Optional[Mapping[type, ErrorTarget]] = None,
) -> ErrorRegistry:
    """
    Configure JSON:API error handling for a FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Optional error settings
        logger: Optional logger for logging exceptions
        registry: Registry to use, defaults to the module registry
        mapping: Exception class -> error type, status or code

    Returns:
        The configured registry, also stored on ``app.state.jsonapi_errors``
    """
    settings = settings or get_settings()
    log = ensure_logger(logger, __name__, settings)

    registry = configure(registry, settings, mapping=mapping)
    app.state.jsonapi_errors = registry

    register_exception_handlers(app, registry, settings, logger=log)
    log.debug(
        "JSON:API error handling configured (%d mapped exceptions, fallback %s)",
        len(registry.mapping),
        registry.fallback.__name__ if registry.fallback else None,
    )
    return registry
