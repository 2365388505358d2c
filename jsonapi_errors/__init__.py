"""
jsonapi_errors - JSON:API error objects for Python services.

This package resolves arbitrary failures to a fixed catalog of HTTP error
types and renders them as JSON:API ``{"errors": [...]}`` documents, with a
ready-made integration for FastAPI.

Usage:
    from fastapi import FastAPI
    from jsonapi_errors import setup_errors

    app = FastAPI()
    setup_errors(app, mapping={LookupError: 404})
"""

__version__ = "0.1.0"

# Public API exports
from jsonapi_errors.api_error import ApiError
from jsonapi_errors.catalog import CLIENT_ERRORS, CODE_MAP, SERVER_ERRORS, STATUS_MAP, ErrorCatalogEntry
from jsonapi_errors.config import ErrorSettings, get_settings
from jsonapi_errors.exceptions import (
    InvalidDescriptorInputError,
    JsonApiErrorsError,
    RegistryNotLoadedError,
    RenderError,
    UnknownCatalogEntryError,
    UnresolvableFailureError,
)
from jsonapi_errors.helpers import ApiErr, api_err, handle_error, instantiate, render, render_error, resolve_failure
from jsonapi_errors.kigen import ErrorTypeRegistry, kigen as default_kigen
from jsonapi_errors.manager import configure, setup_errors
from jsonapi_errors.registry import ErrorRegistry, registry as default_registry
from jsonapi_errors.resolver import Resolver
from jsonapi_errors.serializer import Serializer

__all__ = [
    "ApiErr",
    "ApiError",
    "CLIENT_ERRORS",
    "CODE_MAP",
    "ErrorCatalogEntry",
    "ErrorRegistry",
    "ErrorSettings",
    "ErrorTypeRegistry",
    "InvalidDescriptorInputError",
    "JsonApiErrorsError",
    "RegistryNotLoadedError",
    "RenderError",
    "Resolver",
    "SERVER_ERRORS",
    "STATUS_MAP",
    "Serializer",
    "UnknownCatalogEntryError",
    "UnresolvableFailureError",
    "api_err",
    "configure",
    "get_settings",
    "handle_error",
    "instantiate",
    "default_kigen",
    "default_registry",
    "render",
    "render_error",
    "resolve_failure",
    "setup_errors",
]
