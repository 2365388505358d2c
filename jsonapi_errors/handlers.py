"""
Exception handlers for FastAPI applications.

This module converts exceptions raised while handling a request into JSON:API
error documents. ApiError is rendered as is; FastAPI validation errors and
HTTP exceptions become their catalog error types; any other exception goes
through the ErrorRegistry mapping and fallback.
"""

import logging
from functools import partial
from typing import Any, Dict, List, Optional, Sequence, Type

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from jsonapi_errors.api_error import ApiError
from jsonapi_errors.config import ErrorSettings
from jsonapi_errors.exceptions import UnresolvableFailureError
from jsonapi_errors.helpers import build_error
from jsonapi_errors.logging import ensure_logger
from jsonapi_errors.registry import ErrorRegistry
from jsonapi_errors.resolver import Resolver

PARAMETER_LOCATIONS = ("query", "path", "cookie")


def create_error_response(
    errors: Sequence[ApiError],
    settings: ErrorSettings,
    status_code: Optional[int] = None,
) -> Response:
    """
    Create a JSON:API error response.

    Args:
        errors: Errors to render, the first one decides the status
        settings: Settings supplying media type and short format
        status_code: Explicit status, overrides the resolver's

    Returns:
        Response carrying the errors document
    """
    resolver = Resolver.from_errors(list(errors))
    return Response(
        content=resolver.to_json(short=settings.SHORT_FORMAT),
        status_code=status_code or resolver.status or status.HTTP_500_INTERNAL_SERVER_ERROR,
        media_type=settings.MEDIA_TYPE,
    )


def _error_type(registry: ErrorRegistry, key: int) -> Optional[Type[ApiError]]:
    return registry.error_types.fetch_error_type(key)


def _internal_error(registry: ErrorRegistry) -> ApiError:
    error_type = _error_type(registry, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if error_type is None:
        return ApiError(
            code="internal_server_error",
            title="Internal Server Error",
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return error_type()


def _create_validation_errors(
    errors_data: List[Dict[str, Any]], registry: ErrorRegistry
) -> List[ApiError]:
    """
    Create one 422 error per validation error.

    The error location becomes the source member: body locations a JSON
    pointer, query/path/cookie locations a parameter, header locations a header.

    Args:
        errors_data: List of error dictionaries from pydantic/FastAPI
        registry: Registry providing the UnprocessableEntity type

    Returns:
        List of ApiError objects
    """
    error_type = _error_type(registry, status.HTTP_422_UNPROCESSABLE_ENTITY)
    defaults = {"status": status.HTTP_422_UNPROCESSABLE_ENTITY}
    if error_type is None:
        error_type = ApiError
        defaults.update(code="unprocessable_entity", title="Unprocessable Entity")
    errors = []

    for error in errors_data:
        loc = [str(item) for item in error.get("loc", [])]
        where, path = (loc[0], loc[1:]) if loc else ("", [])

        source = {}
        if where == "body":
            source["pointer"] = "/" + "/".join(path)
        elif where in PARAMETER_LOCATIONS:
            source["parameter"] = ".".join(path)
        elif where == "header":
            source["header"] = ".".join(path)
        else:
            source["pointer"] = "/" + "/".join(loc)

        errors.append(
            error_type(
                **defaults,
                detail=error.get("msg", "Validation error"),
                source=source,
            )
        )

    return errors


async def api_error_handler(
    request: Request,
    exc: ApiError,
    settings: ErrorSettings,
    logger: logging.Logger,
) -> Response:
    """Render an ApiError raised by application code."""
    logger.info(
        "%s %s -> %s %s",
        request.method,
        request.url.path,
        exc.status,
        exc.code,
        extra={"error_code": exc.code, "status": exc.status},
    )
    return create_error_response([exc], settings)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
    registry: ErrorRegistry,
    settings: ErrorSettings,
) -> Response:
    """Render FastAPI's RequestValidationError as 422 error objects."""
    errors = _create_validation_errors(exc.errors(), registry)
    if not errors:
        error_type = _error_type(registry, status.HTTP_422_UNPROCESSABLE_ENTITY) or ApiError
        errors = [error_type(status=status.HTTP_422_UNPROCESSABLE_ENTITY)]
    return create_error_response(
        errors, settings, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
    registry: ErrorRegistry,
    settings: ErrorSettings,
) -> Response:
    """Render an HTTPException with the catalog type for its status."""
    detail = exc.detail if isinstance(exc.detail, str) else ""
    error_type = _error_type(registry, exc.status_code)
    if error_type is not None:
        error = error_type(detail=detail)
    else:
        error = ApiError(status=exc.status_code, detail=detail)

    response = create_error_response([error], settings, status_code=exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def failure_handler(
    request: Request,
    exc: Exception,
    registry: ErrorRegistry,
    settings: ErrorSettings,
    logger: logging.Logger,
) -> Response:
    """
    Render any other exception through the registry mapping and fallback.

    Without a mapping or fallback the failure is rendered as an internal
    server error.
    """
    try:
        error = build_error(exc, with_original=settings.WITH_ORIGINAL, registry=registry)
    except UnresolvableFailureError:
        logger.error(
            "Unresolved exception on %s %s: %r",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return create_error_response([_internal_error(registry)], settings)

    if error.status is None or error.status >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "Exception on %s %s rendered as %s: %r",
            request.method,
            request.url.path,
            type(error).__name__,
            exc,
            exc_info=exc,
            extra={"error_code": error.code, "status": error.status},
        )
    else:
        logger.warning(
            "Exception on %s %s rendered as %s: %r",
            request.method,
            request.url.path,
            type(error).__name__,
            exc,
            extra={"error_code": error.code, "status": error.status},
        )
    return create_error_response([error], settings)


def register_exception_handlers(
    app: FastAPI,
    registry: ErrorRegistry,
    settings: ErrorSettings,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Register all exception handlers with a FastAPI application.

    Every exception class in the registry mapping gets the failure handler,
    so mapped client errors are answered without being re-raised; ``Exception``
    gets it too, for the fallback.

    Args:
        app: FastAPI application instance
        registry: Registry used to resolve failures
        settings: Error settings
        logger: Optional logger for logging exceptions
    """
    log = ensure_logger(logger, __name__, settings)

    app.exception_handler(ApiError)(partial(api_error_handler, settings=settings, logger=log))
    app.exception_handler(RequestValidationError)(
        partial(validation_exception_handler, registry=registry, settings=settings)
    )
    app.exception_handler(StarletteHTTPException)(
        partial(http_exception_handler, registry=registry, settings=settings)
    )

    handler = partial(failure_handler, registry=registry, settings=settings, logger=log)
    for failure_type in registry.mapping:
        if failure_type not in app.exception_handlers:
            app.exception_handler(failure_type)(handler)
    app.exception_handler(Exception)(handler)
