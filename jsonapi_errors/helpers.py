"""
Framework-agnostic helpers for turning failures into JSON:API responses.

These are the calls a web layer makes: resolve a failure to an error type,
instantiate it, and render one or many errors to ``(status, body)``. The
FastAPI integration in jsonapi_errors.handlers is built on them.

Example:
    ```python
    try:
        load_user(user_id)
    except Exception as exc:
        status, body = handle_error(exc, with_original=True)
    ```
"""

import traceback
from typing import Any, Optional, Sequence, Tuple, Type, Union

from jsonapi_errors.api_error import ApiError
from jsonapi_errors.exceptions import RenderError, UnresolvableFailureError
from jsonapi_errors.kigen import ErrorKey, kigen
from jsonapi_errors.registry import ErrorRegistry, registry as default_registry
from jsonapi_errors.resolver import RenderableError, Resolver

WithOriginal = Union[bool, str]

FULL_TRACE = "full_trace"


def resolve_failure(
    failure: Any, registry: Optional[ErrorRegistry] = None
) -> Optional[Type[ApiError]]:
    """Return the error type mapped to a failure, the fallback, or None."""
    return (registry or default_registry).lookup_error(failure)


def instantiate(handle: Union[Type[ApiError], ApiError], **overrides: Any) -> ApiError:
    """
    Build an ApiError from an error type, applying overrides.

    An ApiError instance is returned as is, with overrides assigned to it.
    """
    if isinstance(handle, ApiError):
        for name, value in overrides.items():
            setattr(handle, name, value)
        return handle
    return handle(**overrides)


def render(
    errors: Union[RenderableError, Sequence[RenderableError]],
    short: bool = False,
    status: Optional[int] = None,
) -> Tuple[Optional[int], str]:
    """
    Render one or many errors.

    Args:
        errors: ApiError instance(s) or subclass(es)
        short: Render short error objects
        status: Response status, defaults to the status of the first error

    Returns:
        ``(status, json_body)``
    """
    resolver = Resolver.from_errors(errors)
    return status or resolver.status, resolver.to_json(short=short)


def render_error(
    error: RenderableError, status: Optional[int] = None, short: bool = False
) -> Tuple[Optional[int], str]:
    """
    Render a single ApiError instance or subclass.

    Raises:
        RenderError: If error is not an ApiError
    """
    error_instance = error() if isinstance(error, type) and issubclass(error, ApiError) else error
    if not isinstance(error_instance, ApiError):
        raise RenderError(
            f"Only ApiError instances or subclasses can be rendered, got: "
            f"{type(error_instance).__name__}"
        )
    return render(error_instance, short=short, status=status)


def original_error_meta(failure: BaseException, with_original: WithOriginal = True) -> dict:
    """
    Describe a failure for the ``meta`` member.

    Contains the failure's class path, the innermost traceback frame and its
    message; ``with_original="full_trace"`` adds the whole formatted traceback.
    """
    failure_type = type(failure)
    frames = traceback.extract_tb(failure.__traceback__) if failure.__traceback__ else []
    trace = ""
    if frames:
        frame = frames[-1]
        trace = f"{frame.filename}:{frame.lineno} in {frame.name}"

    meta = {
        "original_error": f"{failure_type.__module__}.{failure_type.__qualname__}",
        "trace": trace,
        "message": str(failure),
    }
    if with_original == FULL_TRACE:
        meta["backtrace"] = "".join(traceback.format_tb(failure.__traceback__)).rstrip("\n")
    return meta


def build_error(
    failure: Any,
    with_original: WithOriginal = False,
    registry: Optional[ErrorRegistry] = None,
) -> ApiError:
    """
    Turn any failure into an ApiError.

    ApiError instances and subclasses are used directly; anything else goes
    through the registry mapping and fallback.

    Raises:
        UnresolvableFailureError: If neither a mapping nor a fallback applies
    """
    if isinstance(failure, ApiError):
        return failure
    if isinstance(failure, type) and issubclass(failure, ApiError):
        return failure()

    error_type = resolve_failure(failure, registry)
    if error_type is None:
        raise UnresolvableFailureError(failure)

    api_error = instantiate(error_type)
    if with_original and isinstance(failure, BaseException):
        api_error.meta = original_error_meta(failure, with_original)
    return api_error


def handle_error(
    failure: Any,
    with_original: WithOriginal = False,
    short: bool = False,
    registry: Optional[ErrorRegistry] = None,
) -> Tuple[Optional[int], str]:
    """
    Resolve and render a failure.

    Args:
        failure: Any exception (or ApiError)
        with_original: False, True or "full_trace"; attach the failure to meta
        short: Render short error objects
        registry: Registry to resolve with, defaults to the module registry

    Returns:
        ``(status, json_body)``

    Raises:
        UnresolvableFailureError: If neither a mapping nor a fallback applies
    """
    return render_error(build_error(failure, with_original, registry), short=short)


def api_err(key: ErrorKey) -> Type[ApiError]:
    """
    Strict lookup of a default-registry error type.

    Raises:
        RegistryNotLoadedError: If the error types are not loaded
        UnknownCatalogEntryError: If key matches no catalog entry
    """
    return kigen.get(key)


class _ApiErrLookup:
    """``raise ApiErr[404](detail="...")`` shorthand for api_err()."""

    def __getitem__(self, key: ErrorKey) -> Type[ApiError]:
        return api_err(key)

    def __call__(self, key: ErrorKey) -> Type[ApiError]:
        return api_err(key)


ApiErr = _ApiErrLookup()
