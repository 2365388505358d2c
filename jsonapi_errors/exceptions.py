"""
Exceptions raised by jsonapi_errors itself.

These are programming and configuration errors (an unknown catalog reference,
a registry used before it was loaded, nothing to render). They are distinct
from ApiError, which describes an error *for the client*.
"""

from typing import Any, Optional


class JsonApiErrorsError(Exception):
    """
    Base exception for all jsonapi_errors failures.

    Attributes:
        message: Human-readable error message
    """

    default_message = "jsonapi_errors failure"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class CatalogIntegrityError(JsonApiErrorsError):
    """Raised at import time when the built-in catalog breaks its invariants."""

    default_message = "Error catalog is inconsistent"


class UnknownCatalogEntryError(JsonApiErrorsError, LookupError):
    """
    Raised when a status or symbolic code does not match any catalog entry.

    Attributes:
        key: The status or code that failed to resolve
        mapping_key: The mapping key the value was configured for, if any
    """

    default_message = "Error type not defined"

    def __init__(
        self,
        key: Any = None,
        mapping_key: Any = None,
        message: Optional[str] = None,
    ):
        self.key = key
        self.mapping_key = mapping_key

        if message is None and key is not None:
            message = f"Error {key!r} definition not found in the error catalog"
            if mapping_key is not None:
                message = f"{message} (mapped from {_describe(mapping_key)})"

        super().__init__(message)


class RegistryNotLoadedError(JsonApiErrorsError):
    """Raised when error types are requested before load_errors() completed."""

    default_message = "Error types not loaded, call load_errors() first"


class UnresolvableFailureError(JsonApiErrorsError):
    """
    Raised when a failure has neither a mapping nor a fallback.

    Attributes:
        failure: The failure that could not be resolved
    """

    default_message = "No mapping or fallback error type set"

    def __init__(self, failure: Any = None, message: Optional[str] = None):
        self.failure = failure
        if message is None and failure is not None:
            message = (
                f"{self.default_message} for "
                f"{_describe(failure if isinstance(failure, type) else type(failure))}"
            )
        super().__init__(message)


class InvalidDescriptorInputError(JsonApiErrorsError, ValueError):
    """Raised when there is no usable error value to resolve or serialize."""

    default_message = "No error given to resolve"


class RenderError(JsonApiErrorsError, TypeError):
    """Raised when render_error() receives something that is not an ApiError."""

    default_message = "Invalid render_error input"


def _describe(obj: Any) -> str:
    if isinstance(obj, type):
        return f"{obj.__module__}.{obj.__qualname__}"
    return repr(obj)
