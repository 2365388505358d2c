"""
Mapping of application exceptions to catalog error types.

The registry answers "which JSON:API error describes this failure?". Values
are resolved to error types when the mapping is configured, so lookups are a
plain dictionary access and a bad catalog reference fails at startup instead
of on the first request.

Example:
    ```python
    registry = ErrorRegistry(kigen)
    registry.set_mapping({KeyError: 404, PermissionError: "forbidden"})
    registry.set_fallback(500)

    registry.lookup_error(KeyError("x"))   # -> NotFound
    registry.lookup_error(RuntimeError())  # -> InternalServerError
    ```
"""

import logging
import threading
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Type, Union

from jsonapi_errors.api_error import ApiError
from jsonapi_errors.exceptions import RegistryNotLoadedError, UnknownCatalogEntryError
from jsonapi_errors.kigen import ErrorKey, ErrorTypeRegistry, kigen as default_kigen

logger = logging.getLogger(__name__)

ErrorTarget = Union[Type[ApiError], ErrorKey]


class ErrorRegistry:
    """
    Exception-to-error-type mapping plus a fallback.

    Writes are serialized by a lock and replace the stored objects wholesale;
    reads never lock.
    """

    def __init__(self, error_types: Optional[ErrorTypeRegistry] = None):
        self.error_types = default_kigen if error_types is None else error_types
        self._lock = threading.Lock()
        self._mapping: Dict[type, Type[ApiError]] = {}
        self._fallback: Optional[Type[ApiError]] = None

    @property
    def fallback(self) -> Optional[Type[ApiError]]:
        return self._fallback

    @property
    def mapping(self) -> Mapping[type, Type[ApiError]]:
        """Read-only view of the installed mapping."""
        return MappingProxyType(self._mapping)

    def set_fallback(self, value: ErrorTarget) -> Type[ApiError]:
        """
        Set the error type used when no mapping matches.

        Args:
            value: An ApiError subclass, a status or a symbolic code

        Returns:
            The resolved error type

        Raises:
            UnknownCatalogEntryError: If value matches no catalog entry
            RegistryNotLoadedError: If value is not a type and nothing is loaded
        """
        error_type = self._resolve(value)
        with self._lock:
            self._fallback = error_type
        logger.debug("Fallback error type set to %s", error_type.__name__)
        return error_type

    def set_mapping(self, table: Mapping[type, ErrorTarget]) -> Mapping[type, Type[ApiError]]:
        """
        Replace the whole mapping.

        Either every value resolves and the new table is installed, or an
        error is raised and the current table is kept.

        Args:
            table: Exception class -> ApiError subclass, status or code

        Returns:
            Read-only view of the installed mapping

        Raises:
            UnknownCatalogEntryError: On the first value that does not resolve
            RegistryNotLoadedError: If a value is not a type and nothing is loaded
        """
        resolved: Dict[type, Type[ApiError]] = {}
        for failure_type, target in table.items():
            resolved[failure_type] = self._resolve(target, mapping_key=failure_type)

        with self._lock:
            self._mapping = resolved
        logger.debug("Installed error mapping with %d entries", len(resolved))
        return self.mapping

    def lookup_error(self, failure: Any) -> Optional[Type[ApiError]]:
        """
        Return the error type for a failure.

        The failure's class is looked up (an instance is reduced to its type);
        a mapping for a base class applies to its subclasses. Without a
        match the fallback is returned, which may be None.
        """
        failure_type = failure if isinstance(failure, type) else type(failure)
        mapping = self._mapping

        error_type = mapping.get(failure_type)
        if error_type is not None:
            return error_type

        for base in failure_type.__mro__[1:]:
            error_type = mapping.get(base)
            if error_type is not None:
                return error_type

        return self._fallback

    def reset_fallback(self) -> None:
        with self._lock:
            self._fallback = None

    def reset(self) -> None:
        """Drop the mapping and the fallback."""
        with self._lock:
            self._mapping = {}
            self._fallback = None

    def _resolve(self, target: ErrorTarget, mapping_key: Any = None) -> Type[ApiError]:
        if self.error_types.is_error_type(target):
            return target

        if not self.error_types.is_loaded:
            raise RegistryNotLoadedError(
                f"Cannot resolve {target!r}: error types not loaded, call load_errors() first"
            )

        error_type = self.error_types.fetch_error_type(target)
        if error_type is None:
            raise UnknownCatalogEntryError(target, mapping_key=mapping_key)
        return error_type


registry = ErrorRegistry(default_kigen)
