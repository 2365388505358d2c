"""
Error type registry.

Kigen derives one ApiError subclass per catalog entry (``NotFound``,
``BadRequest``, ``InternalServerError``, ...) and indexes it by status and by
symbolic code. Types are created lazily by ``load_errors()``, exactly once per
registry.

Example:
    ```python
    from jsonapi_errors.kigen import kigen

    kigen.load_errors()
    NotFound = kigen[404]
    assert kigen["not_found"] is NotFound
    raise NotFound(detail="User 42 does not exist")
    ```
"""

import logging
import threading
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Type, Union

from jsonapi_errors.api_error import ApiError
from jsonapi_errors.catalog import STATUS_MAP, ErrorCatalogEntry, normalize_key
from jsonapi_errors.exceptions import RegistryNotLoadedError, UnknownCatalogEntryError

logger = logging.getLogger(__name__)

ErrorKey = Union[int, str]

TYPES_MODULE = "jsonapi_errors.types"


def create_error_type(entry: ErrorCatalogEntry, base: Type[ApiError] = ApiError) -> Type[ApiError]:
    """
    Create the ApiError subclass for one catalog entry.

    Args:
        entry: Catalog entry supplying the name and the defaults
        base: Base class of the new type

    Returns:
        A new class named after ``entry.name``
    """
    return type(
        entry.name,
        (base,),
        {
            "entry": entry,
            "__module__": TYPES_MODULE,
            "__qualname__": entry.name,
            "__doc__": f"{entry.status} {entry.message}.",
        },
    )


class ErrorTypeRegistry:
    """
    Lazily built index of catalog error types.

    Lookups return None until ``load_errors()`` has completed; a reader never
    sees a partially loaded catalog.
    """

    def __init__(
        self,
        catalog: Optional[Mapping[int, ErrorCatalogEntry]] = None,
        base: Type[ApiError] = ApiError,
    ):
        self._catalog = STATUS_MAP if catalog is None else catalog
        self._base = base
        self._lock = threading.Lock()
        self._by_status: Mapping[int, Type[ApiError]] = MappingProxyType({})
        self._by_code: Mapping[str, Type[ApiError]] = MappingProxyType({})
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def by_status(self) -> Mapping[int, Type[ApiError]]:
        return self._by_status

    @property
    def by_code(self) -> Mapping[str, Type[ApiError]]:
        return self._by_code

    def load_errors(self) -> None:
        """Create the error types for every catalog entry. Safe to call repeatedly."""
        if self._loaded:
            return

        with self._lock:
            if self._loaded:
                return

            by_status: Dict[int, Type[ApiError]] = dict(self._by_status)
            by_code: Dict[str, Type[ApiError]] = dict(self._by_code)
            created = 0
            for status, entry in self._catalog.items():
                if status in by_status:
                    continue
                error_type = create_error_type(entry, self._base)
                by_status[status] = error_type
                by_code[entry.code] = error_type
                created += 1

            self._by_status = MappingProxyType(by_status)
            self._by_code = MappingProxyType(by_code)
            self._loaded = True

        logger.debug("Loaded %d error types", created)

    def fetch_error_type(self, key: ErrorKey) -> Optional[Type[ApiError]]:
        """
        Return the error type for a status or symbolic code.

        Args:
            key: Status (``404``, ``"404"``, ``HTTPStatus.NOT_FOUND``) or code (``"not_found"``)

        Returns:
            The error type, or None if unknown or not loaded yet
        """
        if not self._loaded:
            return None

        key = normalize_key(key)
        if isinstance(key, bool):
            return None
        try:
            return self._by_status.get(key) or self._by_code.get(key)
        except TypeError:
            # unhashable key
            return None

    def __getitem__(self, key: ErrorKey) -> Optional[Type[ApiError]]:
        return self.fetch_error_type(key)

    def get(self, key: ErrorKey) -> Type[ApiError]:
        """
        Strict lookup.

        Raises:
            RegistryNotLoadedError: If load_errors() has not completed
            UnknownCatalogEntryError: If the key matches no catalog entry
        """
        if not self._loaded:
            raise RegistryNotLoadedError()

        error_type = self.fetch_error_type(key)
        if error_type is None:
            raise UnknownCatalogEntryError(key)
        return error_type

    def get_by_name(self, name: str) -> Optional[Type[ApiError]]:
        """Return the error type with the given display name, or None."""
        for error_type in self._by_status.values():
            if error_type.__name__ == name:
                return error_type
        return None

    def error_types(self) -> Tuple[Type[ApiError], ...]:
        """All loaded error types in catalog order."""
        return tuple(self._by_status.values())

    def is_error_type(self, value: object) -> bool:
        """Whether value is an ApiError subclass (not an instance)."""
        return isinstance(value, type) and issubclass(value, ApiError)


kigen = ErrorTypeRegistry()
