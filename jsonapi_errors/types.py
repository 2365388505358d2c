"""
Catalog error types of the default registry, by name.

    from jsonapi_errors.types import NotFound, UnprocessableEntity

The types only exist once ``jsonapi_errors.kigen.kigen.load_errors()`` (or
``configure()``) has run; importing one earlier raises RegistryNotLoadedError.
"""

from typing import List, Type

from jsonapi_errors.api_error import ApiError
from jsonapi_errors.exceptions import RegistryNotLoadedError
from jsonapi_errors.kigen import kigen


def __getattr__(name: str) -> Type[ApiError]:
    if name.startswith("__"):
        raise AttributeError(name)
    if not kigen.is_loaded:
        raise RegistryNotLoadedError(
            f"Cannot access {name!r}: error types not loaded, call load_errors() first"
        )
    error_type = kigen.get_by_name(name)
    if error_type is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return error_type


def __dir__() -> List[str]:
    return sorted(t.__name__ for t in kigen.error_types())
