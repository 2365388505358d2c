"""
The ApiError exception: one JSON:API error occurrence.

ApiError can be raised directly by application code or built from a catalog
error type (``NotFound(detail="...")``). It carries every member of a JSON:API
error object and knows how to turn itself into one.
"""

from types import MappingProxyType
from typing import Any, ClassVar, Dict, Mapping, Optional, Union

from jsonapi_errors.catalog import ErrorCatalogEntry
from jsonapi_errors.exceptions import InvalidDescriptorInputError
from jsonapi_errors.schemas import ErrorObject, Links, Source

EMPTY_META: Mapping[str, Any] = MappingProxyType({})

StatusInput = Union[int, str, None]


def coerce_status(value: Any) -> Optional[int]:
    """
    Normalize a status to an int.

    ``None`` and ``""`` mean "no status". Numeric strings are parsed,
    anything else raises InvalidDescriptorInputError.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidDescriptorInputError(f"Invalid status {value!r}")
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise InvalidDescriptorInputError(f"Invalid status {value!r}")


def _build_links(value: Union[Links, Mapping[str, str], None]) -> Links:
    if value is None:
        return Links()
    if isinstance(value, Links):
        return value.model_copy()
    return Links(**value)


def _build_source(value: Union[Source, Mapping[str, str], None]) -> Source:
    if value is None:
        return Source()
    if isinstance(value, Source):
        return value.model_copy()
    return Source(**value)


class ApiError(Exception):
    """
    Base exception for JSON:API errors.

    Error types generated from the catalog subclass this and set ``entry``,
    which supplies the default ``code``, ``title`` and ``status``. ``detail``
    may be given positionally like any exception message; the other members
    are keyword-only.

    Attributes:
        id: Unique identifier of this occurrence
        code: Application-specific error code
        title: Short summary of the problem
        detail: Explanation specific to this occurrence
        status: HTTP status as an int, or None when unset
        meta: Non-standard meta information
        links: Links member
        source: Source member
    """

    entry: ClassVar[Optional[ErrorCatalogEntry]] = None

    def __init__(
        self,
        detail: str = "",
        *,
        id: str = "",
        code: Optional[str] = None,
        title: Optional[str] = None,
        status: StatusInput = None,
        meta: Optional[Mapping[str, Any]] = None,
        links: Union[Links, Mapping[str, str], None] = None,
        source: Union[Source, Mapping[str, str], None] = None,
    ):
        entry = self.entry
        self.id = id or ""
        self.code = code if code is not None else (entry.code if entry else "")
        self.title = title if title is not None else (entry.message if entry else "")
        self.detail = detail or ""
        self.status = status if status is not None else (entry.status if entry else None)
        self.meta = meta if meta is not None else EMPTY_META
        self.links = links
        self.source = source
        super().__init__(self.message)

    @property
    def status(self) -> Optional[int]:
        return self._status

    @status.setter
    def status(self, value: StatusInput) -> None:
        self._status = coerce_status(value)

    @property
    def links(self) -> Links:
        return self._links

    @links.setter
    def links(self, value: Union[Links, Mapping[str, str], None]) -> None:
        self._links = _build_links(value)

    @property
    def source(self) -> Source:
        return self._source

    @source.setter
    def source(self, value: Union[Source, Mapping[str, str], None]) -> None:
        self._source = _build_source(value)

    @property
    def message(self) -> str:
        """Detail if present, otherwise the title."""
        return self.detail or self.title

    def to_error_object(self) -> ErrorObject:
        """Return the pydantic error object for this error."""
        return ErrorObject.from_error(self)

    def to_dict(self) -> Dict[str, Any]:
        """Return all eight JSON:API members in wire order."""
        return self.to_error_object().model_dump()

    def to_json(self) -> str:
        return self.to_error_object().model_dump_json()

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status={self.status!r}, code={self.code!r}, "
            f"title={self.title!r}, detail={self.detail!r})"
        )

    def __reduce__(self):
        return _restore, (type(self), self._attributes())

    def _attributes(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "title": self.title,
            "detail": self.detail,
            "status": "" if self.status is None else self.status,
            "meta": dict(self.meta) if self.meta else None,
            "links": self.links,
            "source": self.source,
        }


def _restore(error_type, attributes: Dict[str, Any]) -> ApiError:
    return error_type(**attributes)
