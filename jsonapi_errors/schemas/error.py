"""
JSON:API error object schemas.

This module contains the pydantic models for the error-object subset of
JSON:API: the ``links`` and ``source`` members, a single error object and the
top-level ``{"errors": [...]}`` document.

Limitations:
- Only the error-object subset of JSON:API is modelled; ``jsonapi`` and
  top-level ``meta``/``links`` members are not emitted.
- Field order is fixed by declaration order and is part of the wire format.
- ``meta`` values that have no JSON form are emitted as their ``str()``.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_serializer
from pydantic_core import to_jsonable_python

SHORT_FIELDS = ("status", "title", "detail", "source")
FULL_FIELDS = ("id", "links", "status", "code", "title", "detail", "source", "meta")


class Links(BaseModel):
    """
    Links member of an error object.

    Attributes:
        about: Link to further details about this occurrence
        type: Link identifying the type of error
    """

    about: str = Field(default="", description="Link about this occurrence")
    type: str = Field(default="", description="Link identifying the error type")


class Source(BaseModel):
    """
    Source member of an error object.

    Attributes:
        pointer: JSON Pointer to the request document value that caused the error
        parameter: Query parameter that caused the error
        header: Request header that caused the error
    """

    pointer: str = Field(default="", description="JSON Pointer into the request")
    parameter: str = Field(default="", description="Offending query parameter")
    header: str = Field(default="", description="Offending request header")


class ErrorObject(BaseModel):
    """
    A single JSON:API error object.

    The declaration order of the fields is the order in which they are
    serialized.
    """

    id: str = Field(default="", description="Unique identifier of this occurrence")
    links: Links = Field(default_factory=Links)
    status: Optional[int] = Field(default=None, description="HTTP status code")
    code: str = Field(default="", description="Application-specific error code")
    title: str = Field(default="", description="Short summary of the problem")
    detail: str = Field(default="", description="Explanation of this occurrence")
    source: Source = Field(default_factory=Source)
    meta: Dict[str, Any] = Field(default_factory=dict)

    @field_serializer("meta", when_used="json")
    def serialize_meta(self, meta: Dict[str, Any]) -> Dict[str, Any]:
        # Values JSON cannot represent (classes, exceptions) are rendered as str
        return to_jsonable_python(meta, fallback=str)

    @classmethod
    def from_error(cls, error: Any) -> "ErrorObject":
        """Build an error object from an ApiError (or anything with the same attributes)."""
        return cls(
            id=error.id,
            links=error.links.model_dump(),
            status=error.status,
            code=error.code,
            title=error.title,
            detail=error.detail,
            source=error.source.model_dump(),
            meta=dict(error.meta),
        )


class ErrorDocument(BaseModel):
    """Top-level JSON:API document carrying only errors."""

    errors: List[ErrorObject] = Field(default_factory=list)

    def dump(self, short: bool = False) -> Dict[str, Any]:
        """Return the document as a dict, optionally in short form."""
        return self.model_dump(include=self._include(short))

    def dump_json(self, short: bool = False) -> str:
        """Return the document as a compact JSON string, optionally in short form."""
        return self.model_dump_json(include=self._include(short))

    @staticmethod
    def _include(short: bool) -> Optional[Dict[str, Any]]:
        if not short:
            return None
        return {"errors": {"__all__": set(SHORT_FIELDS)}}
