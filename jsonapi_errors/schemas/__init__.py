"""
Pydantic schemas for JSON:API error documents.

Limitations:
- Only the error-object subset of JSON:API is provided
- No built-in support for localization of titles or details
"""

from jsonapi_errors.schemas.error import (
    FULL_FIELDS,
    SHORT_FIELDS,
    ErrorDocument,
    ErrorObject,
    Links,
    Source,
)

__all__ = [
    "ErrorDocument",
    "ErrorObject",
    "Links",
    "Source",
    "FULL_FIELDS",
    "SHORT_FIELDS",
]
