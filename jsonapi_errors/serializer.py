"""
JSON:API serializer for ApiError values.

Full mode emits all eight members of every error object; short mode keeps
only ``status``, ``title``, ``detail`` and ``source``. Errors keep their order
and are never merged or deduplicated.
"""

from typing import Any, Dict, List, Sequence, Union

from jsonapi_errors.api_error import ApiError
from jsonapi_errors.schemas import ErrorDocument, ErrorObject


class Serializer:
    """Render one or many ApiError instances as a JSON:API errors document."""

    def __init__(self, errors: Union[ApiError, Sequence[ApiError]]):
        self.errors: List[ApiError] = (
            [errors] if isinstance(errors, ApiError) else list(errors)
        )

    def to_document(self) -> ErrorDocument:
        return ErrorDocument(
            errors=[ErrorObject.from_error(error) for error in self.errors]
        )

    def to_hash(self, short: bool = False) -> Dict[str, Any]:
        """
        Return the ``{"errors": [...]}`` document as a dict.

        Args:
            short: Keep only status, title, detail and source

        Returns:
            The errors document
        """
        return self.to_document().dump(short=short)

    def to_json(self, short: bool = False) -> str:
        """Return the errors document as a compact JSON string."""
        return self.to_document().dump_json(short=short)
