"""
Resolver for one or many errors.

The resolver normalizes its input to a non-empty list of ApiError instances,
picks the HTTP status for the response and hands the list to a serializer.

The reported status is the status of the *first* error. It is never
aggregated across a batch; callers mixing statuses should order the batch so
the error whose status they want comes first.
"""

from collections import abc
from typing import Any, Dict, Iterable, List, Optional, Type, Union

from jsonapi_errors.api_error import ApiError
from jsonapi_errors.exceptions import InvalidDescriptorInputError
from jsonapi_errors.serializer import Serializer

RenderableError = Union[ApiError, Type[ApiError]]


def _normalize(error: Any) -> ApiError:
    if isinstance(error, ApiError):
        return error
    if isinstance(error, type) and issubclass(error, ApiError):
        return error()
    raise InvalidDescriptorInputError(
        f"Expected an ApiError instance or subclass, got {type(error).__name__}"
    )


class Resolver:
    """
    Resolve errors into a status and a JSON:API document.

    Args:
        errors: An ApiError instance or subclass, or an iterable of them
        serializer: Serializer class used to render the errors
    """

    def __init__(
        self,
        errors: Union[RenderableError, Iterable[RenderableError]],
        serializer: Type[Serializer] = Serializer,
    ):
        self.errors: List[ApiError] = self._error_list(errors)
        self.serializer = serializer(self.errors)

    @classmethod
    def from_errors(
        cls,
        errors: Union[RenderableError, Iterable[RenderableError]],
        serializer: Type[Serializer] = Serializer,
    ) -> "Resolver":
        return cls(errors, serializer=serializer)

    @property
    def status(self) -> Optional[int]:
        """Status of the first error."""
        return self.errors[0].status

    def to_dict(self, short: bool = False) -> Dict[str, Any]:
        return self.serializer.to_hash(short=short)

    def to_json(self, short: bool = False) -> str:
        return self.serializer.to_json(short=short)

    @staticmethod
    def _error_list(errors: Any) -> List[ApiError]:
        if errors is None:
            raise InvalidDescriptorInputError()

        if isinstance(errors, (str, bytes)) or not isinstance(errors, abc.Iterable):
            return [_normalize(errors)]

        batch = [_normalize(error) for error in errors]
        if not batch:
            raise InvalidDescriptorInputError("Cannot resolve an empty batch of errors")
        return batch
