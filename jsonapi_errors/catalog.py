"""
Built-in catalog of HTTP error kinds.

Every entry describes one well-known 4xx or 5xx status: its symbolic code,
the display name used for the generated error type, and the default title.
The catalog is read-only; error types are derived from it by the
ErrorTypeRegistry in jsonapi_errors.kigen.

Limitations:
- Only the statuses listed here are known; custom statuses are not supported.
- Titles are English only.
"""

from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from jsonapi_errors.exceptions import CatalogIntegrityError


class ErrorCatalogEntry(BaseModel):
    """
    One catalog row.

    Attributes:
        status: HTTP status code
        code: Symbolic snake_case code
        name: PascalCase display name of the error type
        message: Default human-readable title
    """

    model_config = ConfigDict(frozen=True)

    status: int = Field(..., ge=400, le=599, description="HTTP status code")
    code: str = Field(..., min_length=1, description="Symbolic error code")
    name: str = Field(..., min_length=1, description="Error type name")
    message: str = Field(..., min_length=1, description="Default error title")


# status: (name, code, message)
_CLIENT_ROWS = {
    400: ("BadRequest", "bad_request", "Bad Request"),
    401: ("Unauthorized", "unauthorized", "Unauthorized"),
    402: ("PaymentRequired", "payment_required", "Payment Required"),
    403: ("Forbidden", "forbidden", "Forbidden"),
    404: ("NotFound", "not_found", "Not Found"),
    405: ("MethodNotAllowed", "method_not_allowed", "Method Not Allowed"),
    406: ("NotAcceptable", "not_acceptable", "Not Acceptable"),
    407: ("ProxyAuthenticationRequired", "proxy_authentication_required", "Proxy Authentication Required"),
    408: ("RequestTimeout", "request_timeout", "Request Timeout"),
    409: ("Conflict", "conflict", "Conflict"),
    410: ("Gone", "gone", "Gone"),
    411: ("LengthRequired", "length_required", "Length Required"),
    412: ("PreconditionFailed", "precondition_failed", "Precondition Failed"),
    413: ("RequestEntityTooLarge", "request_entity_too_large", "Request Entity Too Large"),
    414: ("RequestUriTooLong", "request_uri_too_long", "Request Uri Too Long"),
    415: ("UnsupportedMediaType", "unsupported_media_type", "Unsupported Media Type"),
    416: ("RequestedRangeNotSatisfiable", "requested_range_not_satisfiable", "Requested Range Not Satisfiable"),
    417: ("ExpectationFailed", "expectation_failed", "Expectation Failed"),
    421: ("MisdirectedRequest", "misdirected_request", "Misdirected Request"),
    422: ("UnprocessableEntity", "unprocessable_entity", "Unprocessable Entity"),
    423: ("Locked", "locked", "Locked"),
    424: ("FailedDependency", "failed_dependency", "Failed Dependency"),
    425: ("TooEarly", "too_early", "Too Early"),
    426: ("UpgradeRequired", "upgrade_required", "Upgrade Required"),
    428: ("PreconditionRequired", "precondition_required", "Precondition Required"),
    429: ("TooManyRequests", "too_many_requests", "Too Many Requests"),
    431: ("RequestHeaderFieldsTooLarge", "request_header_fields_too_large", "Request Header Fields Too Large"),
    451: ("UnavailableForLegalReasons", "unavailable_for_legal_reasons", "Unavailable for Legal Reasons"),
}

_SERVER_ROWS = {
    500: ("InternalServerError", "internal_server_error", "Internal Server Error"),
    501: ("NotImplemented", "not_implemented", "Not Implemented"),
    502: ("BadGateway", "bad_gateway", "Bad Gateway"),
    503: ("ServiceUnavailable", "service_unavailable", "Service Unavailable"),
    504: ("GatewayTimeout", "gateway_timeout", "Gateway Timeout"),
    505: ("HttpVersionNotSupported", "http_version_not_supported", "HTTP Version Not Supported"),
    506: ("VariantAlsoNegotiates", "variant_also_negotiates", "Variant Also Negotiates"),
    507: ("InsufficientStorage", "insufficient_storage", "Insufficient Storage"),
    508: ("LoopDetected", "loop_detected", "Loop Detected"),
    509: ("BandwidthLimitExceeded", "bandwidth_limit_exceeded", "Bandwidth Limit Exceeded"),
    510: ("NotExtended", "not_extended", "Not Extended"),
    511: ("NetworkAuthenticationRequired", "network_authentication_required", "Network Authentication Required"),
}


def _build(rows: Dict[int, tuple], low: int, high: int) -> Mapping[int, ErrorCatalogEntry]:
    entries = {}
    for status, (name, code, message) in rows.items():
        if not low <= status <= high:
            raise CatalogIntegrityError(f"Status {status} outside {low}-{high}")
        entries[status] = ErrorCatalogEntry(
            status=status, code=code, name=name, message=message
        )
    return MappingProxyType(entries)


def _index_by_code(entries: Mapping[int, ErrorCatalogEntry]) -> Mapping[str, ErrorCatalogEntry]:
    by_code: Dict[str, ErrorCatalogEntry] = {}
    names = set()
    for entry in entries.values():
        if entry.code in by_code:
            raise CatalogIntegrityError(f"Duplicate error code {entry.code!r}")
        if entry.name in names:
            raise CatalogIntegrityError(f"Duplicate error name {entry.name!r}")
        by_code[entry.code] = entry
        names.add(entry.name)
    return MappingProxyType(by_code)


CLIENT_ERRORS: Mapping[int, ErrorCatalogEntry] = _build(_CLIENT_ROWS, 400, 499)
SERVER_ERRORS: Mapping[int, ErrorCatalogEntry] = _build(_SERVER_ROWS, 500, 599)
STATUS_MAP: Mapping[int, ErrorCatalogEntry] = MappingProxyType(
    {**CLIENT_ERRORS, **SERVER_ERRORS}
)
CODE_MAP: Mapping[str, ErrorCatalogEntry] = _index_by_code(STATUS_MAP)


def normalize_key(key: Union[int, str, object]) -> Union[int, str, object]:
    """
    Normalize a catalog key.

    Numeric strings become ints, enum members become their value
    (so ``http.HTTPStatus.NOT_FOUND`` is ``404``). Anything else is returned as is.
    """
    value = key.value if isinstance(key, Enum) else key
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return value


def get_entry(key: Union[int, str]) -> Optional[ErrorCatalogEntry]:
    """Return the catalog entry for a status or symbolic code, or None."""
    key = normalize_key(key)
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return STATUS_MAP.get(key)
    if isinstance(key, str):
        return CODE_MAP.get(key)
    return None
