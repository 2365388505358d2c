"""
Unit tests for the serializer and schema models.

Covers:
- Full and short projections, field order, value identity between modes
- Multiple errors (order, no deduplication)
- JSON output, including meta values without a JSON form
"""
import json

import pytest

from jsonapi_errors.api_error import ApiError
from jsonapi_errors.schemas import FULL_FIELDS, SHORT_FIELDS, ErrorDocument, ErrorObject
from jsonapi_errors.serializer import Serializer


@pytest.fixture
def full_error():
    return ApiError(
        id="e-1",
        code="conflict",
        title="Conflict",
        detail="Email already taken",
        status=409,
        meta={"field": "email"},
        links={"about": "https://example.com/errors/e-1", "type": "https://example.com/conflict"},
        source={"pointer": "/data/attributes/email"},
    )


def test_full_hash(full_error):
    data = Serializer(full_error).to_hash()
    assert list(data) == ["errors"]
    assert len(data["errors"]) == 1
    error = data["errors"][0]
    assert tuple(error) == FULL_FIELDS
    assert error == full_error.to_dict()


def test_short_hash(full_error):
    error = Serializer(full_error).to_hash(short=True)["errors"][0]
    assert tuple(error) == SHORT_FIELDS
    assert error == {
        "status": 409,
        "title": "Conflict",
        "detail": "Email already taken",
        "source": {"pointer": "/data/attributes/email", "parameter": "", "header": ""},
    }


def test_short_is_subset_of_full(full_error):
    serializer = Serializer([full_error, ApiError(status=400)])
    full = serializer.to_hash()["errors"]
    short = serializer.to_hash(short=True)["errors"]
    for full_item, short_item in zip(full, short):
        assert set(short_item) == {"status", "title", "detail", "source"}
        assert set(short_item) <= set(full_item)
        assert all(short_item[key] == full_item[key] for key in short_item)


def test_multiple_errors_keep_order_and_duplicates():
    first = ApiError(title="Same", status=400)
    second = ApiError(title="Same", status=400)
    third = ApiError(title="Other", status=500)
    errors = Serializer([first, second, third]).to_hash()["errors"]
    assert [e["title"] for e in errors] == ["Same", "Same", "Other"]
    assert errors[0] == errors[1]


def test_to_json_matches_hash(full_error):
    serializer = Serializer(full_error)
    for short in (False, True):
        assert json.loads(serializer.to_json(short=short)) == serializer.to_hash(short=short)


def test_to_json_is_compact():
    assert Serializer(ApiError(status=404)).to_json(short=True) == (
        '{"errors":[{"status":404,"title":"","detail":"",'
        '"source":{"pointer":"","parameter":"","header":""}}]}'
    )


def test_unset_status_serializes_as_null():
    assert Serializer(ApiError()).to_hash()["errors"][0]["status"] is None


def test_round_trip_equals_descriptor_fields(full_error):
    decoded = json.loads(Serializer(full_error).to_json())
    assert decoded["errors"][0] == {
        "id": full_error.id,
        "links": full_error.links.model_dump(),
        "status": full_error.status,
        "code": full_error.code,
        "title": full_error.title,
        "detail": full_error.detail,
        "source": full_error.source.model_dump(),
        "meta": dict(full_error.meta),
    }


def test_error_document_defaults():
    assert ErrorDocument().dump() == {"errors": []}
    assert ErrorObject().model_dump()["links"] == {"about": "", "type": ""}


def test_meta_values_without_json_form_are_stringified():
    err = ApiError(status=500, meta={"original_error": ValueError, "count": 2})
    meta = json.loads(Serializer(err).to_json())["errors"][0]["meta"]
    assert meta == {"original_error": str(ValueError), "count": 2}


def test_meta_values_kept_as_is_in_hash():
    err = ApiError(status=500, meta={"original_error": ValueError})
    assert Serializer(err).to_hash()["errors"][0]["meta"]["original_error"] is ValueError
