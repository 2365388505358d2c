"""
Unit tests for the helpers module.

Covers:
- resolve_failure / instantiate / render
- render_error input checks
- handle_error with mapping, fallback, ApiError input and original-error meta
- api_err / ApiErr shorthand
"""
import json

import pytest

from jsonapi_errors.api_error import ApiError
from jsonapi_errors.exceptions import (
    RegistryNotLoadedError,
    RenderError,
    UnknownCatalogEntryError,
    UnresolvableFailureError,
)
from jsonapi_errors.helpers import (
    ApiErr,
    api_err,
    build_error,
    handle_error,
    instantiate,
    original_error_meta,
    render,
    render_error,
    resolve_failure,
)
from jsonapi_errors.kigen import kigen


class PaymentDeclined(Exception):
    pass


def _raise(exc):
    try:
        raise exc
    except Exception as caught:
        return caught


def test_resolve_failure(error_registry, error_types):
    error_registry.set_mapping({PaymentDeclined: 402})
    assert resolve_failure(PaymentDeclined(), error_registry) is error_types[402]
    assert resolve_failure(KeyError(), error_registry) is None


def test_resolve_failure_uses_default_registry(default_registry):
    default_registry.set_mapping({PaymentDeclined: "payment_required"})
    assert resolve_failure(PaymentDeclined()) is kigen[402]


def test_instantiate(error_types):
    err = instantiate(error_types[404], detail="missing", meta={"id": 7})
    assert isinstance(err, error_types[404])
    assert err.detail == "missing"
    assert err.meta == {"id": 7}

    same = instantiate(err, title="Custom")
    assert same is err
    assert err.title == "Custom"


def test_render_single_and_many(error_types):
    status, body = render(error_types[404]())
    assert status == 404
    assert json.loads(body)["errors"][0]["code"] == "not_found"

    status, body = render([error_types[409](), error_types[422]()], short=True)
    assert status == 409
    assert [e["status"] for e in json.loads(body)["errors"]] == [409, 422]


def test_render_explicit_status(error_types):
    status, _ = render(error_types[404](), status=410)
    assert status == 410


def test_render_error_accepts_type_and_instance(error_types):
    assert render_error(error_types[403])[0] == 403
    assert render_error(error_types[403](), status=401)[0] == 401


@pytest.mark.parametrize("value", [KeyError("x"), KeyError, "oops", None])
def test_render_error_rejects_other_values(value):
    with pytest.raises(RenderError):
        render_error(value)


def test_handle_error_mapped(error_registry):
    error_registry.set_mapping({PaymentDeclined: 402})
    status, body = handle_error(PaymentDeclined("card"), registry=error_registry)
    assert status == 402
    error = json.loads(body)["errors"][0]
    assert error["title"] == "Payment Required"
    assert error["meta"] == {}


def test_handle_error_fallback(error_registry, error_types):
    error_registry.set_fallback(500)
    status, body = handle_error(RuntimeError("boom"), short=True, registry=error_registry)
    assert status == 500
    assert json.loads(body)["errors"][0]["title"] == "Internal Server Error"


def test_handle_error_passes_api_errors_through(error_registry, error_types):
    status, body = handle_error(error_types[429](detail="slow down"), registry=error_registry)
    assert status == 429
    assert json.loads(body)["errors"][0]["detail"] == "slow down"


def test_handle_error_unresolvable(error_registry):
    with pytest.raises(UnresolvableFailureError) as exc:
        handle_error(RuntimeError("boom"), registry=error_registry)
    assert "RuntimeError" in str(exc.value)


def test_handle_error_with_original(error_registry):
    error_registry.set_fallback(500)
    failure = _raise(PaymentDeclined("card declined"))
    _, body = handle_error(failure, with_original=True, registry=error_registry)
    meta = json.loads(body)["errors"][0]["meta"]
    assert meta["original_error"].endswith("PaymentDeclined")
    assert meta["message"] == "card declined"
    assert "_raise" in meta["trace"]
    assert "backtrace" not in meta


def test_handle_error_with_full_trace(error_registry):
    error_registry.set_fallback(500)
    failure = _raise(PaymentDeclined("card declined"))
    _, body = handle_error(failure, with_original="full_trace", registry=error_registry)
    meta = json.loads(body)["errors"][0]["meta"]
    assert "raise exc" in meta["backtrace"]


def test_original_error_meta_without_traceback():
    meta = original_error_meta(ValueError("never raised"))
    assert meta == {
        "original_error": "builtins.ValueError",
        "trace": "",
        "message": "never raised",
    }


def test_build_error_does_not_share_meta(error_registry):
    error_registry.set_fallback(500)
    first = build_error(_raise(ValueError("a")), with_original=True, registry=error_registry)
    second = build_error(_raise(ValueError("b")), registry=error_registry)
    assert first.meta["message"] == "a"
    assert second.meta == {}


def test_api_err(default_registry):
    assert api_err(404) is kigen[404]
    assert ApiErr["not_found"] is kigen[404]
    assert ApiErr(404) is kigen[404]
    with pytest.raises(UnknownCatalogEntryError):
        ApiErr[999]


def test_api_err_not_loaded(monkeypatch, unloaded_error_types):
    import jsonapi_errors.helpers as helpers_module

    monkeypatch.setattr(helpers_module, "kigen", unloaded_error_types)
    with pytest.raises(RegistryNotLoadedError):
        ApiErr[404]


def test_raise_api_err(default_registry):
    with pytest.raises(ApiError) as exc:
        raise ApiErr[404](detail="User 1")
    assert exc.value.status == 404


def test_instantiate_instance_with_links_and_source_mappings(error_types):
    err = instantiate(
        error_types[404](),
        links={"about": "https://example.com/e"},
        source={"pointer": "/data"},
    )
    decoded = json.loads(render_error(err)[1])["errors"][0]
    assert decoded["links"]["about"] == "https://example.com/e"
    assert decoded["source"]["pointer"] == "/data"


def test_catalog_error_positional_detail(error_types):
    err = error_types[404]("User 42 missing")
    assert err.detail == "User 42 missing"
    assert err.title == "Not Found"
    assert json.loads(render_error(err)[1])["errors"][0]["detail"] == "User 42 missing"
