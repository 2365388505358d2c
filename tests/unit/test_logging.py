"""
Unit tests for the logging module.

Covers:
- Logger creation and retrieval (get_logger, ensure_logger)
- Logger configuration (setup_logger)
- JSON formatter output (JsonFormatter)
"""
import json
import logging

import pytest

from jsonapi_errors.logging import JsonFormatter, ensure_logger, get_logger, setup_logger


@pytest.fixture
def dummy_settings():
    class DummySettings:
        DEBUG = False
        LOG_LEVEL = "WARNING"
        LOG_JSON_FORMAT = False

    return DummySettings()


def test_get_logger_uses_settings(dummy_settings):
    logger = get_logger("test.jsonapi.module", dummy_settings)
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test.jsonapi.module"
    assert logger.level == logging.WARNING


def test_get_logger_debug_overrides_level(dummy_settings):
    dummy_settings.DEBUG = True
    assert get_logger("test.jsonapi.debug", dummy_settings).level == logging.DEBUG


def test_get_logger_json_format_from_settings(dummy_settings):
    dummy_settings.LOG_JSON_FORMAT = True
    logger = get_logger("test.jsonapi.json", dummy_settings)
    assert isinstance(logger.handlers[0].formatter, JsonFormatter)


def test_ensure_logger_returns_existing_logger():
    logger = logging.getLogger("test.jsonapi.ensure")
    assert ensure_logger(logger, "ignored") is logger


def test_ensure_logger_creates_new_logger():
    ensured = ensure_logger(None, "test.jsonapi.ensure2")
    assert ensured.name == "test.jsonapi.ensure2"


def test_ensure_logger_raises_without_name():
    with pytest.raises(ValueError):
        ensure_logger()


def test_setup_logger_replaces_handlers():
    logger = logging.getLogger("test.jsonapi.handler")
    logger.handlers.clear()
    logger.addHandler(logging.StreamHandler())
    setup_logger("test.jsonapi.handler")
    assert len(logger.handlers) == 1


def test_setup_logger_invalid_level():
    assert setup_logger("test.jsonapi.invalid", level="NOTALEVEL").level == logging.INFO


def test_setup_logger_level_is_case_insensitive():
    logger = setup_logger("test.jsonapi.lower", level="warning")
    assert logger.level == logging.WARNING
    assert logger.handlers[0].level == logging.WARNING


def test_get_logger_without_settings_uses_defaults():
    logger = get_logger("test.jsonapi.defaults")
    assert logger.level == logging.INFO
    assert not isinstance(logger.handlers[0].formatter, JsonFormatter)


def test_json_formatter_output():
    record = logging.LogRecord(
        name="jsonapi",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="rendered %s",
        args=("NotFound",),
        exc_info=None,
    )
    record.error_code = "not_found"
    record.status = 404
    data = json.loads(JsonFormatter().format(record))
    assert data["level"] == "WARNING"
    assert data["logger"] == "jsonapi"
    assert data["message"] == "rendered NotFound"
    assert data["error_code"] == "not_found"
    assert data["status"] == 404
    assert "timestamp" in data


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        import sys

        exc_info = sys.exc_info()
    record = logging.LogRecord("jsonapi", logging.ERROR, __file__, 1, "failed", None, exc_info)
    data = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in data["exc_info"]
