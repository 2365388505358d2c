"""
Logging configuration for jsonapi_errors.

Library modules log through ``logging.getLogger(__name__)``. The helpers here
build the console logger the FastAPI handlers report through, configured from
ErrorSettings (``DEBUG``, ``LOG_LEVEL``, ``LOG_JSON_FORMAT``).
"""

import logging
import sys
from typing import Any, Optional

from jsonapi_errors.logging.formatters import JsonFormatter

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: Any, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logger(
    name: str,
    level: str = "INFO",
    format: str = DEFAULT_FORMAT,
    debug: bool = False,
    json_format: bool = False,
) -> logging.Logger:
    """
    Attach a single stdout handler to the named logger.

    Handlers installed by an earlier call are replaced, so calling this again
    reconfigures the logger instead of duplicating its output.

    Args:
        name: Logger name
        level: Level name; unknown names fall back to INFO
        format: %-style record format, unused with json_format
        debug: Force DEBUG whatever level says
        json_format: Emit one JSON object per record (JsonFormatter)

    Returns:
        The configured logger
    """
    log_level = _resolve_level(level, debug)
    formatter = JsonFormatter() if json_format else logging.Formatter(format)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    return logger


def get_logger(
    name: str, settings: Optional[Any] = None, json_format: bool = False
) -> logging.Logger:
    """
    Configure the named logger from ErrorSettings.

    Any object exposing ``DEBUG``, ``LOG_LEVEL`` or ``LOG_JSON_FORMAT`` works;
    missing attributes take the ErrorSettings defaults.
    """
    return setup_logger(
        name,
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        debug=bool(getattr(settings, "DEBUG", False)),
        json_format=json_format or bool(getattr(settings, "LOG_JSON_FORMAT", False)),
    )


def ensure_logger(
    logger: Optional[logging.Logger] = None,
    name: Optional[str] = None,
    settings: Optional[Any] = None,
    json_format: bool = False,
) -> logging.Logger:
    """
    Use the caller's logger when given, else configure one named ``name``.

    Raises:
        ValueError: If neither a logger nor a name is given
    """
    if logger is not None:
        return logger
    if not name:
        raise ValueError("ensure_logger() needs a logger or a logger name")
    return get_logger(name, settings, json_format)
