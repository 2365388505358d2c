"""
Logging helpers for jsonapi_errors.

Limitations:
- Only console (stdout) logging is configured by these helpers.
- JSON logs include timestamp, level, logger, message, and the error code and
  status of rendered errors.
"""

from jsonapi_errors.logging.formatters import JsonFormatter
from jsonapi_errors.logging.manager import ensure_logger, get_logger, setup_logger

__all__ = [
    "get_logger",
    "ensure_logger",
    "setup_logger",
    "JsonFormatter",
]
