"""
Log formatters for jsonapi_errors.

Limitations:
- Only ``error_code`` and ``status`` are picked up from ``extra=``; other extra
  fields are ignored unless you extend the formatter.
"""

import json
import logging
from datetime import datetime


class JsonFormatter(logging.Formatter):
    """
    Format log records as JSON for structured logging.

    Emits timestamp, level, logger name and message, plus ``error_code`` and
    ``status`` when they were passed via ``extra=`` (the exception handlers do
    this for every rendered error).
    """

    EXTRA_FIELDS = ("error_code", "status")

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the specified record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string containing the formatted log record
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in self.EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)
        if record.exc_info:
            log_data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)
