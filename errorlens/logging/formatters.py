"""
Custom log formatters for errorlens.

Currently supports JSON formatting for structured logging of handled exceptions.
"""

import json
import logging
from datetime import datetime


class JsonFormatter(logging.Formatter):
    """
    Format log records as JSON for structured logging.

    Timestamp, level, logger name and message are always included. When the
    record carries exception information, the exception type and formatted
    traceback are added. Attributes passed through ``extra`` whose names start
    with ``error_`` (for example ``error_code`` or ``error_status``) are copied as-is.
    """

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

        for key, value in record.__dict__.items():
            if key.startswith("error_"):
                log_data[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception_type"] = record.exc_info[0].__name__
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)
