"""Structured JSON logging configuration."""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict, Any

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = set(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {'message', 'asctime', 'taskName'}

# Never emitted, even when passed through ``extra``
REDACTED_KEYS = {'password', 'password_hash', 'token', 'session_token', 'access_token', 'code', 'cookie'}

# Third-party loggers that are noisy at INFO
QUIET_LOGGERS = ('pymongo', 'httpx', 'httpcore')


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: "[REDACTED]" if k in REDACTED_KEYS else _redact(v) for k, v in value.items()}
    return value


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key in entry or callable(value):
                continue
            entry[key] = "[REDACTED]" if key in REDACTED_KEYS else _redact(value)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_structured_logging(level: str | None = None) -> None:
    """Send every log record, uvicorn's included, through JSONFormatter.

    ``level`` defaults to the ``LOG_LEVEL`` environment variable, then INFO.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
