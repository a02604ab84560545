"""Structured JSON logging with a request-id context."""
import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict

REQUEST_ID_CTX: ContextVar[str] = ContextVar("request_id", default="")

_EXTRA_KEYS = ("method", "path", "status_code", "elapsed_ms", "user_id")


class JsonLogFormatter(logging.Formatter):
    """Serialize log records into compact JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": REQUEST_ID_CTX.get() or None,
        }
        for key in _EXTRA_KEYS:
            value = getattr(record, key, None)
            if value not in (None, ""):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger to emit JSON lines on stdout."""
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonLogFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    root.addHandler(handler)


def set_request_id(request_id: str) -> None:
    REQUEST_ID_CTX.set(request_id)
