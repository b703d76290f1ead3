"""Structured logging for the wardrobe stylist service.

Every record is rendered as one JSON object. Fields passed through
:func:`log_event` are scrubbed first: photos and credentials never reach the
log, and long strings are clipped.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import uuid
from typing import Any, Dict, Iterator, Optional

CORRELATION_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {
    "message",
    "asctime",
}
_SENSITIVE_KEYS = frozenset(
    {
        "image",
        "image_b64",
        "image_base64",
        "image_url",
        "api_key",
        "gemini_api_key",
        "user_id",
        "email",
        "prompt",
        "raw_response",
    }
)
REDACTED = "[redacted]"
MAX_FIELD_LENGTH = 256

_INLINE_IMAGE = re.compile(r"^data:[^,]*,", re.IGNORECASE)
_EMAIL = re.compile(r"[\w.\-]+@[\w.\-]+")


class JsonFormatter(logging.Formatter):
    """Render a record and its ``extra`` fields as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
            "event": getattr(record, "event", message),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        extras = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}
        for key, value in extras.items():
            payload.setdefault(key, redact_for_log(value))
        return json.dumps(payload)


def configure_logging(level: int | str | None = None) -> None:
    """Send root logging to stderr as JSON, at ``LOG_LEVEL`` unless given."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level or os.getenv("LOG_LEVEL", "INFO"), handlers=[handler], force=True)


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def _clip(text: str) -> str:
    if _INLINE_IMAGE.match(text):
        return "[redacted-image]"
    text = _EMAIL.sub("[redacted-email]", text)
    overflow = len(text) - MAX_FIELD_LENGTH
    if overflow > 0:
        return f"{text[:MAX_FIELD_LENGTH]}...[truncated {overflow} chars]"
    return text


def redact_for_log(payload: Any) -> Any:
    """Recursively scrub image payloads, credentials and user identifiers."""

    if isinstance(payload, dict):
        return {key: REDACTED if key in _SENSITIVE_KEYS else redact_for_log(value) for key, value in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [redact_for_log(item) for item in payload]
    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    return _clip(str(payload))


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with scrubbed fields and the active correlation id."""

    correlation_id = fields.pop("correlation_id", None) or CORRELATION_ID.get()
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


@contextlib.contextmanager
def operation_context(name: str, correlation_id: Optional[str] = None, **attributes: Any) -> Iterator[str]:
    """Scope a correlation id around one operation.

    Nested operations inherit the caller's id; a new one is minted only at the
    outermost level. The previous value is restored on exit.
    """

    token = CORRELATION_ID.set(correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex)
    try:
        scoped_id = CORRELATION_ID.get()
        logging.getLogger(__name__).debug("operation %s scoped to %s %s", name, scoped_id, redact_for_log(attributes))
        yield scoped_id
    finally:
        CORRELATION_ID.reset(token)


__all__ = [
    "CORRELATION_ID",
    "JsonFormatter",
    "configure_logging",
    "get_logger",
    "log_event",
    "operation_context",
    "redact_for_log",
]
