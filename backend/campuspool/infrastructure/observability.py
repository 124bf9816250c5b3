"""Structured Logging — JSON records tagged with the request they belong to.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - request_id/method/path bound by the HTTP middleware appear on every record
      logged while that request is handled, without passing extra= around
    - Explicit extra= fields (user_id, conversation_id, phase...) win over bound ones
    - setup_logging is idempotent: calling it twice installs one handler, not two

Design Decisions:
    - contextvars over thread-locals: one asyncio task per request, and the
      polling subscriptions log from their own tasks without leaking a request id
    - JSON in production, one-line text in development (LOG_FORMAT)
"""

import json
import logging
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "request_id", "method", "path", "user_id", "conversation_id",
    "error_code", "status_code", "phase",
)

_request_context: ContextVar[dict | None] = ContextVar("request_context", default=None)

_HANDLER_NAME = "campuspool"


def bind_request_context(request_id: str | None = None, **fields) -> str:
    """Attach fields to every record logged from the current task; returns the request id."""
    request_id = request_id or uuid.uuid4().hex[:12]
    _request_context.set({"request_id": request_id, **fields})
    return request_id


def clear_request_context() -> None:
    _request_context.set(None)


def current_request_id() -> str | None:
    context = _request_context.get()
    return context.get("request_id") if context else None


class RequestContextFilter(logging.Filter):
    """Copy bound request fields onto the record unless extra= already set them."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in (_request_context.get() or {}).items():
            if getattr(record, key, None) is None:
                setattr(record, key, value)
        return True


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Development format; appends [request_id] when one is bound."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        request_id = getattr(record, "request_id", None)
        return f"{line} [{request_id}]" if request_id else line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the CampusPool handler on the root logger, replacing a previous one."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    handler.addFilter(RequestContextFilter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # Engine echo duplicates every statement at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return handler
