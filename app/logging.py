"""JSON logs carrying request and trace ids, with PII masked.

OTPs, tokens, emails and GST numbers are redacted; phone numbers keep their
last four digits. DEBUG records are left untouched outside production.
"""
import json
import logging
import os
from typing import Any, Dict, Tuple

from flask import g, has_app_context
from opentelemetry.trace import get_current_span

REDACTED = "[REDACTED]"
MASKED_KEYS = frozenset({
    "otp",
    "code",
    "token",
    "accessToken",
    "refreshToken",
    "email",
    "gstNumber",
})
PARTIAL_KEYS = frozenset({"phoneNumber", "phone_number"})
NO_ID = "n/a"


def request_id() -> str:
    if not has_app_context():
        return NO_ID
    return getattr(g, "request_id", None) or NO_ID


def trace_ids() -> Tuple[str, str]:
    ctx = get_current_span().get_span_context()
    if not ctx.is_valid:
        return NO_ID, NO_ID
    return format(ctx.trace_id, "032x"), format(ctx.span_id, "016x")


class ContextFilter(logging.Filter):
    """Stamp each record with the request id and the active trace/span ids."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id()
        record.trace_id, record.span_id = trace_ids()
        return True


def mask(key: str, value: Any) -> Any:
    if isinstance(value, dict):
        return mask_payload(value)
    if key in PARTIAL_KEYS and isinstance(value, str) and len(value) > 4:
        return "*" * (len(value) - 4) + value[-4:]
    if key in MASKED_KEYS:
        return REDACTED
    return value


def mask_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: mask(key, value) for key, value in data.items()}


class MaskingFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        production = os.getenv("APP_ENV", "development").lower() == "production"
        if record.levelno == logging.DEBUG and not production:
            return True
        if isinstance(record.msg, dict):
            record.msg = mask_payload(record.msg)
        if isinstance(record.args, dict):
            record.args = mask_payload(record.args)
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        line = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "request_id": getattr(record, "request_id", NO_ID),
            "trace_id": getattr(record, "trace_id", NO_ID),
            "span_id": getattr(record, "span_id", NO_ID),
        }
        # structured events are merged in; plain messages go under "message"
        if isinstance(record.msg, dict):
            line.update(record.msg)
        else:
            line["message"] = record.getMessage()
        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


def _level_for(app) -> int:
    name = os.getenv("LOG_LEVEL")
    if name:
        return getattr(logging, name.upper(), logging.INFO)
    return logging.DEBUG if app.config.get("DEBUG") else logging.INFO


def configure_logging(app) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(datefmt="%Y-%m-%dT%H:%M:%S%z"))
    handler.addFilter(ContextFilter())
    handler.addFilter(MaskingFilter())
    level = _level_for(app)

    app.logger.handlers.clear()
    app.logger.addHandler(handler)
    app.logger.setLevel(level)

    root = logging.getLogger()
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        root.addHandler(handler)
    root.setLevel(level)

    werkzeug_logger = logging.getLogger("werkzeug")
    werkzeug_logger.handlers.clear()
    werkzeug_logger.addHandler(handler)
    werkzeug_logger.setLevel(level)
