"""Structured logging for the save-dapp Lambda.

Every record is written to stdout as one JSON object so CloudWatch Logs
Insights can filter on level, logger and the invocation's request id.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from contextvars import ContextVar
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import Mapping
from typing import MutableMapping
from typing import Optional

request_id: ContextVar[str] = ContextVar("request_id", default="")
function_name: ContextVar[str] = ContextVar("function_name", default="")

_NOISY_LOGGERS = ("boto3", "botocore", "urllib3", "sqlalchemy.engine")


class StructuredLogFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            },
        }

        req_id = request_id.get()
        if req_id:
            log_data["request_id"] = req_id

        fn_name = function_name.get()
        if fn_name:
            log_data["function_name"] = fn_name

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            log_data["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        context = getattr(record, "context", None)
        if isinstance(context, dict) and context:
            log_data["context"] = context

        return json.dumps(log_data, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that folds bound and per-call context together."""

    def process(
        self,
        msg: str,
        kwargs: MutableMapping[str, Any],
    ) -> tuple[str, MutableMapping[str, Any]]:
        context = dict(self.extra or {})
        context.update(kwargs.pop("context", None) or {})
        extra = kwargs.setdefault("extra", {})
        extra["context"] = context
        return msg, kwargs


def configure_logging(level: Optional[str] = None) -> None:
    """Install the JSON handler on the root logger.

    Args:
        level: Log level name. Defaults to LOG_LEVEL or INFO.
    """
    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredLogFormatter())
    root_logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str, **context: Any) -> ContextLogger:
    """Return a logger that attaches ``context`` to every record."""
    return ContextLogger(logging.getLogger(name), context)


def set_request_context(
    req_id: Optional[str] = None,
    fn_name: Optional[str] = None,
) -> None:
    """Bind the invocation identifiers used by the formatter."""
    if req_id:
        request_id.set(req_id)
    if fn_name:
        function_name.set(fn_name)


def clear_request_context() -> None:
    """Reset invocation identifiers once a request has been answered."""
    request_id.set("")
    function_name.set("")


def log_lambda_event(logger: ContextLogger, event: Mapping[str, Any]) -> None:
    """Log the shape of an API Gateway event without its payload."""
    body = event.get("body") or ""
    logger.debug(
        "Lambda event received",
        context={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "body_length": len(body),
            "base64": bool(event.get("isBase64Encoded")),
        },
    )


def log_response(
    logger: ContextLogger,
    status_code: int,
    duration_ms: Optional[float] = None,
) -> None:
    """Log the status of an outgoing response.

    Client and server errors are logged at WARNING so they stand out.
    """
    context: dict[str, Any] = {"status_code": status_code}
    if duration_ms is not None:
        context["duration_ms"] = round(duration_ms, 2)

    level = logging.INFO if status_code < 400 else logging.WARNING
    logger.log(level, "Lambda response", context=context)
