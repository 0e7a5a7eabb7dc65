"""Shared parsing utilities for request handling."""

from __future__ import annotations

import base64
import enum
import json
from datetime import date
from datetime import datetime
from decimal import Decimal
from typing import Any
from typing import Mapping
from uuid import UUID


def parse_json_body(event: Mapping[str, Any]) -> Any:
    """Decode the JSON body of an API Gateway event.

    Args:
        event: The API Gateway event dictionary.

    Returns:
        The decoded JSON document.

    Raises:
        ValueError: If the body is empty or is not valid JSON.
    """
    raw = event.get("body") or ""
    if event.get("isBase64Encoded") and raw:
        raw = base64.b64decode(raw).decode("utf-8")
    if not raw:
        raise ValueError("Request body is required")
    return json.loads(raw)


def is_blank(value: Any) -> bool:
    """Return True for values a JSON client treats as "not provided".

    ``None``, ``False``, zero and the empty string are blank. Empty
    objects and lists are not.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False


def to_json_safe(value: Any) -> Any:
    """Convert database values to JSON-compatible primitives.

    UUIDs become strings, datetimes ISO-8601 strings, decimals floats
    and enums their values. Containers are converted recursively.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, Mapping):
        return {str(key): to_json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_json_safe(item) for item in value]
    return str(value)
