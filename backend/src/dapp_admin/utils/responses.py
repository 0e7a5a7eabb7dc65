"""API Gateway response builders for the save-dapp endpoint."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any
from typing import Optional

from pydantic import BaseModel

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def get_security_headers() -> dict[str, str]:
    """Get security headers for JSON responses.

    Admin payloads must not be cached by browsers or intermediaries,
    and the JSON body must not be sniffed as another content type.
    """
    return {
        "X-Content-Type-Options": "nosniff",
        "Cache-Control": "no-store, no-cache, must-revalidate",
        "Pragma": "no-cache",
    }


def get_cors_headers() -> dict[str, str]:
    """Return the fixed cross-origin headers sent on every response."""
    return dict(CORS_HEADERS)


def preflight_response() -> dict[str, Any]:
    """Answer a CORS preflight request with a plain ``ok`` body."""
    return {
        "statusCode": 200,
        "headers": get_cors_headers(),
        "body": "ok",
    }


def json_response(
    status_code: int,
    body: Any,
    headers: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    """Create a JSON API Gateway response.

    Args:
        status_code: HTTP status code.
        body: Response body (dict, Pydantic model, or dataclass).
        headers: Optional additional headers to include.

    Returns:
        API Gateway response dictionary.
    """
    response_headers = get_cors_headers()
    response_headers["Content-Type"] = "application/json"
    response_headers.update(get_security_headers())
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": json.dumps(_serialize_body(body), default=str),
    }


def error_response(
    status_code: int,
    message: str,
    details: Optional[str] = None,
) -> dict[str, Any]:
    """Create an error response with an optional ``details`` field."""
    body: dict[str, Any] = {"error": message}
    if details:
        body["details"] = details
    return json_response(status_code, body)


def _serialize_body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json")

    if hasattr(body, "__dataclass_fields__"):
        return asdict(body)

    return body
