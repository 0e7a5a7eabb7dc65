"""Secrets Manager access for store credentials."""

from __future__ import annotations

import base64
import json
from typing import Any
from typing import Optional

import boto3

_CLIENT: Optional[Any] = None
_SECRET_CACHE: dict[str, dict[str, Any]] = {}


def get_secretsmanager_client() -> Any:
    """Return the process-wide Secrets Manager client."""
    global _CLIENT
    if _CLIENT is None:
        _CLIENT = boto3.client("secretsmanager")
    return _CLIENT


def get_secret_json(secret_arn: str) -> dict[str, Any]:
    """Fetch a JSON secret, caching it for the life of the process.

    Raises:
        RuntimeError: If the secret has no value.
    """
    if secret_arn in _SECRET_CACHE:
        return _SECRET_CACHE[secret_arn]

    response = get_secretsmanager_client().get_secret_value(SecretId=secret_arn)
    secret_str = response.get("SecretString")
    if not secret_str and response.get("SecretBinary"):
        secret_str = base64.b64decode(response["SecretBinary"]).decode("utf-8")
    if not secret_str:
        raise RuntimeError("Secret value is empty")

    secret_payload = json.loads(secret_str)
    _SECRET_CACHE[secret_arn] = secret_payload
    return secret_payload


def clear_secret_cache() -> None:
    """Drop cached secrets and the client (useful in tests)."""
    global _CLIENT
    _CLIENT = None
    _SECRET_CACHE.clear()
