"""Custom exception classes for the application.

This module provides domain-specific exception classes that carry
appropriate HTTP status codes and structured error information.
"""

from __future__ import annotations

from typing import Any
from typing import Optional


class AppError(Exception):
    """Base exception for application errors.

    All application-specific exceptions should inherit from this class.
    Each exception carries an HTTP status code and optional details.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code (default 500).
        detail: Optional additional context.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response body."""
        result: dict[str, Any] = {"error": self.message}
        if self.detail:
            result["details"] = self.detail
        return result


class ConfigurationError(AppError):
    """Raised when the data store connection settings are missing."""

    def __init__(self, message: str = "store credentials not configured"):
        super().__init__(message, status_code=500)


class ClientInputError(AppError):
    """Raised when the request payload cannot be used at all.

    Use for a missing or malformed dApp object in the request body.
    """

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class ValidationError(AppError):
    """Raised when a save request fails operation-level validation.

    Covers a missing id on UPDATE and unknown operation names. These
    are reported with status 500, matching the deployed endpoint.
    """

    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class PersistenceError(AppError):
    """Raised when the data store rejects an insert or update.

    Attributes:
        operation: The save operation that failed (INSERT or UPDATE).
    """

    def __init__(self, operation: str, reason: str):
        label = "Insert" if operation == "INSERT" else "Update"
        super().__init__(f"{label} failed: {reason}", status_code=500)
        self.operation = operation
        self.reason = reason
