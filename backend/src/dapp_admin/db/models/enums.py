"""Enum definitions for database models."""

from __future__ import annotations

import enum


class SaveOperation(str, enum.Enum):
    """Persistence operations accepted by the save endpoint."""

    INSERT = "INSERT"
    UPDATE = "UPDATE"


class OperationLogType(str, enum.Enum):
    """Phases recorded in the dapp operation log."""

    REQUEST = "EDGE_FUNCTION_REQUEST"
    SUCCESS = "EDGE_FUNCTION_SUCCESS"
    ERROR = "EDGE_FUNCTION_ERROR"
