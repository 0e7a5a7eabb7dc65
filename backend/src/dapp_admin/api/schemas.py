"""Pydantic schemas for the save-dapp endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict

from dapp_admin.db.models import SaveOperation


class SaveDappRequest(BaseModel):
    """Request body: the dapp document and the operation to apply.

    Both fields are kept loose; the handler decides how to report a
    missing dapp or an unknown operation.
    """

    model_config = ConfigDict(extra="ignore")

    dapp: Any = None
    operation: Any = SaveOperation.INSERT.value


class SaveDappResult(BaseModel):
    """Successful save response body."""

    success: bool = True
    operation: str
    data: list[dict[str, Any]]
    id: Any = None
