"""Dapp operation log model."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from dapp_admin.db.base import Base
from dapp_admin.db.base import JsonDocument


class DappOperationLog(Base):
    """Append-only audit entry for a save request phase."""

    __tablename__ = "dapp_operation_logs"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    operation_type: Mapped[str] = mapped_column(
        Text(),
        nullable=False,
        comment="EDGE_FUNCTION_REQUEST, EDGE_FUNCTION_SUCCESS, or EDGE_FUNCTION_ERROR",
    )
    dapp_id: Mapped[Optional[str]] = mapped_column(
        Text(),
        nullable=True,
        comment="Subject dapp, when known at the time of logging",
    )
    data: Mapped[Optional[dict]] = mapped_column(
        JsonDocument,
        nullable=True,
        comment="Request, result, or error snapshot with a timestamp",
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )
