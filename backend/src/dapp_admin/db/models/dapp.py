"""Dapp listing model."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from dapp_admin.db.base import Base
from dapp_admin.db.base import TextList


class Dapp(Base):
    """Decentralized application listing shown in the directory."""

    __tablename__ = "dapps"

    id: Mapped[str] = mapped_column(
        Text(),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Opaque listing identifier, generated when not supplied",
    )
    name: Mapped[str] = mapped_column(Text(), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    problem_solved: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    category_id: Mapped[Optional[str]] = mapped_column(
        Text(),
        nullable=True,
        comment="Identifier of the category the listing belongs to",
    )
    sub_category: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    blockchains: Mapped[List[str]] = mapped_column(
        TextList,
        nullable=False,
        default=list,
        comment="Chains the dapp is deployed on, in display order",
    )
    is_new: Mapped[bool] = mapped_column(
        sa.Boolean(),
        nullable=False,
        default=False,
        server_default=sa.false(),
    )
    is_featured: Mapped[bool] = mapped_column(
        sa.Boolean(),
        nullable=False,
        default=False,
        server_default=sa.false(),
    )
    live_url: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    github_url: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    twitter_url: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    documentation_url: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    discord_url: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
        onupdate=sa.func.now(),
    )
