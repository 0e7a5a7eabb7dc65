"""Database base class for SQLAlchemy models."""

from __future__ import annotations

from typing import Any

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# PostgreSQL gets native types; other dialects (SQLite in tests) store JSON.
JsonDocument = sa.JSON().with_variant(JSONB(), "postgresql")
TextList = sa.JSON().with_variant(ARRAY(sa.Text()), "postgresql")


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""

    # Type hint for id column - actual column defined in subclasses
    id: Any
