"""Data store access for dapp listings and their operation log.

The handler depends on the small ``DappStore`` protocol rather than on
SQLAlchemy, so tests can substitute an in-memory store. ``SqlDappStore``
is the production implementation: every call runs in its own session
and commits on success, so a log write and a listing write never share
a transaction.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any
from typing import Iterator
from typing import Mapping
from typing import Optional
from typing import Protocol
from uuid import uuid4

from sqlalchemy import insert
from sqlalchemy import select
from sqlalchemy import update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dapp_admin.db.models import Dapp
from dapp_admin.db.models import DappOperationLog
from dapp_admin.utils.parsers import is_blank
from dapp_admin.utils.parsers import to_json_safe

Row = dict[str, Any]


class StoreError(Exception):
    """Raised when the data store rejects an operation.

    Attributes:
        message: The store's description of the failure.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DappStore(Protocol):
    """Insert, update and select capabilities used by the save handler."""

    def insert_dapp(self, row: Mapping[str, Any]) -> list[Row]: ...

    def update_dapp(self, dapp_id: Any, changes: Mapping[str, Any]) -> list[Row]: ...

    def select_dapps(self, dapp_id: Any) -> list[Row]: ...

    def insert_operation_log(
        self,
        operation_type: str,
        dapp_id: Optional[str],
        data: Mapping[str, Any],
    ) -> None: ...


class SqlDappStore:
    """SQLAlchemy implementation of ``DappStore``."""

    def __init__(self, engine: Engine):
        """Initialize the store.

        Args:
            engine: Engine bound to the database holding both tables.
        """
        self._engine = engine
        self._dapps = Dapp.__table__
        self._logs = DappOperationLog.__table__

    def insert_dapp(self, row: Mapping[str, Any]) -> list[Row]:
        """Insert one listing and return it as stored.

        Keys that are not columns of ``dapps`` are rejected by the store.
        An id is generated when the row does not carry one.
        """
        values = dict(row)
        raw_id = values.pop("id", None)
        dapp_id = str(uuid4()) if is_blank(raw_id) else str(raw_id)
        values["id"] = dapp_id

        with self._session() as session:
            session.execute(insert(self._dapps).values(**values))
            rows = self._select(session, dapp_id)
            session.commit()
        return rows

    def update_dapp(self, dapp_id: Any, changes: Mapping[str, Any]) -> list[Row]:
        """Apply a partial update to one listing and return affected rows.

        An empty ``changes`` mapping performs no write but still returns
        the rows matching ``dapp_id``.
        """
        key = str(dapp_id)
        with self._session() as session:
            if changes:
                session.execute(
                    update(self._dapps)
                    .where(self._dapps.c.id == key)
                    .values(**dict(changes))
                )
            rows = self._select(session, key)
            session.commit()
        return rows

    def select_dapps(self, dapp_id: Any) -> list[Row]:
        """Return the listings whose id matches ``dapp_id``."""
        key = str(dapp_id)
        with self._session() as session:
            return self._select(session, key)

    def insert_operation_log(
        self,
        operation_type: str,
        dapp_id: Optional[str],
        data: Mapping[str, Any],
    ) -> None:
        """Append one entry to ``dapp_operation_logs``."""
        with self._session() as session:
            session.execute(
                insert(self._logs).values(
                    operation_type=operation_type,
                    dapp_id=None if dapp_id is None else str(dapp_id),
                    data=to_json_safe(data),
                )
            )
            session.commit()

    def _select(self, session: Session, key: str) -> list[Row]:
        result = session.execute(select(self._dapps).where(self._dapps.c.id == key))
        return [to_json_safe(dict(mapping)) for mapping in result.mappings().all()]

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with Session(self._engine) as session:
                yield session
        except SQLAlchemyError as exc:
            raise StoreError(_describe(exc)) from exc


def _describe(exc: SQLAlchemyError) -> str:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig).strip()
    return str(exc.args[0]) if exc.args else str(exc)
