"""Pytest configuration and fixtures for backend tests.

This module provides shared fixtures for testing the backend application,
including a SQLite-backed store, an in-memory fake store, API Gateway
events and mock AWS clients.
"""

from __future__ import annotations

import base64
import json
import os
import sys
from pathlib import Path
from typing import Any
from typing import Generator
from typing import Mapping
from typing import Optional
from uuid import uuid4

import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))


# --- Database Fixtures ---


@pytest.fixture
def test_engine():
    """Create a fresh database engine with both tables.

    Uses SQLite in-memory by default. Set TEST_DATABASE_URL to run the
    store tests against PostgreSQL instead.
    """
    from sqlalchemy import create_engine
    from sqlalchemy.pool import StaticPool

    from dapp_admin.db.base import Base

    database_url = os.getenv('TEST_DATABASE_URL', 'sqlite://')
    if database_url.startswith('sqlite'):
        engine = create_engine(
            database_url,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url)

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def sql_store(test_engine):
    """SQL store bound to the test engine."""
    from dapp_admin.db.store import SqlDappStore

    return SqlDappStore(test_engine)


@pytest.fixture
def db_session(test_engine) -> Generator:
    """Session for inspecting what the store committed."""
    from sqlalchemy.orm import Session

    with Session(test_engine) as session:
        yield session


# --- Fake Store ---


class FakeDappStore:
    """In-memory ``DappStore`` that records every call.

    Set ``fail_insert``, ``fail_update`` or ``fail_logs`` to a message to
    make the matching calls fail.
    """

    def __init__(self) -> None:
        self.rows: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, Any]] = []
        self.logs: list[dict[str, Any]] = []
        self.fail_insert: Optional[str] = None
        self.fail_update: Optional[str] = None
        self.fail_logs: Optional[str] = None

    def insert_dapp(self, row: Mapping[str, Any]) -> list[dict[str, Any]]:
        from dapp_admin.db.store import StoreError

        self.calls.append(('insert', dict(row)))
        if self.fail_insert:
            raise StoreError(self.fail_insert)
        stored = dict(row)
        stored.setdefault('id', str(uuid4()))
        self.rows[str(stored['id'])] = stored
        return [dict(stored)]

    def update_dapp(
        self, dapp_id: Any, changes: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        from dapp_admin.db.store import StoreError

        self.calls.append(('update', (dapp_id, dict(changes))))
        if self.fail_update:
            raise StoreError(self.fail_update)
        row = self.rows.get(str(dapp_id))
        if row is None:
            return []
        row.update(changes)
        return [dict(row)]

    def select_dapps(self, dapp_id: Any) -> list[dict[str, Any]]:
        self.calls.append(('select', dapp_id))
        row = self.rows.get(str(dapp_id))
        return [dict(row)] if row else []

    def insert_operation_log(
        self,
        operation_type: str,
        dapp_id: Optional[str],
        data: Mapping[str, Any],
    ) -> None:
        from dapp_admin.db.store import StoreError

        self.calls.append(('log', operation_type))
        if self.fail_logs:
            raise StoreError(self.fail_logs)
        self.logs.append(
            {
                'operation_type': operation_type,
                'dapp_id': dapp_id,
                'data': dict(data),
            }
        )

    @property
    def log_types(self) -> list[str]:
        return [entry['operation_type'] for entry in self.logs]


@pytest.fixture
def fake_store() -> FakeDappStore:
    """Fresh in-memory store."""
    return FakeDappStore()


@pytest.fixture
def store_config():
    """Fully configured store settings."""
    from dapp_admin.config import StoreConfig

    return StoreConfig(
        database_url='postgresql+psycopg://service_role@db.example.com:5432/postgres',
        service_key='service-role-secret',
    )


# --- Sample Data Factories ---


@pytest.fixture
def sample_dapp_data() -> dict:
    """Sample listing as submitted by the admin form."""
    return {
        'name': 'Uniswap',
        'description': 'Swap tokens on Ethereum',
        'problem_solved': 'Permissionless token exchange',
        'live_url': 'https://app.uniswap.org',
        'category_id': 'digital-assets',
        'sub_category': 'Exchanges',
    }


# --- API Event Fixtures ---


@pytest.fixture
def api_gateway_event() -> dict:
    """Base API Gateway event structure."""
    return {
        'httpMethod': 'POST',
        'path': '/functions/v1/admin-save-dapp',
        'queryStringParameters': {},
        'headers': {'content-type': 'application/json'},
        'requestContext': {
            'requestId': str(uuid4()),
        },
        'body': None,
        'isBase64Encoded': False,
    }


@pytest.fixture
def make_event(api_gateway_event):
    """Build a POST event carrying ``payload`` as its JSON body."""

    def _make(payload: Any, encode: bool = False) -> dict:
        event = dict(api_gateway_event)
        body = json.dumps(payload)
        if encode:
            body = base64.b64encode(body.encode('utf-8')).decode('ascii')
        event['body'] = body
        event['isBase64Encoded'] = encode
        return event

    return _make


# --- Mock Fixtures ---


@pytest.fixture
def mock_boto3_client(mocker):
    """Mock boto3 client for AWS service calls."""
    from dapp_admin.services.secrets import clear_secret_cache

    clear_secret_cache()
    mock = mocker.patch('boto3.client')
    yield mock
    clear_secret_cache()

