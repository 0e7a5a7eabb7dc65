"""Centralized database engine management.

Engines are cached per URL so warm Lambda invocations reuse their
connection pool. The service credential is injected into the URL here
and never logged.
"""

from __future__ import annotations

import os
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from sqlalchemy.engine import Engine
from sqlalchemy.engine import make_url

from dapp_admin.config import StoreConfig

_ENGINE_CACHE: dict[str, Engine] = {}


def get_engine(config: StoreConfig, use_cache: bool = True) -> Engine:
    """Get or create a SQLAlchemy engine for the configured store.

    Args:
        config: Store configuration with URL and service credential.
        use_cache: Whether to reuse a cached engine for the same URL.

    Returns:
        A configured SQLAlchemy engine.
    """
    url = build_database_url(config)
    cache_key = url.render_as_string(hide_password=False)
    if use_cache and cache_key in _ENGINE_CACHE:
        return _ENGINE_CACHE[cache_key]

    if url.get_backend_name() == "postgresql":
        engine = create_engine(
            url,
            pool_pre_ping=True,
            connect_args=_get_connect_args(),
            **_get_pool_settings(),
        )
    else:
        engine = create_engine(url, pool_pre_ping=True)

    if use_cache:
        _ENGINE_CACHE[cache_key] = engine
    return engine


def build_database_url(config: StoreConfig) -> URL:
    """Return the configured URL with the service credential as password."""
    url = make_url(config.database_url)
    if url.get_backend_name() == "postgresql" and url.drivername == "postgresql":
        url = url.set(drivername="postgresql+psycopg")
    if url.password is None and config.service_key:
        url = url.set(password=config.service_key)
    return url


def clear_engine_cache() -> None:
    """Dispose and forget cached engines (useful in tests)."""
    for engine in _ENGINE_CACHE.values():
        engine.dispose()
    _ENGINE_CACHE.clear()


def _get_connect_args() -> dict[str, str]:
    """Return connection arguments for the psycopg driver."""
    return {"sslmode": os.getenv("DATABASE_SSLMODE", "require")}


def _get_pool_settings() -> dict[str, Any]:
    """Return small pool settings suited to one request per container."""
    return {
        "pool_size": int(os.getenv("DB_POOL_SIZE", "1")),
        "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", "0")),
        "pool_recycle": int(os.getenv("DB_POOL_RECYCLE", "300")),
        "pool_timeout": int(os.getenv("DB_POOL_TIMEOUT", "30")),
    }
