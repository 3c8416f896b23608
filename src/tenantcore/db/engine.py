"""Async engine and session management.

SQLite (``sqlite+aiosqlite``) for development and tests, PostgreSQL
(``postgresql+asyncpg``) in production. The engine is cached per
configuration and rebuilt when the database settings change.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from ..exceptions import DatabaseConnectionError

if TYPE_CHECKING:
    from ..config import TenantCoreConfig

_ENGINE: AsyncEngine | None = None
_ENGINE_KEY: tuple[Any, ...] | None = None
_SESSIONMAKER: async_sessionmaker[AsyncSession] | None = None


def _cache_key(config: TenantCoreConfig) -> tuple[Any, ...]:
    return (config.database_url, config.database_echo)


def is_sqlite_memory_url(url: URL) -> bool:
    database = (url.database or "").strip()
    if not database or database == ":memory:":
        return True
    if database.startswith("file:"):
        query = dict(url.query or {})
        if query.get("mode") == "memory":
            return True
    return False


def create_engine(config: TenantCoreConfig) -> AsyncEngine:
    """Build an async engine for ``config.database_url``."""
    url = make_url(config.database_url)
    engine_kwargs: dict[str, Any] = {"echo": config.database_echo}

    if url.get_backend_name() == "sqlite":
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        engine_kwargs["poolclass"] = StaticPool if is_sqlite_memory_url(url) else NullPool
    else:
        engine_kwargs["pool_pre_ping"] = True

    engine = create_async_engine(url.render_as_string(hide_password=False), **engine_kwargs)

    if url.get_backend_name() == "sqlite":

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, _connection_record) -> None:
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
            finally:
                cursor.close()

    return engine


def get_engine(config: TenantCoreConfig | None = None) -> AsyncEngine:
    """Return a cached async engine matching the active configuration."""
    global _ENGINE, _ENGINE_KEY, _SESSIONMAKER
    if config is None:
        from ..config import load_config_from_env

        config = load_config_from_env()
    key = _cache_key(config)
    if _ENGINE is None or _ENGINE_KEY != key:
        if _ENGINE is not None:
            _ENGINE.sync_engine.dispose()
        _ENGINE = create_engine(config)
        _ENGINE_KEY = key
        _SESSIONMAKER = None
    return _ENGINE


def get_sessionmaker(engine: AsyncEngine | None = None) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to ``engine`` (default: the cached engine)."""
    global _SESSIONMAKER
    if engine is not None:
        return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    if _SESSIONMAKER is None:
        _SESSIONMAKER = async_sessionmaker(get_engine(), expire_on_commit=False, autoflush=False)
    return _SESSIONMAKER


@asynccontextmanager
async def session_scope(
    sessionmaker: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """Request-scoped session: commit on success, roll back on error.

    Usage::

        async with session_scope() as db:
            ctx = await build_request_context(db, sessionmaker, tenant_id=tid)
    """
    factory = sessionmaker or get_sessionmaker()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create all mapped tables (development and tests)."""
    from .models import Base

    engine = engine or get_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except OperationalError as exc:
        raise DatabaseConnectionError(f"Could not initialise database: {exc}") from exc


def reset_database_state() -> None:
    """Dispose the cached engine and session factory."""
    global _ENGINE, _ENGINE_KEY, _SESSIONMAKER
    if _ENGINE is not None:
        _ENGINE.sync_engine.dispose()
    _ENGINE = None
    _ENGINE_KEY = None
    _SESSIONMAKER = None


__all__ = [
    "create_engine",
    "get_engine",
    "get_sessionmaker",
    "init_db",
    "is_sqlite_memory_url",
    "reset_database_state",
    "session_scope",
]
