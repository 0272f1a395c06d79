"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations. PostgreSQL (asyncpg) is the
production backend; SQLite (aiosqlite) serves local development and tests.

Engine and session factory are created lazily on first use (get_db /
get_db_transactional) so import does not trigger Settings validation.
"""

import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from campus_events.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def build_engine(
    database_url: str,
    *,
    echo: bool = False,
    pool_size: int | None = None,
    max_overflow: int | None = None,
) -> AsyncEngine:
    """Create an async engine for database_url.

    SQLite connections get foreign keys enabled (report rows cascade with
    their event) and no pool sizing; other backends get a pre-pinged pool.

    pysqlite only emits BEGIN before DML, so a SAVEPOINT issued after a
    plain SELECT would open (and its RELEASE commit) the whole transaction.
    The driver is put in autocommit mode and BEGIN is emitted on every
    SQLAlchemy transaction start instead.
    """
    url = make_url(database_url)
    kwargs: dict[str, Any] = {"echo": echo}
    if url.get_backend_name() != "sqlite":
        kwargs.update(
            pool_pre_ping=True,
            pool_size=pool_size if pool_size is not None else 20,
            max_overflow=max_overflow if max_overflow is not None else 30,
            pool_recycle=3600,
        )
    new_engine = create_async_engine(database_url, **kwargs)

    if url.get_backend_name() == "sqlite":

        @event.listens_for(new_engine.sync_engine, "connect")
        def _sqlite_on_connect(dbapi_connection, _connection_record) -> None:
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
            finally:
                cursor.close()

        @event.listens_for(new_engine.sync_engine, "begin")
        def _sqlite_begin(conn) -> None:
            conn.exec_driver_sql("BEGIN")

    return new_engine


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


def _ensure_engine() -> async_sessionmaker[AsyncSession]:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is None:
        settings = get_settings()
        engine = build_engine(
            settings.database_url,
            echo=settings.database_echo,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )
        AsyncSessionLocal = build_sessionmaker(engine)
        logger.debug("Database engine created for %s", make_url(settings.database_url).drivername)
    return AsyncSessionLocal


async def dispose_engine() -> None:
    """Dispose the engine (application shutdown)."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None


async def get_db():
    """Database session dependency for read operations.

    Does not commit; use get_db_transactional for writes.
    Yields a session and closes it on exit.
    """
    session_factory = _ensure_engine()
    async with session_factory() as session:
        yield session


async def get_db_transactional():
    """Database session dependency for write operations.

    Begins a transaction, commits on success, rolls back on exception.
    Use for POST, PUT, PATCH, DELETE endpoints. A report insert and its
    report-count increment share this transaction.
    """
    session_factory = _ensure_engine()
    async with session_factory() as session:
        async with session.begin():
            yield session
