"""
Database engine and session management.

The store is an in-memory SQLite database. Every call to ``init_db`` drops
and recreates the schema, so data does not survive a restart.

All sessions are handed out through ``session_scope``, which holds a
process-wide lock for the lifetime of the session. The in-memory database
lives on a single shared connection, so units of work must not interleave.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from turfbook.core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _engine_kwargs() -> dict:
    is_sqlite = settings.DATABASE_URL.startswith("sqlite")
    kwargs = {"echo": False}
    if is_sqlite:
        # One shared connection, otherwise each checkout gets an empty :memory: db
        kwargs["connect_args"] = {"check_same_thread": False}
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_async_engine(settings.DATABASE_URL, **_engine_kwargs())

if settings.DATABASE_URL.startswith("sqlite"):
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

_store_lock: Optional[asyncio.Lock] = None


def _get_store_lock() -> asyncio.Lock:
    global _store_lock
    if _store_lock is None:
        _store_lock = asyncio.Lock()
    return _store_lock


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """Open a session while holding the store lock."""
    async with _get_store_lock():
        async with AsyncSessionLocal() as session:
            yield session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields a database session."""
    async with session_scope() as session:
        yield session


async def init_db() -> None:
    """Drop and recreate all tables."""
    global _store_lock
    # Import models so they register on Base.metadata
    import turfbook.models  # noqa: F401

    _store_lock = asyncio.Lock()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema created")


async def close_db() -> None:
    """Dispose the engine; an in-memory database is discarded with it."""
    await engine.dispose()
    logger.info("Database engine disposed")
