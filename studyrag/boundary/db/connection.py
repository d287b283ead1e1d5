"""
Database connection management.

Provides the async SQLAlchemy engine, session factories for request
handlers and background ingestion runs, and table creation.

Dependencies: sqlalchemy, studyrag.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from studyrag.boundary.db.base import Base
from studyrag.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    pool_pre_ping=True verifies connections before use to detect
    stale/broken connections early. The pool belongs to the event loop
    that first uses it; code that starts its own loop per call should use
    create_worker_engine() instead.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = get_settings().database

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def create_worker_engine(database_url: str | None = None) -> AsyncEngine:
    """
    Create an unpooled async engine for one worker task.

    asyncpg connections are bound to the event loop that opened them, so a
    task running under its own asyncio.run() must not reuse pooled
    connections from an earlier loop. The caller disposes the engine before
    its loop closes.

    Args:
        database_url: Async database URL (configured URL if None)

    Returns:
        AsyncEngine: Engine opening a fresh connection per checkout
    """
    db_config = get_settings().database

    return create_async_engine(
        database_url or db_config.async_database_url,
        echo=db_config.echo_sql,
        poolclass=NullPool,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    autocommit=False and autoflush=False give explicit transaction control.

    Args:
        engine: Engine to bind (configured engine if None)

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Session dependency for request handlers with automatic cleanup.

    Opens one session per request and closes it when the handler finishes,
    even if it raises.

    Yields:
        AsyncSession: Session scoped to the request lifetime

    Usage:
        async for db in get_async_db():
            service = DocumentService(db)
            await service.list_documents()
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Create all tables registered on Base.metadata."""
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
