"""
Test suite for database connection helpers.

System role: Verification of table creation and session factory wiring
"""

from unittest.mock import patch

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from studyrag.boundary.db.connection import (
    create_tables,
    create_worker_engine,
    get_async_db,
    get_async_session_factory,
)
from studyrag.boundary.db.CRUD.document_crud import document_crud


@pytest.fixture
async def bare_engine():
    """Provide an in-memory SQLite engine without tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    await engine.dispose()


class TestConnectionHelpers:
    """Test create_tables() and get_async_session_factory()."""

    @pytest.mark.asyncio
    async def test_create_tables(self, bare_engine) -> None:
        """Test documents and document_chunks tables are created."""
        await create_tables(bare_engine)

        async with bare_engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

        assert {"documents", "document_chunks"} <= set(tables)

    @pytest.mark.asyncio
    async def test_session_factory_keeps_objects_after_commit(self, bare_engine) -> None:
        """Test sessions do not expire loaded objects on commit."""
        await create_tables(bare_engine)
        factory = get_async_session_factory(bare_engine)

        async with factory() as session:
            document = await document_crud.create(
                session, title="Optics", file_name="optics.txt", file_path="/uploads/optics.txt"
            )
            await session.commit()

            assert document.title == "Optics"


class TestWorkerEngine:
    """Test create_worker_engine()."""

    @pytest.mark.asyncio
    async def test_engine_is_unpooled(self, tmp_path) -> None:
        """Test worker engines open a fresh connection per checkout."""
        engine = create_worker_engine(f"sqlite+aiosqlite:///{tmp_path / 'unpooled.db'}")
        try:
            await create_tables(engine)

            assert isinstance(engine.pool, NullPool)
        finally:
            await engine.dispose()


class TestGetAsyncDb:
    """Test get_async_db() session dependency."""

    @pytest.mark.asyncio
    async def test_yields_usable_session(
        self,
        test_session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        """Test exactly one session is yielded and committed work persists."""
        with patch(
            "studyrag.boundary.db.connection.get_async_session_factory",
            return_value=test_session_factory,
        ):
            sessions = []
            async for db in get_async_db():
                document = await document_crud.create(
                    db, title="Acoustics", file_name="a.txt", file_path="/uploads/a.txt"
                )
                await db.commit()
                sessions.append(db)

        assert len(sessions) == 1
        async with test_session_factory() as session:
            assert await document_crud.exists(session, document.id)

    @pytest.mark.asyncio
    async def test_close_discards_uncommitted_work(
        self,
        test_session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        """Test closing the dependency rolls back what the handler left open."""
        with patch(
            "studyrag.boundary.db.connection.get_async_session_factory",
            return_value=test_session_factory,
        ):
            dependency = get_async_db()
            db = await dependency.__anext__()
            document = await document_crud.create(
                db, title="Draft", file_name="d.txt", file_path="/uploads/d.txt"
            )
            document_id = document.id
            await dependency.aclose()

        async with test_session_factory() as session:
            assert not await document_crud.exists(session, document_id)
