"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory SQLite async database, session factory, in-memory
document store, sample documents on disk
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    StaticPool keeps every session on the same connection so data committed
    by one session is visible to the next.

    Yields:
        AsyncEngine: Engine bound to a fresh in-memory database
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from studyrag.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Provide session factory bound to the test engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create async database session for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def in_memory_store():
    """Provide empty InMemoryDocumentStore."""
    from studyrag.core.document_processing.database import InMemoryDocumentStore

    return InMemoryDocumentStore()


@pytest.fixture
def mock_pipeline() -> MagicMock:
    """
    Create mock DocumentPipeline for service tests.

    Returns:
        MagicMock: Pipeline whose dispatch records calls without running
    """
    pipeline = MagicMock()
    pipeline.dispatch = MagicMock()
    return pipeline


@pytest.fixture
def lecture_notes_file(tmp_path: Path) -> Path:
    """
    Create a plain-text study document with three paragraphs.

    Returns:
        Path: Path to the text file
    """
    path = tmp_path / "lecture_notes.txt"
    path.write_text(
        "Photosynthesis converts light energy into chemical energy.\n\n"
        "Chlorophyll absorbs light mostly in the blue and red wavelengths.\n\n"
        "Cellular respiration releases the stored energy as ATP.",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def empty_text_file(tmp_path: Path) -> Path:
    """Create a text file containing only whitespace."""
    path = tmp_path / "empty.txt"
    path.write_text("   \n\n  ", encoding="utf-8")
    return path
