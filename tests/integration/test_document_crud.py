"""
Test suite for DocumentCRUD and ChunkCRUD database operations.

Runs against an in-memory SQLite database. Covers status filtering, the
PROCESSING-only status update guard, chunk batch writes and ordered reads.

System role: Verification of document persistence layer
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from studyrag.boundary.db.CRUD.base_crud import as_uuid
from studyrag.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from studyrag.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from studyrag.boundary.db.models import ChunkModel, DocumentModel
from studyrag.core.document_processing.models import Chunk, DocumentStatus


async def create_document(session: AsyncSession, title: str = "Genetics") -> DocumentModel:
    document = await document_crud.create(
        session,
        title=title,
        file_name=f"{title.lower()}.pdf",
        file_path=f"/uploads/{title.lower()}.pdf",
        file_size=1024,
    )
    await session.commit()
    return document


class TestDocumentCRUDInit:
    """Test suite for CRUD initialization."""

    def test_init_should_set_models(self) -> None:
        """Test CRUD classes bind their ORM models."""
        assert DocumentCRUD().model == DocumentModel
        assert ChunkCRUD().model == ChunkModel


class TestDocumentCRUDCreate:
    """Test suite for document creation defaults."""

    @pytest.mark.asyncio
    async def test_create_defaults_to_processing(self, test_async_db: AsyncSession) -> None:
        """Test new documents start PROCESSING with empty text."""
        document = await create_document(test_async_db)

        assert isinstance(document.id, uuid.UUID)
        assert document.status == DocumentStatus.PROCESSING
        assert document.extracted_text == ""
        assert document.error_message is None
        assert document.upload_date is not None

    @pytest.mark.asyncio
    async def test_exists_and_get_by_id(self, test_async_db: AsyncSession) -> None:
        """Test lookup by primary key."""
        document = await create_document(test_async_db)

        assert await document_crud.exists(test_async_db, document.id)
        assert not await document_crud.exists(test_async_db, uuid.uuid4())
        fetched = await document_crud.get_by_id(test_async_db, document.id)
        assert fetched.title == "Genetics"


class TestStringIds:
    """Test operations accept document ids as strings, as ingestion runs pass them."""

    def test_as_uuid(self) -> None:
        """Test string ids are parsed and UUIDs pass through."""
        value = uuid.uuid4()

        assert as_uuid(value) is value
        assert as_uuid(str(value)) == value
        with pytest.raises(ValueError):
            as_uuid("not-a-uuid")

    @pytest.mark.asyncio
    async def test_document_operations_with_string_id(self, test_async_db: AsyncSession) -> None:
        """Test lookups, status updates and deletes by string id."""
        document = await create_document(test_async_db)
        document_id = str(document.id)

        assert await document_crud.exists(test_async_db, document_id)
        assert (await document_crud.get_by_id(test_async_db, document_id)).id == document.id
        assert await document_crud.mark_failed(test_async_db, document_id, "bad scan") is not None
        assert await document_crud.delete_by_id(test_async_db, document_id)
        assert not await document_crud.exists(test_async_db, document.id)

    @pytest.mark.asyncio
    async def test_chunk_operations_with_string_id(self, test_async_db: AsyncSession) -> None:
        """Test chunk batch writes and reads by string document id."""
        document = await create_document(test_async_db)
        document_id = str(document.id)

        await chunk_crud.bulk_create(
            test_async_db, document_id, [Chunk(content="Mitosis has four phases.", chunk_index=0)]
        )

        rows = await chunk_crud.get_by_document_id(test_async_db, document_id)
        assert [row.document_id for row in rows] == [document.id]
        assert await chunk_crud.count_by_document_id(test_async_db, document_id) == 1
        assert await chunk_crud.delete_by_document_id(test_async_db, document_id) == 1


class TestDocumentCRUDStatus:
    """Test suite for status queries and transitions."""

    @pytest.mark.asyncio
    async def test_mark_ready_sets_text(self, test_async_db: AsyncSession) -> None:
        """Test mark_ready stores extracted text and READY."""
        document = await create_document(test_async_db)

        updated = await document_crud.mark_ready(test_async_db, document.id, "DNA is a polymer.")
        await test_async_db.commit()

        assert updated is not None
        assert updated.status == DocumentStatus.READY
        assert updated.extracted_text == "DNA is a polymer."

    @pytest.mark.asyncio
    async def test_mark_failed_sets_error(self, test_async_db: AsyncSession) -> None:
        """Test mark_failed records the error and clears text."""
        document = await create_document(test_async_db)

        updated = await document_crud.mark_failed(test_async_db, document.id, "corrupt PDF")
        await test_async_db.commit()

        assert updated.status == DocumentStatus.FAILED
        assert updated.error_message == "corrupt PDF"
        assert updated.extracted_text == ""

    @pytest.mark.asyncio
    async def test_terminal_status_is_not_overwritten(self, test_async_db: AsyncSession) -> None:
        """Test update_status matches only PROCESSING rows."""
        document = await create_document(test_async_db)
        await document_crud.mark_ready(test_async_db, document.id, "text")
        await test_async_db.commit()

        result = await document_crud.mark_failed(test_async_db, document.id, "late failure")
        await test_async_db.commit()

        assert result is None
        fetched = await document_crud.get_by_id(test_async_db, document.id)
        assert fetched.status == DocumentStatus.READY

    @pytest.mark.asyncio
    async def test_update_status_missing_document(self, test_async_db: AsyncSession) -> None:
        """Test update_status returns None for unknown ids."""
        assert await document_crud.mark_ready(test_async_db, uuid.uuid4(), "text") is None

    @pytest.mark.asyncio
    async def test_get_by_status(self, test_async_db: AsyncSession) -> None:
        """Test filtering documents by status."""
        ready = await create_document(test_async_db, "Ready")
        await create_document(test_async_db, "Pending")
        await document_crud.mark_ready(test_async_db, ready.id, "text")
        await test_async_db.commit()

        processing = await document_crud.get_by_status(test_async_db, DocumentStatus.PROCESSING)
        finished = await document_crud.get_by_status(test_async_db, DocumentStatus.READY)

        assert [d.title for d in processing] == ["Pending"]
        assert [d.id for d in finished] == [ready.id]

    @pytest.mark.asyncio
    async def test_list_recent_newest_first(self, test_async_db: AsyncSession) -> None:
        """Test list_recent orders by upload_date descending."""
        first = await create_document(test_async_db, "First")
        second = await create_document(test_async_db, "Second")
        await document_crud.update_by_id(
            test_async_db, first.id, upload_date=second.upload_date.replace(year=2020)
        )
        await test_async_db.commit()

        documents = await document_crud.list_recent(test_async_db)

        assert [d.title for d in documents] == ["Second", "First"]
        assert len(await document_crud.list_recent(test_async_db, limit=1)) == 1

    @pytest.mark.asyncio
    async def test_touch_updates_last_accessed(self, test_async_db: AsyncSession) -> None:
        """Test touch refreshes last_accessed."""
        document = await create_document(test_async_db)
        await document_crud.update_by_id(
            test_async_db, document.id, last_accessed=document.last_accessed.replace(year=2020)
        )
        await test_async_db.commit()

        touched = await document_crud.touch(test_async_db, document.id)

        assert touched.last_accessed.year > 2020


class TestChunkCRUD:
    """Test suite for chunk persistence."""

    @pytest.mark.asyncio
    async def test_bulk_create_and_read_in_order(self, test_async_db: AsyncSession) -> None:
        """Test chunks are returned by ascending chunk_index."""
        document = await create_document(test_async_db)
        chunks = [
            Chunk(content="second", chunk_index=1),
            Chunk(content="first", chunk_index=0),
            Chunk(content="third", chunk_index=2),
        ]

        added = await chunk_crud.bulk_create(test_async_db, document.id, chunks)
        await test_async_db.commit()

        rows = await chunk_crud.get_by_document_id(test_async_db, document.id)
        assert added == 3
        assert [row.to_chunk() for row in rows] == sorted(chunks, key=lambda c: c.chunk_index)
        assert await chunk_crud.count_by_document_id(test_async_db, document.id) == 3

    @pytest.mark.asyncio
    async def test_chunks_scoped_to_document(self, test_async_db: AsyncSession) -> None:
        """Test reads and deletes only touch the owning document's chunks."""
        biology = await create_document(test_async_db, "Biology")
        physics = await create_document(test_async_db, "Physics")
        await chunk_crud.bulk_create(test_async_db, biology.id, [Chunk(content="cells", chunk_index=0)])
        await chunk_crud.bulk_create(
            test_async_db,
            physics.id,
            [Chunk(content="forces", chunk_index=0), Chunk(content="energy", chunk_index=1)],
        )
        await test_async_db.commit()

        deleted = await chunk_crud.delete_by_document_id(test_async_db, physics.id)
        await test_async_db.commit()

        assert deleted == 2
        assert await chunk_crud.count_by_document_id(test_async_db, physics.id) == 0
        remaining = await chunk_crud.get_by_document_id(test_async_db, biology.id)
        assert [row.content for row in remaining] == ["cells"]

    @pytest.mark.asyncio
    async def test_bulk_create_empty(self, test_async_db: AsyncSession) -> None:
        """Test writing no chunks is a no-op."""
        document = await create_document(test_async_db)

        assert await chunk_crud.bulk_create(test_async_db, document.id, []) == 0
