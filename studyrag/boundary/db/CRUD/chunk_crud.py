"""
Chunk CRUD operations.

Chunks are written in one batch per document and read back in
chunk_index order.

Dependencies: sqlalchemy, studyrag.boundary.db.models
System role: Chunk persistence operations
"""

from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from studyrag.boundary.db.CRUD.base_crud import BaseCRUD, IdLike, as_uuid
from studyrag.boundary.db.models.chunk_model import ChunkModel
from studyrag.core.document_processing.models import Chunk


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel scoped by owning document."""

    def __init__(self) -> None:
        """Initialize ChunkCRUD with ChunkModel."""
        super().__init__(ChunkModel)

    async def bulk_create(
        self,
        session: AsyncSession,
        document_id: IdLike,
        chunks: Sequence[Chunk],
    ) -> int:
        """
        Insert all chunks of a document.

        Args:
            session: Async database session
            document_id: Owning document UUID
            chunks: Domain chunks in reading order

        Returns:
            int: Number of rows added
        """
        session.add_all(
            ChunkModel(
                document_id=as_uuid(document_id),
                chunk_index=chunk.chunk_index,
                page_number=chunk.page_number,
                content=chunk.content,
            )
            for chunk in chunks
        )
        await session.flush()
        return len(chunks)

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: IdLike,
    ) -> Sequence[ChunkModel]:
        """
        Retrieve all chunks of a document in reading order.

        Args:
            session: Async database session
            document_id: Owning document UUID

        Returns:
            Sequence of ChunkModels ordered by chunk_index
        """
        stmt = (
            select(ChunkModel)
            .where(ChunkModel.document_id == as_uuid(document_id))
            .order_by(ChunkModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_by_document_id(self, session: AsyncSession, document_id: IdLike) -> int:
        """
        Delete all chunks of a document.

        Args:
            session: Async database session
            document_id: Owning document UUID

        Returns:
            int: Number of rows deleted
        """
        stmt = delete(ChunkModel).where(ChunkModel.document_id == as_uuid(document_id))
        result = await session.execute(stmt)
        return result.rowcount

    async def count_by_document_id(self, session: AsyncSession, document_id: IdLike) -> int:
        """Count chunks stored for a document."""
        stmt = select(func.count()).select_from(ChunkModel).where(
            ChunkModel.document_id == as_uuid(document_id)
        )
        result = await session.execute(stmt)
        return result.scalar_one()


chunk_crud = ChunkCRUD()
