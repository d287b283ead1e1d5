"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel
with document-specific query methods for status tracking.

Dependencies: sqlalchemy, studyrag.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from studyrag.boundary.db.base import utc_now
from studyrag.boundary.db.CRUD.base_crud import BaseCRUD, IdLike, as_uuid
from studyrag.boundary.db.models.document_model import DocumentModel
from studyrag.core.document_processing.models import DocumentStatus


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Status updates only apply to documents still in PROCESSING, so a
    terminal READY or FAILED row is never overwritten.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_status(
        self,
        session: AsyncSession,
        status: DocumentStatus,
        limit: int | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents by processing status.

        Args:
            session: Async database session
            status: Document processing status to filter by
            limit: Maximum number of documents to return

        Returns:
            Sequence of DocumentModels with matching status
        """
        stmt = select(DocumentModel).where(DocumentModel.status == status)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_recent(
        self,
        session: AsyncSession,
        limit: int | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents newest upload first.

        Args:
            session: Async database session
            limit: Maximum number of documents to return

        Returns:
            Sequence of DocumentModels ordered by upload_date descending
        """
        stmt = select(DocumentModel).order_by(DocumentModel.upload_date.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_status(
        self,
        session: AsyncSession,
        id: IdLike,
        status: DocumentStatus,
        **fields,
    ) -> DocumentModel | None:
        """
        Move a PROCESSING document to a new status.

        Args:
            session: Async database session
            id: Document UUID
            status: New processing status
            **fields: Extra columns written in the same statement

        Returns:
            Updated DocumentModel, None if missing or no longer PROCESSING
        """
        stmt = (
            update(DocumentModel)
            .where(
                DocumentModel.id == as_uuid(id),
                DocumentModel.status == DocumentStatus.PROCESSING,
            )
            .values(status=status, **fields)
            .returning(DocumentModel)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def mark_ready(
        self,
        session: AsyncSession,
        id: IdLike,
        extracted_text: str,
    ) -> DocumentModel | None:
        """
        Mark document as successfully processed.

        Args:
            session: Async database session
            id: Document UUID
            extracted_text: Full text extracted from the raw document

        Returns:
            Updated DocumentModel if it was PROCESSING, None otherwise
        """
        return await self.update_status(
            session,
            id,
            DocumentStatus.READY,
            extracted_text=extracted_text,
            error_message=None,
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        id: IdLike,
        error_message: str,
    ) -> DocumentModel | None:
        """
        Mark document as failed with error details.

        Args:
            session: Async database session
            id: Document UUID
            error_message: Human-readable error description

        Returns:
            Updated DocumentModel if it was PROCESSING, None otherwise
        """
        return await self.update_status(
            session,
            id,
            DocumentStatus.FAILED,
            extracted_text="",
            error_message=error_message,
        )

    async def touch(self, session: AsyncSession, id: IdLike) -> DocumentModel | None:
        """
        Refresh last_accessed for a document.

        Args:
            session: Async database session
            id: Document UUID

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        return await self.update_by_id(session, id, last_accessed=utc_now())


document_crud = DocumentCRUD()
