"""
SQLAlchemy-backed DocumentStore.

Chunk rows and extracted text are staged in the session by save_chunks and
committed together with the READY status. A FAILED transition rolls the
staged work back first, so a failed run leaves no chunks behind.

Dependencies: sqlalchemy, studyrag.boundary.db.CRUD
System role: Database persistence layer for ingestion runs
"""

import logging
from collections.abc import Sequence
from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from studyrag.boundary.db.CRUD.base_crud import as_uuid
from studyrag.boundary.db.CRUD.chunk_crud import chunk_crud
from studyrag.boundary.db.CRUD.document_crud import document_crud
from studyrag.core.document_processing.models import Chunk, DocumentStatus, ensure_transition
from studyrag.core.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)


class SqlDocumentStore:
    """DocumentStore over the documents and document_chunks tables."""

    def __init__(self, db_session: AsyncSession) -> None:
        """
        Initialize with database session.

        Args:
            db_session: AsyncSession owned by one ingestion run or request
        """
        self.db = db_session
        self._staged_text: dict[UUID, str] = {}

    async def save_chunks(
        self,
        document_id: str,
        chunks: Sequence[Chunk],
        extracted_text: str,
    ) -> None:
        """
        Stage chunk rows for a document without committing.

        Args:
            document_id: Document UUID
            chunks: Chunks in reading order
            extracted_text: Full extracted text, written on READY
        """
        doc_uuid = as_uuid(document_id)
        await chunk_crud.bulk_create(self.db, doc_uuid, chunks)
        self._staged_text[doc_uuid] = extracted_text

    async def load_chunks(self, document_id: str) -> list[Chunk]:
        rows = await chunk_crud.get_by_document_id(self.db, as_uuid(document_id))
        return [row.to_chunk() for row in rows]

    async def get_status(self, document_id: str) -> DocumentStatus:
        document = await document_crud.get_by_id(self.db, as_uuid(document_id))
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        return DocumentStatus(document.status)

    async def set_status(
        self,
        document_id: str,
        status: DocumentStatus,
        error_message: str | None = None,
    ) -> None:
        """
        Transition a PROCESSING document to READY or FAILED and commit.

        Args:
            document_id: Document UUID
            status: Target status
            error_message: Failure reason (FAILED only)

        Raises:
            DocumentNotFoundError: Document does not exist
            InvalidStatusTransitionError: Document is not in PROCESSING
        """
        doc_uuid = as_uuid(document_id)
        try:
            if status == DocumentStatus.FAILED:
                await self.db.rollback()
                self._staged_text.pop(doc_uuid, None)

            current = await self.get_status(document_id)
            ensure_transition(current, status)

            if status == DocumentStatus.READY:
                await document_crud.mark_ready(
                    self.db, doc_uuid, self._staged_text.pop(doc_uuid, "")
                )
            else:
                await chunk_crud.delete_by_document_id(self.db, doc_uuid)
                await document_crud.mark_failed(
                    self.db, doc_uuid, error_message or ""
                )

            await self.db.commit()

            logger.info(
                f"{__name__}:set_status - Document marked as {status.value.upper()}",
                extra={"document_id": str(document_id)},
            )

        except Exception as e:
            logger.error(f"{__name__}:set_status - {type(e).__name__}: {e}")
            await self.db.rollback()
            raise


@asynccontextmanager
async def sql_store_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[SqlDocumentStore]:
    """
    Yield a SqlDocumentStore bound to a fresh session.

    Args:
        session_factory: Async session factory

    Yields:
        SqlDocumentStore: Store owning the session for the scope's lifetime
    """
    async with session_factory() as session:
        yield SqlDocumentStore(session)
