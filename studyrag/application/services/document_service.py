"""
Document service orchestrator.

Coordinates document upload, status tracking and retrieval. Upload returns
as soon as the PROCESSING record is committed; ingestion continues in the
background through DocumentPipeline.

Dependencies: studyrag.core, studyrag.boundary.db
System role: Document management orchestration
"""

import logging
from functools import partial
from pathlib import Path
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from studyrag.boundary.db.connection import get_async_session_factory
from studyrag.boundary.db.CRUD.chunk_crud import chunk_crud
from studyrag.boundary.db.CRUD.document_crud import document_crud
from studyrag.boundary.db.models.document_model import DocumentModel
from studyrag.boundary.db.sql_document_store import sql_store_scope
from studyrag.core.document_processing import (
    DocumentPipeline,
    DocumentPipelineSettings,
    DocumentStatus,
    get_pipeline_settings,
)
from studyrag.core.exceptions import (
    DocumentNotFoundError,
    NotReadyError,
    RetrievalError,
    ValidationError,
)
from studyrag.core.retriever import Retriever
from studyrag.models.document import DocumentListResponse, DocumentResponse
from studyrag.models.retrieval import RetrievalResult

logger = logging.getLogger(__name__)


def build_default_pipeline() -> DocumentPipeline:
    """Pipeline whose runs each open their own database session."""
    return DocumentPipeline(partial(sql_store_scope, get_async_session_factory()))


class DocumentService:
    """
    Document service orchestrator.

    Owns the request's AsyncSession. Ingestion runs never share it; each
    dispatched run opens its own session through the pipeline's store scope.
    """

    def __init__(
        self,
        db: AsyncSession,
        pipeline: DocumentPipeline | None = None,
        settings: DocumentPipelineSettings | None = None,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for database operations
            pipeline: Ingestion pipeline (SQL-backed default if None)
            settings: Pipeline settings used for retrieval defaults
        """
        self.db = db
        self.pipeline = pipeline or build_default_pipeline()
        self.retriever = Retriever.from_settings(settings or get_pipeline_settings())

    async def upload_document(
        self,
        title: str,
        file_name: str,
        file_path: str,
        file_size: int = 0,
    ) -> DocumentModel:
        """
        Register an uploaded file and start ingestion.

        Flow:
        1. Validate title and path
        2. Create the document in PROCESSING and commit
        3. Dispatch the pipeline without awaiting it

        Args:
            title: User-facing title
            file_name: Original filename
            file_path: Where the raw file was stored
            file_size: Size in bytes

        Returns:
            DocumentModel: The new document, still PROCESSING

        Raises:
            ValidationError: Missing title or path
        """
        if not title or not title.strip():
            raise ValidationError("Document title is required", field="title")
        if not file_path or not file_path.strip():
            raise ValidationError("File path is required", field="file_path")

        document = await document_crud.create(
            self.db,
            title=title.strip(),
            file_name=file_name or Path(file_path).name,
            file_path=file_path,
            file_size=file_size,
            status=DocumentStatus.PROCESSING,
        )
        await self.db.commit()

        logger.info(
            f"{__name__}:upload_document - Document created, dispatching ingestion",
            extra={"document_id": str(document.id), "file_name": document.file_name},
        )

        self.pipeline.dispatch(str(document.id), file_path)
        return document

    async def _get_or_raise(self, document_id: UUID) -> DocumentModel:
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        return document

    async def get_document(
        self,
        document_id: UUID,
        include_chunks: bool = False,
    ) -> DocumentResponse:
        """
        Fetch a document and refresh its last_accessed timestamp.

        Args:
            document_id: Document UUID
            include_chunks: Attach stored chunks in reading order

        Returns:
            DocumentResponse: Document metadata, optionally with chunks

        Raises:
            DocumentNotFoundError: Unknown document
        """
        await self._get_or_raise(document_id)
        document = await document_crud.touch(self.db, document_id)
        await self.db.commit()

        chunks = None
        if include_chunks:
            rows = await chunk_crud.get_by_document_id(self.db, document_id)
            chunks = [row.to_chunk() for row in rows]
        return DocumentResponse.from_model(document, chunks)

    async def list_documents(self, limit: int | None = None) -> DocumentListResponse:
        """List documents, newest upload first."""
        documents = await document_crud.list_recent(self.db, limit=limit)
        return DocumentListResponse(
            documents=[DocumentResponse.from_model(d) for d in documents],
            total=len(documents),
        )

    async def get_status(self, document_id: UUID) -> DocumentStatus:
        document = await self._get_or_raise(document_id)
        return DocumentStatus(document.status)

    async def find_relevant_chunks(
        self,
        document_id: UUID,
        query: str,
        k: int | None = None,
    ) -> RetrievalResult:
        """
        Retrieve the chunks of a READY document most relevant to a query.

        Args:
            document_id: Document UUID
            query: Free-text query
            k: Maximum chunks to return (retrieval_top_k if None)

        Returns:
            RetrievalResult: Selected chunks, best first

        Raises:
            DocumentNotFoundError: Unknown document
            NotReadyError: Document is PROCESSING or FAILED
            RetrievalError: Chunks could not be loaded
        """
        document = await self._get_or_raise(document_id)
        status = DocumentStatus(document.status)
        if status != DocumentStatus.READY:
            raise NotReadyError(str(document_id), status.value)

        try:
            rows = await chunk_crud.get_by_document_id(self.db, document_id)
        except SQLAlchemyError as e:
            raise RetrievalError(f"Failed to load chunks: {e}", str(document_id)) from e
        chunks = [row.to_chunk() for row in rows]

        if self.retriever.has_usable_terms(query):
            result = RetrievalResult.from_scored(query, self.retriever.rank(chunks, query, k))
        else:
            result = RetrievalResult(query=query, chunks=self.retriever.retrieve(chunks, query, k))

        await document_crud.touch(self.db, document_id)
        await self.db.commit()

        logger.info(
            f"{__name__}:find_relevant_chunks - Retrieved {len(result.chunks)} chunks",
            extra={"document_id": str(document_id), "candidates": len(chunks)},
        )
        return result

    async def delete_document(self, document_id: UUID) -> None:
        """
        Delete a document and its chunks.

        Raises:
            DocumentNotFoundError: Unknown document
        """
        await self._get_or_raise(document_id)
        try:
            await chunk_crud.delete_by_document_id(self.db, document_id)
            await document_crud.delete_by_id(self.db, document_id)
            await self.db.commit()
        except Exception as e:
            logger.error(f"{__name__}:delete_document - {type(e).__name__}: {e}")
            await self.db.rollback()
            raise
