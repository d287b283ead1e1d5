"""
Document storage collaborator for the ingestion pipeline.

Defines the DocumentStore protocol the pipeline writes through and an
in-memory implementation for development and tests. The SQL-backed store
lives in studyrag.boundary.db.sql_document_store.

Dependencies: asyncio, contextlib
System role: Persistence seam for document status and chunks
"""

import asyncio
import logging
import uuid
from collections.abc import Callable, Sequence
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Protocol

from studyrag.core.document_processing.models import Chunk, DocumentStatus, ensure_transition
from studyrag.core.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)

class DocumentStore(Protocol):
    """Storage operations used by an ingestion run."""

    async def save_chunks(
        self,
        document_id: str,
        chunks: Sequence[Chunk],
        extracted_text: str,
    ) -> None: ...

    async def load_chunks(self, document_id: str) -> list[Chunk]: ...

    async def get_status(self, document_id: str) -> DocumentStatus: ...

    async def set_status(
        self,
        document_id: str,
        status: DocumentStatus,
        error_message: str | None = None,
    ) -> None: ...


StoreScope = Callable[[], AbstractAsyncContextManager[DocumentStore]]


@dataclass
class StoredDocument:
    """In-memory document record."""

    id: str
    title: str = ""
    file_path: str = ""
    status: DocumentStatus = DocumentStatus.PROCESSING
    extracted_text: str = ""
    error_message: str | None = None
    chunks: list[Chunk] = field(default_factory=list)
    staged_text: str | None = None
    staged_chunks: list[Chunk] | None = None


class InMemoryDocumentStore:
    """
    Dict-backed DocumentStore.

    save_chunks stages text and chunks; they become visible only when the
    document transitions to READY, and are dropped on FAILED.
    """

    def __init__(self) -> None:
        self._documents: dict[str, StoredDocument] = {}
        self._lock = asyncio.Lock()

    def create_document(
        self,
        document_id: str | None = None,
        title: str = "",
        file_path: str = "",
    ) -> str:
        """
        Register a new document in PROCESSING.

        Returns:
            str: Document identifier
        """
        doc_id = document_id or str(uuid.uuid4())
        self._documents[doc_id] = StoredDocument(id=doc_id, title=title, file_path=file_path)
        return doc_id

    def get(self, document_id: str) -> StoredDocument:
        try:
            return self._documents[str(document_id)]
        except KeyError:
            raise DocumentNotFoundError(str(document_id)) from None

    async def save_chunks(
        self,
        document_id: str,
        chunks: Sequence[Chunk],
        extracted_text: str,
    ) -> None:
        async with self._lock:
            document = self.get(document_id)
            document.staged_chunks = list(chunks)
            document.staged_text = extracted_text

    async def load_chunks(self, document_id: str) -> list[Chunk]:
        return sorted(self.get(document_id).chunks, key=lambda c: c.chunk_index)

    async def get_status(self, document_id: str) -> DocumentStatus:
        return self.get(document_id).status

    async def set_status(
        self,
        document_id: str,
        status: DocumentStatus,
        error_message: str | None = None,
    ) -> None:
        async with self._lock:
            document = self.get(document_id)
            ensure_transition(document.status, status)

            if status == DocumentStatus.READY:
                document.chunks = document.staged_chunks or []
                document.extracted_text = document.staged_text or ""
                document.error_message = None
            else:
                document.chunks = []
                document.extracted_text = ""
                document.error_message = error_message or ""

            document.staged_chunks = None
            document.staged_text = None
            document.status = status

        logger.info(
            f"{__name__}:set_status - Document marked as {status.value.upper()}",
            extra={"document_id": document_id},
        )

    def scope(self) -> AbstractAsyncContextManager["InMemoryDocumentStore"]:
        """Return a StoreScope-compatible context manager yielding this store."""
        return _shared_scope(self)


@asynccontextmanager
async def _shared_scope(store: InMemoryDocumentStore) -> AsyncIterator[InMemoryDocumentStore]:
    yield store
