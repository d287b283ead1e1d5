"""
Document domain models and schemas.

Response schemas for document operations.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel

from studyrag.core.document_processing.models import Chunk, DocumentStatus


class DocumentResponse(BaseModel):
    """Response schema for document operations."""

    id: uuid.UUID
    title: str
    file_name: str
    file_size: int
    status: DocumentStatus
    upload_date: datetime
    last_accessed: datetime
    error_message: str | None = None
    chunks: list[Chunk] | None = None

    @classmethod
    def from_model(cls, document, chunks: list[Chunk] | None = None) -> "DocumentResponse":
        """Build from a DocumentModel without touching its lazy chunks relationship."""
        return cls(
            id=document.id,
            title=document.title,
            file_name=document.file_name,
            file_size=document.file_size,
            status=document.status,
            upload_date=document.upload_date,
            last_accessed=document.last_accessed,
            error_message=document.error_message,
            chunks=chunks,
        )


class DocumentListResponse(BaseModel):
    """Document list response."""

    documents: list[DocumentResponse]
    total: int
