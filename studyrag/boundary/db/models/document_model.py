"""
Document ORM model.

Represents uploaded documents with processing status and extracted text.
Tracks the ingestion lifecycle from upload to retrievable chunks.

Dependencies: sqlalchemy, studyrag.boundary.db.base
System role: Document persistence for ingestion tracking
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyrag.boundary.db.base import Base, TimestampMixin, UUIDMixin, utc_now
from studyrag.core.document_processing.models import DocumentStatus


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model tracking ingestion pipeline state.

    Lifecycle: Upload (PROCESSING) → extraction and chunking → READY, or
    FAILED on any extraction or chunking error.

    Attributes:
        id: UUID primary key (auto-generated)
        title: User-facing title
        file_name: Original filename (255 char limit)
        file_path: Path or URL of the raw document (1024 char limit)
        file_size: Size of the raw document in bytes
        extracted_text: Full text, empty until READY
        status: Current processing state
        error_message: Null if success; human-readable error if FAILED
        upload_date: Upload timestamp (UTC)
        last_accessed: Last read or retrieval timestamp (UTC)

    Relationships:
        chunks: ChunkModel rows ordered by chunk_index
    """

    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    file_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Original filename",
    )

    file_path: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        doc="Path or URL for raw document",
    )

    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    extracted_text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=DocumentStatus.PROCESSING,
    )

    error_message: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        doc="Error details if processing failed",
    )

    upload_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    last_accessed: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        order_by="ChunkModel.chunk_index",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
