"""
Chunk ORM model.

Stores the retrievable text segments of a READY document. Rows are written
once, at the PROCESSING → READY transition, and never updated.

Dependencies: sqlalchemy, studyrag.boundary.db.base
System role: Chunk persistence for lexical retrieval
"""

import uuid

from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyrag.boundary.db.base import Base, UUIDMixin
from studyrag.core.document_processing.models import Chunk


class ChunkModel(Base, UUIDMixin):
    """
    Chunk ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        document_id: Owning document (cascade delete)
        chunk_index: 0-based reading order, unique per document
        page_number: Best-effort page hint, 0 when unknown
        content: Chunk text
    """

    __tablename__ = "document_chunks"
    __table_args__ = (
        UniqueConstraint("document_id", "chunk_index", name="uq_document_chunk_index"),
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    page_number: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    document = relationship("DocumentModel", back_populates="chunks")

    def to_chunk(self) -> Chunk:
        """Convert the row to the immutable domain chunk."""
        return Chunk(
            content=self.content,
            chunk_index=self.chunk_index,
            page_number=self.page_number or 0,
        )
