"""
Chunk domain models for document processing pipeline.

Chunk is the unit of retrieval; ScoredChunk is the transient retrieval-time
annotation of a chunk against one query.

Dependencies: pydantic
System role: Data structures for document chunks in ingestion and retrieval
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Immutable segment of a document's text."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    content: str = Field(min_length=1, description="Chunk text content")
    chunk_index: int = Field(ge=0, description="0-based reading order within the document")
    page_number: int = Field(default=0, ge=0, description="Best-effort page hint, 0 when unknown")


class ScoredChunk(BaseModel):
    """Chunk annotated with its relevance to a query. Never persisted."""

    model_config = ConfigDict(frozen=True)

    chunk: Chunk
    score: float = Field(description="Length-normalized, position-weighted score")
    raw_score: float = Field(description="Unnormalized match score")
    matched_terms: int = Field(ge=0, description="Distinct query terms found in the chunk")

    @property
    def chunk_index(self) -> int:
        return self.chunk.chunk_index
