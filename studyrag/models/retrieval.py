"""
Retrieval result schema handed to answer generation.

Dependencies: pydantic
System role: Retrieval API contracts
"""

from pydantic import BaseModel, Field

from studyrag.core.document_processing.models import Chunk, ScoredChunk


class RetrievalResult(BaseModel):
    """Chunks selected for a query, best first."""

    query: str
    chunks: list[Chunk] = Field(default_factory=list)
    scores: list[float] = Field(
        default_factory=list,
        description="Score per chunk; empty when no query term was usable",
    )

    @property
    def relevant_chunks(self) -> list[int]:
        """Chunk indices in result order."""
        return [chunk.chunk_index for chunk in self.chunks]

    @property
    def context(self) -> str:
        """Chunk contents joined for downstream prompting."""
        return "\n\n".join(chunk.content for chunk in self.chunks)

    @classmethod
    def from_scored(cls, query: str, scored: list[ScoredChunk]) -> "RetrievalResult":
        return cls(
            query=query,
            chunks=[s.chunk for s in scored],
            scores=[s.score for s in scored],
        )
