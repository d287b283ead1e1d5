"""
Top-k lexical retrieval over a document's chunks.

Scores every chunk, drops non-positive scores and orders the rest by score,
then distinct matched terms, then reading order.

Dependencies: studyrag.core.lexical_scorer, studyrag chunk models
System role: RAG retrieval business logic
"""

from collections.abc import Sequence

from studyrag.core.document_processing.configs import DocumentPipelineSettings
from studyrag.core.document_processing.models import Chunk, ScoredChunk
from studyrag.core.lexical_scorer import LexicalScorer

DEFAULT_TOP_K = 3


def _ranking_key(candidate: ScoredChunk) -> tuple[float, int, int]:
    return (-candidate.score, -candidate.matched_terms, candidate.chunk_index)


class Retriever:
    """Retrieval business logic."""

    def __init__(self, scorer: LexicalScorer | None = None, top_k: int = DEFAULT_TOP_K) -> None:
        """
        Initialize retriever.

        Args:
            scorer: Lexical scorer (default stop words if None)
            top_k: Number of chunks returned when k is not given
        """
        self._scorer = scorer or LexicalScorer()
        self.top_k = top_k

    def has_usable_terms(self, query: str | None) -> bool:
        return bool(self._scorer.terms(query))

    @classmethod
    def from_settings(cls, settings: DocumentPipelineSettings) -> "Retriever":
        return cls(top_k=settings.retrieval_top_k)

    def rank(
        self,
        chunks: Sequence[Chunk],
        query: str | None,
        k: int | None = None,
    ) -> list[ScoredChunk]:
        """
        Score and rank chunks against a query.

        Returns an empty list when the query has no usable terms; callers
        wanting the reading-order fallback should use retrieve().

        Args:
            chunks: Chunks of one document
            query: Free-text query
            k: Maximum number of results (top_k if None)

        Returns:
            list[ScoredChunk]: Positive-score candidates, best first
        """
        k = self.top_k if k is None else k
        terms = self._scorer.terms(query)
        if not chunks or not terms or k <= 0:
            return []

        corpus_size = len(chunks)
        candidates = [
            self._scorer.score(chunk, terms, position, corpus_size)
            for position, chunk in enumerate(chunks)
        ]
        ranked = sorted((c for c in candidates if c.score > 0), key=_ranking_key)
        return ranked[:k]

    def retrieve(
        self,
        chunks: Sequence[Chunk],
        query: str | None,
        k: int | None = None,
    ) -> list[Chunk]:
        """
        Retrieve the chunks most relevant to a query.

        Args:
            chunks: Chunks of one document
            query: Free-text query
            k: Maximum number of results (top_k if None)

        Returns:
            list[Chunk]: At most k chunks; the first k in reading order when the
            query consists only of stop words or very short words
        """
        k = self.top_k if k is None else k
        if not chunks or not query or not query.strip() or k <= 0:
            return []

        if not self.has_usable_terms(query):
            return sorted(chunks, key=lambda chunk: chunk.chunk_index)[:k]

        return [candidate.chunk for candidate in self.rank(chunks, query, k)]


def find_relevant_chunks(
    chunks: Sequence[Chunk],
    query: str | None,
    k: int = DEFAULT_TOP_K,
) -> list[Chunk]:
    """Retrieve the top-k chunks for a query with the default scorer."""
    return Retriever().retrieve(chunks, query, k)
