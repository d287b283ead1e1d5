"""
Keyword relevance scoring for document chunks.

Bag-of-words heuristic: whole-word hits weigh 3, partial (substring-only)
hits weigh 1.5, chunks matching several distinct terms get 2 per term,
the sum is divided by sqrt(chunk word count) and decays by up to 10%
towards the end of the document.

Dependencies: re, math, studyrag chunk models
System role: Scoring stage of lexical retrieval
"""

import math
import re
from collections.abc import Iterable

from studyrag.core.document_processing.models import Chunk, ScoredChunk

STOP_WORDS: frozenset[str] = frozenset({
    "the", "is", "at", "which", "on", "a", "an", "and", "or", "but",
    "in", "with", "to", "for", "of", "as", "by", "this", "that", "it",
})

MIN_TERM_LENGTH = 3
EXACT_MATCH_WEIGHT = 3
PARTIAL_MATCH_WEIGHT = 1.5
MULTI_TERM_WEIGHT = 2
POSITION_DECAY = 0.1


def extract_query_terms(query: str | None, stop_words: Iterable[str] = STOP_WORDS) -> list[str]:
    """
    Turn a free-text query into distinct scoring terms.

    Args:
        query: User query
        stop_words: Words never used as terms

    Returns:
        list[str]: Lowercased terms longer than two characters, first occurrence order
    """
    if not query:
        return []
    stop_words = frozenset(stop_words)
    terms = [
        word
        for word in query.lower().split()
        if len(word) >= MIN_TERM_LENGTH and word not in stop_words
    ]
    return list(dict.fromkeys(terms))


def _exact_matches(term: str, content: str) -> int:
    return len(re.findall(rf"\b{re.escape(term)}\b", content))


def score_chunk(
    chunk: Chunk,
    query_terms: Iterable[str],
    position: int,
    corpus_size: int,
) -> ScoredChunk:
    """
    Score one chunk against preprocessed query terms.

    Args:
        chunk: Chunk to score
        query_terms: Output of extract_query_terms
        position: Position of the chunk in the scored sequence
        corpus_size: Number of chunks in the scored sequence

    Returns:
        ScoredChunk: Chunk with score, raw score and distinct matched term count

    Raises:
        ValueError: When corpus_size is not positive
    """
    if corpus_size <= 0:
        raise ValueError("corpus_size must be positive")

    content = chunk.content.lower()
    raw_score = 0.0
    matched_terms = 0

    for term in query_terms:
        exact = _exact_matches(term, content)
        occurrences = content.count(term)
        raw_score += exact * EXACT_MATCH_WEIGHT
        raw_score += max(0, occurrences - exact) * PARTIAL_MATCH_WEIGHT
        if occurrences:
            matched_terms += 1

    if matched_terms > 1:
        raw_score += matched_terms * MULTI_TERM_WEIGHT

    normalized_score = raw_score / math.sqrt(len(content.split()))
    position_bonus = 1 - (position / corpus_size) * POSITION_DECAY

    return ScoredChunk(
        chunk=chunk,
        score=normalized_score * position_bonus,
        raw_score=raw_score,
        matched_terms=matched_terms,
    )


class LexicalScorer:
    """Query preprocessing and chunk scoring with a configurable stop-word set."""

    def __init__(self, stop_words: Iterable[str] = STOP_WORDS) -> None:
        self.stop_words = frozenset(stop_words)

    def terms(self, query: str | None) -> list[str]:
        """
        Extract usable query terms with this scorer's stop words.

        Args:
            query: Raw user query (None is treated as empty)

        Returns:
            list[str]: Lowercased, de-duplicated terms longer than two characters
        """
        return extract_query_terms(query, self.stop_words)

    def score(
        self,
        chunk: Chunk,
        query_terms: Iterable[str],
        position: int,
        corpus_size: int,
    ) -> ScoredChunk:
        """
        Score one chunk against terms from terms().

        Args:
            chunk: Chunk to score
            query_terms: Terms returned by terms()
            position: Position of the chunk in the scored sequence
            corpus_size: Number of chunks in the scored sequence

        Returns:
            ScoredChunk: Position-weighted score with its raw score and matched term count
        """
        return score_chunk(chunk, query_terms, position, corpus_size)
