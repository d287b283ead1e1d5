"""
Paragraph-aware word chunking task.

Splits extracted document text into ordered, overlapping chunks. Sizes are
measured in whitespace-delimited words. Paragraphs are accumulated greedily;
paragraphs longer than the target size are cut into fixed word windows.

Dependencies: re, studyrag chunk model
System role: Second stage of document ingestion pipeline
"""

import re
from collections.abc import Iterator

from ..models import Chunk

PARAGRAPH_SEPARATOR = "\n\n"

_HORIZONTAL_WHITESPACE = re.compile(r"[^\S\n]+")
_SPACES_AROUND_NEWLINE = re.compile(r" *\n *")
_NEWLINES = re.compile(r"\n+")


def clean_text(text: str) -> str:
    """
    Normalize whitespace while keeping line structure.

    Args:
        text: Raw extracted text

    Returns:
        str: Text with unix line endings, single spaces and no padding around newlines
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _HORIZONTAL_WHITESPACE.sub(" ", text)
    text = _SPACES_AROUND_NEWLINE.sub("\n", text)
    return text.strip()


def split_paragraphs(cleaned: str) -> list[str]:
    """Split cleaned text on runs of newlines, dropping empty paragraphs."""
    return [p.strip() for p in _NEWLINES.split(cleaned) if p.strip()]


def word_windows(words: list[str], target_size: int, overlap: int) -> Iterator[str]:
    """
    Yield fixed-size word windows advancing by target_size - overlap.

    The last window may be shorter. Stops as soon as a window reaches the end.
    """
    step = target_size - overlap
    for start in range(0, len(words), step):
        yield " ".join(words[start:start + target_size])
        if start + target_size >= len(words):
            break


def _validate_sizes(target_size: int, overlap: int) -> None:
    if overlap < 0:
        raise ValueError("overlap cannot be negative")
    if target_size <= overlap:
        raise ValueError("target_size must be greater than overlap")


def chunk_text(text: str | None, target_size: int = 500, overlap: int = 50) -> list[Chunk]:
    """
    Split text into overlapping chunks.

    Args:
        text: Extracted document text
        target_size: Target chunk size in words
        overlap: Words carried over from one chunk into the next

    Returns:
        list[Chunk]: Chunks indexed 0..n-1 in reading order; empty for blank text

    Raises:
        ValueError: When target_size <= overlap or overlap < 0
    """
    _validate_sizes(target_size, overlap)
    if not text or not text.strip():
        return []

    cleaned = clean_text(text)
    contents: list[str] = []
    buffer: list[str] = []
    buffer_words = 0

    for paragraph in split_paragraphs(cleaned):
        words = paragraph.split()

        if len(words) > target_size:
            if buffer:
                contents.append(PARAGRAPH_SEPARATOR.join(buffer))
                buffer, buffer_words = [], 0
            contents.extend(word_windows(words, target_size, overlap))
            continue

        if buffer and buffer_words + len(words) > target_size:
            contents.append(PARAGRAPH_SEPARATOR.join(buffer))

            previous_words = " ".join(buffer).split()
            seed_size = min(overlap, len(previous_words))
            seed = previous_words[len(previous_words) - seed_size:]

            buffer = [" ".join(seed), paragraph] if seed else [paragraph]
            buffer_words = len(seed) + len(words)
        else:
            buffer.append(paragraph)
            buffer_words += len(words)

    if buffer:
        contents.append(PARAGRAPH_SEPARATOR.join(buffer))

    if not contents and cleaned:
        contents.extend(word_windows(cleaned.split(), target_size, overlap))

    return [
        Chunk(content=content, chunk_index=index, page_number=0)
        for index, content in enumerate(contents)
    ]


class ChunkingTask:
    """Split extracted text into overlapping word chunks."""

    def __init__(
        self,
        chunk_size: int = 500,
        chunk_overlap: int = 50,
    ) -> None:
        """
        Initialize chunking task with size configuration.

        Args:
            chunk_size: Target chunk size in words
            chunk_overlap: Overlap between consecutive chunks in words

        Raises:
            ValueError: When chunk_size <= chunk_overlap or chunk_overlap < 0
        """
        _validate_sizes(chunk_size, chunk_overlap)
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def chunk(self, text: str | None) -> list[Chunk]:
        """
        Split text into chunks.

        Args:
            text: Extracted document text

        Returns:
            list[Chunk]: Ordered chunks, empty for blank text
        """
        return chunk_text(text, self.chunk_size, self.chunk_overlap)
