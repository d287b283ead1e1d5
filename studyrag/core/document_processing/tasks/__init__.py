"""
Task modules for document processing pipeline.

Exports: ParsingTask, TextExtractor, ChunkingTask, chunk_text
"""

from .chunking_task import ChunkingTask, chunk_text, clean_text
from .parsing_task import ParsingTask, TextExtractor

__all__ = [
    "ParsingTask",
    "TextExtractor",
    "ChunkingTask",
    "chunk_text",
    "clean_text",
]
