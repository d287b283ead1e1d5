"""
Models for document processing pipeline.

Exports: Chunk, ScoredChunk, DocumentStatus, ensure_transition, PipelineResult
"""

from .chunk import Chunk, ScoredChunk
from .document_status import ALLOWED_TRANSITIONS, DocumentStatus, ensure_transition
from .pipeline_result import PipelineResult

__all__ = [
    "Chunk",
    "ScoredChunk",
    "DocumentStatus",
    "ALLOWED_TRANSITIONS",
    "ensure_transition",
    "PipelineResult",
]
