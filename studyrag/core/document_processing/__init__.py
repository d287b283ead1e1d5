"""
Document processing pipeline.

Turns a raw document into ordered chunks and records the outcome on the
document. Storage is reached through the DocumentStore protocol.

Exports: DocumentPipeline, DocumentPipelineSettings, get_pipeline_settings,
Chunk, ScoredChunk, DocumentStatus, PipelineResult, InMemoryDocumentStore
"""

from .configs import DocumentPipelineSettings, get_pipeline_settings
from .database import DocumentStore, InMemoryDocumentStore, StoreScope
from .entrypoint import DocumentPipeline
from .models import Chunk, DocumentStatus, PipelineResult, ScoredChunk, ensure_transition

__all__ = [
    "DocumentPipeline",
    "DocumentPipelineSettings",
    "get_pipeline_settings",
    "DocumentStore",
    "InMemoryDocumentStore",
    "StoreScope",
    "Chunk",
    "ScoredChunk",
    "DocumentStatus",
    "PipelineResult",
    "ensure_transition",
]
