"""
Storage seam for the ingestion pipeline.

Exports: DocumentStore, StoreScope, InMemoryDocumentStore
"""

from .document_store import (
    DocumentStore,
    InMemoryDocumentStore,
    StoreScope,
    StoredDocument,
)

__all__ = [
    "DocumentStore",
    "InMemoryDocumentStore",
    "StoreScope",
    "StoredDocument",
]
