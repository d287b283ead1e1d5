"""
API-facing schemas.

Exports: DocumentResponse, DocumentListResponse, RetrievalResult
"""

from studyrag.models.document import DocumentListResponse, DocumentResponse
from studyrag.models.retrieval import RetrievalResult

__all__ = [
    "DocumentListResponse",
    "DocumentResponse",
    "RetrievalResult",
]
