"""
CRUD operations package.

Exports singleton CRUD helpers for documents and chunks.
"""

from studyrag.boundary.db.CRUD.base_crud import BaseCRUD, as_uuid
from studyrag.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from studyrag.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud

__all__ = [
    "BaseCRUD",
    "as_uuid",
    "ChunkCRUD",
    "chunk_crud",
    "DocumentCRUD",
    "document_crud",
]
