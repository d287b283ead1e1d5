"""
Database models package.

Exports:
  - DocumentModel: Document ORM model
  - ChunkModel: Document chunk ORM model

Dependencies: sqlalchemy, studyrag.boundary.db.base
System role: Database model definitions for domain entities
"""

from studyrag.boundary.db.models.chunk_model import ChunkModel
from studyrag.boundary.db.models.document_model import DocumentModel

__all__ = [
    "ChunkModel",
    "DocumentModel",
]
