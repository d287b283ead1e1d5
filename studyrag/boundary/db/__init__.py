"""
Database boundary layer.

Exports ORM base, models and connection helpers.
"""

from studyrag.boundary.db.base import Base
from studyrag.boundary.db.connection import (
    create_tables,
    create_worker_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from studyrag.boundary.db.models import ChunkModel, DocumentModel

__all__ = [
    "Base",
    "ChunkModel",
    "DocumentModel",
    "create_tables",
    "create_worker_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]
