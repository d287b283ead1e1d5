"""
Shared CRUD operations for UUID-keyed models.

Documents and chunks are both keyed by UUID, while ingestion runs and Celery
tasks carry document ids as strings. Every id accepted here may be either;
as_uuid() normalizes it before it reaches a query.

Dependencies: sqlalchemy, uuid
System role: Foundation for DocumentCRUD and ChunkCRUD
"""

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from studyrag.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)

IdLike = str | UUID


def as_uuid(id: IdLike) -> UUID:
    """
    Normalize a document or chunk id.

    Raises:
        ValueError: id is not a valid UUID string
    """
    return id if isinstance(id, UUID) else UUID(str(id))


class BaseCRUD(Generic[ModelT]):
    """
    Primary-key operations shared by the studyrag tables.

    Methods flush but never commit. The service or store that owns the
    session decides when a unit of work ends, which is how an ingestion run
    keeps staged chunks invisible until its READY commit.
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Insert a row and load its generated id and timestamps.

        Args:
            session: Async database session
            **kwargs: Column values

        Returns:
            The flushed model instance
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: IdLike) -> ModelT | None:
        stmt = select(self.model).where(self.model.id == as_uuid(id))
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_by_id(self, session: AsyncSession, id: IdLike, **kwargs) -> ModelT | None:
        """
        Update columns on one row.

        Args:
            session: Async database session
            id: Primary key
            **kwargs: Columns to set

        Returns:
            The updated instance, or None if no row has this id
        """
        stmt = (
            update(self.model)
            .where(self.model.id == as_uuid(id))
            .values(**kwargs)
            .returning(self.model)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: IdLike) -> bool:
        """Delete one row; False if it did not exist."""
        stmt = delete(self.model).where(self.model.id == as_uuid(id))
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: IdLike) -> bool:
        stmt = select(self.model.id).where(self.model.id == as_uuid(id))
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
