"""
Generic async CRUD for UUID-keyed models.

Nothing here commits or opens a transaction: callers wrap calls in
``async with session.begin()`` so several writes can share one commit.

Dependencies: sqlalchemy
System role: Parent of DocumentCRUD and ChunkCRUD
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum_rag.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Primary-key operations shared by every model."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    def _by_id(self, id: UUID) -> ColumnElement[bool]:
        return self.model.id == id

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """
        Insert one row and return it with server and default values loaded.

        Args:
            session: Session inside the caller's transaction
            **values: Column values

        Returns:
            The flushed and refreshed instance
        """
        instance = self.model(**values)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        result = await session.execute(select(self.model).where(self._by_id(id)))
        return result.scalar_one_or_none()

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        stmt = select(self.model).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_by_id(
        self,
        session: AsyncSession,
        id: UUID,
        **values: Any,
    ) -> ModelT | None:
        """
        Update one row in a single statement.

        Returns:
            The updated instance, or None when no row has this id
        """
        stmt = update(self.model).where(self._by_id(id)).values(**values).returning(self.model)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """Delete one row; False when nothing matched."""
        result = await session.execute(delete(self.model).where(self._by_id(id)))
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: UUID) -> bool:
        result = await session.execute(select(self.model.id).where(self._by_id(id)))
        return result.scalar_one_or_none() is not None
