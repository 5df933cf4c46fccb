"""
Chunk CRUD operations.

Bulk writes, per-document deletes and the candidate scan used by the
exact (in-process) vector index.

Dependencies: sqlalchemy, curriculum_rag.boundary.db.models
System role: Chunk persistence operations
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Row, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum_rag.boundary.db.CRUD.base_crud import BaseCRUD
from curriculum_rag.boundary.db.models.chunk_model import ChunkModel


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel."""

    def __init__(self) -> None:
        super().__init__(ChunkModel)

    async def bulk_insert(
        self,
        session: AsyncSession,
        rows: Sequence[dict[str, Any]],
    ) -> int:
        """
        Insert many chunk rows in a single executemany round trip.

        Args:
            session: Async database session
            rows: Column dictionaries (document_id, chunk_index, content, ...)

        Returns:
            int: Number of rows submitted
        """
        if not rows:
            return 0
        await session.execute(insert(ChunkModel), list(rows))
        return len(rows)

    async def delete_by_document(self, session: AsyncSession, document_id: UUID) -> int:
        """Delete every chunk of a document and return the number removed."""
        stmt = delete(ChunkModel).where(ChunkModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.rowcount or 0

    async def count_by_document(self, session: AsyncSession, document_id: UUID) -> int:
        stmt = select(func.count(ChunkModel.id)).where(
            ChunkModel.document_id == document_id
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    async def get_by_document(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[ChunkModel]:
        """Retrieve a document's chunks in document order."""
        stmt = (
            select(ChunkModel)
            .where(ChunkModel.document_id == document_id)
            .order_by(ChunkModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_candidates(self, session: AsyncSession) -> Sequence[Row]:
        """
        Load every chunk with the columns needed for scoring.

        Returns:
            Rows of (id, document_id, content, subject, level, language,
            source_page, embedding)
        """
        stmt = select(
            ChunkModel.id,
            ChunkModel.document_id,
            ChunkModel.content,
            ChunkModel.subject,
            ChunkModel.level,
            ChunkModel.language,
            ChunkModel.source_page,
            ChunkModel.embedding,
        )
        result = await session.execute(stmt)
        return result.all()


chunk_crud = ChunkCRUD()
