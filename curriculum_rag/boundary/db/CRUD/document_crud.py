"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel
with lookup by filename and status, dashboard statistics and
chunk-aware deletion.

Dependencies: sqlalchemy, curriculum_rag.boundary.db.models
System role: Document persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum_rag.boundary.db.CRUD.base_crud import BaseCRUD
from curriculum_rag.boundary.db.models.chunk_model import ChunkModel
from curriculum_rag.boundary.db.models.document_model import DocumentModel, DocumentStatus


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with document-specific queries for filtering
    by filename and processing status.
    """

    def __init__(self) -> None:
        super().__init__(DocumentModel)

    async def get_by_filename(
        self,
        session: AsyncSession,
        filename: str,
    ) -> DocumentModel | None:
        """
        Retrieve the oldest document registered under a filename.

        Args:
            session: Async database session
            filename: Exact filename

        Returns:
            DocumentModel if found, None otherwise
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.filename == filename)
            .order_by(DocumentModel.created_at)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_status(
        self,
        session: AsyncSession,
        status: DocumentStatus,
        limit: int | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents by processing status.

        Args:
            session: Async database session
            status: Document processing status to filter by
            limit: Maximum number of documents to return

        Returns:
            Sequence of DocumentModels with matching status
        """
        stmt = select(DocumentModel).where(DocumentModel.status == status)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_documents(
        self,
        session: AsyncSession,
        search: str | None = None,
        status: DocumentStatus | None = None,
        subject: str | None = None,
        level: str | None = None,
    ) -> Sequence[DocumentModel]:
        """
        List documents newest first, optionally filtered.

        Args:
            session: Async database session
            search: Case-insensitive substring of title or filename
            status: Exact status
            subject: Exact subject
            level: Exact level

        Returns:
            Sequence of matching DocumentModels
        """
        stmt = select(DocumentModel)
        if status is not None:
            stmt = stmt.where(DocumentModel.status == status)
        if subject is not None:
            stmt = stmt.where(DocumentModel.subject == subject)
        if level is not None:
            stmt = stmt.where(DocumentModel.level == level)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(DocumentModel.title.ilike(pattern), DocumentModel.filename.ilike(pattern))
            )
        result = await session.execute(stmt.order_by(DocumentModel.created_at.desc()))
        return result.scalars().all()

    async def get_stale_processing(
        self,
        session: AsyncSession,
        older_than: datetime,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents stuck in PROCESSING since before a cutoff.

        Args:
            session: Async database session
            older_than: Documents whose updated_at precedes this are stale

        Returns:
            Sequence of stale DocumentModels
        """
        stmt = select(DocumentModel).where(
            DocumentModel.status == DocumentStatus.PROCESSING,
            DocumentModel.updated_at < older_than,
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_stats(self, session: AsyncSession) -> dict[str, int]:
        """
        Aggregate counts for the documents dashboard.

        Returns:
            dict with total, indexed, processing, errors and total_chunks
        """
        result = await session.execute(
            select(DocumentModel.status, func.count(DocumentModel.id)).group_by(
                DocumentModel.status
            )
        )
        by_status = {status: count for status, count in result.all()}
        total_chunks = await session.execute(select(func.count(ChunkModel.id)))

        return {
            "total": sum(by_status.values()),
            "indexed": by_status.get(DocumentStatus.READY, 0),
            "processing": by_status.get(DocumentStatus.PROCESSING, 0),
            "errors": by_status.get(DocumentStatus.ERROR, 0),
            "total_chunks": total_chunks.scalar_one(),
        }

    async def delete_with_chunks(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a document and all of its chunks.

        Chunks are removed explicitly so the result does not depend on the
        backend enforcing ON DELETE CASCADE.

        Returns:
            True if the document was deleted, False if not found
        """
        await session.execute(delete(ChunkModel).where(ChunkModel.document_id == id))
        return await self.delete_by_id(session, id)


document_crud = DocumentCRUD()
