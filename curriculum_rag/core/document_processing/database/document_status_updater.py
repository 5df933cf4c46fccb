"""
Document status updater.

Drives the document state machine in the database:
PENDING/ERROR/READY -> PROCESSING -> READY (or ERROR with error message)

The claim is a single conditional UPDATE, so two concurrent ingestions of
one document cannot both enter PROCESSING.

Dependencies: sqlalchemy
System role: Database persistence layer for ingestion status
"""

import logging
import uuid
from datetime import datetime

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from curriculum_rag.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from curriculum_rag.boundary.db.models.chunk_model import ChunkModel
from curriculum_rag.boundary.db.models.document_model import DocumentModel, DocumentStatus
from curriculum_rag.core.exceptions import (
    ClaimLostError,
    DocumentNotFoundError,
    IngestionInProgressError,
)

logger = logging.getLogger(__name__)

# error_message column is 2048 chars
MAX_ERROR_MESSAGE_LENGTH = 2000


def truncate_error(message: str) -> str:
    if len(message) > MAX_ERROR_MESSAGE_LENGTH:
        return message[:MAX_ERROR_MESSAGE_LENGTH]
    return message


class DocumentStatusUpdater:
    """Update document status during ingestion."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        crud: DocumentCRUD = document_crud,
    ) -> None:
        """
        Initialize with a session factory.

        Args:
            session_factory: Factory for short-lived transactions
            crud: Document CRUD used for existence checks
        """
        self._session_factory = session_factory
        self._crud = crud

    async def claim_for_processing(self, document_id: uuid.UUID) -> DocumentModel:
        """
        Atomically move a document to PROCESSING and clear its chunks.

        Any status except PROCESSING may be claimed, which makes ERROR and
        READY documents re-ingestible from scratch.

        Args:
            document_id: Document UUID

        Returns:
            DocumentModel: Snapshot of the claimed document

        Raises:
            DocumentNotFoundError: Document does not exist
            IngestionInProgressError: Document is already PROCESSING
        """
        async with self._session_factory() as session, session.begin():
            stmt = (
                update(DocumentModel)
                .where(
                    DocumentModel.id == document_id,
                    DocumentModel.status != DocumentStatus.PROCESSING,
                )
                .values(status=DocumentStatus.PROCESSING, chunk_count=0)
                .returning(DocumentModel)
            )
            result = await session.execute(stmt)
            document = result.scalar_one_or_none()

            if document is None:
                if await self._crud.exists(session, document_id):
                    raise IngestionInProgressError(str(document_id))
                raise DocumentNotFoundError(str(document_id))

            cleared = await session.execute(
                delete(ChunkModel).where(ChunkModel.document_id == document_id)
            )

        logger.info(
            f"{__name__}:claim_for_processing - Document marked as PROCESSING",
            extra={"document_id": str(document_id), "chunks_cleared": cleared.rowcount},
        )
        return document

    async def mark_ready(
        self,
        session: AsyncSession,
        document_id: uuid.UUID,
        chunk_count: int,
        claimed_at: datetime | None = None,
    ) -> None:
        """
        Mark document READY inside the caller's transaction.

        Sharing the transaction with the chunk inserts keeps chunk_count and
        the chunk rows consistent. Only a PROCESSING document is moved, and
        with ``claimed_at`` only while its updated_at still matches the claim.

        Raises:
            ClaimLostError: The claim was recovered as stale or taken by
                another run; the caller's transaction must roll back
        """
        stmt = update(DocumentModel).where(
            DocumentModel.id == document_id,
            DocumentModel.status == DocumentStatus.PROCESSING,
        )
        if claimed_at is not None:
            stmt = stmt.where(DocumentModel.updated_at == claimed_at)
        result = await session.execute(
            stmt.values(
                status=DocumentStatus.READY,
                chunk_count=chunk_count,
                error_message=None,
            ).returning(DocumentModel.id)
        )
        if result.scalar_one_or_none() is None:
            raise ClaimLostError(str(document_id))
        logger.info(
            f"{__name__}:mark_ready - Document marked as READY",
            extra={"document_id": str(document_id), "chunk_count": chunk_count},
        )

    async def mark_failed(
        self,
        document_id: uuid.UUID,
        error_message: str,
        stale_before: datetime | None = None,
    ) -> bool:
        """
        Mark document ERROR in a fresh transaction, removing any chunks.

        Args:
            document_id: Document UUID
            error_message: Human-readable error description
            stale_before: Only fail the document if it is still PROCESSING
                and was last updated before this time

        Returns:
            bool: True if the document was moved to ERROR
        """
        truncated_error = truncate_error(error_message)
        stmt = update(DocumentModel).where(DocumentModel.id == document_id)
        if stale_before is not None:
            stmt = stmt.where(
                DocumentModel.status == DocumentStatus.PROCESSING,
                DocumentModel.updated_at < stale_before,
            )
        stmt = stmt.values(
            status=DocumentStatus.ERROR,
            chunk_count=0,
            error_message=truncated_error,
        ).returning(DocumentModel.id)

        async with self._session_factory() as session, session.begin():
            result = await session.execute(stmt)
            if result.scalar_one_or_none() is None:
                return False
            await session.execute(
                delete(ChunkModel).where(ChunkModel.document_id == document_id)
            )

        logger.info(
            f"{__name__}:mark_failed - Document marked as ERROR",
            extra={"document_id": str(document_id), "error_message": truncated_error},
        )
        return True

    async def mark_stale_as_failed(self, older_than: datetime) -> list[uuid.UUID]:
        """
        Move documents stuck in PROCESSING since before ``older_than`` to ERROR.

        Returns:
            list[uuid.UUID]: IDs of the recovered documents
        """
        async with self._session_factory() as session:
            stale = await self._crud.get_stale_processing(session, older_than)
        stale_ids = [document.id for document in stale]

        recovered = []
        for document_id in stale_ids:
            if await self.mark_failed(
                document_id,
                f"Processing did not finish before {older_than.isoformat()}",
                stale_before=older_than,
            ):
                recovered.append(document_id)

        if recovered:
            logger.warning(
                f"{__name__}:mark_stale_as_failed - Recovered {len(recovered)} stale documents",
                extra={"document_ids": [str(i) for i in recovered]},
            )
        return recovered
