"""
Chunk write task.

Builds chunk rows (with the document's curriculum metadata copied onto
each row) and inserts them in batches inside the caller's transaction.

Dependencies: sqlalchemy, curriculum_rag.boundary.db
System role: Final stage of document ingestion pipeline
"""

import logging
import uuid
from typing import Any, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum_rag.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from curriculum_rag.core.document_processing.batch_policy import BatchPolicy, batched
from curriculum_rag.core.exceptions import IndexWriteError

logger = logging.getLogger(__name__)


def build_chunk_rows(
    document_id: uuid.UUID,
    texts: Sequence[str],
    embeddings: Sequence[Sequence[float]],
    *,
    subject: str | None,
    level: str | None,
    language: str,
    start_index: int = 0,
    source_pages: Sequence[str | None] | None = None,
) -> list[dict[str, Any]]:
    """Column dictionaries for ChunkModel, numbered from ``start_index``."""
    if len(texts) != len(embeddings):
        raise IndexWriteError(
            "Chunk and embedding counts differ",
            operation="insert",
            details={"chunks": len(texts), "embeddings": len(embeddings)},
        )
    return [
        {
            "document_id": document_id,
            "chunk_index": start_index + offset,
            "content": text,
            "content_length": len(text),
            "embedding": list(embedding),
            "subject": subject,
            "level": level,
            "language": language,
            "source_page": source_pages[offset] if source_pages else None,
        }
        for offset, (text, embedding) in enumerate(zip(texts, embeddings))
    ]


class IndexWriteTask:
    """Insert chunk rows in ``insert_batch_size`` batches."""

    def __init__(self, policy: BatchPolicy, crud: ChunkCRUD = chunk_crud) -> None:
        self._policy = policy
        self._crud = crud

    async def write(self, session: AsyncSession, rows: Sequence[dict[str, Any]]) -> int:
        """
        Insert rows in order. Does not commit.

        Returns:
            int: Number of rows inserted

        Raises:
            IndexWriteError: When the datastore rejects a batch
        """
        written = 0
        for start, batch in batched(rows, self._policy.insert_batch_size):
            try:
                written += await self._crud.bulk_insert(session, batch)
            except SQLAlchemyError as e:
                raise IndexWriteError(
                    f"Failed to insert chunks: {e}",
                    operation="insert",
                    details={"batch_start": start, "batch_size": len(batch)},
                ) from e

        logger.info(f"{__name__}:write - Inserted {written} chunk rows")
        return written

