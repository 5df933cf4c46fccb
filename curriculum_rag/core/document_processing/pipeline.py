"""
Document ingestion pipeline orchestrator.

Coordinates claim, fetch, extraction, chunking, embedding and chunk
writes for one document, and owns the failure policy: any error after
the claim leaves the document in ERROR with no chunks attached.

Dependencies: All task modules, document_status_updater
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
import time
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from curriculum_rag.core.document_processing.batch_policy import BatchPolicy
from curriculum_rag.core.document_processing.database import DocumentStatusUpdater
from curriculum_rag.core.document_processing.models import IngestionResult
from curriculum_rag.core.document_processing.tasks import (
    BlobFetcher,
    ChunkingTask,
    EmbeddingTask,
    FetchedBlob,
    IndexWriteTask,
    TextExtractor,
    build_chunk_rows,
)
from curriculum_rag.boundary.embeddings.embedder import Embedder
from curriculum_rag.core.exceptions import (
    BlobFetchError,
    ClaimLostError,
    EmptyDocumentError,
    IngestionFailedError,
)
from curriculum_rag.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Orchestrate ingestion: claim -> fetch -> extract -> chunk -> embed -> write."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        embedder: Embedder,
        fetcher: BlobFetcher,
        policy: BatchPolicy | None = None,
        extractor: TextExtractor | None = None,
        chunk_size: int = 500,
        chunk_overlap: int = 50,
        fetch_timeout_seconds: float | None = 60.0,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            session_factory: Async session factory for status and chunk writes
            embedder: Embedder shared with query-time retrieval
            fetcher: Blob fetcher resolving document storage locators
            policy: Batch sizes and inter-batch delay (defaults if None)
            extractor: Text extractor (PDF/plain text by default)
            chunk_size: Chunker size parameter
            chunk_overlap: Chunker overlap parameter
            fetch_timeout_seconds: Bound on fetching document bytes (None disables)
        """
        self._session_factory = session_factory
        self._policy = policy or BatchPolicy()
        self._fetcher = fetcher
        self._fetch_timeout = fetch_timeout_seconds
        self._status = DocumentStatusUpdater(session_factory)
        self._extractor = extractor or TextExtractor()
        self._chunking_task = ChunkingTask(chunk_size=chunk_size, chunk_overlap=chunk_overlap)
        self._embedding_task = EmbeddingTask(embedder, self._policy)
        self._index_write_task = IndexWriteTask(self._policy)

    async def _fetch(self, locator: str | None) -> FetchedBlob:
        if not locator:
            raise BlobFetchError("Document has no storage locator")
        return await asyncio.wait_for(self._fetcher.fetch(locator), timeout=self._fetch_timeout)

    async def _record_failure(
        self,
        document_id: uuid.UUID,
        stage: str,
        exc: BaseException,
    ) -> None:
        log_exception_with_context(
            logger,
            f"{__name__}:ingest_document - Ingestion failed during {stage}",
            exc,
            document_id=str(document_id),
            stage=stage,
        )
        message = str(exc) or type(exc).__name__
        await self._status.mark_failed(document_id, f"{stage}: {message}")

    async def ingest_document(
        self,
        document_id: uuid.UUID,
        content: bytes | None = None,
    ) -> IngestionResult:
        """
        Ingest one document from raw bytes to READY.

        Args:
            document_id: Document to ingest (PENDING, ERROR or READY)
            content: Raw bytes to use instead of fetching storage_url

        Returns:
            IngestionResult: Chunk count and timing

        Raises:
            DocumentNotFoundError: Unknown document id (nothing changed)
            IngestionInProgressError: Document already PROCESSING (nothing changed)
            IngestionFailedError: Any later failure; the document is now ERROR
            asyncio.CancelledError: Re-raised after the document is marked ERROR
        """
        start_time = time.perf_counter()
        document = await self._status.claim_for_processing(document_id)

        stage = "fetch"
        try:
            if content is not None:
                blob = FetchedBlob(data=content, mime_type=document.mime_type)
            else:
                blob = await self._fetch(document.storage_url)

            stage = "extract"
            text = await self._extractor.extract(
                blob.data,
                blob.mime_type or document.mime_type,
                document.filename,
            )
            if not text.strip():
                raise EmptyDocumentError(
                    "Document contains no extractable text",
                    str(document_id),
                    mime_type=blob.mime_type or document.mime_type,
                )

            stage = "chunk"
            chunks = self._chunking_task.chunk(text)

            stage = "embed"
            embeddings = await self._embedding_task.embed(chunks)

            stage = "write"
            rows = build_chunk_rows(
                document.id,
                chunks,
                embeddings,
                subject=document.subject,
                level=document.level,
                language=document.language,
            )
            async with self._session_factory() as session, session.begin():
                written = await self._index_write_task.write(session, rows)
                await self._status.mark_ready(
                    session, document.id, written, claimed_at=document.updated_at
                )

        except ClaimLostError as e:
            logger.warning(
                f"{__name__}:ingest_document - Claim lost before write, leaving document as is",
                extra={"document_id": str(document_id)},
            )
            raise IngestionFailedError(str(document_id), stage, e) from e
        except asyncio.CancelledError as e:
            await self._record_failure(document_id, stage, e)
            raise
        except Exception as e:
            await self._record_failure(document_id, stage, e)
            raise IngestionFailedError(str(document_id), stage, e) from e

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:ingest_document - Document READY",
            extra={
                "document_id": str(document_id),
                "chunk_count": written,
                "processing_time_ms": round(elapsed_ms, 1),
            },
        )
        return IngestionResult(
            document_id=document.id,
            chunk_count=written,
            processing_time_ms=elapsed_ms,
        )

    async def recover_stale(self, stale_after: timedelta) -> list[uuid.UUID]:
        """
        Fail documents stuck in PROCESSING for longer than ``stale_after``.

        Returns:
            list[uuid.UUID]: Recovered document IDs
        """
        cutoff = datetime.now(timezone.utc) - stale_after
        return await self._status.mark_stale_as_failed(cutoff)
