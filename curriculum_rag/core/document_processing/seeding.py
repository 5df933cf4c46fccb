"""
Best-effort bulk loader for pre-chunked curriculum data.

Unlike single-document ingestion, a failed batch is logged and skipped so
one bad batch cannot abort a long seed run. Files whose document already
has chunks are skipped entirely, which makes re-running a seed safe. A
document another caller holds in PROCESSING is skipped too.

Dependencies: sqlalchemy, pydantic, curriculum_rag.boundary
System role: Initial corpus loading
"""

import json
import logging
import re
import uuid
from pathlib import Path
from typing import Iterable

from pydantic import TypeAdapter
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from curriculum_rag.boundary.db.CRUD.chunk_crud import chunk_crud
from curriculum_rag.boundary.db.CRUD.document_crud import document_crud
from curriculum_rag.boundary.db.models.document_model import DocumentModel, DocumentStatus
from curriculum_rag.boundary.embeddings.embedder import Embedder
from curriculum_rag.core.document_processing.batch_policy import BatchPolicy, batched
from curriculum_rag.core.document_processing.models import SeedRecord, SeedReport
from curriculum_rag.core.document_processing.tasks import IndexWriteTask, build_chunk_rows
from curriculum_rag.core.exceptions import EmbeddingProviderError, IndexWriteError

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "History"
DEFAULT_LANGUAGE = "sw"
DEFAULT_LEVEL = "Form 1"

_FORM_PATTERN = re.compile(r"f([1-4])")

_records_adapter = TypeAdapter(list[SeedRecord])


def infer_level_from_filename(filename: str) -> str:
    """Map f1..f4 in a filename to 'Form 1'..'Form 4', defaulting to Form 1."""
    match = _FORM_PATTERN.search(filename.lower())
    return f"Form {match.group(1)}" if match else DEFAULT_LEVEL


def title_from_filename(filename: str) -> str:
    return re.sub(r"\.[^.]+$", "", filename)


def load_seed_file(path: str | Path) -> list[SeedRecord]:
    """
    Parse a JSON array of pre-chunked records.

    Raises:
        pydantic.ValidationError: When a record is malformed
        OSError / json.JSONDecodeError: When the file cannot be read or parsed
    """
    raw = Path(path).read_text(encoding="utf-8")
    return _records_adapter.validate_python(json.loads(raw))


def group_by_filename(records: Iterable[SeedRecord]) -> dict[str, list[SeedRecord]]:
    """Group records by source file, keeping first-seen file order."""
    grouped: dict[str, list[SeedRecord]] = {}
    for record in records:
        grouped.setdefault(record.filename, []).append(record)
    return grouped


class ChunkSeeder:
    """Embed and insert pre-chunked records, one document per source file."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        embedder: Embedder,
        policy: BatchPolicy | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._embedder = embedder
        self._policy = policy or BatchPolicy(batch_delay_seconds=1.5)
        self._index_write_task = IndexWriteTask(self._policy)

    async def _prepare_document(
        self,
        filename: str,
        first: SeedRecord,
        subject: str,
        level: str,
        language: str,
        report: SeedReport,
    ) -> uuid.UUID | None:
        """Return the document to fill, or None when the file was already seeded."""
        async with self._session_factory() as session, session.begin():
            existing = await document_crud.get_by_filename(session, filename)

            if existing is not None:
                if await chunk_crud.count_by_document(session, existing.id) > 0:
                    logger.info(
                        f"{__name__}:seed - Chunks already seeded, skipping",
                        extra={"seed_file": filename, "document_id": str(existing.id)},
                    )
                    report.documents_skipped += 1
                    return None
                claimed = await session.execute(
                    update(DocumentModel)
                    .where(
                        DocumentModel.id == existing.id,
                        DocumentModel.status != DocumentStatus.PROCESSING,
                    )
                    .values(status=DocumentStatus.PROCESSING)
                    .returning(DocumentModel.id)
                )
                if claimed.scalar_one_or_none() is None:
                    logger.warning(
                        f"{__name__}:seed - Document is being ingested, skipping",
                        extra={"seed_file": filename, "document_id": str(existing.id)},
                    )
                    report.documents_skipped += 1
                    return None
                logger.info(
                    f"{__name__}:seed - Reusing existing document",
                    extra={"seed_file": filename, "document_id": str(existing.id)},
                )
                return existing.id

            document = await document_crud.create(
                session,
                title=title_from_filename(filename),
                filename=filename,
                storage_url=first.source,
                file_size=0,
                mime_type="application/pdf",
                subject=subject,
                level=level,
                language=language,
                status=DocumentStatus.PROCESSING,
            )
            report.documents_created += 1
            logger.info(
                f"{__name__}:seed - Created document",
                extra={"seed_file": filename, "document_id": str(document.id)},
            )
            return document.id

    async def _seed_file(
        self,
        filename: str,
        records: list[SeedRecord],
        default_subject: str,
        default_language: str,
        report: SeedReport,
    ) -> None:
        first = records[0]
        subject = first.metadata.subject or default_subject
        level = first.metadata.level or infer_level_from_filename(filename)
        language = first.metadata.language or default_language

        document_id = await self._prepare_document(
            filename, first, subject, level, language, report
        )
        if document_id is None:
            return

        inserted = 0
        size = self._policy.embed_batch_size
        total_batches = (len(records) + size - 1) // size

        for number, (start, batch) in enumerate(
            batched(records, size), start=1
        ):
            if start > 0:
                await self._policy.pause()

            try:
                embeddings = await self._embedder.embed_many([r.text for r in batch])
                rows = build_chunk_rows(
                    document_id,
                    [r.text for r in batch],
                    embeddings,
                    subject=subject,
                    level=level,
                    language=language,
                    start_index=inserted,
                    source_pages=[r.metadata.source_page for r in batch],
                )
                # Per-record metadata wins over the file-level values
                for row, record in zip(rows, batch):
                    row["subject"] = record.metadata.subject or subject
                    row["level"] = record.metadata.level or level
                    row["language"] = record.metadata.language or language
                    row["content_length"] = record.content_length or row["content_length"]

                async with self._session_factory() as session, session.begin():
                    written = await self._index_write_task.write(session, rows)
            except (EmbeddingProviderError, IndexWriteError, SQLAlchemyError) as e:
                report.failed_batches += 1
                logger.error(
                    f"{__name__}:seed - Batch {number}/{total_batches} failed: {e}",
                    extra={"seed_file": filename, "document_id": str(document_id)},
                )
                continue

            inserted += written
            logger.info(
                f"{__name__}:seed - Batch {number}/{total_batches} inserted",
                extra={"seed_file": filename, "inserted": inserted, "total": len(records)},
            )

        await self._finish_document(document_id, filename, inserted)
        report.chunks_inserted += inserted
        report.files[filename] = inserted

    async def _finish_document(self, document_id: uuid.UUID, filename: str, inserted: int) -> None:
        async with self._session_factory() as session, session.begin():
            chunk_count = await chunk_crud.count_by_document(session, document_id)
            values = {"status": DocumentStatus.READY, "chunk_count": chunk_count, "error_message": None}
            if chunk_count == 0:
                values.update(
                    status=DocumentStatus.ERROR,
                    error_message="Seeding inserted no chunks",
                )
            await session.execute(
                update(DocumentModel).where(DocumentModel.id == document_id).values(**values)
            )

        logger.info(
            f"{__name__}:seed - {filename}: {inserted} chunks indexed",
            extra={"document_id": str(document_id), "chunk_count": chunk_count},
        )

    async def seed(
        self,
        records: Iterable[SeedRecord],
        *,
        default_subject: str = DEFAULT_SUBJECT,
        default_language: str = DEFAULT_LANGUAGE,
    ) -> SeedReport:
        """
        Seed pre-chunked records grouped by filename.

        Args:
            records: Records in file order
            default_subject: Subject when a file's first record has none
            default_language: Language when a file's first record has none

        Returns:
            SeedReport: Documents created/skipped, chunks inserted, failed batches
        """
        report = SeedReport()
        grouped = group_by_filename(records)
        logger.info(f"{__name__}:seed - Found {len(grouped)} source files")

        for filename, file_records in grouped.items():
            await self._seed_file(
                filename, file_records, default_subject, default_language, report
            )

        logger.info(
            f"{__name__}:seed - Seed complete",
            extra=report.model_dump(exclude={"files"}),
        )
        return report
