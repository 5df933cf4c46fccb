"""
Test suite for document and chunk CRUD operations.

Runs against in-memory SQLite through the shared session_factory fixture.

System role: Verification of the persistence layer
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import InvalidRequestError

from curriculum_rag.boundary.db.CRUD import chunk_crud, document_crud
from curriculum_rag.boundary.db.models import DocumentStatus
from tests.conftest import unit_vector


class TestDocumentCRUD:
    """Test document lookups, listing and statistics."""

    @pytest.mark.asyncio
    async def test_create_should_apply_defaults(self, session_factory) -> None:
        """Test a new document starts PENDING with zero chunks."""
        async with session_factory() as session, session.begin():
            document = await document_crud.create(session, title="Uraia", filename="civics_f1.pdf")

        assert document.status == DocumentStatus.PENDING
        assert document.chunk_count == 0
        assert document.language == "sw"
        assert document.created_at is not None

    @pytest.mark.asyncio
    async def test_get_by_filename_should_return_oldest(self, session_factory) -> None:
        # Arrange
        now = datetime.now(timezone.utc)
        async with session_factory() as session, session.begin():
            newer = await document_crud.create(
                session, title="b", filename="dup.pdf", created_at=now
            )
            older = await document_crud.create(
                session, title="a", filename="dup.pdf", created_at=now - timedelta(days=1)
            )

        # Act
        async with session_factory() as session:
            found = await document_crud.get_by_filename(session, "dup.pdf")
            missing = await document_crud.get_by_filename(session, "other.pdf")

        # Assert
        assert found.id == older.id
        assert found.id != newer.id
        assert missing is None

    @pytest.mark.asyncio
    async def test_list_documents_should_filter_and_order_newest_first(
        self, session_factory
    ) -> None:
        now = datetime.now(timezone.utc)
        async with session_factory() as session, session.begin():
            await document_crud.create(
                session, title="Historia Kidato 1", filename="history_f1.pdf",
                subject="History", created_at=now - timedelta(hours=2),
            )
            await document_crud.create(
                session, title="Historia Kidato 2", filename="history_f2.pdf",
                subject="History", status=DocumentStatus.READY, created_at=now - timedelta(hours=1),
            )
            await document_crud.create(
                session, title="Jiografia", filename="geo_f2.pdf",
                subject="Geography", created_at=now,
            )

        async with session_factory() as session:
            everything = await document_crud.list_documents(session)
            searched = await document_crud.list_documents(session, search="HISTORIA")
            ready = await document_crud.list_documents(session, status=DocumentStatus.READY)
            geography = await document_crud.list_documents(session, subject="Geography")
            by_filename = await document_crud.list_documents(session, search="geo_")

        assert [d.title for d in everything] == ["Jiografia", "Historia Kidato 2", "Historia Kidato 1"]
        assert [d.title for d in searched] == ["Historia Kidato 2", "Historia Kidato 1"]
        assert [d.filename for d in ready] == ["history_f2.pdf"]
        assert [d.title for d in geography] == ["Jiografia"]
        assert [d.title for d in by_filename] == ["Jiografia"]

    @pytest.mark.asyncio
    async def test_get_stats_should_count_by_status(
        self, session_factory, make_document, insert_chunk
    ) -> None:
        # Arrange
        ready_id = await make_document(status=DocumentStatus.READY, chunk_count=2)
        await make_document(status=DocumentStatus.PROCESSING)
        await make_document(status=DocumentStatus.ERROR)
        await make_document()
        await insert_chunk(ready_id, unit_vector(0), chunk_index=0)
        await insert_chunk(ready_id, unit_vector(1), chunk_index=1)

        # Act
        async with session_factory() as session:
            stats = await document_crud.get_stats(session)

        # Assert
        assert stats == {
            "total": 4,
            "indexed": 1,
            "processing": 1,
            "errors": 1,
            "total_chunks": 2,
        }

    @pytest.mark.asyncio
    async def test_delete_with_chunks_should_remove_document_and_chunks(
        self, session_factory, make_document, insert_chunk
    ) -> None:
        document_id = await make_document()
        await insert_chunk(document_id, unit_vector(0))

        async with session_factory() as session, session.begin():
            deleted = await document_crud.delete_with_chunks(session, document_id)

        async with session_factory() as session:
            assert deleted is True
            assert await document_crud.exists(session, document_id) is False
            assert await chunk_crud.count_by_document(session, document_id) == 0

    @pytest.mark.asyncio
    async def test_delete_with_chunks_unknown_id_should_return_false(self, session_factory) -> None:
        async with session_factory() as session, session.begin():
            assert await document_crud.delete_with_chunks(session, uuid.uuid4()) is False

    @pytest.mark.asyncio
    async def test_get_stale_processing_should_use_updated_at(
        self, session_factory, make_document
    ) -> None:
        now = datetime.now(timezone.utc)
        stale_id = await make_document(
            status=DocumentStatus.PROCESSING, updated_at=now - timedelta(hours=2)
        )
        await make_document(status=DocumentStatus.PROCESSING, updated_at=now)
        await make_document(status=DocumentStatus.ERROR, updated_at=now - timedelta(hours=2))

        async with session_factory() as session:
            stale = await document_crud.get_stale_processing(session, now - timedelta(hours=1))

        assert [d.id for d in stale] == [stale_id]

    @pytest.mark.asyncio
    async def test_update_by_id_should_return_updated_row(self, session_factory, make_document) -> None:
        document_id = await make_document()

        async with session_factory() as session, session.begin():
            updated = await document_crud.update_by_id(
                session, document_id, status=DocumentStatus.READY, chunk_count=3
            )

        assert updated.status == DocumentStatus.READY
        assert updated.chunk_count == 3


class TestChunkCRUD:
    """Test chunk bulk writes and per-document reads."""

    @pytest.mark.asyncio
    async def test_bulk_insert_and_get_by_document_should_keep_index_order(
        self, session_factory, make_document
    ) -> None:
        # Arrange
        document_id = await make_document()
        rows = [
            {
                "document_id": document_id,
                "chunk_index": index,
                "content": f"chunk {index}",
                "content_length": 7,
                "embedding": unit_vector(index),
                "language": "sw",
            }
            for index in (2, 0, 1)
        ]

        # Act
        async with session_factory() as session, session.begin():
            inserted = await chunk_crud.bulk_insert(session, rows)
        async with session_factory() as session:
            chunks = await chunk_crud.get_by_document(session, document_id)

        # Assert
        assert inserted == 3
        assert [c.chunk_index for c in chunks] == [0, 1, 2]
        assert list(chunks[1].embedding) == unit_vector(1)

    @pytest.mark.asyncio
    async def test_relationships_should_refuse_implicit_loads(
        self, session_factory, make_document, insert_chunk
    ) -> None:
        """Test chunk and document relationships never lazy-load under async IO."""
        document_id = await make_document()
        await insert_chunk(document_id, unit_vector(0))

        async with session_factory() as session:
            document = await document_crud.get_by_id(session, document_id)
            chunks = await chunk_crud.get_by_document(session, document_id)

            with pytest.raises(InvalidRequestError):
                document.chunks
            with pytest.raises(InvalidRequestError):
                chunks[0].document

    @pytest.mark.asyncio
    async def test_bulk_insert_empty_should_be_noop(self, session_factory) -> None:
        async with session_factory() as session, session.begin():
            assert await chunk_crud.bulk_insert(session, []) == 0

    @pytest.mark.asyncio
    async def test_delete_by_document_should_leave_other_documents(
        self, session_factory, make_document, insert_chunk
    ) -> None:
        first = await make_document()
        second = await make_document(filename="other.pdf")
        await insert_chunk(first, unit_vector(0))
        await insert_chunk(first, unit_vector(1), chunk_index=1)
        await insert_chunk(second, unit_vector(0))

        async with session_factory() as session, session.begin():
            removed = await chunk_crud.delete_by_document(session, first)

        async with session_factory() as session:
            assert removed == 2
            assert await chunk_crud.count_by_document(session, first) == 0
            assert await chunk_crud.count_by_document(session, second) == 1
