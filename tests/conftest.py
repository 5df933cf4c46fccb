"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite session factory, deterministic stub embedding
providers, document factory
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

import os

# Small vectors keep fixtures readable; must be set before the chunk model is imported.
os.environ["EMBEDDING_DIMENSION"] = "8"

import uuid
from typing import Any

import pytest
from langchain_core.embeddings import Embeddings

TEST_DIMENSION = 8


class KeywordEmbeddings(Embeddings):
    """
    Deterministic embeddings: one axis per keyword, counted occurrences.

    Texts without any keyword map onto the last axis so they are never zero.
    """

    KEYWORDS = ("colonial", "independence", "trade", "climate", "cell", "poem", "river")

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def _vector(self, text: str) -> list[float]:
        lowered = text.lower()
        vector = [float(lowered.count(word)) for word in self.KEYWORDS]
        vector.append(0.0 if any(vector) else 1.0)
        return vector

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self._vector(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append([text])
        return self._vector(text)


class ConstantEmbeddings(Embeddings):
    """Returns the same vector for every input (zero vector by default)."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [[self.value] * TEST_DIMENSION for _ in texts]

    def embed_query(self, text: str) -> list[float]:
        return [self.value] * TEST_DIMENSION


def unit_vector(axis: int) -> list[float]:
    vector = [0.0] * TEST_DIMENSION
    vector[axis] = 1.0
    return vector


@pytest.fixture
async def session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Factory bound to a fresh schema
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from curriculum_rag.boundary.db.base import Base
    from curriculum_rag.boundary.db.models import ChunkModel, DocumentModel  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def keyword_embeddings() -> KeywordEmbeddings:
    return KeywordEmbeddings()


@pytest.fixture
def embedder(keyword_embeddings: KeywordEmbeddings):
    """Embedder over the keyword stub with no retry delay."""
    from curriculum_rag.boundary.embeddings import Embedder

    return Embedder(
        keyword_embeddings,
        dimension=TEST_DIMENSION,
        timeout_seconds=5.0,
        max_attempts=1,
        retry_wait_initial=0,
        retry_wait_max=0,
    )


@pytest.fixture
def make_document(session_factory):
    """Factory fixture inserting a document and returning its id."""
    from curriculum_rag.boundary.db.CRUD import document_crud

    async def _make(**overrides: Any) -> uuid.UUID:
        values = {
            "title": "Historia ya Afrika Mashariki",
            "filename": "history_f2.txt",
            "storage_url": None,
            "mime_type": "text/plain",
            "subject": "History",
            "level": "Form 2",
            "language": "sw",
        }
        values.update(overrides)
        async with session_factory() as session, session.begin():
            document = await document_crud.create(session, **values)
        return document.id

    return _make


@pytest.fixture
def insert_chunk(session_factory):
    """Factory fixture inserting one chunk row with an explicit embedding."""
    from curriculum_rag.boundary.db.CRUD import chunk_crud

    async def _insert(
        document_id: uuid.UUID,
        embedding: list[float],
        content: str = "chunk",
        subject: str | None = "History",
        level: str | None = "Form 2",
        chunk_index: int = 0,
    ) -> None:
        async with session_factory() as session, session.begin():
            await chunk_crud.bulk_insert(
                session,
                [
                    {
                        "document_id": document_id,
                        "chunk_index": chunk_index,
                        "content": content,
                        "content_length": len(content),
                        "embedding": embedding,
                        "subject": subject,
                        "level": level,
                        "language": "sw",
                    }
                ],
            )

    return _insert
