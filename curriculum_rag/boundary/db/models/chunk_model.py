"""
Chunk ORM model.

One row per retrievable text span, holding its embedding and a
denormalized copy of the parent document's curriculum metadata.

Dependencies: sqlalchemy, pgvector, curriculum_rag.boundary.db.base
System role: Vector storage for hybrid retrieval
"""

import uuid

from pgvector.sqlalchemy import Vector
from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from curriculum_rag.boundary.db.base import Base, CreatedAtMixin, UUIDMixin
from curriculum_rag.configs import get_settings

EMBEDDING_DIMENSION = get_settings().embedding.dimension


class ChunkModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Chunk ORM model.

    Chunks are immutable once written; re-ingestion deletes and rewrites
    the whole set for a document.

    Attributes:
        document_id: Parent document (ON DELETE CASCADE)
        chunk_index: Contiguous 0..n-1 position in document order
        content: Chunk text
        content_length: len(content)
        embedding: Fixed-dimension embedding vector
        subject / level / language: Metadata copied from the document at write time
        source_page: Page label when known
    """

    __tablename__ = "chunks"

    document_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    content_length: Mapped[int] = mapped_column(Integer, nullable=False)
    embedding = mapped_column(Vector(EMBEDDING_DIMENSION), nullable=False)

    subject: Mapped[str | None] = mapped_column(String(63), nullable=True)
    level: Mapped[str | None] = mapped_column(String(31), nullable=True)
    language: Mapped[str] = mapped_column(String(31), nullable=False, default="sw")
    source_page: Mapped[str | None] = mapped_column(String(31), nullable=True)

    document = relationship("DocumentModel", back_populates="chunks", lazy="raise")

    __table_args__ = (
        Index("ix_chunks_subject_level", "subject", "level"),
        Index(
            "ix_chunks_embedding_hnsw",
            "embedding",
            postgresql_using="hnsw",
            postgresql_ops={"embedding": "vector_cosine_ops"},
        ).ddl_if(dialect="postgresql"),
    )
