"""
Document ORM model.

Represents curriculum source documents with ingestion status and
curriculum metadata (subject, level, language).

Dependencies: sqlalchemy, curriculum_rag.boundary.db.base
System role: Document persistence for ingestion tracking
"""

import enum

from sqlalchemy import Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from curriculum_rag.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentStatus(str, enum.Enum):
    """
    Document ingestion lifecycle states.

    PENDING: Registered, awaiting ingestion
    PROCESSING: Claimed by exactly one ingestion run
    READY: Chunks written and retrievable
    ERROR: Last ingestion failed; error_message holds details
    """

    PENDING = "pending"
    PROCESSING = "processing"
    READY = "ready"
    ERROR = "error"


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model tracking ingestion state.

    Lifecycle: register (PENDING) -> claim (PROCESSING) -> READY or ERROR.
    READY and ERROR documents may be claimed again for re-ingestion.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Display title
        filename: Original filename, used by the seed loader for deduplication
        storage_url: Blob locator (s3://, http(s)://, file path)
        file_size: Size in bytes
        mime_type: Content type used to pick a text extractor
        subject / level / language: Curriculum metadata copied onto chunks
        status: Current ingestion state
        chunk_count: Number of chunk rows, valid when READY or ERROR
        error_message: Null unless the last ingestion failed
        uploaded_by_id: Opaque reference to the uploader
    """

    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    filename: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    storage_url: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        doc="S3 URL, HTTP URL or file path for raw document",
    )
    file_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    mime_type: Mapped[str] = mapped_column(
        String(127), nullable=False, default="application/pdf"
    )

    subject: Mapped[str | None] = mapped_column(String(63), nullable=True, index=True)
    level: Mapped[str | None] = mapped_column(String(31), nullable=True)
    language: Mapped[str] = mapped_column(String(31), nullable=False, default="sw")

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(
            DocumentStatus,
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=DocumentStatus.PENDING,
        index=True,
    )
    chunk_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    error_message: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        doc="Error details if ingestion failed",
    )
    uploaded_by_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Chunks are always deleted with explicit statements; the FK cascade covers
    # deletes issued outside this package.
    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        passive_deletes=True,
        lazy="raise",
    )
