"""
Declarative base, UUID keys and timestamp columns.

Dependencies: sqlalchemy
System role: Shared foundation of the documents and chunks tables
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Registry for every ORM model; create_tables builds from its metadata."""


class UUIDMixin:
    """Client-generated UUID4 primary key."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )


class CreatedAtMixin:
    """Creation time only, for rows that are never updated in place (chunks)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )


class TimestampMixin(CreatedAtMixin):
    """
    Creation time plus a last-modified time.

    updated_at is refreshed by ``onupdate`` on Core UPDATE statements too,
    so every status transition moves it. Stale PROCESSING detection
    compares against this column.
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
