"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - DocumentModel, DocumentStatus, ChunkModel: Domain entities
  - document_crud, chunk_crud: CRUD operation singletons

Dependencies: sqlalchemy, pgvector, curriculum_rag.configs
System role: Database adapter for documents and embedded chunks
"""

from curriculum_rag.boundary.db.base import Base, TimestampMixin, UUIDMixin
from curriculum_rag.boundary.db.connection import (
    enable_pgvector,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from curriculum_rag.boundary.db.models import (
    EMBEDDING_DIMENSION,
    ChunkModel,
    DocumentModel,
    DocumentStatus,
)
from curriculum_rag.boundary.db.CRUD import (
    BaseCRUD,
    ChunkCRUD,
    DocumentCRUD,
    chunk_crud,
    document_crud,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "enable_pgvector",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "EMBEDDING_DIMENSION",
    "ChunkModel",
    "DocumentModel",
    "DocumentStatus",
    "BaseCRUD",
    "ChunkCRUD",
    "DocumentCRUD",
    "chunk_crud",
    "document_crud",
]
