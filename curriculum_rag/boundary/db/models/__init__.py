"""
Database models package.

Exports:
  - DocumentModel, DocumentStatus: Document ORM model and status enum
  - ChunkModel: Chunk ORM model with pgvector embedding

Dependencies: sqlalchemy, pgvector, curriculum_rag.boundary.db.base
System role: Database model definitions for domain entities
"""

from curriculum_rag.boundary.db.models.document_model import DocumentModel, DocumentStatus
from curriculum_rag.boundary.db.models.chunk_model import EMBEDDING_DIMENSION, ChunkModel

__all__ = [
    "DocumentModel",
    "DocumentStatus",
    "ChunkModel",
    "EMBEDDING_DIMENSION",
]
