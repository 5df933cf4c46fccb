"""
Vector retrieval schemas.

Dependencies: pydantic
System role: Type definitions for retrieval results
"""

import uuid

from pydantic import BaseModel, Field


class RetrievalResult(BaseModel):
    """Single chunk returned by a hybrid retrieval query."""

    chunk_id: uuid.UUID = Field(description="Chunk identifier")
    document_id: uuid.UUID = Field(description="Owning document")
    content: str = Field(description="Chunk text content")
    subject: str | None = Field(default=None, description="Curriculum subject")
    level: str | None = Field(default=None, description="Curriculum level, e.g. 'Form 2'")
    language: str = Field(default="sw", description="Chunk language code")
    source_page: str | None = Field(default=None, description="Page label in the source")
    similarity: float = Field(description="Dense similarity, 1 - cosine distance")
    final_score: float = Field(description="Hybrid score used for ranking")
