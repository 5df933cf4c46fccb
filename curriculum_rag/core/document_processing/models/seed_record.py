"""
Seed file schemas.

Pre-chunked records as exported by the curriculum chunking tooling, one
JSON object per chunk, plus the summary returned by a seed run.

Dependencies: pydantic
System role: Input and output types for ChunkSeeder
"""

from pydantic import BaseModel, Field, field_validator


class SeedMetadata(BaseModel):
    """Curriculum metadata attached to a pre-chunked record."""

    subject: str | None = None
    level: str | None = None
    language: str | None = None
    source_page: str | None = None

    @field_validator("subject", "level", "language", "source_page", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None


class SeedRecord(BaseModel):
    """One pre-chunked text span awaiting embedding."""

    chunk_id: str | None = None
    source: str | None = Field(default=None, description="Original blob locator")
    filename: str
    content_length: int | None = None
    text: str
    metadata: SeedMetadata = Field(default_factory=SeedMetadata)


class SeedReport(BaseModel):
    """Summary of a best-effort seed run."""

    documents_created: int = 0
    documents_skipped: int = 0
    chunks_inserted: int = 0
    failed_batches: int = 0
    files: dict[str, int] = Field(
        default_factory=dict,
        description="Chunks inserted per filename during this run",
    )
