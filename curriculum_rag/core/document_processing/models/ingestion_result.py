"""
Ingestion result model.

Dependencies: pydantic
System role: Return type for IngestionPipeline.ingest_document()
"""

import uuid

from pydantic import BaseModel, Field


class IngestionResult(BaseModel):
    """Result of a successful single-document ingestion."""

    document_id: uuid.UUID = Field(description="Ingested document")
    chunk_count: int = Field(description="Number of chunks written")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
