"""
Ingestion pipeline configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Chunking, batching and rate-limit policy for ingestion
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from curriculum_rag.configs.base import BaseSettings


class IngestionSettings(BaseSettings):
    """Settings for the document ingestion pipeline and seed loader."""

    model_config = SettingsConfigDict(env_prefix="INGESTION_")

    # Chunking settings
    chunk_size: int = Field(default=500, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(default=50, description="Overlap between consecutive chunks")

    # Batching settings
    embed_batch_size: int = Field(default=50, description="Texts per embedding request")
    insert_batch_size: int = Field(default=100, description="Chunk rows per insert")
    batch_delay_seconds: float = Field(
        default=0.5,
        description="Pause between embedding batches during single-document ingestion",
    )
    seed_batch_delay_seconds: float = Field(
        default=1.5,
        description="Pause between embedding batches during bulk seeding",
    )

    fetch_timeout_seconds: float | None = Field(
        default=60.0,
        description="Timeout for fetching document bytes (None disables)",
    )
    stale_after_minutes: int = Field(
        default=30,
        description="Documents stuck in processing longer than this are considered stale",
    )
