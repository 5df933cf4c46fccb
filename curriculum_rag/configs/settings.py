"""
Aggregated application settings.

Dependencies: All config groups
System role: Single settings object handed to the ServiceContainer
"""

from functools import lru_cache

from pydantic import Field

from curriculum_rag.configs.base import BaseSettings
from curriculum_rag.configs.database import DatabaseSettings
from curriculum_rag.configs.embedding import EmbeddingSettings
from curriculum_rag.configs.ingestion import IngestionSettings
from curriculum_rag.configs.retrieval import RetrievalSettings
from curriculum_rag.configs.storage import StorageSettings


class Settings(BaseSettings):
    """One field per config group; each group reads its own env prefix."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Process-wide settings, read from the environment on first use.

    The chunks table reads the embedding dimension from here at import
    time, so EMBEDDING_DIMENSION must be set before models are imported.
    """
    return Settings()
