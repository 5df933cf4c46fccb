"""
Retrieval configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Vector index selection and query defaults
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from curriculum_rag.configs.base import BaseSettings


class RetrievalSettings(BaseSettings):
    """Vector index configuration (pgvector for Postgres, exact for SQLite/dev)."""

    model_config = SettingsConfigDict(env_prefix="RETRIEVAL_")

    index_type: str = Field(
        default="pgvector",
        description="Vector index type: 'pgvector' (SQL scoring) or 'exact' (in-process numpy)",
    )
    default_limit: int = Field(default=6, description="Number of results to return")
    similarity_threshold: float = Field(
        default=0.25,
        description="Dense similarity must exceed this value for a chunk to be returned",
    )
