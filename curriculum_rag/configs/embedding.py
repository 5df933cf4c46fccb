"""
Embedding provider configuration settings.

The embedding model and its dimensionality are system-wide: ingestion and
query-time embedding must use the same model, and the chunks table column is
declared with this dimension.

Dependencies: pydantic, pydantic_settings
System role: Embedding model configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from curriculum_rag.configs.base import BaseSettings


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration."""

    model_config = SettingsConfigDict(env_prefix="EMBEDDING_")

    provider: str = Field(
        default="openai",
        description="Embedding provider: 'openai' or 'google'",
    )
    model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model ID (text-embedding-3-small is 1536-dim)",
    )
    google_model: str = Field(
        default="models/gemini-embedding-001",
        description="Gemini model ID used when provider is 'google'",
    )
    dimension: int = Field(
        default=1536,
        description="Embedding vector dimension shared by every chunk and query",
    )
    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    google_api_key: str | None = Field(default=None, description="Google AI API key")

    timeout_seconds: float = Field(
        default=30.0,
        description="Upper bound for a single upstream embedding call",
    )
    max_attempts: int = Field(
        default=3,
        description="Attempts per embedding call before giving up",
    )
