"""
Embedding provider factory.

Dependencies: langchain_openai, langchain_google_genai, curriculum_rag.configs
System role: Builds the configured LangChain embeddings client
"""

import logging

from langchain_core.embeddings import Embeddings

from curriculum_rag.boundary.embeddings.embedder import Embedder
from curriculum_rag.configs.embedding import EmbeddingSettings
from curriculum_rag.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def build_embeddings_provider(settings: EmbeddingSettings) -> Embeddings:
    """
    Create the LangChain embeddings client named by ``settings.provider``.

    Raises:
        ValidationError: If the provider name is unknown
    """
    provider = settings.provider.lower()
    logger.info(
        f"{__name__}:build_embeddings_provider - Creating provider",
        extra={"provider": provider, "dimension": settings.dimension},
    )

    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        kwargs = {}
        if settings.openai_api_key:
            kwargs["api_key"] = settings.openai_api_key
        return OpenAIEmbeddings(
            model=settings.model,
            dimensions=settings.dimension,
            **kwargs,
        )

    if provider == "google":
        from curriculum_rag.boundary.embeddings.embeddings_wrapper import (
            FixedDimensionEmbeddings,
        )

        kwargs = {}
        if settings.google_api_key:
            kwargs["google_api_key"] = settings.google_api_key
        return FixedDimensionEmbeddings(
            model=settings.google_model,
            output_dimensionality=settings.dimension,
            **kwargs,
        )

    raise ValidationError(
        f"Unknown embedding provider: {settings.provider}",
        field="provider",
    )


def build_embedder(settings: EmbeddingSettings, provider: Embeddings | None = None) -> Embedder:
    """Create an Embedder from settings, optionally around an injected provider."""
    return Embedder(
        provider=provider or build_embeddings_provider(settings),
        dimension=settings.dimension,
        timeout_seconds=settings.timeout_seconds,
        max_attempts=settings.max_attempts,
    )
