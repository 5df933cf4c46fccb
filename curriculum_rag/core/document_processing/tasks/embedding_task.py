"""
Embedding generation task.

Embeds chunk texts in sequential batches with a rate-limit pause between
batches, so provider request concurrency stays at one per document.

Dependencies: curriculum_rag.boundary.embeddings
System role: Fourth stage of document ingestion pipeline
"""

import logging
from typing import Sequence

from curriculum_rag.boundary.embeddings.embedder import Embedder
from curriculum_rag.core.document_processing.batch_policy import BatchPolicy, batched

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Generate embeddings for chunk texts batch by batch."""

    def __init__(self, embedder: Embedder, policy: BatchPolicy) -> None:
        self._embedder = embedder
        self._policy = policy

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Embed texts in ``embed_batch_size`` batches.

        Returns:
            list[list[float]]: One vector per input text, in order

        Raises:
            EmbeddingProviderError: When any batch fails
        """
        embeddings: list[list[float]] = []
        size = self._policy.embed_batch_size
        total_batches = (len(texts) + size - 1) // size

        for number, (start, batch) in enumerate(batched(texts, size), start=1):
            if start > 0:
                await self._policy.pause()
            embeddings.extend(await self._embedder.embed_many(batch))
            logger.info(
                f"{__name__}:embed - Batch {number}/{total_batches} embedded",
                extra={"embedded": len(embeddings), "total": len(texts)},
            )

        return embeddings
