"""
Hybrid retriever.

Embeds the query text and asks the vector index for chunks ranked by
dense similarity blended with curriculum metadata alignment. This is the
single entry point the conversational layer uses to ground answers.

Dependencies: curriculum_rag.boundary.embeddings, curriculum_rag.boundary.vdb
System role: Query-time retrieval
"""

import logging

from curriculum_rag.boundary.embeddings.embedder import Embedder
from curriculum_rag.boundary.vdb.base import VectorIndexBase
from curriculum_rag.boundary.vdb.vector_schemas import RetrievalResult
from curriculum_rag.core.exceptions import ValidationError
from curriculum_rag.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class Retriever:
    """Hybrid dense + metadata retriever over a vector index."""

    def __init__(
        self,
        embedder: Embedder,
        index: VectorIndexBase,
        default_limit: int = 6,
        default_threshold: float = 0.25,
    ) -> None:
        self.embedder = embedder
        self.index = index
        self.default_limit = default_limit
        self.default_threshold = default_threshold

    async def retrieve(
        self,
        query_text: str,
        subject: str | None = None,
        level: str | None = None,
        limit: int | None = None,
        similarity_threshold: float | None = None,
    ) -> list[RetrievalResult]:
        """
        Retrieve chunks relevant to a query.

        Subject and level bias the ranking but never exclude chunks; only
        the similarity threshold does.

        Args:
            query_text: Natural-language query
            subject: Optional curriculum subject to favour
            level: Optional curriculum level to favour
            limit: Maximum results (defaults to default_limit)
            similarity_threshold: Dense similarity floor, exclusive

        Returns:
            list[RetrievalResult]: Results in non-increasing final_score order,
            possibly empty

        Raises:
            ValidationError: If limit < 1
            EmbeddingProviderError: If the query cannot be embedded
        """
        limit = self.default_limit if limit is None else limit
        threshold = (
            self.default_threshold if similarity_threshold is None else similarity_threshold
        )
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")

        query_embedding = await self.embedder.embed_one(query_text)
        results = await self.index.search(
            query_embedding,
            subject=subject,
            level=level,
            limit=limit,
            similarity_threshold=threshold,
        )

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:retrieve - Returning {len(results)} results",
            subject=subject,
            curriculum_level=level,
            limit=limit,
            threshold=threshold,
        )
        return results
