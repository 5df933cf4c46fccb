"""
Exact in-process hybrid index.

Loads every chunk embedding through the ORM and scores it with numpy.
Works on any backend the ORM supports, which makes it the index used for
SQLite (tests, local development) and small corpora.

Dependencies: numpy, sqlalchemy
System role: Local/dev vector index with the same ranking as PgVectorIndex
"""

import logging
from typing import Sequence

import numpy as np

from curriculum_rag.boundary.db.CRUD.chunk_crud import chunk_crud
from curriculum_rag.boundary.vdb.base import VectorIndexBase
from curriculum_rag.boundary.vdb.vector_schemas import RetrievalResult
from curriculum_rag.core.scoring import (
    cosine_similarities,
    final_score,
    has_filters,
    metadata_alignment,
)

logger = logging.getLogger(__name__)


class ExactVectorIndex(VectorIndexBase):
    """Brute-force cosine scan; exact but linear in corpus size."""

    async def search(
        self,
        query_embedding: Sequence[float],
        *,
        subject: str | None = None,
        level: str | None = None,
        limit: int = 6,
        similarity_threshold: float = 0.25,
    ) -> list[RetrievalResult]:
        async with self._session_factory() as session:
            rows = await chunk_crud.get_candidates(session)

        if not rows:
            return []

        filters_present = has_filters(subject, level)
        matrix = np.vstack([np.asarray(row.embedding, dtype=np.float64) for row in rows])
        similarities = cosine_similarities(matrix, query_embedding)

        results = []
        for row, similarity in zip(rows, similarities):
            similarity = float(similarity)
            if similarity <= similarity_threshold:
                continue
            alignment = metadata_alignment(row.subject, row.level, subject, level)
            results.append(
                RetrievalResult(
                    chunk_id=row.id,
                    document_id=row.document_id,
                    content=row.content,
                    subject=row.subject,
                    level=row.level,
                    language=row.language,
                    source_page=row.source_page,
                    similarity=similarity,
                    final_score=final_score(similarity, alignment, filters_present),
                )
            )

        results.sort(key=lambda r: (-r.final_score, str(r.chunk_id)))

        logger.info(
            f"{__name__}:search - Scored {len(rows)} chunks, {len(results)} above threshold",
            extra={"subject": subject, "level": level, "limit": limit},
        )
        return results[:limit]
