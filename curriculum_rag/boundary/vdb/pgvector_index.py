"""
pgvector-backed hybrid index.

Pushes the whole hybrid score into SQL using pgvector's cosine distance
operator (<=>). Ordering by the hybrid score means PostgreSQL evaluates
the expression for every chunk that clears the threshold rather than
walking the HNSW index.

Dependencies: sqlalchemy, pgvector
System role: Production vector index (PostgreSQL + pgvector)
"""

import logging
from typing import Sequence

from sqlalchemy import and_, case, literal, select

from curriculum_rag.boundary.db.models.chunk_model import ChunkModel
from curriculum_rag.boundary.vdb.base import VectorIndexBase
from curriculum_rag.boundary.vdb.vector_schemas import RetrievalResult
from curriculum_rag.core.scoring import has_filters, hybrid_weights

logger = logging.getLogger(__name__)


class PgVectorIndex(VectorIndexBase):
    """Hybrid search evaluated entirely inside PostgreSQL."""

    def _alignment_expression(self, subject: str | None, level: str | None):
        conditions = []
        if subject:
            conditions.append(ChunkModel.subject == subject)
        if level:
            conditions.append(ChunkModel.level == level)
        return case((and_(*conditions), literal(1.0)), else_=literal(0.0))

    async def search(
        self,
        query_embedding: Sequence[float],
        *,
        subject: str | None = None,
        level: str | None = None,
        limit: int = 6,
        similarity_threshold: float = 0.25,
    ) -> list[RetrievalResult]:
        filters_present = has_filters(subject, level)
        alpha, gamma = hybrid_weights(filters_present)

        similarity = 1 - ChunkModel.embedding.cosine_distance(list(query_embedding))
        if filters_present:
            score = alpha * similarity + gamma * self._alignment_expression(subject, level)
        else:
            score = similarity

        stmt = (
            select(
                ChunkModel.id,
                ChunkModel.document_id,
                ChunkModel.content,
                ChunkModel.subject,
                ChunkModel.level,
                ChunkModel.language,
                ChunkModel.source_page,
                similarity.label("similarity"),
                score.label("final_score"),
            )
            .where(similarity > similarity_threshold)
            .order_by(score.desc(), ChunkModel.id.asc())
            .limit(limit)
        )

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            rows = result.all()

        logger.info(
            f"{__name__}:search - Retrieved {len(rows)} chunks",
            extra={"subject": subject, "level": level, "limit": limit},
        )
        return [
            RetrievalResult(
                chunk_id=row.id,
                document_id=row.document_id,
                content=row.content,
                subject=row.subject,
                level=row.level,
                language=row.language,
                source_page=row.source_page,
                similarity=float(row.similarity),
                final_score=float(row.final_score),
            )
            for row in rows
        ]
