"""
Vector index interface.

Dependencies: curriculum_rag.boundary.vdb.vector_schemas
System role: Contract shared by the pgvector and exact index backends
"""

from abc import ABC, abstractmethod
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from curriculum_rag.boundary.vdb.vector_schemas import RetrievalResult


class VectorIndexBase(ABC):
    """
    Hybrid nearest-neighbour search over stored chunks.

    Implementations must drop chunks whose similarity does not exceed the
    threshold, rank by final score descending with chunk id as the
    tie-breaker, and never treat subject/level as hard filters.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @abstractmethod
    async def search(
        self,
        query_embedding: Sequence[float],
        *,
        subject: str | None = None,
        level: str | None = None,
        limit: int = 6,
        similarity_threshold: float = 0.25,
    ) -> list[RetrievalResult]:
        """Return at most ``limit`` results ordered by final score."""
