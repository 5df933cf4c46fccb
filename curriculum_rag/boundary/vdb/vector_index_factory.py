"""
Vector index factory for selecting between pgvector (prod) and exact (dev).

Dependencies: curriculum_rag.boundary.vdb, curriculum_rag.configs
System role: Vector index instantiation and selection
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from curriculum_rag.boundary.vdb.base import VectorIndexBase
from curriculum_rag.boundary.vdb.exact_index import ExactVectorIndex
from curriculum_rag.boundary.vdb.pgvector_index import PgVectorIndex
from curriculum_rag.configs.retrieval import RetrievalSettings
from curriculum_rag.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def get_vector_index(
    session_factory: async_sessionmaker[AsyncSession],
    settings: RetrievalSettings,
) -> VectorIndexBase:
    """
    Build the vector index named by RETRIEVAL_INDEX_TYPE.

    Raises:
        ValidationError: If the index type is not 'pgvector' or 'exact'
    """
    index_type = settings.index_type.lower()

    if index_type == "pgvector":
        logger.info(f"{__name__}:get_vector_index - Creating pgvector index (SQL scoring)")
        return PgVectorIndex(session_factory)

    if index_type == "exact":
        logger.info(f"{__name__}:get_vector_index - Creating exact index (in-process scoring)")
        return ExactVectorIndex(session_factory)

    raise ValidationError(
        f"Invalid RETRIEVAL_INDEX_TYPE: {index_type}. Must be 'pgvector' or 'exact'.",
        field="index_type",
    )
