"""
Vector index boundary.

Exports:
  - RetrievalResult: ranked chunk returned by a search
  - VectorIndexBase, PgVectorIndex, ExactVectorIndex: index backends
  - get_vector_index(): settings-driven backend selection
"""

from curriculum_rag.boundary.vdb.vector_schemas import RetrievalResult
from curriculum_rag.boundary.vdb.base import VectorIndexBase
from curriculum_rag.boundary.vdb.pgvector_index import PgVectorIndex
from curriculum_rag.boundary.vdb.exact_index import ExactVectorIndex
from curriculum_rag.boundary.vdb.vector_index_factory import get_vector_index

__all__ = [
    "RetrievalResult",
    "VectorIndexBase",
    "PgVectorIndex",
    "ExactVectorIndex",
    "get_vector_index",
]
