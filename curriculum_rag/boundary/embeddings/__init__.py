"""
Embedding boundary: provider construction and the Embedder adapter.

Exports:
  - Embedder: normalized, timeout-bounded, retried embedding calls
  - build_embeddings_provider(), build_embedder(): settings-driven construction
"""

from curriculum_rag.boundary.embeddings.embedder import Embedder, normalize_text
from curriculum_rag.boundary.embeddings.factory import build_embedder, build_embeddings_provider

__all__ = [
    "Embedder",
    "normalize_text",
    "build_embedder",
    "build_embeddings_provider",
]
