"""
Curriculum-grounded retrieval and ingestion core.

Public surface:
  - split_into_chunks: boundary-aware text chunker
  - Embedder: batched, timeout-bounded embedding adapter
  - Retriever / RetrievalResult: hybrid dense + curriculum metadata retrieval
  - IngestionPipeline / IngestionResult: document ingestion state machine
  - ChunkSeeder: best-effort bulk loader for pre-chunked records
  - ServiceContainer: settings-driven wiring of the above
"""

from curriculum_rag.core.chunker import split_into_chunks
from curriculum_rag.core.retriever import Retriever
from curriculum_rag.boundary.embeddings import Embedder
from curriculum_rag.boundary.vdb import RetrievalResult
from curriculum_rag.core.document_processing import (
    BatchPolicy,
    ChunkSeeder,
    IngestionPipeline,
    IngestionResult,
)
from curriculum_rag.dependencies import ServiceContainer

__all__ = [
    "split_into_chunks",
    "Embedder",
    "Retriever",
    "RetrievalResult",
    "BatchPolicy",
    "ChunkSeeder",
    "IngestionPipeline",
    "IngestionResult",
    "ServiceContainer",
]
