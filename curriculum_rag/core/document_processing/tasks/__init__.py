"""
Task modules for the document processing pipeline.

Exports: fetchers, TextExtractor, ChunkingTask, EmbeddingTask, IndexWriteTask
"""

from .chunking_task import ChunkingTask
from .embedding_task import EmbeddingTask
from .extraction_task import TextExtractor
from .fetch_task import (
    BlobFetcher,
    FetchedBlob,
    HttpBlobFetcher,
    LocalBlobFetcher,
    RoutingBlobFetcher,
    S3BlobFetcher,
)
from .index_write_task import IndexWriteTask, build_chunk_rows

__all__ = [
    "BlobFetcher",
    "FetchedBlob",
    "LocalBlobFetcher",
    "HttpBlobFetcher",
    "S3BlobFetcher",
    "RoutingBlobFetcher",
    "TextExtractor",
    "ChunkingTask",
    "EmbeddingTask",
    "IndexWriteTask",
    "build_chunk_rows",
]
