"""
Document processing pipeline for ingestion.

Single-document ingestion with a strict all-or-nothing failure policy,
plus a best-effort bulk seeder for pre-chunked data.

Dependencies: sqlalchemy, pypdf, httpx, boto3, pydantic
System role: Document ingestion entrypoint
"""

from .batch_policy import BatchPolicy
from .models import IngestionResult, SeedRecord, SeedReport
from .pipeline import IngestionPipeline
from .seeding import ChunkSeeder, load_seed_file

__all__ = [
    "BatchPolicy",
    "IngestionPipeline",
    "IngestionResult",
    "ChunkSeeder",
    "SeedRecord",
    "SeedReport",
    "load_seed_file",
]
