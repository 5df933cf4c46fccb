"""
Models for the document processing pipeline.

Exports: IngestionResult, SeedMetadata, SeedRecord, SeedReport
"""

from .ingestion_result import IngestionResult
from .seed_record import SeedMetadata, SeedRecord, SeedReport

__all__ = [
    "IngestionResult",
    "SeedMetadata",
    "SeedRecord",
    "SeedReport",
]
