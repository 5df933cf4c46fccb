"""
Batching and rate-limit policy for ingestion.

Dependencies: curriculum_rag.configs
System role: Injected knobs for batch sizes and inter-batch delay
"""

import asyncio
from dataclasses import dataclass
from typing import Iterator, Sequence, TypeVar

from curriculum_rag.configs.ingestion import IngestionSettings

T = TypeVar("T")


@dataclass(frozen=True)
class BatchPolicy:
    """
    Batch sizes and the pause between embedding batches.

    Tests construct this with ``batch_delay_seconds=0``.
    """

    embed_batch_size: int = 50
    insert_batch_size: int = 100
    batch_delay_seconds: float = 0.5

    def __post_init__(self) -> None:
        if self.embed_batch_size < 1 or self.insert_batch_size < 1:
            raise ValueError("batch sizes must be at least 1")
        if self.batch_delay_seconds < 0:
            raise ValueError("batch_delay_seconds cannot be negative")

    @classmethod
    def from_settings(cls, settings: IngestionSettings, seeding: bool = False) -> "BatchPolicy":
        """Build the policy for single-document ingestion or for bulk seeding."""
        return cls(
            embed_batch_size=settings.embed_batch_size,
            insert_batch_size=settings.insert_batch_size,
            batch_delay_seconds=(
                settings.seed_batch_delay_seconds if seeding else settings.batch_delay_seconds
            ),
        )

    async def pause(self) -> None:
        """Sleep for the configured inter-batch delay."""
        if self.batch_delay_seconds > 0:
            await asyncio.sleep(self.batch_delay_seconds)


def batched(items: Sequence[T], size: int) -> Iterator[tuple[int, Sequence[T]]]:
    """Yield (start_offset, slice) pairs of at most ``size`` items."""
    for start in range(0, len(items), size):
        yield start, items[start:start + size]
