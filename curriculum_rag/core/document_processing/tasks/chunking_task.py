"""
Text chunking task.

Splits extracted text into retrievable chunks while preserving context.

Dependencies: curriculum_rag.core.chunker
System role: Third stage of document ingestion pipeline
"""

from curriculum_rag.core.chunker import TextChunker


class ChunkingTask:
    """Split document text with the boundary-preferring chunker."""

    def __init__(
        self,
        chunk_size: int = 500,
        chunk_overlap: int = 50,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            InvalidChunkParameters: When the parameters cannot terminate
        """
        self._chunker = TextChunker(chunk_size=chunk_size, chunk_overlap=chunk_overlap)

    def chunk(self, text: str) -> list[str]:
        return self._chunker.split(text)
