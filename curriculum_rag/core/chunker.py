"""
Boundary-preferring recursive text chunker.

Splits plain text into overlapping chunks of roughly ``chunk_size``
characters, preferring paragraph, line, sentence and clause boundaries
over mid-word cuts. Output is fully deterministic, which is what makes
re-ingestion of a document reproducible.

Dependencies: None (pure domain logic)
System role: First transformation step of document ingestion
"""

from dataclasses import dataclass

from curriculum_rag.core.exceptions import InvalidChunkParameters

# Coarse to fine: paragraph, line, sentence, clause, word
SEPARATORS: tuple[str, ...] = ("\n\n", "\n", ". ", "? ", "! ", "; ", ", ", " ")

# (text, already_overlapped)
_Piece = tuple[str, bool]


def _validate(chunk_size: int, chunk_overlap: int) -> None:
    if chunk_size <= 0 or chunk_overlap < 0 or chunk_overlap >= chunk_size:
        raise InvalidChunkParameters(chunk_size, chunk_overlap)


def _split_by_size(text: str, chunk_size: int, chunk_overlap: int) -> list[_Piece]:
    """
    Fixed-size slicing used when no separator is left.

    Consecutive slices share ``chunk_overlap`` characters by construction,
    so every slice after the first is flagged as already overlapped.
    """
    pieces: list[_Piece] = []
    step = chunk_size - chunk_overlap
    start = 0
    while start < len(text):
        end = min(start + chunk_size, len(text))
        piece = text[start:end].strip()
        if piece:
            pieces.append((piece, bool(pieces)))
        start += step
    return pieces


def _recursive_split(
    text: str,
    separators: tuple[str, ...],
    chunk_size: int,
    chunk_overlap: int,
) -> list[_Piece]:
    if len(text) <= chunk_size:
        stripped = text.strip()
        return [(stripped, False)] if stripped else []

    separator = next((sep for sep in separators if sep in text), None)
    if separator is None:
        return _split_by_size(text, chunk_size, chunk_overlap)

    finer = separators[separators.index(separator) + 1:]
    pieces: list[_Piece] = []
    current = ""

    for part in text.split(separator):
        candidate = f"{current}{separator}{part}" if current else part
        if len(candidate) <= chunk_size:
            current = candidate
            continue

        if current.strip():
            pieces.append((current.strip(), False))

        if len(part) > chunk_size:
            pieces.extend(_recursive_split(part, finer, chunk_size, chunk_overlap))
            current = ""
        else:
            current = part

    if current.strip():
        pieces.append((current.strip(), False))

    return pieces


def split_into_chunks(
    text: str,
    chunk_size: int = 500,
    chunk_overlap: int = 50,
) -> list[str]:
    """
    Split text into overlapping, boundary-aligned chunks.

    Every chunk after the first starts with the last ``chunk_overlap``
    characters of the chunk before it. Slices from the fixed-size fallback
    already overlap positionally and are not prefixed a second time.

    Args:
        text: Plain text to split
        chunk_size: Target maximum characters per boundary chunk, before overlap
        chunk_overlap: Characters carried over from the previous chunk

    Returns:
        list[str]: Non-empty chunks in document order

    Raises:
        InvalidChunkParameters: If chunk_size <= 0 or overlap not in [0, chunk_size)

    Example:
        >>> split_into_chunks("Hello world.")
        ['Hello world.']
    """
    _validate(chunk_size, chunk_overlap)

    if not text or not text.strip():
        return []
    if len(text) <= chunk_size:
        return [text.strip()]

    chunks: list[str] = []
    for piece, already_overlapped in _recursive_split(
        text, SEPARATORS, chunk_size, chunk_overlap
    ):
        if chunks and chunk_overlap and not already_overlapped:
            piece = chunks[-1][-chunk_overlap:] + piece
        chunks.append(piece)
    return chunks


@dataclass(frozen=True)
class TextChunker:
    """Validated chunking parameters bound to ``split_into_chunks``."""

    chunk_size: int = 500
    chunk_overlap: int = 50

    def __post_init__(self) -> None:
        _validate(self.chunk_size, self.chunk_overlap)

    def split(self, text: str) -> list[str]:
        return split_into_chunks(text, self.chunk_size, self.chunk_overlap)
