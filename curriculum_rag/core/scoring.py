"""
Hybrid retrieval scoring policy.

final_score = alpha * similarity + gamma * metadata_alignment, where the
weights switch on whether any curriculum filter (subject, level) was given.
Both vector index backends rank with these definitions.

Dependencies: numpy
System role: Single source of truth for retrieval ranking
"""

from typing import Sequence

import numpy as np

FILTERED_WEIGHTS: tuple[float, float] = (0.4, 0.6)
UNFILTERED_WEIGHTS: tuple[float, float] = (1.0, 0.0)


def has_filters(subject: str | None, level: str | None) -> bool:
    """Empty strings count as no filter."""
    return bool(subject or level)


def hybrid_weights(filters_present: bool) -> tuple[float, float]:
    """
    Return (alpha, gamma) for dense similarity and metadata alignment.

    Metadata dominates when the caller scoped the query to a curriculum
    slice; otherwise ranking is purely dense.
    """
    return FILTERED_WEIGHTS if filters_present else UNFILTERED_WEIGHTS


def metadata_alignment(
    chunk_subject: str | None,
    chunk_level: str | None,
    subject: str | None,
    level: str | None,
) -> float:
    """1.0 when the chunk matches every non-empty filter, else 0.0."""
    subject_ok = not subject or chunk_subject == subject
    level_ok = not level or chunk_level == level
    return 1.0 if subject_ok and level_ok else 0.0


def final_score(similarity: float, alignment: float, filters_present: bool) -> float:
    alpha, gamma = hybrid_weights(filters_present)
    return alpha * similarity + gamma * alignment


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """
    Cosine similarity of two vectors (1 - cosine distance).

    Zero-norm vectors have no direction and score 0.0.
    """
    return float(cosine_similarities(np.atleast_2d(np.asarray(a, dtype=np.float64)), b)[0])


def cosine_similarities(matrix: np.ndarray, query: Sequence[float] | np.ndarray) -> np.ndarray:
    """
    Cosine similarity of every row of ``matrix`` against ``query``.

    Args:
        matrix: (n, d) array of candidate embeddings
        query: length-d query embedding

    Returns:
        np.ndarray: (n,) similarities, 0.0 wherever either vector has zero norm
    """
    rows = np.asarray(matrix, dtype=np.float64)
    q = np.asarray(query, dtype=np.float64)
    norms = np.linalg.norm(rows, axis=1) * np.linalg.norm(q)
    dots = rows @ q
    similarities = np.zeros(len(rows), dtype=np.float64)
    np.divide(dots, norms, out=similarities, where=norms > 0)
    return similarities
