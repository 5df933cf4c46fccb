"""
Test suite for the hybrid scoring policy.

System role: Verification of weights, alignment and cosine similarity
"""

import numpy as np
import pytest

from curriculum_rag.core.scoring import (
    cosine_similarities,
    cosine_similarity,
    final_score,
    has_filters,
    hybrid_weights,
    metadata_alignment,
)


class TestHybridWeights:
    def test_filters_present_should_favour_metadata(self) -> None:
        assert hybrid_weights(True) == (0.4, 0.6)

    def test_no_filters_should_be_pure_dense(self) -> None:
        assert hybrid_weights(False) == (1.0, 0.0)

    @pytest.mark.parametrize(
        "subject, level, expected",
        [
            (None, None, False),
            ("History", None, True),
            (None, "Form 1", True),
            ("Civics", "Form 4", True),
            ("", None, False),
            ("", "", False),
            ("", "Form 2", True),
        ],
    )
    def test_has_filters(self, subject, level, expected) -> None:
        assert has_filters(subject, level) is expected


class TestMetadataAlignment:
    def test_no_filters_should_align(self) -> None:
        assert metadata_alignment("Biology", "Form 3", None, None) == 1.0

    def test_matching_both_filters_should_align(self) -> None:
        assert metadata_alignment("History", "Form 2", "History", "Form 2") == 1.0

    def test_one_mismatch_should_not_align(self) -> None:
        assert metadata_alignment("History", "Form 3", "History", "Form 2") == 0.0

    def test_missing_chunk_metadata_should_not_align_with_filter(self) -> None:
        assert metadata_alignment(None, None, "History", None) == 0.0

    def test_empty_subject_filter_should_be_ignored(self) -> None:
        assert metadata_alignment("History", "Form 2", "", "Form 2") == 1.0
        assert metadata_alignment("History", "Form 3", "", "Form 2") == 0.0


class TestFinalScore:
    def test_without_filters_should_equal_similarity(self) -> None:
        assert final_score(0.37, 0.0, False) == 0.37
        assert final_score(0.37, 1.0, False) == 0.37

    def test_with_filters_should_blend(self) -> None:
        assert final_score(0.5, 1.0, True) == pytest.approx(0.8)
        assert final_score(0.5, 0.0, True) == pytest.approx(0.2)


class TestCosineSimilarity:
    def test_identical_vectors_should_score_one(self) -> None:
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors_should_score_zero(self) -> None:
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors_should_score_minus_one(self) -> None:
        assert cosine_similarity([1.0, 1.0], [-1.0, -1.0]) == pytest.approx(-1.0)

    def test_zero_norm_should_score_zero(self) -> None:
        assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0
        assert cosine_similarity([1.0, 0.0], [0.0, 0.0]) == 0.0

    def test_batch_should_match_pairwise(self) -> None:
        matrix = np.array([[1.0, 0.0], [1.0, 1.0], [0.0, 0.0]])

        result = cosine_similarities(matrix, [1.0, 0.0])

        assert result == pytest.approx([1.0, 1 / np.sqrt(2), 0.0])
