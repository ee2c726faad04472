"""Unit tests for string similarity and Levenshtein distance"""

import pytest

from domain.boq.similarity import normalize, similarity


class TestNormalize:
    def test_lowercases_trims_and_collapses_whitespace(self):
        assert normalize("  Century   Plywood \t 12MM ") == "century plywood 12mm"


class TestSimilarity:
    """Test similarity percentage rules"""

    def test_identical_strings_score_100(self):
        assert similarity("Plywood", "Plywood") == 100.0
        assert similarity("Gurjan Plywood 18mm", "Gurjan Plywood 18mm") == 100.0

    def test_case_and_whitespace_are_ignored(self):
        assert similarity("Century  Plywood ", "century plywood") == 100.0

    def test_containment_scores_85(self):
        assert similarity("Plywood", "Plywoods") == 85.0
        assert similarity("1mm calibrated", "1mm") == 85.0

    def test_edit_distance_ratio(self):
        # 3 edits over 7 characters
        assert similarity("kitten", "sitting") == pytest.approx((1 - 3 / 7) * 100)

    @pytest.mark.parametrize("a,b,edits,length", [
        ("flaw", "lawn", 2, 4),
        ("Hettich Hinge", "Hettich Soft Close Hinge", 11, 24),
        ("Century Plywood", "Centuryply", 5, 15),
        ("Plywood", "Playwood", 1, 8),
    ])
    def test_edit_distance_over_longer_length(self, a, b, edits, length):
        assert similarity(a, b) == pytest.approx((1 - edits / length) * 100)

    def test_nothing_in_common_scores_0(self):
        assert similarity("abc", "xyz") == 0.0

    @pytest.mark.parametrize("a,b", [
        ("", "Plywood"),
        ("Plywood", ""),
        (None, "Plywood"),
        ("Plywood", None),
        ("   ", "Plywood"),
    ])
    def test_empty_or_missing_input_scores_0(self, a, b):
        assert similarity(a, b) == 0.0

    @pytest.mark.parametrize("a,b", [
        ("Century Plywood", "Hettich Hinge"),
        ("12mm", "1mm calibrated"),
        ("sheets", "pieces"),
    ])
    def test_symmetric_and_bounded(self, a, b):
        score = similarity(a, b)
        assert score == similarity(b, a)
        assert 0.0 <= score <= 100.0
