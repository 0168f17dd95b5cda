"""Tests for round-robin pairing."""

from pairwise_ranker.services.pairing import round_robin_pairs, total_comparisons


class TestRoundRobinPairs:
    """Tests for round_robin_pairs."""

    def test_classic_order(self):
        """Test pairs come row by row with i < j."""
        assert round_robin_pairs(4) == [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]

    def test_two_items(self):
        """Test the smallest session has one comparison."""
        assert round_robin_pairs(2) == [(0, 1)]

    def test_shuffle_covers_every_pair_once(self):
        """Test shuffling keeps each unordered pair exactly once."""
        pairs = round_robin_pairs(6, shuffle=True, seed=7)
        assert len(pairs) == total_comparisons(6)
        assert {frozenset(p) for p in pairs} == {frozenset(p) for p in round_robin_pairs(6)}
        assert all(a != b for a, b in pairs)

    def test_deterministic_with_seed(self):
        """Test pairing is deterministic with the same seed."""
        assert round_robin_pairs(8, shuffle=True, seed=3) == round_robin_pairs(
            8, shuffle=True, seed=3
        )


class TestTotalComparisons:
    """Tests for total_comparisons."""

    def test_counts(self):
        """Test n * (n - 1) / 2."""
        assert total_comparisons(2) == 1
        assert total_comparisons(5) == 10
        assert total_comparisons(100) == 4950
