"""Tests for Elo rating calculations."""

import pytest

from pairwise_ranker.models import Item
from pairwise_ranker.ranking.elo import (
    EloAlgorithm,
    calculate_expected_score,
    update_elo,
)


class TestCalculateExpectedScore:
    """Tests for expected score calculation."""

    def test_equal_ratings(self):
        """Test equal ratings produce 0.5 expected."""
        assert calculate_expected_score(1000, 1000) == 0.5

    def test_higher_rating_higher_expected(self):
        """Test higher rated item has higher expected score."""
        expected = calculate_expected_score(1100, 900)
        assert 0.5 < expected < 1.0

    def test_400_point_difference(self):
        """Test 400 point difference produces ~91% expected."""
        # 10^(400/400) = 10, so expected = 1/(1+0.1) ≈ 0.909
        assert calculate_expected_score(1400, 1000) == pytest.approx(0.909, abs=0.001)

    def test_expected_scores_sum_to_one(self):
        """Test both sides' expectations are complementary."""
        a = calculate_expected_score(1234.5, 987.6)
        b = calculate_expected_score(987.6, 1234.5)
        assert a + b == pytest.approx(1.0)


class TestUpdateElo:
    """Tests for Elo rating updates."""

    def test_equal_ratings_single_game(self):
        """Test equal items move by exactly K/2."""
        assert update_elo(1000.0, 1000.0) == (1016.0, 984.0)

    def test_zero_sum(self):
        """Test gains equal losses."""
        new_w, new_l = update_elo(1100.0, 950.0, k_factor=32)
        assert new_w - 1100.0 == pytest.approx(950.0 - new_l)

    def test_upset_win_larger_change(self):
        """Test an underdog win moves ratings more than half of K."""
        new_w, _ = update_elo(900.0, 1100.0, k_factor=32)
        assert new_w - 900.0 > 16

    def test_favorite_win_smaller_change(self):
        """Test a favorite win moves ratings less than half of K."""
        new_w, _ = update_elo(1100.0, 900.0, k_factor=32)
        assert new_w - 1100.0 < 16

    def test_extreme_gap_does_not_overflow(self):
        """Test a huge rating gap saturates instead of overflowing."""
        assert calculate_expected_score(0.0, 1e6) == 0.0
        new_w, new_l = update_elo(1e6, 0.0)
        assert new_w == pytest.approx(1e6)
        assert new_l == pytest.approx(0.0)


class TestEloAlgorithm:
    """Tests for EloAlgorithm."""

    def test_initialize(self):
        """Test initialization sets the configured starting Elo."""
        items = [Item("a", elo=5.0), Item("b")]
        EloAlgorithm(initial_elo=1200.0).initialize(items)
        assert [i.elo for i in items] == [1200.0, 1200.0]

    def test_apply_vote(self):
        """Test a vote updates only the Elo fields."""
        winner, loser = Item("a"), Item("b")
        EloAlgorithm().apply_vote(winner, loser)

        assert winner.elo == 1016.0
        assert loser.elo == 984.0
        assert winner.rating == 1500.0
        assert winner.wins == 0

    def test_order_matters(self):
        """Test Elo is path-dependent."""
        algo = EloAlgorithm()
        a1, b1, c1 = Item("a"), Item("b"), Item("c")
        algo.apply_vote(a1, b1)
        algo.apply_vote(b1, c1)
        algo.apply_vote(c1, a1)

        a2, b2, c2 = Item("a"), Item("b"), Item("c")
        algo.apply_vote(c2, a2)
        algo.apply_vote(b2, c2)
        algo.apply_vote(a2, b2)

        assert a1.elo != pytest.approx(a2.elo)

    def test_protocol_attributes(self):
        """Test ranking key and incremental flag."""
        algo = EloAlgorithm()
        assert algo.key == "elo"
        assert algo.incremental is True
