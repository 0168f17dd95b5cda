"""Tests for Glicko rating calculations."""

import math

import pytest

from pairwise_ranker.core.errors import NumericDegeneracyError
from pairwise_ranker.models import Item
from pairwise_ranker.ranking.glicko import (
    Q,
    GlickoAlgorithm,
    calculate_expected_score,
    clamp_expected,
    g,
    update_glicko,
)


class TestGlickoHelpers:
    """Tests for g() and the expected score."""

    def test_q_constant(self):
        """Test q = ln(10) / 400."""
        assert Q == pytest.approx(math.log(10) / 400)

    def test_g_zero_rd(self):
        """Test g(0) is 1."""
        assert g(0.0) == 1.0

    def test_g_decreases_with_rd(self):
        """Test larger deviations attenuate more."""
        assert g(50.0) > g(350.0)

    def test_equal_ratings_expected_half(self):
        """Test equal ratings give 0.5 regardless of RD."""
        assert calculate_expected_score(1500, 1500, 350) == 0.5

    def test_clamp(self):
        """Test expected scores are kept away from 0 and 1."""
        assert clamp_expected(1.0, 1e-6) == 1.0 - 1e-6
        assert clamp_expected(0.0, 1e-6) == 1e-6
        assert clamp_expected(0.3, 1e-6) == 0.3


class TestUpdateGlicko:
    """Tests for single-game Glicko updates."""

    def test_matches_formula(self):
        """Test the update matches a direct evaluation of the formulas."""
        (w_r, w_rd), (l_r, l_rd) = update_glicko((1520.0, 300.0), (1480.0, 200.0))

        g_l, g_w = g(200.0), g(300.0)
        e_w = 1 / (1 + 10 ** (-g_l * (1520.0 - 1480.0) / 400))
        e_l = 1 / (1 + 10 ** (-g_w * (1480.0 - 1520.0) / 400))
        d2_w = 1 / (Q**2 * g_l**2 * e_w * (1 - e_w))
        d2_l = 1 / (Q**2 * g_w**2 * e_l * (1 - e_l))

        assert w_r == pytest.approx(1520.0 + Q / (1 / 300.0**2 + 1 / d2_w) * g_l * (1 - e_w))
        assert l_r == pytest.approx(1480.0 + Q / (1 / 200.0**2 + 1 / d2_l) * g_w * (0 - e_l))
        assert w_rd == pytest.approx(math.sqrt(1 / (1 / 300.0**2 + 1 / d2_w)))
        assert l_rd == pytest.approx(math.sqrt(1 / (1 / 200.0**2 + 1 / d2_l)))

    def test_symmetric_for_equal_items(self):
        """Test equal items move by the same amount in opposite directions."""
        (w_r, w_rd), (l_r, l_rd) = update_glicko((1500.0, 350.0), (1500.0, 350.0))
        assert w_r > 1500.0 > l_r
        assert w_r - 1500.0 == pytest.approx(1500.0 - l_r)
        assert w_rd == pytest.approx(l_rd)

    def test_rd_shrinks(self):
        """Test rating deviation decreases after a game."""
        (_, w_rd), (_, l_rd) = update_glicko((1500.0, 350.0), (1500.0, 350.0))
        assert w_rd < 350.0
        assert l_rd < 350.0

    def test_saturated_expected_stays_finite(self):
        """Test a saturated expected score is clamped instead of dividing by zero."""
        (w_r, w_rd), (l_r, l_rd) = update_glicko((1e7, 350.0), (0.0, 350.0))
        for value in (w_r, w_rd, l_r, l_rd):
            assert math.isfinite(value)

    def test_extreme_gap_with_small_rd(self):
        """Test a huge rating gap with tight deviations does not overflow."""
        (w_r, w_rd), (l_r, l_rd) = update_glicko((1e7, 1.0), (0.0, 1.0))
        for value in (w_r, w_rd, l_r, l_rd):
            assert math.isfinite(value)
        assert calculate_expected_score(0.0, 1e7, 1.0) == 0.0

    def test_non_positive_rd_raises(self):
        """Test a zero deviation is reported as degenerate."""
        with pytest.raises(NumericDegeneracyError):
            update_glicko((1500.0, 0.0), (1500.0, 350.0))


class TestGlickoAlgorithm:
    """Tests for GlickoAlgorithm."""

    def test_initialize(self):
        """Test initialization resets rating and RD."""
        items = [Item("a", rating=1.0, rd=2.0)]
        GlickoAlgorithm(initial_rating=1600.0, initial_rd=300.0).initialize(items)
        assert (items[0].rating, items[0].rd) == (1600.0, 300.0)

    def test_apply_vote(self):
        """Test a vote updates rating and RD of both items."""
        winner, loser = Item("a"), Item("b")
        GlickoAlgorithm().apply_vote(winner, loser)
        assert winner.rating > 1500.0 > loser.rating
        assert winner.rd < 350.0
        assert winner.elo == 1000.0

    def test_failed_vote_leaves_items_untouched(self):
        """Test a degenerate update does not partially apply."""
        winner, loser = Item("a", rd=0.0), Item("b")
        with pytest.raises(NumericDegeneracyError):
            GlickoAlgorithm().apply_vote(winner, loser)
        assert loser.rating == 1500.0
        assert loser.rd == 350.0

    def test_secondary_keys(self):
        """Test RD is reported alongside the rating."""
        assert GlickoAlgorithm().secondary_keys == ("rd",)
