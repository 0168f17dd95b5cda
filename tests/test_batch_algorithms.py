"""Tests for win counting, Bayesian smoothing, and PageRank over votes."""

import numpy as np
import pytest

from pairwise_ranker.models import Item, VoteMatrix
from pairwise_ranker.ranking import create_algorithm
from pairwise_ranker.ranking.bayesian import BayesianAlgorithm, calculate_bayesian_score
from pairwise_ranker.ranking.pagerank import PageRankAlgorithm, calculate_pagerank
from pairwise_ranker.ranking.win_count import WinCountAlgorithm, aggregate_wins


def _matrix(rows):
    return VoteMatrix.from_list(rows)


class TestAggregateWins:
    """Tests for win aggregation."""

    def test_row_sums(self):
        """Test wins are the row sums of the matrix."""
        items = [Item("a"), Item("b"), Item("c")]
        aggregate_wins(items, _matrix([[0, 2, 1], [0, 0, 4], [1, 0, 0]]))
        assert [i.wins for i in items] == [3, 4, 1]

    def test_idempotent(self):
        """Test repeated aggregation never double-counts."""
        items = [Item("a"), Item("b")]
        matrix = _matrix([[0, 3], [1, 0]])
        for _ in range(3):
            aggregate_wins(items, matrix)
        assert [i.wins for i in items] == [3, 1]

    def test_size_mismatch(self):
        """Test a mismatched item list is rejected."""
        with pytest.raises(ValueError):
            aggregate_wins([Item("a")], VoteMatrix(2))


class TestWinCountAlgorithm:
    """Tests for WinCountAlgorithm."""

    def test_votes_do_not_touch_items(self):
        """Test apply_vote leaves wins for finalize to derive."""
        winner, loser = Item("a"), Item("b")
        WinCountAlgorithm().apply_vote(winner, loser)
        assert winner.wins == 0

    def test_finalize(self):
        """Test finalize aggregates wins."""
        items = [Item("a"), Item("b")]
        WinCountAlgorithm().finalize(items, _matrix([[0, 1], [2, 0]]))
        assert [i.wins for i in items] == [1, 2]


class TestBayesian:
    """Tests for Bayesian smoothing."""

    def test_zero_wins(self):
        """Test no wins scores zero."""
        assert calculate_bayesian_score(0) == 0.0

    def test_nine_wins(self):
        """Test nine wins scores 0.9."""
        assert calculate_bayesian_score(9) == pytest.approx(0.9)

    def test_monotonic_and_bounded(self):
        """Test scores increase with wins and stay below one."""
        scores = [calculate_bayesian_score(w) for w in range(50)]
        assert scores == sorted(scores)
        assert all(0.0 <= s < 1.0 for s in scores)

    def test_negative_wins_rejected(self):
        """Test negative win counts are invalid."""
        with pytest.raises(ValueError):
            calculate_bayesian_score(-1)

    def test_finalize_aggregates_first(self):
        """Test finalize derives wins from the matrix before scoring."""
        items = [Item("a", wins=99), Item("b")]
        BayesianAlgorithm().finalize(items, _matrix([[0, 1], [0, 0]]))
        assert items[0].wins == 1
        assert items[0].bayesian_score == 0.5
        assert items[1].bayesian_score == 0.0


class TestCalculatePageRank:
    """Tests for PageRank over the vote matrix."""

    def test_two_node_closed_form(self):
        """Test a single vote reaches the two-node fixed point."""
        d = 0.85
        scores = calculate_pagerank([[0, 1], [0, 0]], damping=d, rounds=100)

        first = (1 - d) / 2
        second = (1 - d) / 2 + d * first
        assert scores[0] == pytest.approx(first, abs=1e-9)
        assert scores[1] == pytest.approx(second, abs=1e-9)
        assert scores[0] != scores[1]

    def test_divides_by_edge_count(self):
        """Test the divisor is the edge's own vote count."""
        d = 0.85
        scores = calculate_pagerank([[0, 2], [0, 0]], damping=d)
        first = (1 - d) / 2
        assert scores[1] == pytest.approx(first + d * first / 2, abs=1e-9)

    def test_no_votes(self):
        """Test every item gets the teleport share when there are no votes."""
        scores = calculate_pagerank(np.zeros((3, 3)))
        assert list(scores) == pytest.approx([0.05, 0.05, 0.05])

    def test_simultaneous_update(self):
        """Test one sweep reads only the previous sweep's scores."""
        votes = [[0, 1, 0], [0, 0, 1], [0, 0, 0]]
        scores = calculate_pagerank(votes, damping=0.85, rounds=1)
        assert scores[1] == pytest.approx(scores[2])
        assert scores[0] == pytest.approx(0.05)

    def test_empty(self):
        """Test an empty matrix yields no scores."""
        assert calculate_pagerank(np.zeros((0, 0))).size == 0


class TestPageRankAlgorithm:
    """Tests for PageRankAlgorithm."""

    def test_initialize(self):
        """Test scores start at 1/N."""
        items = [Item("a"), Item("b"), Item("c"), Item("d")]
        PageRankAlgorithm().initialize(items)
        assert [i.pagerank for i in items] == [0.25] * 4

    def test_finalize(self):
        """Test finalize stores scores and aggregated wins."""
        items = [Item("a"), Item("b")]
        PageRankAlgorithm().finalize(items, _matrix([[0, 1], [0, 0]]))
        assert items[0].pagerank == pytest.approx(0.075)
        assert items[1].pagerank == pytest.approx(0.13875)
        assert items[0].wins == 1

    def test_factory_uses_config(self):
        """Test the factory passes damping and rounds through."""
        from pairwise_ranker.core.config import RankingConfig

        algo = create_algorithm(
            "pagerank", RankingConfig(pagerank_damping=0.5, pagerank_rounds=7)
        )
        assert algo.damping == 0.5
        assert algo.rounds == 7
