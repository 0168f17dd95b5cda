"""Bayesian smoothing of win counts."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from pairwise_ranker.ranking.win_count import aggregate_wins

if TYPE_CHECKING:
    from pairwise_ranker.models import Item, VoteMatrix


def calculate_bayesian_score(wins: int) -> float:
    """Smoothed score wins / (wins + 1): monotonic in wins, bounded in [0, 1)."""
    if wins < 0:
        msg = f"Win count must be non-negative, got {wins}"
        raise ValueError(msg)
    return wins / (wins + 1)


class BayesianAlgorithm:
    """Rank by smoothed win counts."""

    name = "bayesian"
    label = "Bayesian"
    key = "bayesian_score"
    secondary_keys = ("wins",)
    incremental = False

    def initialize(self, items: Sequence[Item]) -> None:
        for item in items:
            item.bayesian_score = 0.0

    def apply_vote(self, winner: Item, loser: Item) -> None:
        pass

    def finalize(self, items: Sequence[Item], matrix: VoteMatrix) -> None:
        aggregate_wins(items, matrix)
        for item in items:
            item.bayesian_score = calculate_bayesian_score(item.wins)
