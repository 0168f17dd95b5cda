"""PageRank computed over the vote matrix."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
import structlog
from numpy.typing import ArrayLike, NDArray

from pairwise_ranker.ranking.base import ensure_finite
from pairwise_ranker.ranking.win_count import aggregate_wins

if TYPE_CHECKING:
    from pairwise_ranker.models import Item, VoteMatrix

logger = structlog.get_logger()

DEFAULT_DAMPING = 0.85
DEFAULT_ROUNDS = 100


def calculate_pagerank(
    votes: ArrayLike,
    damping: float = DEFAULT_DAMPING,
    rounds: int = DEFAULT_ROUNDS,
) -> NDArray[np.float64]:
    """Run a fixed number of PageRank sweeps over a vote matrix.

    Each sweep computes, for every item i,

        new[i] = (1 - d) / N + d * sum(pr[j] / votes[j][i] for votes[j][i] > 0)

    from the previous sweep's scores only. The divisor is the count on the
    single edge j -> i rather than j's out-degree, and there is no
    convergence check.

    Args:
        votes: N x N win counts, ``votes[i][j]`` = times i beat j.
        damping: Damping factor d.
        rounds: Number of sweeps.

    Returns:
        Array of N scores.
    """
    counts = np.asarray(votes, dtype=np.float64)
    n = counts.shape[0]
    if n == 0:
        return np.zeros(0, dtype=np.float64)

    weights = np.zeros_like(counts)
    np.divide(1.0, counts, out=weights, where=counts > 0)
    incoming = weights.T

    scores = np.full(n, 1.0 / n)
    for _ in range(rounds):
        scores = (1.0 - damping) / n + damping * (incoming @ scores)
    return scores


class PageRankAlgorithm:
    """Batch PageRank over accumulated votes.

    Attributes:
        damping: Damping factor.
        rounds: Fixed number of sweeps.
    """

    name = "pagerank"
    label = "PageRank"
    key = "pagerank"
    secondary_keys = ("wins",)
    incremental = False

    def __init__(self, damping: float = DEFAULT_DAMPING, rounds: int = DEFAULT_ROUNDS) -> None:
        self.damping = damping
        self.rounds = rounds

    def initialize(self, items: Sequence[Item]) -> None:
        start = 1.0 / len(items) if items else 0.0
        for item in items:
            item.pagerank = start

    def apply_vote(self, winner: Item, loser: Item) -> None:
        pass

    def finalize(self, items: Sequence[Item], matrix: VoteMatrix) -> None:
        aggregate_wins(items, matrix)
        scores = calculate_pagerank(matrix.as_array(), self.damping, self.rounds)
        ensure_finite(self.name, total=float(scores.sum()))
        for item, score in zip(items, scores, strict=True):
            item.pagerank = float(score)
        logger.debug("pagerank_computed", rounds=self.rounds, total=float(scores.sum()))
