"""Simplified TrueSkill-style ratings."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from pairwise_ranker.models.item import INITIAL_MU, INITIAL_SIGMA
from pairwise_ranker.ranking.base import ensure_finite

if TYPE_CHECKING:
    from pairwise_ranker.models import Item, VoteMatrix

DEFAULT_BETA = 4.166
DEFAULT_TAU = 0.083


def update_trueskill(
    winner: tuple[float, float],
    loser: tuple[float, float],
    beta: float = DEFAULT_BETA,
    tau: float = DEFAULT_TAU,
) -> tuple[tuple[float, float], tuple[float, float]]:
    """Update (mu, sigma) pairs after a single outcome.

    Uses a logistic win probability over the combined spread
    c = sqrt(2 * beta^2 + sigma_w^2 + sigma_l^2). Sigma is inflated by tau
    after every game and is never reduced, so uncertainty only grows.

    Args:
        winner: (mu, sigma) of the winner.
        loser: (mu, sigma) of the loser.
        beta: Performance spread.
        tau: Dynamics factor.

    Returns:
        Tuple of ((winner_mu, winner_sigma), (loser_mu, loser_sigma)).
    """
    winner_mu, winner_sigma = winner
    loser_mu, loser_sigma = loser

    c = math.sqrt(2 * beta**2 + winner_sigma**2 + loser_sigma**2)
    expected_winner = 1.0 / (1.0 + math.exp((loser_mu - winner_mu) / c))
    expected_loser = 1.0 - expected_winner

    new_winner_mu = winner_mu + winner_sigma**2 / c * (1.0 - expected_winner)
    new_loser_mu = loser_mu + loser_sigma**2 / c * (0.0 - expected_loser)

    new_winner_sigma = math.sqrt(winner_sigma**2 + tau**2)
    new_loser_sigma = math.sqrt(loser_sigma**2 + tau**2)

    return (new_winner_mu, new_winner_sigma), (new_loser_mu, new_loser_sigma)


class TrueSkillAlgorithm:
    """TrueSkill-style ratings ranked by mean skill.

    Attributes:
        initial_mu: Starting mean skill estimate.
        initial_sigma: Starting uncertainty.
        beta: Performance spread.
        tau: Sigma inflation per game.
    """

    name = "trueskill"
    label = "TrueSkill"
    key = "mu"
    secondary_keys = ("sigma",)
    incremental = True

    def __init__(
        self,
        initial_mu: float = INITIAL_MU,
        initial_sigma: float = INITIAL_SIGMA,
        beta: float = DEFAULT_BETA,
        tau: float = DEFAULT_TAU,
    ) -> None:
        self.initial_mu = initial_mu
        self.initial_sigma = initial_sigma
        self.beta = beta
        self.tau = tau

    def initialize(self, items: Sequence[Item]) -> None:
        for item in items:
            item.mu = self.initial_mu
            item.sigma = self.initial_sigma

    def apply_vote(self, winner: Item, loser: Item) -> None:
        (w_mu, w_sigma), (l_mu, l_sigma) = update_trueskill(
            (winner.mu, winner.sigma), (loser.mu, loser.sigma), self.beta, self.tau
        )
        ensure_finite(
            self.name, winner_mu=w_mu, winner_sigma=w_sigma, loser_mu=l_mu, loser_sigma=l_sigma
        )
        winner.mu, winner.sigma = w_mu, w_sigma
        loser.mu, loser.sigma = l_mu, l_sigma

    def finalize(self, items: Sequence[Item], matrix: VoteMatrix) -> None:
        pass
