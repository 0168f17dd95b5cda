"""Glicko rating calculations (single-game updates, no rating periods)."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from pairwise_ranker.core.errors import NumericDegeneracyError
from pairwise_ranker.models.item import INITIAL_RATING, INITIAL_RD
from pairwise_ranker.ranking.base import ensure_finite

if TYPE_CHECKING:
    from pairwise_ranker.models import Item, VoteMatrix

logger = structlog.get_logger()

Q = math.log(10) / 400.0
DEFAULT_EPSILON = 1e-10


def g(rd: float) -> float:
    """Attenuation factor for an opponent's rating deviation."""
    return 1.0 / math.sqrt(1.0 + 3.0 * rd**2 / math.pi**2)


def calculate_expected_score(rating_a: float, rating_b: float, rd_b: float) -> float:
    """Expected score of A against B, discounted by B's uncertainty.

    E = 1 / (1 + 10^(-g(RD_B) * (R_A - R_B) / 400))
    """
    try:
        return 1.0 / (1.0 + 10 ** (-g(rd_b) * (rating_a - rating_b) / 400.0))
    except OverflowError:
        # B is so far ahead that A saturates at zero
        return 0.0


def clamp_expected(expected: float, epsilon: float = DEFAULT_EPSILON) -> float:
    """Keep an expected score inside (0, 1) so the variance term stays finite."""
    return min(max(expected, epsilon), 1.0 - epsilon)


def _updated(
    rating: float,
    rd: float,
    opponent_g: float,
    expected: float,
    actual: float,
) -> tuple[float, float]:
    d2 = 1.0 / (Q**2 * opponent_g**2 * expected * (1.0 - expected))
    precision = 1.0 / rd**2 + 1.0 / d2
    new_rating = rating + Q / precision * opponent_g * (actual - expected)
    new_rd = math.sqrt(1.0 / precision)
    return new_rating, new_rd


def update_glicko(
    winner: tuple[float, float],
    loser: tuple[float, float],
    epsilon: float = DEFAULT_EPSILON,
) -> tuple[tuple[float, float], tuple[float, float]]:
    """Update Glicko ratings after a single outcome.

    Both sides are computed from the pre-game values.

    Args:
        winner: (rating, rd) of the winner.
        loser: (rating, rd) of the loser.
        epsilon: Clamp applied to both expected scores.

    Returns:
        Tuple of ((winner_rating, winner_rd), (loser_rating, loser_rd)).

    Raises:
        NumericDegeneracyError: If a rating deviation is not positive.
    """
    winner_rating, winner_rd = winner
    loser_rating, loser_rd = loser
    if winner_rd <= 0 or loser_rd <= 0:
        raise NumericDegeneracyError(
            "glicko", f"rating deviation must be positive (got {winner_rd}, {loser_rd})"
        )

    g_loser = g(loser_rd)
    g_winner = g(winner_rd)

    expected_winner = clamp_expected(
        calculate_expected_score(winner_rating, loser_rating, loser_rd), epsilon
    )
    expected_loser = clamp_expected(
        calculate_expected_score(loser_rating, winner_rating, winner_rd), epsilon
    )

    return (
        _updated(winner_rating, winner_rd, g_loser, expected_winner, 1.0),
        _updated(loser_rating, loser_rd, g_winner, expected_loser, 0.0),
    )


class GlickoAlgorithm:
    """Glicko ratings with a per-item rating deviation.

    RD shrinks with every game and never grows back.

    Attributes:
        initial_rating: Starting rating.
        initial_rd: Starting rating deviation.
        epsilon: Clamp for saturated expected scores.
    """

    name = "glicko"
    label = "Glicko"
    key = "rating"
    secondary_keys = ("rd",)
    incremental = True

    def __init__(
        self,
        initial_rating: float = INITIAL_RATING,
        initial_rd: float = INITIAL_RD,
        epsilon: float = DEFAULT_EPSILON,
    ) -> None:
        self.initial_rating = initial_rating
        self.initial_rd = initial_rd
        self.epsilon = epsilon

    def initialize(self, items: Sequence[Item]) -> None:
        for item in items:
            item.rating = self.initial_rating
            item.rd = self.initial_rd

    def apply_vote(self, winner: Item, loser: Item) -> None:
        (w_rating, w_rd), (l_rating, l_rd) = update_glicko(
            (winner.rating, winner.rd), (loser.rating, loser.rd), self.epsilon
        )
        ensure_finite(
            self.name,
            winner_rating=w_rating,
            winner_rd=w_rd,
            loser_rating=l_rating,
            loser_rd=l_rd,
        )

        logger.debug("glicko_update", winner=winner.name, loser=loser.name, winner_rd=w_rd)
        winner.rating, winner.rd = w_rating, w_rd
        loser.rating, loser.rd = l_rating, l_rd

    def finalize(self, items: Sequence[Item], matrix: VoteMatrix) -> None:
        pass
