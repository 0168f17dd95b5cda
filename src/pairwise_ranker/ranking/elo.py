"""Elo rating calculations."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from pairwise_ranker.models.item import INITIAL_ELO
from pairwise_ranker.ranking.base import ensure_finite

if TYPE_CHECKING:
    from pairwise_ranker.models import Item, VoteMatrix

logger = structlog.get_logger()

DEFAULT_K_FACTOR = 32.0


def calculate_expected_score(rating_a: float, rating_b: float) -> float:
    """Calculate expected score for player A against player B.

    Uses the standard Elo formula:
    E_A = 1 / (1 + 10^((R_B - R_A) / 400))

    Args:
        rating_a: Rating of player A.
        rating_b: Rating of player B.

    Returns:
        Probability that A wins (0.0 to 1.0).
    """
    try:
        return 1.0 / (1.0 + 10 ** ((rating_b - rating_a) / 400))
    except OverflowError:
        return 0.0


def update_elo(
    winner_elo: float,
    loser_elo: float,
    k_factor: float = DEFAULT_K_FACTOR,
) -> tuple[float, float]:
    """Update Elo ratings after a single outcome.

    Args:
        winner_elo: Current rating of the winner.
        loser_elo: Current rating of the loser.
        k_factor: K-factor for updates.

    Returns:
        Tuple of (new_winner_elo, new_loser_elo).
    """
    expected_winner = calculate_expected_score(winner_elo, loser_elo)
    expected_loser = calculate_expected_score(loser_elo, winner_elo)

    new_winner = winner_elo + k_factor * (1.0 - expected_winner)
    new_loser = loser_elo + k_factor * (0.0 - expected_loser)

    return new_winner, new_loser


class EloAlgorithm:
    """Elo rating implementing the RatingAlgorithm protocol.

    Path-dependent: the same votes in a different order give different ratings.

    Attributes:
        initial_elo: Starting Elo for every item.
        k_factor: K-factor for rating adjustments.
    """

    name = "elo"
    label = "Elo"
    key = "elo"
    secondary_keys: tuple[str, ...] = ()
    incremental = True

    def __init__(
        self,
        initial_elo: float = INITIAL_ELO,
        k_factor: float = DEFAULT_K_FACTOR,
    ) -> None:
        self.initial_elo = initial_elo
        self.k_factor = k_factor

    def initialize(self, items: Sequence[Item]) -> None:
        for item in items:
            item.elo = self.initial_elo

    def apply_vote(self, winner: Item, loser: Item) -> None:
        new_winner, new_loser = update_elo(winner.elo, loser.elo, self.k_factor)
        ensure_finite(self.name, winner_elo=new_winner, loser_elo=new_loser)

        logger.debug(
            "elo_update",
            winner=winner.name,
            loser=loser.name,
            winner_delta=round(new_winner - winner.elo, 4),
        )
        winner.elo = new_winner
        loser.elo = new_loser

    def finalize(self, items: Sequence[Item], matrix: VoteMatrix) -> None:
        """Nothing to do: ratings are current after every vote."""
