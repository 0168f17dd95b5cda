"""Incremental Bradley-Terry ratings."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from pairwise_ranker.core.errors import NumericDegeneracyError
from pairwise_ranker.models.item import INITIAL_RATING
from pairwise_ranker.ranking.base import ensure_finite
from pairwise_ranker.ranking.elo import DEFAULT_K_FACTOR

if TYPE_CHECKING:
    from pairwise_ranker.models import Item, VoteMatrix


def calculate_bradley_terry_score(rating_a: float, rating_b: float) -> float:
    """Probability that A beats B under Bradley-Terry: a / (a + b).

    Raises:
        NumericDegeneracyError: If the two ratings sum to zero.
    """
    total = rating_a + rating_b
    if total == 0:
        raise NumericDegeneracyError("bradley_terry", "ratings sum to zero")
    return rating_a / total


def update_bradley_terry(
    winner_rating: float,
    loser_rating: float,
    k_factor: float = DEFAULT_K_FACTOR,
) -> tuple[float, float]:
    """Update Bradley-Terry ratings after a single outcome.

    Args:
        winner_rating: Current rating of the winner.
        loser_rating: Current rating of the loser.
        k_factor: Step size.

    Returns:
        Tuple of (new_winner_rating, new_loser_rating).
    """
    winner_score = calculate_bradley_terry_score(winner_rating, loser_rating)
    loser_score = calculate_bradley_terry_score(loser_rating, winner_rating)

    return (
        winner_rating + k_factor * (1.0 - winner_score),
        loser_rating + k_factor * (0.0 - loser_score),
    )


class BradleyTerryAlgorithm:
    """Bradley-Terry ratings stored in the ``rating`` field.

    Shares the field with Glicko; a session only ever runs one of them.
    """

    name = "bradley_terry"
    label = "Bradley-Terry"
    key = "rating"
    secondary_keys: tuple[str, ...] = ()
    incremental = True

    def __init__(
        self,
        initial_rating: float = INITIAL_RATING,
        k_factor: float = DEFAULT_K_FACTOR,
    ) -> None:
        self.initial_rating = initial_rating
        self.k_factor = k_factor

    def initialize(self, items: Sequence[Item]) -> None:
        for item in items:
            item.rating = self.initial_rating

    def apply_vote(self, winner: Item, loser: Item) -> None:
        new_winner, new_loser = update_bradley_terry(
            winner.rating, loser.rating, self.k_factor
        )
        ensure_finite(self.name, winner_rating=new_winner, loser_rating=new_loser)
        winner.rating = new_winner
        loser.rating = new_loser

    def finalize(self, items: Sequence[Item], matrix: VoteMatrix) -> None:
        pass
