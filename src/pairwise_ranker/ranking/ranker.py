"""Ordering items by an algorithm's score field."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from operator import attrgetter
from typing import TYPE_CHECKING

from pairwise_ranker.core.errors import NumericDegeneracyError

if TYPE_CHECKING:
    from pairwise_ranker.models import Item
    from pairwise_ranker.ranking.base import RatingAlgorithm


@dataclass(frozen=True)
class Standing:
    """One row of a ranked result.

    Attributes:
        rank: 1-based position.
        name: Item name.
        score: Value of the algorithm's ranking field.
        secondary: Other fields the algorithm reports, keyed by field name.
    """

    rank: int
    name: str
    score: float
    secondary: dict[str, float] = field(default_factory=dict)


def rank_items(items: Sequence[Item], key: str) -> list[Item]:
    """Sort items by ``key`` descending, keeping input order among ties.

    Args:
        items: Items to order. Not modified.
        key: Item field to sort by.

    Returns:
        New list of the same items.

    Raises:
        NumericDegeneracyError: If any key is NaN.
    """
    getter = attrgetter(key)
    for item in items:
        if math.isnan(getter(item)):
            raise NumericDegeneracyError(key, f"{item.name} has a NaN score")
    # sorted() stays stable with reverse=True
    return sorted(items, key=getter, reverse=True)


def build_standings(items: Sequence[Item], algorithm: RatingAlgorithm) -> list[Standing]:
    """Rank items and attach the algorithm's primary and secondary scores."""
    return [
        Standing(
            rank=position,
            name=item.name,
            score=getattr(item, algorithm.key),
            secondary={k: getattr(item, k) for k in algorithm.secondary_keys},
        )
        for position, item in enumerate(rank_items(items, algorithm.key), 1)
    ]
