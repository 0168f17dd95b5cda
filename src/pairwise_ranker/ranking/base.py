"""Base protocol for rating algorithms."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pairwise_ranker.core.errors import NumericDegeneracyError

if TYPE_CHECKING:
    from pairwise_ranker.models import Item, VoteMatrix


@runtime_checkable
class RatingAlgorithm(Protocol):
    """Protocol for rating algorithms.

    Incremental algorithms update the two items of every vote as it arrives.
    Batch algorithms leave ``apply_vote`` as a no-op and derive scores from
    the whole vote matrix in ``finalize``.

    Attributes:
        name: Registry name (e.g. ``"elo"``).
        label: Human-readable name for reports.
        key: Item field the ranking is ordered by.
        secondary_keys: Extra item fields worth displaying.
        incremental: Whether scores change per vote.
    """

    name: str
    label: str
    key: str
    secondary_keys: tuple[str, ...]
    incremental: bool

    def initialize(self, items: Sequence[Item]) -> None:
        """Reset the algorithm's score fields to their starting values.

        Args:
            items: Items of the session.
        """
        ...

    def apply_vote(self, winner: Item, loser: Item) -> None:
        """Update scores after ``winner`` beat ``loser``.

        Must leave both items untouched if it raises.

        Args:
            winner: The preferred item.
            loser: The other item.
        """
        ...

    def finalize(self, items: Sequence[Item], matrix: VoteMatrix) -> None:
        """Compute batch scores once all votes are in.

        Args:
            items: Items of the session, in matrix order.
            matrix: Accumulated votes.
        """
        ...


def ensure_finite(algorithm: str, **values: float) -> None:
    """Raise NumericDegeneracyError if any value is NaN or infinite."""
    bad = {name: value for name, value in values.items() if not math.isfinite(value)}
    if bad:
        detail = ", ".join(f"{name}={value}" for name, value in bad.items())
        raise NumericDegeneracyError(algorithm, detail)
