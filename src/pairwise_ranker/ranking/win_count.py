"""Win counting and win aggregation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pairwise_ranker.models import Item, VoteMatrix


def aggregate_wins(items: Sequence[Item], matrix: VoteMatrix) -> None:
    """Overwrite every item's ``wins`` with its row sum in the vote matrix.

    Idempotent: calling it repeatedly never double-counts.
    """
    if len(items) != matrix.size:
        msg = f"Expected {matrix.size} items, got {len(items)}"
        raise ValueError(msg)
    for item, wins in zip(items, matrix.row_sums(), strict=True):
        item.wins = wins


class WinCountAlgorithm:
    """Rank by the number of comparisons each item won."""

    name = "win_count"
    label = "Win Rate"
    key = "wins"
    secondary_keys: tuple[str, ...] = ()
    incremental = False

    def initialize(self, items: Sequence[Item]) -> None:
        for item in items:
            item.wins = 0

    def apply_vote(self, winner: Item, loser: Item) -> None:
        """Votes only touch the matrix; wins are derived in ``finalize``."""

    def finalize(self, items: Sequence[Item], matrix: VoteMatrix) -> None:
        aggregate_wins(items, matrix)
