"""Round-robin pairing of session items."""

from __future__ import annotations

import random
from itertools import combinations


def round_robin_pairs(
    size: int,
    shuffle: bool = False,
    seed: int | None = None,
) -> list[tuple[int, int]]:
    """Generate every unordered pair of item indices exactly once.

    Without shuffling the order is i < j, row by row:
    (0, 1), (0, 2), ..., (1, 2), ...

    When shuffling, both the pair order and which item is shown first are
    randomized with a seeded generator so a run can be reproduced.

    Args:
        size: Number of items.
        shuffle: Randomize presentation order.
        seed: Random seed for reproducible shuffling.

    Returns:
        List of (first, second) index pairs.
    """
    pairs = list(combinations(range(size), 2))
    if not shuffle:
        return pairs

    rng = random.Random(seed)  # noqa: S311
    rng.shuffle(pairs)
    return [(b, a) if rng.random() < 0.5 else (a, b) for a, b in pairs]


def total_comparisons(size: int) -> int:
    """Number of pairs in a full round robin."""
    return size * (size - 1) // 2
