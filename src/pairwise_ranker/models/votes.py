"""Pairwise vote accumulation."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pairwise_ranker.core.errors import InvalidIndexError, SessionStateError


@dataclass(frozen=True)
class Vote:
    """A single judgment: ``winner`` beat ``loser`` (item indices)."""

    winner: int
    loser: int


def _is_index(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class VoteMatrix:
    """Square table where cell ``[i][j]`` counts how often item i beat item j.

    Cells only ever grow, the diagonal stays zero, and each item's win total
    is the sum of its row.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            msg = f"Matrix size must be non-negative, got {size}"
            raise ValueError(msg)
        self._counts: NDArray[np.int64] = np.zeros((size, size), dtype=np.int64)

    @property
    def size(self) -> int:
        return int(self._counts.shape[0])

    @property
    def total(self) -> int:
        """Total number of recorded votes."""
        return int(self._counts.sum())

    def check_pair(self, winner: int, loser: int) -> None:
        """Raise InvalidIndexError unless both indices are valid and distinct."""
        valid = (
            _is_index(winner)
            and _is_index(loser)
            and 0 <= winner < self.size
            and 0 <= loser < self.size
        )
        if not valid or winner == loser:
            raise InvalidIndexError(winner, loser, self.size)

    def record_vote(self, winner: int, loser: int) -> None:
        """Increment ``[winner][loser]`` by one."""
        self.check_pair(winner, loser)
        self._counts[winner, loser] += 1

    def count(self, winner: int, loser: int) -> int:
        return int(self._counts[winner, loser])

    def row_sums(self) -> list[int]:
        """Wins per item."""
        return [int(v) for v in self._counts.sum(axis=1)]

    def as_array(self) -> NDArray[np.int64]:
        """Return a copy of the counts."""
        return self._counts.copy()

    def to_list(self) -> list[list[int]]:
        return [[int(v) for v in row] for row in self._counts]

    def iter_votes(self) -> Iterator[Vote]:
        """Yield every stored vote, row-major, each cell repeated by its count."""
        for i in range(self.size):
            for j in range(self.size):
                for _ in range(int(self._counts[i, j])):
                    yield Vote(i, j)

    @classmethod
    def from_list(cls, rows: Sequence[Sequence[int]]) -> VoteMatrix:
        """Build a matrix from nested lists, validating its shape and contents.

        Raises:
            SessionStateError: If the table is not square, holds negative
                counts, or has a non-zero diagonal.
        """
        size = len(rows)
        if any(len(row) != size for row in rows):
            msg = f"Vote matrix must be {size}x{size}"
            raise SessionStateError(msg)
        matrix = cls(size)
        if size == 0:
            return matrix
        counts = np.asarray(rows, dtype=np.int64)
        if (counts < 0).any():
            msg = "Vote matrix contains negative counts"
            raise SessionStateError(msg)
        if np.diagonal(counts).any():
            msg = "Vote matrix diagonal must be zero"
            raise SessionStateError(msg)
        matrix._counts = counts
        return matrix

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VoteMatrix):
            return NotImplemented
        return bool(np.array_equal(self._counts, other._counts))

    def __repr__(self) -> str:
        return f"VoteMatrix(size={self.size}, total={self.total})"
