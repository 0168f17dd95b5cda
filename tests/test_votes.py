"""Tests for the vote matrix."""

import pytest

from pairwise_ranker.core.errors import InvalidIndexError, SessionStateError
from pairwise_ranker.models import Vote, VoteMatrix


class TestVoteMatrix:
    """Tests for VoteMatrix."""

    def test_starts_empty(self):
        """Test a new matrix is zero-filled."""
        matrix = VoteMatrix(3)
        assert matrix.size == 3
        assert matrix.total == 0
        assert matrix.to_list() == [[0, 0, 0]] * 3

    def test_record_vote(self):
        """Test a vote increments exactly one cell."""
        matrix = VoteMatrix(3)
        matrix.record_vote(2, 0)
        matrix.record_vote(2, 0)
        assert matrix.count(2, 0) == 2
        assert matrix.count(0, 2) == 0
        assert matrix.total == 2

    def test_row_sums(self):
        """Test row sums are per-item wins."""
        matrix = VoteMatrix(3)
        for winner, loser in [(0, 1), (0, 2), (2, 1)]:
            matrix.record_vote(winner, loser)
        assert matrix.row_sums() == [2, 0, 1]

    @pytest.mark.parametrize(
        ("winner", "loser"),
        [(1, 1), (-1, 0), (0, 3), (3, 0), (True, 0), (0.0, 1)],
    )
    def test_invalid_pairs(self, winner, loser):
        """Test invalid or identical indices are rejected without changes."""
        matrix = VoteMatrix(3)
        with pytest.raises(InvalidIndexError):
            matrix.record_vote(winner, loser)
        assert matrix.total == 0

    def test_self_vote_message(self):
        """Test the error explains self-comparisons."""
        with pytest.raises(InvalidIndexError, match="compared with itself"):
            VoteMatrix(2).check_pair(1, 1)

    def test_iter_votes(self):
        """Test votes are replayed row-major with repetitions."""
        matrix = VoteMatrix.from_list([[0, 2, 0], [0, 0, 0], [1, 0, 0]])
        assert list(matrix.iter_votes()) == [Vote(0, 1), Vote(0, 1), Vote(2, 0)]

    def test_as_array_is_copy(self):
        """Test callers cannot mutate the matrix through as_array."""
        matrix = VoteMatrix(2)
        arr = matrix.as_array()
        arr[0, 1] = 5
        assert matrix.count(0, 1) == 0

    def test_equality(self):
        """Test matrices compare by contents."""
        a, b = VoteMatrix(2), VoteMatrix(2)
        a.record_vote(0, 1)
        assert a != b
        b.record_vote(0, 1)
        assert a == b


class TestFromList:
    """Tests for VoteMatrix.from_list validation."""

    def test_round_trip(self):
        """Test nested lists survive conversion."""
        rows = [[0, 1, 4], [2, 0, 0], [0, 7, 0]]
        assert VoteMatrix.from_list(rows).to_list() == rows

    def test_not_square(self):
        """Test ragged tables are rejected."""
        with pytest.raises(SessionStateError):
            VoteMatrix.from_list([[0, 1], [0]])

    def test_negative(self):
        """Test negative counts are rejected."""
        with pytest.raises(SessionStateError):
            VoteMatrix.from_list([[0, -1], [0, 0]])

    def test_diagonal(self):
        """Test self-wins are rejected."""
        with pytest.raises(SessionStateError):
            VoteMatrix.from_list([[1, 0], [0, 0]])
