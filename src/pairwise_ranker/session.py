"""Rating session: items, accumulated votes, and the active algorithm."""

from __future__ import annotations

import copy
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

import structlog

from pairwise_ranker.core.config import (
    DEFAULT_MAX_ITEMS,
    DEFAULT_MAX_NAME_LENGTH,
    RankerConfig,
)
from pairwise_ranker.core.errors import (
    DuplicateNameError,
    InvalidItemCountError,
    InvalidNameError,
    SessionStateError,
)
from pairwise_ranker.core.identifiers import IdSource
from pairwise_ranker.models import Item, ItemRecord, SessionRecord, Vote, VoteMatrix
from pairwise_ranker.models.item import ITEM_SCORE_FIELDS
from pairwise_ranker.ranking import (
    RatingAlgorithm,
    Standing,
    aggregate_wins,
    build_standings,
    create_algorithm,
    rank_items,
)

logger = structlog.get_logger()


def validate_names(
    names: Sequence[str],
    max_items: int = DEFAULT_MAX_ITEMS,
    max_name_length: int = DEFAULT_MAX_NAME_LENGTH,
) -> None:
    """Check item count, name lengths, and uniqueness.

    Raises:
        InvalidItemCountError: If there are fewer than 2 or more than ``max_items``.
        InvalidNameError: If a name is blank or longer than ``max_name_length``.
        DuplicateNameError: If a name appears twice (case-sensitive).
    """
    if not 2 <= len(names) <= max_items:
        raise InvalidItemCountError(len(names), max_items)
    for name in names:
        _validate_name(name, max_name_length)
    duplicates = [name for name, count in Counter(names).items() if count > 1]
    if duplicates:
        raise DuplicateNameError(duplicates[0])


def _validate_name(name: str, max_name_length: int) -> None:
    if not isinstance(name, str) or not name.strip() or len(name) > max_name_length:
        raise InvalidNameError(name, max_name_length)


class RatingSession:
    """Owns the items under comparison, their vote matrix, and one algorithm.

    Votes are validated before anything changes, so a failed ``record_vote``
    leaves the matrix, history, and scores exactly as they were. Item
    membership is fixed once the first comparison has been recorded.

    Attributes:
        session_id: Identifier supplied by the caller.
        topic: What the items are compared on.
        algorithm: Active rating algorithm.
        matrix: Accumulated win counts.
        history: Votes in arrival order.
        skipped: Number of skipped comparisons.
        created_at: Session start time (UTC).
    """

    def __init__(
        self,
        names: Sequence[str],
        algorithm: RatingAlgorithm,
        *,
        session_id: str,
        topic: str = "items",
        max_items: int = DEFAULT_MAX_ITEMS,
        max_name_length: int = DEFAULT_MAX_NAME_LENGTH,
        created_at: datetime | None = None,
    ) -> None:
        validate_names(names, max_items, max_name_length)
        self.session_id = session_id
        self.topic = topic
        self.algorithm = algorithm
        self.max_items = max_items
        self.max_name_length = max_name_length
        self.created_at = created_at or datetime.now(UTC)
        self._items = [Item(name=name) for name in names]
        self.matrix = VoteMatrix(len(self._items))
        self.history: list[Vote] = []
        self.skipped = 0
        self.finalized = False
        self.algorithm.initialize(self._items)
        logger.info(
            "session_created",
            session_id=session_id,
            items=len(self._items),
            algorithm=algorithm.name,
        )

    @classmethod
    def from_config(
        cls,
        names: Sequence[str],
        config: RankerConfig,
        id_source: IdSource,
    ) -> RatingSession:
        """Create a session using the configured algorithm and limits.

        Raises:
            InvalidAlgorithmSelectionError: If the configured algorithm is unknown.
        """
        algorithm = create_algorithm(config.ranking.algorithm, config.ranking)
        return cls(
            names,
            algorithm,
            session_id=id_source.next_id(),
            topic=config.topic,
            max_items=config.max_items,
            max_name_length=config.max_name_length,
        )

    # ==================== Membership ====================

    @property
    def items(self) -> tuple[Item, ...]:
        """Items in session order."""
        return tuple(self._items)

    @property
    def size(self) -> int:
        return len(self._items)

    @property
    def started(self) -> bool:
        """Whether any comparison (vote or skip) has been recorded."""
        return bool(self.history) or self.skipped > 0 or self.matrix.total > 0

    def names(self) -> list[str]:
        return [item.name for item in self._items]

    def index_of(self, name: str) -> int:
        """Return the index of the item called ``name``.

        Raises:
            KeyError: If no item has that name.
        """
        for index, item in enumerate(self._items):
            if item.name == name:
                return index
        raise KeyError(name)

    def add_item(self, name: str) -> Item:
        """Append an item before any comparisons have been made.

        Raises:
            SessionStateError: If comparisons have already begun.
            InvalidItemCountError: If the session is full.
            InvalidNameError: If the name is blank or too long.
            DuplicateNameError: If the name is taken.
        """
        if self.started:
            msg = "Items cannot be added after comparisons have begun"
            raise SessionStateError(msg)
        if self.size >= self.max_items:
            raise InvalidItemCountError(self.size + 1, self.max_items)
        _validate_name(name, self.max_name_length)
        if name in self.names():
            raise DuplicateNameError(name)

        item = Item(name=name)
        self._items.append(item)
        self.matrix = VoteMatrix(self.size)
        self.algorithm.initialize(self._items)
        return item

    # ==================== Votes ====================

    def record_vote(self, winner: int, loser: int) -> None:
        """Record that item ``winner`` beat item ``loser``.

        Incremental algorithms update both items immediately.

        Raises:
            InvalidIndexError: If an index is out of range or winner == loser.
            NumericDegeneracyError: If the update would produce a non-finite score.
        """
        self.matrix.check_pair(winner, loser)
        if self.algorithm.incremental:
            self.algorithm.apply_vote(self._items[winner], self._items[loser])
        self.matrix.record_vote(winner, loser)
        self.history.append(Vote(winner, loser))
        self.finalized = False
        logger.debug(
            "vote_recorded",
            winner=self._items[winner].name,
            loser=self._items[loser].name,
            total=len(self.history),
        )

    def record_votes(self, votes: Iterable[tuple[int, int]]) -> int:
        """Record votes in order. Returns the number recorded."""
        count = 0
        for winner, loser in votes:
            self.record_vote(winner, loser)
            count += 1
        return count

    def skip(self, first: int, second: int) -> None:
        """Record that the user declined to choose between two items.

        Raises:
            InvalidIndexError: If an index is out of range or both are equal.
        """
        self.matrix.check_pair(first, second)
        self.skipped += 1
        logger.debug(
            "comparison_skipped",
            first=self._items[first].name,
            second=self._items[second].name,
        )

    # ==================== Scoring ====================

    def aggregate_wins(self) -> None:
        """Overwrite each item's win count with its row sum."""
        aggregate_wins(self._items, self.matrix)

    def finalize(self) -> None:
        """Aggregate wins and let the algorithm compute batch scores."""
        self.aggregate_wins()
        self.algorithm.finalize(self._items, self.matrix)
        self.finalized = True
        logger.info(
            "session_finalized",
            session_id=self.session_id,
            algorithm=self.algorithm.name,
            votes=self.matrix.total,
            skipped=self.skipped,
        )

    def replay(self) -> None:
        """Recompute the active algorithm's scores from scratch.

        Uses the chronological history when it is available. Otherwise the
        matrix counts are replayed row by row, each cell applied as many
        times as it was won. On failure the previous scores are restored.
        """
        snapshot = copy.deepcopy(self._items)
        votes: Iterable[Vote] = self.history or self.matrix.iter_votes()
        try:
            self.algorithm.initialize(self._items)
            if self.algorithm.incremental:
                for vote in votes:
                    self.algorithm.apply_vote(self._items[vote.winner], self._items[vote.loser])
            self.finalize()
        except Exception:
            for item, previous in zip(self._items, snapshot, strict=True):
                for key in ITEM_SCORE_FIELDS:
                    setattr(item, key, getattr(previous, key))
            raise

    def ranked(self) -> list[Item]:
        """Items ordered by the algorithm's key, highest first."""
        if not self.finalized:
            self.finalize()
        return rank_items(self._items, self.algorithm.key)

    def standings(self) -> list[Standing]:
        """Ranked rows for presentation."""
        if not self.finalized:
            self.finalize()
        return build_standings(self._items, self.algorithm)

    # ==================== Serialization ====================

    def to_record(self, version: str | None = None) -> SessionRecord:
        """Snapshot every item field, the full matrix, and session metadata."""
        return SessionRecord(
            session_id=self.session_id,
            topic=self.topic,
            algorithm=self.algorithm.name,
            created_at=self.created_at,
            items=[ItemRecord(**item.to_dict()) for item in self._items],
            votes=self.matrix.to_list(),
            history=[(vote.winner, vote.loser) for vote in self.history],
            skipped=self.skipped,
            finalized=self.finalized,
            version=version,
        )

    @classmethod
    def from_record(
        cls,
        record: SessionRecord,
        config: RankerConfig | None = None,
    ) -> RatingSession:
        """Rebuild a session from a record, keeping its stored scores.

        Raises:
            InvalidAlgorithmSelectionError: If the record names an unknown algorithm.
            SessionStateError: If the matrix or history is inconsistent.
        """
        config = config or RankerConfig()
        algorithm = create_algorithm(record.algorithm, config.ranking)
        session = cls(
            [item.name for item in record.items],
            algorithm,
            session_id=record.session_id,
            topic=record.topic,
            max_items=config.max_items,
            max_name_length=config.max_name_length,
            created_at=record.created_at,
        )
        for item, stored in zip(session._items, record.items, strict=True):
            for key in ITEM_SCORE_FIELDS:
                setattr(item, key, getattr(stored, key))

        session.matrix = VoteMatrix.from_list(record.votes)
        session.history = [Vote(winner, loser) for winner, loser in record.history]
        session._check_history()
        session.skipped = record.skipped
        session.finalized = record.finalized
        return session

    def _check_history(self) -> None:
        if not self.history:
            return
        rebuilt = VoteMatrix(self.size)
        for vote in self.history:
            rebuilt.record_vote(vote.winner, vote.loser)
        if rebuilt != self.matrix:
            msg = "Vote history does not match the vote matrix"
            raise SessionStateError(msg)
