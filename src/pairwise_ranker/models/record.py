"""Serializable session snapshot exchanged with the persistence layer."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field, model_validator

from pairwise_ranker.models.item import (
    INITIAL_ELO,
    INITIAL_MU,
    INITIAL_RATING,
    INITIAL_RD,
    INITIAL_SIGMA,
)


class ItemRecord(BaseModel):
    """Every score field of an item, whatever algorithm is active."""

    name: str
    wins: int = Field(default=0, ge=0)
    elo: float = INITIAL_ELO
    rating: float = INITIAL_RATING
    rd: float = INITIAL_RD
    mu: float = INITIAL_MU
    sigma: float = INITIAL_SIGMA
    pagerank: float = 0.0
    bayesian_score: float = 0.0


class SessionRecord(BaseModel):
    """Complete state of a rating session.

    Attributes:
        session_id: Identifier issued by the caller's IdSource.
        topic: What the items are being compared on.
        algorithm: Name of the active rating algorithm.
        created_at: When the session started (UTC).
        items: Items in session order.
        votes: Full N x N win-count matrix.
        history: Chronological (winner, loser) pairs.
        skipped: Number of comparisons the user skipped.
        finalized: Whether batch scores were computed before saving.
        version: Package version that wrote the record.
    """

    session_id: str
    topic: str
    algorithm: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    items: list[ItemRecord]
    votes: list[list[int]]
    history: list[tuple[int, int]] = Field(default_factory=list)
    skipped: int = Field(default=0, ge=0)
    finalized: bool = False
    version: str | None = None

    @model_validator(mode="after")
    def check_matrix_shape(self) -> SessionRecord:
        size = len(self.items)
        if len(self.votes) != size or any(len(row) != size for row in self.votes):
            msg = f"Vote matrix must be {size}x{size} to match the item list"
            raise ValueError(msg)
        return self
