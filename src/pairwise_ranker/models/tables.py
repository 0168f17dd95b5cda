"""SQLModel tables mirroring saved sessions."""

import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class SessionRow(SQLModel, table=True):
    """Metadata for a saved rating session."""

    id: str = Field(primary_key=True)
    topic: str = Field(index=True)
    algorithm: str
    size: int
    skipped: int = 0
    finalized: bool = False
    version: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ItemRow(SQLModel, table=True):
    """One item of a session with all of its score fields."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    session_id: str = Field(index=True, foreign_key="sessionrow.id")
    position: int
    name: str
    wins: int = 0
    elo: float
    rating: float
    rd: float
    mu: float
    sigma: float
    pagerank: float
    bayesian_score: float


class VoteRow(SQLModel, table=True):
    """A non-zero vote matrix cell."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    session_id: str = Field(index=True, foreign_key="sessionrow.id")
    winner: int
    loser: int
    count: int


class HistoryRow(SQLModel, table=True):
    """A vote in arrival order."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    session_id: str = Field(index=True, foreign_key="sessionrow.id")
    sequence: int
    winner: int
    loser: int
