"""Ranked item model."""

from __future__ import annotations

from dataclasses import asdict, dataclass

INITIAL_ELO = 1000.0
INITIAL_RATING = 1500.0
INITIAL_RD = 350.0
INITIAL_MU = 25.0
INITIAL_SIGMA = 8.333

ITEM_SCORE_FIELDS = (
    "wins",
    "elo",
    "rating",
    "rd",
    "mu",
    "sigma",
    "pagerank",
    "bayesian_score",
)


@dataclass
class Item:
    """An entity under comparison, carrying one score per supported algorithm.

    Only the fields of the session's active algorithm are meaningful; the
    rest keep their initial values so every record has the same layout.

    Attributes:
        name: Unique, case-sensitive identifier.
        wins: Row sum of the vote matrix (win count / Bayesian input).
        elo: Elo rating.
        rating: Glicko rating, reused by Bradley-Terry.
        rd: Glicko rating deviation.
        mu: TrueSkill-style mean skill.
        sigma: TrueSkill-style uncertainty.
        pagerank: PageRank-over-votes score.
        bayesian_score: Smoothed win score in [0, 1).
    """

    name: str
    wins: int = 0
    elo: float = INITIAL_ELO
    rating: float = INITIAL_RATING
    rd: float = INITIAL_RD
    mu: float = INITIAL_MU
    sigma: float = INITIAL_SIGMA
    pagerank: float = 0.0
    bayesian_score: float = 0.0

    def to_dict(self) -> dict[str, object]:
        return asdict(self)
