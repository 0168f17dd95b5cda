"""Pairwise Ranker.

Rank a handful of named items by repeatedly choosing the better of two,
then turn the outcomes into an order with Elo, Glicko, Bradley-Terry,
TrueSkill-style, PageRank, Bayesian, or plain win counting.
"""

__version__ = "0.1.0"

from pairwise_ranker.ranking import create_algorithm  # noqa: E402
from pairwise_ranker.session import RatingSession  # noqa: E402

__all__ = [
    "RatingSession",
    "__version__",
    "create_algorithm",
]
