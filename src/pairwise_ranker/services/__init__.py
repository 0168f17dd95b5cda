"""Collaborators around the rating engine: pairing, reporting, storage."""

from pairwise_ranker.services.pairing import round_robin_pairs, total_comparisons
from pairwise_ranker.services.reporting import (
    export_standings_csv,
    generate_leaderboard_report,
)

__all__ = [
    "export_standings_csv",
    "generate_leaderboard_report",
    "round_robin_pairs",
    "total_comparisons",
]
