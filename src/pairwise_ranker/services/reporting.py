"""Report generation for ranked sessions."""

from __future__ import annotations

import csv
from collections.abc import Sequence
from pathlib import Path

from tabulate import tabulate

from pairwise_ranker.ranking import RatingAlgorithm, Standing

COLUMN_TITLES = {
    "wins": "Wins",
    "elo": "Elo Rating",
    "rating": "Rating",
    "rd": "RD",
    "mu": "Mu",
    "sigma": "Sigma",
    "pagerank": "PageRank",
    "bayesian_score": "Score",
}


def format_score(key: str, value: float) -> str:
    """Wins are shown as whole numbers, everything else to two decimals."""
    if key == "wins":
        return f"{value:.0f}"
    if key == "pagerank":
        return f"{value:.4f}"
    return f"{value:.2f}"


def standing_headers(algorithm: RatingAlgorithm) -> list[str]:
    """Column headers for a standings table."""
    keys = [algorithm.key, *algorithm.secondary_keys]
    return ["Rank", "Name", *(COLUMN_TITLES.get(k, k) for k in keys)]


def standing_rows(standings: Sequence[Standing], algorithm: RatingAlgorithm) -> list[list[str]]:
    """Formatted table rows, one per standing."""
    return [
        [
            str(s.rank),
            s.name,
            format_score(algorithm.key, s.score),
            *(format_score(k, s.secondary[k]) for k in algorithm.secondary_keys),
        ]
        for s in standings
    ]


def generate_leaderboard_report(
    standings: Sequence[Standing],
    algorithm: RatingAlgorithm,
    topic: str,
    description: str | None = None,
) -> str:
    """Generate a markdown leaderboard.

    Args:
        standings: Ranked rows.
        algorithm: Algorithm that produced them.
        topic: Comparison topic, used in the title.
        description: Optional line below the title.

    Returns:
        Markdown report content.
    """
    lines = [f"# Final Rankings ({algorithm.label}): {topic}", ""]
    if description:
        lines.extend([description, ""])
    lines.append(
        tabulate(
            standing_rows(standings, algorithm),
            headers=standing_headers(algorithm),
            tablefmt="github",
            disable_numparse=True,
        )
    )
    return "\n".join(lines)


def export_standings_csv(
    standings: Sequence[Standing],
    algorithm: RatingAlgorithm,
    path: Path,
) -> Path:
    """Write standings to CSV with unformatted scores."""
    keys = [algorithm.key, *algorithm.secondary_keys]
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["rank", "name", *keys])
        for s in standings:
            writer.writerow(
                [s.rank, s.name, s.score, *(s.secondary[k] for k in algorithm.secondary_keys)]
            )
    return path
