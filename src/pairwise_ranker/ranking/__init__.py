"""Rating algorithms for pairwise comparisons.

Provides interchangeable incremental (Elo, Glicko, Bradley-Terry,
TrueSkill-style) and batch (win count, PageRank, Bayesian) algorithms and
the stable ranker that orders items by their scores.
"""

from __future__ import annotations

from collections.abc import Callable

from pairwise_ranker.core.config import RankingConfig
from pairwise_ranker.core.errors import InvalidAlgorithmSelectionError
from pairwise_ranker.ranking.base import RatingAlgorithm
from pairwise_ranker.ranking.bayesian import BayesianAlgorithm, calculate_bayesian_score
from pairwise_ranker.ranking.bradley_terry import (
    BradleyTerryAlgorithm,
    calculate_bradley_terry_score,
    update_bradley_terry,
)
from pairwise_ranker.ranking.elo import EloAlgorithm, calculate_expected_score, update_elo
from pairwise_ranker.ranking.glicko import GlickoAlgorithm, update_glicko
from pairwise_ranker.ranking.pagerank import PageRankAlgorithm, calculate_pagerank
from pairwise_ranker.ranking.ranker import Standing, build_standings, rank_items
from pairwise_ranker.ranking.trueskill import TrueSkillAlgorithm, update_trueskill
from pairwise_ranker.ranking.win_count import WinCountAlgorithm, aggregate_wins

ALGORITHMS: dict[str, Callable[[RankingConfig], RatingAlgorithm]] = {
    "win_count": lambda _config: WinCountAlgorithm(),
    "elo": lambda config: EloAlgorithm(
        initial_elo=config.initial_elo,
        k_factor=config.k_factor,
    ),
    "glicko": lambda config: GlickoAlgorithm(
        initial_rating=config.initial_rating,
        initial_rd=config.initial_rd,
        epsilon=config.glicko_epsilon,
    ),
    "bradley_terry": lambda config: BradleyTerryAlgorithm(
        initial_rating=config.initial_rating,
        k_factor=config.k_factor,
    ),
    "trueskill": lambda config: TrueSkillAlgorithm(
        initial_mu=config.initial_mu,
        initial_sigma=config.initial_sigma,
        beta=config.trueskill_beta,
        tau=config.trueskill_tau,
    ),
    "pagerank": lambda config: PageRankAlgorithm(
        damping=config.pagerank_damping,
        rounds=config.pagerank_rounds,
    ),
    "bayesian": lambda _config: BayesianAlgorithm(),
}


def create_algorithm(name: str, config: RankingConfig | None = None) -> RatingAlgorithm:
    """Create a rating algorithm by name.

    Args:
        name: Registry name, e.g. ``"elo"`` or ``"pagerank"``.
        config: Ranking configuration. Defaults are used if None.

    Returns:
        Configured rating algorithm.

    Raises:
        InvalidAlgorithmSelectionError: If ``name`` is not registered.
    """
    builder = ALGORITHMS.get(name)
    if builder is None:
        raise InvalidAlgorithmSelectionError(name, list(ALGORITHMS))
    return builder(config or RankingConfig())


__all__ = [
    "ALGORITHMS",
    "BayesianAlgorithm",
    "BradleyTerryAlgorithm",
    "EloAlgorithm",
    "GlickoAlgorithm",
    "PageRankAlgorithm",
    "RatingAlgorithm",
    "Standing",
    "TrueSkillAlgorithm",
    "WinCountAlgorithm",
    "aggregate_wins",
    "build_standings",
    "calculate_bayesian_score",
    "calculate_bradley_terry_score",
    "calculate_expected_score",
    "calculate_pagerank",
    "create_algorithm",
    "rank_items",
    "update_bradley_terry",
    "update_elo",
    "update_glicko",
    "update_trueskill",
]
