"""Configuration schemas and loading for the pairwise ranker."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from pairwise_ranker.core.errors import ConfigurationError

DEFAULT_MAX_ITEMS = 100
DEFAULT_MAX_NAME_LENGTH = 49
DEFAULT_SLUG_MAX_LENGTH = 50

AlgorithmName = Literal[
    "win_count",
    "elo",
    "glicko",
    "bradley_terry",
    "trueskill",
    "pagerank",
    "bayesian",
]


class RankingConfig(BaseModel):
    """Rating algorithm configuration.

    Attributes:
        algorithm: Rating algorithm used to order the items.
        k_factor: Step size shared by Elo and Bradley-Terry.
        initial_elo: Starting Elo for every item.
        initial_rating: Starting Glicko / Bradley-Terry rating.
        initial_rd: Starting Glicko rating deviation.
        initial_mu: Starting TrueSkill mean.
        initial_sigma: Starting TrueSkill uncertainty.
        trueskill_beta: Performance spread of the TrueSkill-style update.
        trueskill_tau: Dynamics factor added to sigma after every game.
        pagerank_damping: Damping factor for PageRank over votes.
        pagerank_rounds: Fixed number of PageRank sweeps.
        glicko_epsilon: Clamp applied to Glicko expected scores.
    """

    algorithm: AlgorithmName = "elo"
    k_factor: float = 32.0
    # Elo-specific
    initial_elo: float = 1000.0
    # Glicko / Bradley-Terry
    initial_rating: float = 1500.0
    initial_rd: float = Field(default=350.0, gt=0)
    glicko_epsilon: float = Field(default=1e-10, gt=0, lt=0.5)
    # TrueSkill-specific
    initial_mu: float = 25.0
    initial_sigma: float = Field(default=8.333, gt=0)
    trueskill_beta: float = Field(default=4.166, gt=0)
    trueskill_tau: float = Field(default=0.083, ge=0)
    # PageRank-specific
    pagerank_damping: float = Field(default=0.85, ge=0, le=1)
    pagerank_rounds: int = Field(default=100, ge=1)


class RankerConfig(BaseModel):
    """Complete ranking session configuration."""

    topic: str = "items"
    items: list[str] = Field(default_factory=list)
    max_items: int = Field(default=DEFAULT_MAX_ITEMS, ge=2)
    max_name_length: int = Field(default=DEFAULT_MAX_NAME_LENGTH, ge=1)
    shuffle_pairs: bool = False
    seed: int = 42
    slug_max_length: int = Field(default=DEFAULT_SLUG_MAX_LENGTH, ge=1, le=100)
    output_dir: str = "./sessions"
    database: bool = False
    ranking: RankingConfig = Field(default_factory=RankingConfig)

    @field_validator("topic")
    @classmethod
    def validate_topic(cls, v: str) -> str:
        """Ensure the topic is a non-empty string."""
        if not v or not v.strip():
            msg = "Topic cannot be empty"
            raise ValueError(msg)
        return v.strip()


def load_config(path: str | Path) -> RankerConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Validated RankerConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If the file does not hold a mapping.
        pydantic.ValidationError: If config values are invalid.
    """
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open() as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a mapping at the top of {config_path}",
            "Write the configuration as YAML key/value pairs.",
        )

    return RankerConfig.model_validate(data)
