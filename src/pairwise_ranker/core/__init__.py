"""Core configuration and utilities for the pairwise ranker."""

from pairwise_ranker.core.config import (
    DEFAULT_MAX_ITEMS,
    DEFAULT_MAX_NAME_LENGTH,
    RankerConfig,
    RankingConfig,
    load_config,
)
from pairwise_ranker.core.errors import (
    ConfigurationError,
    DuplicateNameError,
    InvalidAlgorithmSelectionError,
    InvalidIndexError,
    InvalidItemCountError,
    InvalidNameError,
    NumericDegeneracyError,
    RankingError,
    SessionStateError,
)
from pairwise_ranker.core.identifiers import (
    CounterIdSource,
    IdSource,
    SlugGenerator,
    UuidIdSource,
)

__all__ = [
    "DEFAULT_MAX_ITEMS",
    "DEFAULT_MAX_NAME_LENGTH",
    "RankerConfig",
    "RankingConfig",
    "load_config",
    "ConfigurationError",
    "DuplicateNameError",
    "InvalidAlgorithmSelectionError",
    "InvalidIndexError",
    "InvalidItemCountError",
    "InvalidNameError",
    "NumericDegeneracyError",
    "RankingError",
    "SessionStateError",
    "CounterIdSource",
    "IdSource",
    "SlugGenerator",
    "UuidIdSource",
]
