"""Configuration dataclasses and error types for search and reporting runs.

All run parameters live in frozen dataclasses validated on construction, so
an invalid configuration is rejected before any enumeration starts.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from speed_dial.config.constants import (
    ALPHABET_SIZE,
    DEFAULT_LENGTH_WEIGHT,
    DEFAULT_MAX_DEPTH,
    DEFAULT_PARTITION_DEPTH,
    LARGE_DEPTH_WARNING,
)

__all__ = [
    "ConfigurationError",
    "RankingPolicy",
    "ReportConfig",
    "SearchConfig",
    "parse_policy",
]

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when run parameters are invalid; no partial result exists."""


class RankingPolicy(Enum):
    """Built-in policies for choosing the best combination."""

    LONGEST = "longest"
    LOWEST = "lowest"
    WEIGHTED = "weighted"


def parse_policy(raw_policy: RankingPolicy | str) -> RankingPolicy:
    """Parse a policy identifier into RankingPolicy."""
    if isinstance(raw_policy, RankingPolicy):
        return raw_policy
    try:
        return RankingPolicy(str(raw_policy).strip().lower())
    except ValueError as exc:
        valid = ", ".join(policy.value for policy in RankingPolicy)
        raise ConfigurationError(f"policy must be one of {valid}") from exc


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class SearchConfig:
    """Parameters of one exhaustive enumeration run."""

    max_depth: int = DEFAULT_MAX_DEPTH
    policy: RankingPolicy = RankingPolicy.LONGEST
    length_weight: float = DEFAULT_LENGTH_WEIGHT
    workers: int = 1
    partition_depth: int = DEFAULT_PARTITION_DEPTH
    keep_sequences: bool = False

    def __post_init__(self) -> None:
        if not _is_int(self.max_depth):
            raise ConfigurationError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ConfigurationError("max_depth must be >= 1")
        if self.max_depth > LARGE_DEPTH_WARNING:
            logger.warning(
                "max_depth=%d enumerates about %d**%d sequences; expect a very long run",
                self.max_depth,
                ALPHABET_SIZE,
                self.max_depth,
            )
        if not isinstance(self.policy, RankingPolicy):
            object.__setattr__(self, "policy", parse_policy(self.policy))
        if isinstance(self.length_weight, bool) or not isinstance(self.length_weight, (int, float)):
            raise ConfigurationError("length_weight must be a number")
        if not math.isfinite(self.length_weight) or self.length_weight < 0.0:
            raise ConfigurationError("length_weight must be a finite value >= 0.0")
        if not _is_int(self.workers) or self.workers < 1:
            raise ConfigurationError("workers must be an integer >= 1")
        if not _is_int(self.partition_depth) or self.partition_depth < 1:
            raise ConfigurationError("partition_depth must be an integer >= 1")

    @property
    def effective_partition_depth(self) -> int:
        """Partition prefix length clamped to the search depth."""
        return min(self.partition_depth, self.max_depth)


@dataclass(frozen=True)
class ReportConfig:
    """Which optional sections the text report includes."""

    show_all: bool = False
    show_dups: bool = False
    show_bests: bool = False
    show_symmetry: bool = False
