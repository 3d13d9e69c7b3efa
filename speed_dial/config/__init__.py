"""Configuration layer: constants and typed config dataclasses."""

from speed_dial.config.constants import (
    ALPHABET_SIZE,
    ARTIFACT_SCHEMA_VERSION,
    DEFAULT_LENGTH_WEIGHT,
    DEFAULT_MAX_DEPTH,
    DEFAULT_PARTITION_DEPTH,
    EXPORT_BATCH_SIZE,
    LARGE_DEPTH_WARNING,
    NUM_WHEELS,
    QUARTER_TURNS,
    RING_SIZE,
)
from speed_dial.config.types import (
    ConfigurationError,
    RankingPolicy,
    ReportConfig,
    SearchConfig,
    parse_policy,
)

__all__ = [
    "ALPHABET_SIZE",
    "ARTIFACT_SCHEMA_VERSION",
    "ConfigurationError",
    "DEFAULT_LENGTH_WEIGHT",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_PARTITION_DEPTH",
    "EXPORT_BATCH_SIZE",
    "LARGE_DEPTH_WARNING",
    "NUM_WHEELS",
    "QUARTER_TURNS",
    "RING_SIZE",
    "RankingPolicy",
    "ReportConfig",
    "SearchConfig",
    "parse_policy",
]
