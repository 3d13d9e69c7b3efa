"""Exhaustive move-sequence analysis for four-wheel speed-dial locks."""

from speed_dial.config.types import ConfigurationError, RankingPolicy, SearchConfig
from speed_dial.domain.mechanism import LockState, Marker, Move, WheelState, apply, initial_state
from speed_dial.experiments.run import RunResult, run, run_search
from speed_dial.search.aggregator import EnumerationOrderError, ReachabilityRecord

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "EnumerationOrderError",
    "LockState",
    "Marker",
    "Move",
    "RankingPolicy",
    "ReachabilityRecord",
    "RunResult",
    "SearchConfig",
    "WheelState",
    "__version__",
    "apply",
    "initial_state",
    "run",
    "run_search",
]
