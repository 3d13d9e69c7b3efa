"""Search layer: sequence enumeration and state aggregation."""

from speed_dial.search.aggregator import (
    EnumerationOrderError,
    ReachabilityRecord,
    StateAggregator,
)
from speed_dial.search.enumerator import (
    count_sequences,
    enumerate_sequences,
    partition_prefixes,
)

__all__ = [
    "EnumerationOrderError",
    "ReachabilityRecord",
    "StateAggregator",
    "count_sequences",
    "enumerate_sequences",
    "partition_prefixes",
]
