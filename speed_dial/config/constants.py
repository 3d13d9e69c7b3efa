"""Centralized constants for the speed-dial lock model and search.

Mechanical figures come from the physical lock and are fixed data. Search
defaults and workload thresholds are consumed by the config dataclasses and the CLI.
"""

from __future__ import annotations

NUM_WHEELS = 4
"""Number of wheels in the assembly, indexed front to back."""

RING_SIZE = 5
"""Coarse positions per wheel; positions wrap modulo this value."""

ALPHABET_SIZE = 4
"""Number of moves: Up, Right, Down, Left."""

QUARTER_TURNS = 4
"""Rotations of the assembly that map the lock onto itself."""

DEFAULT_MAX_DEPTH = 10
"""Default maximum sequence length to enumerate."""

LARGE_DEPTH_WARNING = 13
"""max_depth above which a run logs a workload warning (4**13 sequences take hours)."""

DEFAULT_PARTITION_DEPTH = 1
"""Prefix length used to split the move tree across worker processes."""

DEFAULT_LENGTH_WEIGHT = 1.0
"""Weight of the minimal length in the weighted ranking policy."""

EXPORT_BATCH_SIZE = 8_192
"""Rows per record batch when writing the reachability table to Parquet."""

ARTIFACT_SCHEMA_VERSION = 1
"""Version stamped into every exported artifact."""
