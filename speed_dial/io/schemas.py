"""Parquet schema definitions for exported run artifacts.

Every exported table is written against one of these schemas so column
names and types stay stable across runs.
"""

from __future__ import annotations

import pyarrow as pa

REACHABILITY_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("max_depth", pa.int64()),
        ("state", pa.string()),
        ("w0", pa.string()),
        ("w1", pa.string()),
        ("w2", pa.string()),
        ("w3", pa.string()),
        ("count", pa.int64()),
        ("collisions", pa.int64()),
        ("min_length", pa.int64()),
        ("sequence", pa.string()),
        ("symmetry_representative", pa.string()),
    ]
)

SYMMETRY_CLASS_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("max_depth", pa.int64()),
        ("representative", pa.string()),
        ("size", pa.int64()),
        ("total_count", pa.int64()),
        ("min_length", pa.int64()),
        ("min_collisions", pa.int64()),
        ("max_collisions", pa.int64()),
    ]
)
