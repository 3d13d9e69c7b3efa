"""I/O layer: artifact schemas, paths and writers."""

from speed_dial.io.export import write_run_artifacts
from speed_dial.io.paths import (
    logs_dir,
    reachability_table_path,
    run_summary_path,
    symmetry_classes_path,
)
from speed_dial.io.schemas import REACHABILITY_SCHEMA, SYMMETRY_CLASS_SCHEMA

__all__ = [
    "REACHABILITY_SCHEMA",
    "SYMMETRY_CLASS_SCHEMA",
    "logs_dir",
    "reachability_table_path",
    "run_summary_path",
    "symmetry_classes_path",
    "write_run_artifacts",
]
