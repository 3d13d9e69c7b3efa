"""Path construction helpers for run artifact directories."""

from __future__ import annotations

from pathlib import Path


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def reachability_table_path(out_dir: Path) -> Path:
    """Return path to the reachability table Parquet file."""
    return logs_dir(out_dir) / "reachability_table.parquet"


def symmetry_classes_path(out_dir: Path) -> Path:
    """Return path to the symmetry classes Parquet file."""
    return logs_dir(out_dir) / "symmetry_classes.parquet"


def run_summary_path(out_dir: Path) -> Path:
    """Return path to the run summary JSON file."""
    return logs_dir(out_dir) / "run_summary.json"
