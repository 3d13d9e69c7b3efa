"""Write a finished run's table, symmetry classes and summary to disk.

Artifacts are one-way outputs for offline analysis; nothing here is read
back by later runs.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pyarrow as pa
import pyarrow.parquet as pq

from speed_dial.analysis.ranking import ordered_records
from speed_dial.analysis.report import build_run_summary
from speed_dial.analysis.symmetry import build_symmetry_classes, canonical_representative
from speed_dial.config.constants import ARTIFACT_SCHEMA_VERSION, EXPORT_BATCH_SIZE
from speed_dial.domain.encoding import render_sequence, render_state, render_wheel
from speed_dial.io.paths import (
    logs_dir,
    reachability_table_path,
    run_summary_path,
    symmetry_classes_path,
)
from speed_dial.io.schemas import REACHABILITY_SCHEMA, SYMMETRY_CLASS_SCHEMA

if TYPE_CHECKING:
    from speed_dial.experiments.run import RunResult

logger = logging.getLogger(__name__)


def _flush_rows(writer: pq.ParquetWriter, columns: dict[str, list]) -> None:
    writer.write_table(pa.Table.from_pydict(columns, schema=REACHABILITY_SCHEMA))
    for values in columns.values():
        values.clear()


def write_reachability_table(result: RunResult, path: Path) -> int:
    """Stream the reachability table to Parquet in fixed-size batches."""
    columns: dict[str, list] = {name: [] for name in REACHABILITY_SCHEMA.names}
    rows = 0
    with pq.ParquetWriter(path, REACHABILITY_SCHEMA) as writer:
        for record in ordered_records(result.table.values()):
            wheels = record.state.wheels
            columns["schema_version"].append(ARTIFACT_SCHEMA_VERSION)
            columns["max_depth"].append(result.max_depth)
            columns["state"].append(render_state(record.state))
            for index, wheel in enumerate(wheels):
                columns[f"w{index}"].append(render_wheel(wheel))
            columns["count"].append(record.count)
            columns["collisions"].append(record.collisions)
            columns["min_length"].append(record.min_length)
            columns["sequence"].append(render_sequence(record.sequence))
            columns["symmetry_representative"].append(
                render_state(canonical_representative(record.state))
            )
            rows += 1
            if len(columns["state"]) >= EXPORT_BATCH_SIZE:
                _flush_rows(writer, columns)
        if columns["state"]:
            _flush_rows(writer, columns)
    return rows


def write_symmetry_classes(result: RunResult, path: Path) -> int:
    rows = [
        {
            "schema_version": ARTIFACT_SCHEMA_VERSION,
            "max_depth": result.max_depth,
            "representative": render_state(sym_class.representative),
            "size": sym_class.size,
            "total_count": sym_class.total_count,
            "min_length": sym_class.min_length,
            "min_collisions": sym_class.min_collisions,
            "max_collisions": sym_class.max_collisions,
        }
        for sym_class in build_symmetry_classes(result.table)
    ]
    pq.write_table(pa.Table.from_pylist(rows, schema=SYMMETRY_CLASS_SCHEMA), path)
    return len(rows)


def write_run_artifacts(result: RunResult, out_dir: Path) -> dict[str, Path]:
    """Write every artifact of ``result`` under ``out_dir/logs``."""
    out_dir = Path(out_dir)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)

    table_path = reachability_table_path(out_dir)
    n_states = write_reachability_table(result, table_path)
    logger.info("Wrote %d states to %s", n_states, table_path)

    classes_path = symmetry_classes_path(out_dir)
    n_classes = write_symmetry_classes(result, classes_path)
    logger.info("Wrote %d symmetry classes to %s", n_classes, classes_path)

    summary_path = run_summary_path(out_dir)
    summary_path.write_text(json.dumps(build_run_summary(result), ensure_ascii=False, indent=2))
    logger.info("Wrote run summary to %s", summary_path)

    return {
        "reachability_table": table_path,
        "symmetry_classes": classes_path,
        "run_summary": summary_path,
    }
