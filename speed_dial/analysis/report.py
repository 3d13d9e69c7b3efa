"""Text report and summary payload for a finished run.

The summary section is the stable output format::

    For up to 10 moves
    7396 Uniques
    1390704 dups
    Best: (w0,w1,w2,w3) (N target) (SEQ)

where ``N`` is the collision count of the best state. Optional sections
(all records, every sequence per record, all tied bests, symmetry classes)
are appended in a fixed order so identical runs render identical bytes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from speed_dial.analysis.ranking import ordered_records
from speed_dial.analysis.symmetry import build_symmetry_classes, rank_classes
from speed_dial.config.constants import ARTIFACT_SCHEMA_VERSION
from speed_dial.config.types import ReportConfig
from speed_dial.domain.encoding import render_sequence, render_state
from speed_dial.search.aggregator import ReachabilityRecord

if TYPE_CHECKING:
    from speed_dial.experiments.run import RunResult

DUP_INDENT = "   "


def format_record(record: ReachabilityRecord) -> str:
    """``<state> (<collisions> target) (<sequence>)``"""
    return (
        f"{render_state(record.state)} ({record.collisions} target) "
        f"({render_sequence(record.sequence)})"
    )


def format_listing_line(record: ReachabilityRecord) -> str:
    """One line of the full listing, with aligned collision count and length."""
    return (
        f"{render_state(record.state)} ({record.collisions:4} target) "
        f"{record.min_length:2} ({render_sequence(record.sequence)})"
    )


def _dup_lines(record: ReachabilityRecord) -> list[str]:
    if record.collisions == 0 or record.sequences is None:
        return []
    return [DUP_INDENT + render_sequence(seq) for seq in record.sequences]


def render_summary(result: RunResult) -> list[str]:
    return [
        f"For up to {result.max_depth} moves",
        f"{result.unique_count} Uniques",
        f"{result.duplicate_count} dups",
    ]


def render_report(result: RunResult, config: ReportConfig | None = None) -> str:
    """Render the full text report for ``result``."""
    config = config or ReportConfig()
    lines = render_summary(result)

    if config.show_all:
        for record in ordered_records(result.table.values()):
            lines.append(format_listing_line(record))
            if config.show_dups:
                lines.extend(_dup_lines(record))

    bests = result.bests if config.show_bests else (result.best,)
    for record in bests:
        lines.append(f"Best: {format_record(record)}")
        if config.show_dups:
            lines.extend(_dup_lines(record))

    if config.show_symmetry:
        classes = rank_classes(build_symmetry_classes(result.table))
        lines.append(f"{len(classes)} symmetry classes")
        for sym_class in classes:
            lines.append(
                f"{render_state(sym_class.representative)} x{sym_class.size} "
                f"({sym_class.min_collisions} target) {sym_class.min_length:2}"
            )

    return "\n".join(lines) + "\n"


def _record_payload(record: ReachabilityRecord) -> dict[str, Any]:
    return {
        "state": render_state(record.state),
        "count": record.count,
        "collisions": record.collisions,
        "min_length": record.min_length,
        "sequence": render_sequence(record.sequence),
    }


def build_run_summary(result: RunResult) -> dict[str, Any]:
    """JSON-serialisable summary of a run."""
    stats = result.stats
    return {
        "schema_version": ARTIFACT_SCHEMA_VERSION,
        "max_depth": result.max_depth,
        "policy": result.policy,
        "unique_count": stats.unique_count,
        "duplicate_count": stats.duplicate_count,
        "total_observations": stats.total_observations,
        "max_min_length": stats.max_min_length,
        "length_histogram": list(stats.length_histogram),
        "collision_p50": stats.collision_p50,
        "collision_p90": stats.collision_p90,
        "collision_max": stats.collision_max,
        "symmetry_classes": len(build_symmetry_classes(result.table)),
        "best": _record_payload(result.best),
        "bests": [_record_payload(record) for record in result.bests],
    }
