"""Analysis layer: statistics, ranking policies, symmetry classes and reports."""

from speed_dial.analysis.ranking import (
    REGISTERED_POLICIES,
    ScoringPolicy,
    TableStats,
    get_policy,
    ordered_records,
    select_best,
    select_bests,
    table_stats,
)
from speed_dial.analysis.report import build_run_summary, format_record, render_report
from speed_dial.analysis.symmetry import (
    SymmetryClass,
    build_symmetry_classes,
    canonical_representative,
    class_statistics,
    rank_classes,
    symmetry_orbit,
)

__all__ = [
    "REGISTERED_POLICIES",
    "ScoringPolicy",
    "SymmetryClass",
    "TableStats",
    "build_run_summary",
    "build_symmetry_classes",
    "canonical_representative",
    "class_statistics",
    "format_record",
    "get_policy",
    "ordered_records",
    "rank_classes",
    "render_report",
    "select_best",
    "select_bests",
    "symmetry_orbit",
    "table_stats",
]
