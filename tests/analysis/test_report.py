"""Tests for speed_dial.analysis.report module."""

from __future__ import annotations

import json
import re

import pytest

from speed_dial.analysis.ranking import select_best, select_bests, table_stats
from speed_dial.analysis.report import (
    build_run_summary,
    format_listing_line,
    format_record,
    render_report,
)
from speed_dial.config.types import ReportConfig
from speed_dial.domain.encoding import parse_sequence
from speed_dial.domain.mechanism import apply_sequence
from speed_dial.experiments.run import RunResult, run
from speed_dial.search.aggregator import ReachabilityRecord

BEST_LINE = re.compile(r"^Best: \((\d[<|>],){3}\d[<|>]\) \(\d+ target\) \([URDL]+\)$")


@pytest.fixture(scope="module")
def depth1():
    return run(max_depth=1)


def _synthetic_result() -> RunResult:
    """Two states, one of them reached by three sequences."""
    lone = parse_sequence("RR")
    shared = (parse_sequence("U"), parse_sequence("DLU"), parse_sequence("LLD"))
    records = [
        ReachabilityRecord(apply_sequence(lone), 1, 2, lone, (lone,)),
        ReachabilityRecord(apply_sequence(shared[0]), 3, 1, shared[0], shared),
    ]
    table = {r.state: r for r in records}
    stats = table_stats(table)
    return RunResult(
        max_depth=3,
        policy="longest",
        table=table,
        stats=stats,
        best=select_best(table, stats=stats),
        bests=tuple(select_bests(table, stats=stats)),
    )


def test_depth_one_report_is_exact(depth1) -> None:
    assert render_report(depth1) == (
        "For up to 1 moves\n"
        "4 Uniques\n"
        "0 dups\n"
        "Best: (1|,0>,0|,1<) (0 target) (U)\n"
    )


def test_best_line_shape(depth1) -> None:
    last = render_report(depth1).splitlines()[-1]
    assert BEST_LINE.match(last)


def test_listing_in_count_length_state_order(depth1) -> None:
    lines = render_report(depth1, ReportConfig(show_all=True)).splitlines()
    assert lines[3:7] == [
        "(0|,1<,1|,0>) (   0 target)  1 (D)",
        "(0>,0|,1<,1|) (   0 target)  1 (L)",
        "(1<,1|,0>,0|) (   0 target)  1 (R)",
        "(1|,0>,0|,1<) (   0 target)  1 (U)",
    ]
    assert lines[7].startswith("Best: ")


def test_all_bests_in_tie_break_order(depth1) -> None:
    lines = render_report(depth1, ReportConfig(show_bests=True)).splitlines()
    assert [line[-2] for line in lines[3:]] == ["U", "R", "D", "L"]


def test_symmetry_section(depth1) -> None:
    lines = render_report(depth1, ReportConfig(show_symmetry=True)).splitlines()
    assert lines[-2:] == ["1 symmetry classes", "(0|,1<,1|,0>) x4 (0 target)  1"]


def test_dups_listed_under_colliding_records() -> None:
    result = _synthetic_result()
    lines = render_report(result, ReportConfig(show_all=True, show_dups=True)).splitlines()
    assert lines[3] == format_listing_line(result.table[apply_sequence(parse_sequence("RR"))])
    assert lines[4].endswith("(   2 target)  1 (U)")
    assert lines[5:8] == ["   U", "   DLU", "   LLD"]
    assert lines[8] == "Best: " + format_record(result.best)


def test_report_is_idempotent() -> None:
    result = run(max_depth=3)
    config = ReportConfig(show_all=True, show_bests=True, show_symmetry=True)
    assert render_report(result, config) == render_report(result, config)
    assert render_report(result, config) == render_report(run(max_depth=3), config)


def test_run_summary_is_json_serialisable() -> None:
    summary = build_run_summary(run(max_depth=2))
    decoded = json.loads(json.dumps(summary))
    assert decoded["max_depth"] == 2
    assert decoded["unique_count"] == 20
    assert decoded["duplicate_count"] == 0
    assert decoded["total_observations"] == 20
    assert decoded["length_histogram"] == [4, 16]
    assert decoded["best"] == {
        "state": "(2|,1>,0|,2<)",
        "count": 1,
        "collisions": 0,
        "min_length": 2,
        "sequence": "UU",
    }
    assert len(decoded["bests"]) == 16
