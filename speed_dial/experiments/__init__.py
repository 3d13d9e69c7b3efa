"""Experiments layer: run orchestration, serial or split across processes."""

from speed_dial.experiments.run import (
    RunResult,
    aggregate_parallel,
    aggregate_serial,
    run,
    run_search,
)

__all__ = [
    "RunResult",
    "aggregate_parallel",
    "aggregate_serial",
    "run",
    "run_search",
]
