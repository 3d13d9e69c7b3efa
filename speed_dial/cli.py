"""CLI entrypoint for speed-dial combination analysis.

This module owns argument parsing, config-file resolution and output
dispatch. All domain logic lives in the extracted modules:

- ``speed_dial.domain``       – mechanism model and canonical encodings
- ``speed_dial.search``       – sequence enumeration and aggregation
- ``speed_dial.experiments``  – run orchestration
- ``speed_dial.analysis``     – ranking, symmetry classes and the text report
- ``speed_dial.io``           – optional Parquet/JSON artifacts
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from speed_dial.analysis.report import build_run_summary, format_record, render_report
from speed_dial.config.constants import (
    DEFAULT_LENGTH_WEIGHT,
    DEFAULT_MAX_DEPTH,
    DEFAULT_PARTITION_DEPTH,
)
from speed_dial.config.types import (
    RankingPolicy,
    ReportConfig,
    SearchConfig,
    parse_policy,
)
from speed_dial.domain.encoding import (
    parse_sequence,
    parse_state,
    render_sequence,
    render_state,
)
from speed_dial.domain.mechanism import LockState, Sequence, apply_sequence
from speed_dial.experiments.run import RunResult, run_search
from speed_dial.io.export import write_run_artifacts

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Config-file resolution
# ---------------------------------------------------------------------------

_BOOL_WORDS = {
    "true": True,
    "yes": True,
    "on": True,
    "1": True,
    "false": False,
    "no": False,
    "off": False,
    "0": False,
}


def _as_bool(raw: object, key: str) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().lower() in _BOOL_WORDS:
        return _BOOL_WORDS[raw.strip().lower()]
    raise ValueError(f"{key} must be a boolean value, got {raw!r}")


def _as_int(raw: object, key: str) -> int:
    """Integers and integer strings only; JSON ``2.0`` and ``true`` are rejected."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw)
        except ValueError:
            pass
    raise ValueError(f"{key} must be an integer, got {raw!r}")


def _as_float(raw: object, key: str) -> float:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, str):
        try:
            return float(raw)
        except ValueError:
            pass
    raise ValueError(f"{key} must be a number, got {raw!r}")


def _as_text(raw: object, key: str) -> str:
    if isinstance(raw, (str, Path)):
        return str(raw)
    raise ValueError(f"{key} must be a string, got {raw!r}")


class _Settings:
    """Resolve each setting as CLI value, then config-file value, then default."""

    def __init__(self, file_cfg: dict[str, object]) -> None:
        self.file_cfg = file_cfg

    def pick(
        self,
        cli_val: object,
        key: str,
        default: T,
        coerce: Callable[[object, str], T],
    ) -> T:
        if cli_val is not None:
            return coerce(cli_val, key)
        if key in self.file_cfg:
            return coerce(self.file_cfg[key], key)
        return default

    def optional_text(self, cli_val: str | Path | None, key: str) -> str | None:
        raw = cli_val if cli_val is not None else self.file_cfg.get(key)
        return None if raw is None else _as_text(raw, key)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="speed-dial",
        description="Enumerate speed-dial lock move sequences and rank the combinations",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument(
        "-m",
        "--max",
        dest="max_depth",
        type=int,
        default=None,
        help=f"Maximum number of moves to consider (default {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "-a",
        "--all",
        dest="show_all",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show all combinations instead of just the best",
    )
    parser.add_argument(
        "-d",
        "--dups",
        dest="show_dups",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show every move sequence for combinations with duplicates",
    )
    parser.add_argument(
        "-b",
        "--bests",
        dest="show_bests",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show all of the best candidates, not just the first",
    )
    parser.add_argument(
        "-s",
        "--symmetry",
        dest="show_symmetry",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show the symmetry-class view",
    )
    parser.add_argument(
        "-p",
        "--policy",
        type=str,
        choices=[policy.value for policy in RankingPolicy],
        default=None,
        help="Ranking policy for the best combination (default longest)",
    )
    parser.add_argument("--length-weight", type=float, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--partition-depth", type=int, default=None)
    parser.add_argument(
        "--lookup",
        type=str,
        default=None,
        help="Report the record of one state, e.g. '(0|,2>,3<,3<)'",
    )
    parser.add_argument(
        "--replay",
        type=str,
        default=None,
        help="Report the state reached by a move sequence, e.g. URRLLU",
    )
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--json",
        dest="as_json",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print the run summary as JSON instead of the text report",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _lookup_line(result: RunResult, state: LockState) -> str:
    record = result.table.get(state)
    if record is None:
        return f"Lookup: {render_state(state)} unreachable within {result.max_depth} moves"
    return f"Lookup: {format_record(record)}"


def _replay_lines(result: RunResult, sequence: Sequence) -> list[str]:
    state = apply_sequence(sequence)
    lines = [f"Replay: {render_sequence(sequence)} -> {render_state(state)}"]
    lines.append(_lookup_line(result, state))
    return lines


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint.

    Supports ``--config path/to/config.json``; CLI arguments override
    config-file values and config-file values override built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must hold a JSON object: {args.config}")

    settings = _Settings(file_cfg)
    try:
        show_dups = settings.pick(args.show_dups, "dups", False, _as_bool)
        search_config = SearchConfig(
            max_depth=settings.pick(args.max_depth, "max", DEFAULT_MAX_DEPTH, _as_int),
            policy=parse_policy(
                settings.pick(args.policy, "policy", RankingPolicy.LONGEST.value, _as_text)
            ),
            length_weight=settings.pick(
                args.length_weight, "length_weight", DEFAULT_LENGTH_WEIGHT, _as_float
            ),
            workers=settings.pick(args.workers, "workers", 1, _as_int),
            partition_depth=settings.pick(
                args.partition_depth, "partition_depth", DEFAULT_PARTITION_DEPTH, _as_int
            ),
            keep_sequences=show_dups,
        )
        report_config = ReportConfig(
            show_all=settings.pick(args.show_all, "all", False, _as_bool),
            show_dups=show_dups,
            show_bests=settings.pick(args.show_bests, "bests", False, _as_bool),
            show_symmetry=settings.pick(args.show_symmetry, "symmetry", False, _as_bool),
        )
        as_json = settings.pick(args.as_json, "json", False, _as_bool)
        raw_lookup = settings.optional_text(args.lookup, "lookup")
        raw_replay = settings.optional_text(args.replay, "replay")
        raw_out_dir = settings.optional_text(args.out_dir, "out_dir")
        lookup = parse_state(raw_lookup) if raw_lookup is not None else None
        replay = parse_sequence(raw_replay) if raw_replay is not None else None
    except ValueError as exc:
        parser.error(str(exc))

    if replay is not None and not 1 <= len(replay) <= search_config.max_depth:
        parser.error(f"replay must contain between 1 and {search_config.max_depth} moves")

    result = run_search(search_config)

    if raw_out_dir is not None:
        write_run_artifacts(result, Path(raw_out_dir))

    if as_json:
        print(json.dumps(build_run_summary(result), ensure_ascii=False, indent=2))
    else:
        sys.stdout.write(render_report(result, report_config))

    extra: list[str] = []
    if lookup is not None:
        extra.append(_lookup_line(result, lookup))
    if replay is not None:
        extra.extend(_replay_lines(result, replay))
    for line in extra:
        print(line)


if __name__ == "__main__":
    main()
