"""Run orchestration: enumerate, aggregate, then rank.

A run is one bounded batch computation. With ``workers > 1`` the move tree
is split by its first ``partition_depth`` moves into independent subtrees;
each worker process owns its own partial aggregator and the partial tables
are merged in canonical prefix order once all of them are complete.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Mapping
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass

from speed_dial.analysis.ranking import (
    ScoringPolicy,
    TableStats,
    get_policy,
    policy_name,
    select_best,
    select_bests,
    table_stats,
)
from speed_dial.config.constants import (
    DEFAULT_LENGTH_WEIGHT,
    DEFAULT_MAX_DEPTH,
    DEFAULT_PARTITION_DEPTH,
)
from speed_dial.config.types import RankingPolicy, SearchConfig
from speed_dial.domain.mechanism import LockState, Sequence, initial_state
from speed_dial.search.aggregator import ReachabilityRecord, StateAggregator
from speed_dial.search.enumerator import (
    count_sequences,
    enumerate_sequences,
    partition_prefixes,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Finalized output of one enumeration run."""

    max_depth: int
    policy: str
    table: Mapping[LockState, ReachabilityRecord]
    stats: TableStats
    best: ReachabilityRecord
    bests: tuple[ReachabilityRecord, ...]

    @property
    def unique_count(self) -> int:
        return self.stats.unique_count

    @property
    def duplicate_count(self) -> int:
        return self.stats.duplicate_count

    @property
    def total_observations(self) -> int:
        return self.stats.total_observations


def _aggregate_subtree(
    max_depth: int,
    initial: LockState,
    prefix: Sequence,
    keep_sequences: bool,
) -> StateAggregator:
    """Worker body: aggregate every sequence that starts with ``prefix``."""
    aggregator = StateAggregator(keep_sequences=keep_sequences)
    return aggregator.consume(enumerate_sequences(max_depth, initial, prefix))


def aggregate_serial(
    max_depth: int,
    initial: LockState,
    keep_sequences: bool = False,
) -> StateAggregator:
    """Aggregate the whole move tree in this process."""
    return _aggregate_subtree(max_depth, initial, (), keep_sequences)


def aggregate_parallel(
    max_depth: int,
    initial: LockState,
    workers: int,
    partition_depth: int,
    keep_sequences: bool = False,
) -> StateAggregator:
    """Aggregate the move tree split into prefix subtrees across processes.

    Sequences shorter than the prefix length are aggregated in this process
    first; each prefix subtree then covers lengths ``partition_depth`` and up.
    """
    depth = min(partition_depth, max_depth)
    prefixes = partition_prefixes(depth)
    n_workers = min(workers, os.cpu_count() or 1, len(prefixes))
    logger.info(
        "Partitioning %d prefix subtrees of length %d across %d workers",
        len(prefixes),
        depth,
        n_workers,
    )
    combined = StateAggregator(keep_sequences=keep_sequences)
    if depth > 1:
        combined.consume(enumerate_sequences(depth - 1, initial))
    with ProcessPoolExecutor(max_workers=n_workers) as executor:
        futures = [
            executor.submit(_aggregate_subtree, max_depth, initial, prefix, keep_sequences)
            for prefix in prefixes
        ]
        # Merge in canonical prefix order so results never depend on scheduling.
        for prefix, future in zip(prefixes, futures, strict=True):
            partial_table = future.result()
            logger.debug(
                "Merged subtree %s: %d states from %d sequences",
                "".join(m.code for m in prefix),
                len(partial_table),
                partial_table.observations,
            )
            combined.merge(partial_table)
    return combined


def run_search(
    config: SearchConfig,
    initial: LockState | None = None,
    policy: ScoringPolicy | None = None,
) -> RunResult:
    """Run one full enumeration under ``config``.

    ``policy`` overrides ``config.policy`` with a custom scoring callable.
    """
    start_state = initial_state() if initial is None else initial
    score = policy if policy is not None else get_policy(config.policy, config.length_weight)
    expected = count_sequences(config.max_depth)
    logger.info(
        "Enumerating %d sequences up to %d moves (workers=%d)",
        expected,
        config.max_depth,
        config.workers,
    )
    started = time.perf_counter()
    if config.workers > 1:
        aggregator = aggregate_parallel(
            config.max_depth,
            start_state,
            workers=config.workers,
            partition_depth=config.effective_partition_depth,
            keep_sequences=config.keep_sequences,
        )
    else:
        aggregator = aggregate_serial(config.max_depth, start_state, config.keep_sequences)
    if aggregator.observations != expected:
        raise RuntimeError(
            f"enumeration visited {aggregator.observations} sequences, expected {expected}"
        )
    table = aggregator.finalize()
    stats = table_stats(table)
    best = select_best(table, score, stats=stats)
    bests = select_bests(table, score, stats=stats)
    logger.info(
        "Finished in %.2fs: %d unique states, %d duplicates",
        time.perf_counter() - started,
        stats.unique_count,
        stats.duplicate_count,
    )
    return RunResult(
        max_depth=config.max_depth,
        policy=policy_name(policy if policy is not None else config.policy),
        table=table,
        stats=stats,
        best=best,
        bests=tuple(bests),
    )


def run(
    max_depth: int = DEFAULT_MAX_DEPTH,
    policy: RankingPolicy | str | ScoringPolicy = RankingPolicy.LONGEST,
    *,
    initial: LockState | None = None,
    workers: int = 1,
    partition_depth: int = DEFAULT_PARTITION_DEPTH,
    keep_sequences: bool = False,
    length_weight: float = DEFAULT_LENGTH_WEIGHT,
) -> RunResult:
    """Enumerate every sequence up to ``max_depth`` and rank the end states.

    ``policy`` is a RankingPolicy, its name, or a scoring callable
    ``(record, stats) -> tuple`` where lower ranks first. Invalid settings
    raise ConfigurationError before any enumeration.
    """
    custom = policy if callable(policy) else None
    config = SearchConfig(
        max_depth=max_depth,
        policy=RankingPolicy.LONGEST if custom is not None else policy,
        length_weight=length_weight,
        workers=workers,
        partition_depth=partition_depth,
        keep_sequences=keep_sequences,
    )
    return run_search(config, initial=initial, policy=custom)
