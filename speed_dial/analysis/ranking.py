"""Table statistics and pluggable "best combination" selection.

A scoring policy is any callable ``(record, stats) -> tuple`` where a lower
tuple is better. Built-in policies are registered by RankingPolicy name;
callers may pass their own callable instead. Whatever the policy, ties on
the score break by lowest collision count and then by the lexicographically
smallest representative sequence, so selection is deterministic.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from functools import partial, reduce

import numpy as np

from speed_dial.config.constants import DEFAULT_LENGTH_WEIGHT
from speed_dial.config.types import RankingPolicy, parse_policy
from speed_dial.domain.mechanism import LockState
from speed_dial.search.aggregator import ReachabilityRecord

Score = tuple[float, ...]


@dataclass(frozen=True)
class TableStats:
    """Global statistics of one finalized reachability table."""

    unique_count: int
    total_observations: int
    duplicate_count: int
    max_min_length: int
    length_histogram: tuple[int, ...]
    """Unique states per minimal length; index 0 is length 1."""
    collision_p50: float
    collision_p90: float
    collision_max: int


ScoringPolicy = Callable[[ReachabilityRecord, TableStats], Score]


def table_stats(table: Mapping[LockState, ReachabilityRecord]) -> TableStats:
    """Compute unique/duplicate counts and distribution summaries."""
    if not table:
        raise ValueError("reachability table is empty")
    records = list(table.values())
    counts = np.fromiter((r.count for r in records), dtype=np.int64, count=len(records))
    lengths = np.fromiter((r.min_length for r in records), dtype=np.int64, count=len(records))
    collisions = counts - 1
    unique_count = len(records)
    total = int(counts.sum())
    histogram = np.bincount(lengths, minlength=int(lengths.max()) + 1)[1:]
    return TableStats(
        unique_count=unique_count,
        total_observations=total,
        duplicate_count=total - unique_count,
        max_min_length=int(lengths.max()),
        length_histogram=tuple(int(v) for v in histogram),
        collision_p50=float(np.percentile(collisions, 50)),
        collision_p90=float(np.percentile(collisions, 90)),
        collision_max=int(collisions.max()),
    )


# ---------------------------------------------------------------------------
# Built-in policies
# ---------------------------------------------------------------------------


def score_longest(record: ReachabilityRecord, stats: TableStats) -> Score:
    """Longest minimal length first, then fewest collisions."""
    return (-record.min_length, record.collisions)


def score_lowest(record: ReachabilityRecord, stats: TableStats) -> Score:
    """Fewest collisions regardless of length, shorter first on ties."""
    return (record.collisions, record.min_length)


def score_weighted(
    record: ReachabilityRecord,
    stats: TableStats,
    length_weight: float = DEFAULT_LENGTH_WEIGHT,
) -> Score:
    """Balance guessability (log collisions) against memorisation length."""
    return (float(np.log1p(record.collisions)) - length_weight * record.min_length,)


REGISTERED_POLICIES: dict[RankingPolicy, ScoringPolicy] = {
    RankingPolicy.LONGEST: score_longest,
    RankingPolicy.LOWEST: score_lowest,
    RankingPolicy.WEIGHTED: score_weighted,
}


def get_policy(
    policy: RankingPolicy | str | ScoringPolicy,
    length_weight: float = DEFAULT_LENGTH_WEIGHT,
) -> ScoringPolicy:
    """Resolve a policy name or pass a custom scoring callable through."""
    if callable(policy):
        return policy
    resolved = parse_policy(policy)
    if resolved is RankingPolicy.WEIGHTED:
        return partial(score_weighted, length_weight=length_weight)
    return REGISTERED_POLICIES[resolved]


def policy_name(policy: RankingPolicy | str | ScoringPolicy) -> str:
    """Human-readable identifier of a policy."""
    if isinstance(policy, (str, RankingPolicy)):
        return parse_policy(policy).value
    func = policy.func if isinstance(policy, partial) else policy
    return getattr(func, "__name__", type(func).__name__)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def _rank_key(record: ReachabilityRecord, score: ScoringPolicy, stats: TableStats) -> tuple:
    return (score(record, stats), record.collisions, record.sequence)


def select_best(
    table: Mapping[LockState, ReachabilityRecord],
    policy: RankingPolicy | str | ScoringPolicy = RankingPolicy.LONGEST,
    stats: TableStats | None = None,
    length_weight: float = DEFAULT_LENGTH_WEIGHT,
) -> ReachabilityRecord:
    """Pick the single best record under ``policy``.

    The current best is an explicit accumulator folded over the records, so
    partial bests from independent subtables can be combined the same way.
    """
    if not table:
        raise ValueError("reachability table is empty")
    score = get_policy(policy, length_weight)
    stats = table_stats(table) if stats is None else stats
    return reduce(partial(better_of, score=score, stats=stats), table.values())


def better_of(
    best: ReachabilityRecord,
    candidate: ReachabilityRecord,
    *,
    score: ScoringPolicy,
    stats: TableStats,
) -> ReachabilityRecord:
    """Return whichever of two records ranks first."""
    if _rank_key(candidate, score, stats) < _rank_key(best, score, stats):
        return candidate
    return best


def select_bests(
    table: Mapping[LockState, ReachabilityRecord],
    policy: RankingPolicy | str | ScoringPolicy = RankingPolicy.LONGEST,
    stats: TableStats | None = None,
    length_weight: float = DEFAULT_LENGTH_WEIGHT,
) -> list[ReachabilityRecord]:
    """Every record whose policy score ties the best, in tie-break order."""
    if not table:
        raise ValueError("reachability table is empty")
    score = get_policy(policy, length_weight)
    stats = table_stats(table) if stats is None else stats
    best_score = min(score(record, stats) for record in table.values())
    tied = [record for record in table.values() if score(record, stats) == best_score]
    tied.sort(key=lambda record: _rank_key(record, score, stats))
    return tied


def ordered_records(records: Iterable[ReachabilityRecord]) -> list[ReachabilityRecord]:
    """Listing order: fewest sequences first, then shorter, then state order."""
    return sorted(records, key=lambda r: (r.count, r.min_length, r.state))
