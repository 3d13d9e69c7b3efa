"""Tests for speed_dial.analysis.ranking module."""

from __future__ import annotations

import math

import pytest

from speed_dial.analysis.ranking import (
    REGISTERED_POLICIES,
    better_of,
    get_policy,
    ordered_records,
    policy_name,
    score_weighted,
    select_best,
    select_bests,
    table_stats,
)
from speed_dial.config.types import ConfigurationError, RankingPolicy
from speed_dial.domain.encoding import parse_sequence
from speed_dial.domain.mechanism import apply_sequence
from speed_dial.search.aggregator import ReachabilityRecord


def _record(moves: str, count: int) -> ReachabilityRecord:
    seq = parse_sequence(moves)
    return ReachabilityRecord(apply_sequence(seq), count, len(seq), seq)


@pytest.fixture
def table() -> dict:
    records = [
        _record("U", 1),
        _record("R", 3),
        _record("UU", 5),
        _record("UR", 2),
        _record("URD", 9),
        _record("RRD", 4),
        _record("DDL", 4),
    ]
    return {r.state: r for r in records}


class TestTableStats:
    def test_counts(self, table: dict) -> None:
        stats = table_stats(table)
        assert stats.unique_count == 7
        assert stats.total_observations == 28
        assert stats.duplicate_count == 21
        assert stats.max_min_length == 3
        assert stats.length_histogram == (2, 2, 3)
        assert stats.collision_max == 8
        assert stats.collision_p50 == 3.0

    def test_empty_table_rejected(self) -> None:
        with pytest.raises(ValueError):
            table_stats({})


class TestPolicies:
    def test_longest_prefers_length_then_fewest_collisions(self, table: dict) -> None:
        best = select_best(table, RankingPolicy.LONGEST)
        assert best.min_length == 3
        assert best.count == 4
        # RRD and DDL tie on score; the smaller sequence wins
        assert best.sequence == parse_sequence("RRD")

    def test_lowest_prefers_fewest_collisions(self, table: dict) -> None:
        best = select_best(table, "lowest")
        assert best.sequence == parse_sequence("U")

    def test_weighted_balances_length_and_collisions(self, table: dict) -> None:
        stats = table_stats(table)
        record = table[apply_sequence(parse_sequence("UR"))]
        assert score_weighted(record, stats, 1.0)[0] == pytest.approx(math.log1p(1) - 2.0)
        best = select_best(table, RankingPolicy.WEIGHTED, length_weight=1.0)
        assert best.min_length == 3
        heavy_collision_averse = select_best(table, RankingPolicy.WEIGHTED, length_weight=0.0)
        assert heavy_collision_averse.sequence == parse_sequence("U")

    def test_bests_lists_every_tie(self, table: dict) -> None:
        bests = select_bests(table, RankingPolicy.LONGEST)
        assert [r.sequence for r in bests] == [parse_sequence("RRD"), parse_sequence("DDL")]
        assert bests[0] == select_best(table, RankingPolicy.LONGEST)

    def test_custom_callable_policy(self, table: dict) -> None:
        def most_collisions(record, stats):
            return (-record.count,)

        assert select_best(table, most_collisions).sequence == parse_sequence("URD")
        assert policy_name(most_collisions) == "most_collisions"

    def test_selection_is_independent_of_table_order(self, table: dict) -> None:
        reversed_table = dict(reversed(list(table.items())))
        for policy in RankingPolicy:
            assert select_best(table, policy) == select_best(reversed_table, policy)

    def test_better_of_folds_partial_bests(self, table: dict) -> None:
        stats = table_stats(table)
        score = get_policy(RankingPolicy.LONGEST)
        records = list(table.values())
        left = select_best({r.state: r for r in records[:3]}, score, stats=stats)
        right = select_best({r.state: r for r in records[3:]}, score, stats=stats)
        assert better_of(left, right, score=score, stats=stats) == select_best(table, score)

    def test_registry_covers_every_policy(self) -> None:
        assert set(REGISTERED_POLICIES) == set(RankingPolicy)

    def test_unknown_policy_rejected(self, table: dict) -> None:
        with pytest.raises(ConfigurationError):
            select_best(table, "shortest")

    def test_policy_names(self) -> None:
        assert policy_name("LOWEST") == "lowest"
        assert policy_name(get_policy(RankingPolicy.WEIGHTED, 2.0)) == "score_weighted"

    def test_empty_table_rejected(self) -> None:
        with pytest.raises(ValueError):
            select_best({})


def test_ordered_records(table: dict) -> None:
    ordered = ordered_records(table.values())
    keys = [(r.count, r.min_length, r.state) for r in ordered]
    assert keys == sorted(keys)
    assert ordered[0].sequence == parse_sequence("U")
