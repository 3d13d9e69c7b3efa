"""Tests for speed_dial.experiments.run module."""

from __future__ import annotations

import re
from collections import deque
from itertools import product

import pytest

from speed_dial.analysis.report import render_report
from speed_dial.config.types import ConfigurationError, RankingPolicy, SearchConfig
from speed_dial.domain.encoding import parse_sequence, parse_state
from speed_dial.domain.mechanism import MOVES, apply, apply_sequence, initial_state
from speed_dial.experiments.run import run, run_search
from speed_dial.search.enumerator import count_sequences

BEST_LINE = re.compile(r"^Best: \((\d[<|>],){3}\d[<|>]\) \(\d+ target\) \([URDL]+\)$")


@pytest.fixture(scope="module")
def depth10():
    return run()


class TestReferenceDepth:
    def test_unique_and_duplicate_counts(self, depth10) -> None:
        assert depth10.unique_count == 7396
        assert depth10.duplicate_count == 1_390_704
        assert depth10.total_observations == count_sequences(10) == 1_398_100

    def test_best_is_longest_with_fewest_collisions(self, depth10) -> None:
        best = depth10.best
        longest = max(r.min_length for r in depth10.table.values())
        assert best.min_length == longest
        assert best.collisions == min(
            r.collisions for r in depth10.table.values() if r.min_length == longest
        )

    def test_best_witness_replays_to_best_state(self, depth10) -> None:
        best = depth10.best
        assert apply_sequence(best.sequence) == best.state
        assert len(best.sequence) == best.min_length

    def test_report_shape(self, depth10) -> None:
        lines = render_report(depth10).splitlines()
        assert lines[:3] == ["For up to 10 moves", "7396 Uniques", "1390704 dups"]
        assert BEST_LINE.match(lines[3])
        assert lines[3] == "Best: (2>,2<,0<,2|) (0 target) (UUUURRDDLL)"
        assert len(lines) == 4


class TestSmallDepths:
    def test_depth_one(self) -> None:
        result = run(max_depth=1)
        assert result.unique_count == 4
        assert result.duplicate_count == 0
        assert result.best.state == parse_state("(1|,0>,0|,1<)")
        assert result.best.sequence == parse_sequence("U")

    def test_depth_two(self) -> None:
        result = run(max_depth=2)
        assert result.unique_count == 20
        assert result.duplicate_count == 0
        assert result.best.state == parse_state("(2|,1>,0|,2<)")
        assert result.best.sequence == parse_sequence("UU")

    def test_depth_two_lowest_policy(self) -> None:
        result = run(max_depth=2, policy=RankingPolicy.LOWEST)
        assert result.best.sequence == parse_sequence("U")
        assert result.policy == "lowest"


class TestBruteForce:
    max_depth = 4

    def test_table_matches_exhaustive_product(self) -> None:
        expected: dict = {}
        for length in range(1, self.max_depth + 1):
            for seq in product(MOVES, repeat=length):
                state = apply_sequence(seq)
                count, witness = expected.get(state, (0, seq))
                expected[state] = (count + 1, min(witness, seq, key=lambda s: (len(s), s)))
        table = run(max_depth=self.max_depth).table
        assert set(table) == set(expected)
        for state, (count, witness) in expected.items():
            assert table[state].count == count
            assert table[state].sequence == witness
            assert table[state].min_length == len(witness)

    def test_min_length_matches_breadth_first_search(self) -> None:
        rest = initial_state()
        distance = {rest: 0}
        frontier = deque([rest])
        while frontier:
            state = frontier.popleft()
            if distance[state] == self.max_depth:
                continue
            for move in MOVES:
                successor = apply(state, move)
                if successor not in distance:
                    distance[successor] = distance[state] + 1
                    frontier.append(successor)
        table = run(max_depth=self.max_depth).table
        reached = {s for s, d in distance.items() if d > 0}
        assert reached == set(table) - {rest}
        for state in reached:
            assert table[state].min_length == distance[state]


class TestParallel:
    @pytest.mark.parametrize("partition_depth", [1, 2])
    def test_parallel_matches_serial(self, partition_depth: int) -> None:
        serial = run(max_depth=5)
        parallel = run(max_depth=5, workers=2, partition_depth=partition_depth)
        assert dict(parallel.table) == dict(serial.table)
        assert parallel.best == serial.best
        assert parallel.bests == serial.bests
        assert render_report(parallel) == render_report(serial)

    def test_partition_deeper_than_search(self) -> None:
        serial = run(max_depth=2)
        parallel = run(max_depth=2, workers=2, partition_depth=4)
        assert dict(parallel.table) == dict(serial.table)


class TestConfiguration:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_depth": 0},
            {"max_depth": -1},
            {"max_depth": 2.5},
            {"max_depth": 2, "policy": "shortest"},
            {"max_depth": 2, "workers": 0},
            {"max_depth": 2, "length_weight": -1.0},
            {"max_depth": 2, "length_weight": "x"},
            {"max_depth": 2, "workers": "2"},
            {"max_depth": 2, "partition_depth": None},
        ],
    )
    def test_invalid_settings_rejected_before_enumeration(self, kwargs: dict) -> None:
        with pytest.raises(ConfigurationError):
            run(**kwargs)

    def test_large_depth_is_accepted(self) -> None:
        config = SearchConfig(max_depth=20)
        assert config.max_depth == 20
        assert count_sequences(config.max_depth) == sum(4**length for length in range(1, 21))

    def test_custom_scoring_callable(self) -> None:
        def shortest_first(record, stats):
            return (record.min_length,)

        result = run(max_depth=3, policy=shortest_first)
        assert result.best.min_length == 1
        assert result.best.sequence == parse_sequence("U")
        assert result.policy == "shortest_first"

    def test_run_search_with_config(self) -> None:
        result = run_search(SearchConfig(max_depth=2, policy="weighted", length_weight=0.5))
        assert result.policy == "weighted"
        assert result.unique_count == 20

    def test_keep_sequences(self) -> None:
        result = run(max_depth=3, keep_sequences=True)
        for record in result.table.values():
            assert record.sequences is not None
            assert len(record.sequences) == record.count
            for seq in record.sequences:
                assert apply_sequence(seq) == record.state

    def test_custom_initial_state(self) -> None:
        start = apply_sequence(parse_sequence("UU"))
        result = run(max_depth=2, initial=start)
        for state, record in result.table.items():
            assert apply_sequence(record.sequence, start) == state
