"""Reachability table: per-state multiplicity and minimal-length bookkeeping.

The aggregator folds the enumerator's (sequence, state) stream into one
entry per distinct LockState. Entries are kept as small mutable lists while
the run is in progress and frozen into ReachabilityRecord values by
``finalize()``, which is the only way the table leaves the aggregator.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from speed_dial.domain.mechanism import LockState, Sequence

# Entry slots while aggregating.
_COUNT = 0
_MIN_LENGTH = 1
_SEQUENCE = 2
_ALL = 3


class EnumerationOrderError(AssertionError):
    """A shorter witness arrived after a longer one: the stream was out of order."""


@dataclass(frozen=True)
class ReachabilityRecord:
    """Everything learned about one reachable state during a run."""

    state: LockState
    count: int
    min_length: int
    sequence: Sequence
    sequences: tuple[Sequence, ...] | None = None

    @property
    def collisions(self) -> int:
        """Sequences beyond the minimal witness that reach the same state."""
        return self.count - 1


class StateAggregator:
    """Accumulates a reachability table from an ordered observation stream.

    In strict mode (the default) a shorter sequence for a known state raises
    EnumerationOrderError, since the enumerator guarantees length-major
    order. Non-strict mode replaces the witness instead.
    """

    def __init__(self, keep_sequences: bool = False, strict: bool = True) -> None:
        self.keep_sequences = keep_sequences
        self.strict = strict
        self.observations = 0
        self._entries: dict[LockState, list] = {}
        self._finalized = False

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, state: object) -> bool:
        return state in self._entries

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("aggregator is finalized; the table is read-only")

    def observe(self, sequence: Sequence, state: LockState) -> None:
        self._check_open()
        entry = self._entries.get(state)
        if entry is None:
            self.observations += 1
            self._entries[state] = [
                1,
                len(sequence),
                sequence,
                [sequence] if self.keep_sequences else None,
            ]
            return
        shorter = len(sequence) < entry[_MIN_LENGTH]
        if shorter and self.strict:
            raise EnumerationOrderError(
                f"sequence of length {len(sequence)} observed after a "
                f"length-{entry[_MIN_LENGTH]} witness for the same state"
            )
        self.observations += 1
        entry[_COUNT] += 1
        if self.keep_sequences:
            entry[_ALL].append(sequence)
        if shorter:
            entry[_MIN_LENGTH] = len(sequence)
            entry[_SEQUENCE] = sequence

    def consume(self, stream: Iterable[tuple[Sequence, LockState]]) -> StateAggregator:
        """Observe every pair of ``stream`` in order."""
        for sequence, state in stream:
            self.observe(sequence, state)
        return self

    def merge(self, other: StateAggregator) -> StateAggregator:
        """Fold another partial table into this one.

        Counts add up; the smaller minimal length wins, and on equal length
        the lexicographically smaller representative wins, so merging is
        associative and commutative.
        """
        self._check_open()
        if other is self:
            raise ValueError("cannot merge an aggregator into itself")
        if other.keep_sequences != self.keep_sequences:
            raise ValueError("cannot merge tables with different keep_sequences settings")
        self.observations += other.observations
        for state, theirs in other._entries.items():
            mine = self._entries.get(state)
            if mine is None:
                self._entries[state] = [
                    theirs[_COUNT],
                    theirs[_MIN_LENGTH],
                    theirs[_SEQUENCE],
                    list(theirs[_ALL]) if self.keep_sequences else None,
                ]
                continue
            mine[_COUNT] += theirs[_COUNT]
            if (theirs[_MIN_LENGTH], theirs[_SEQUENCE]) < (mine[_MIN_LENGTH], mine[_SEQUENCE]):
                mine[_MIN_LENGTH] = theirs[_MIN_LENGTH]
                mine[_SEQUENCE] = theirs[_SEQUENCE]
            if self.keep_sequences:
                mine[_ALL].extend(theirs[_ALL])
        return self

    def finalize(self) -> Mapping[LockState, ReachabilityRecord]:
        """Freeze the table and hand it over as a read-only mapping."""
        self._check_open()
        self._finalized = True
        table: dict[LockState, ReachabilityRecord] = {}
        for state, entry in self._entries.items():
            sequences = None
            if self.keep_sequences:
                sequences = tuple(sorted(entry[_ALL], key=lambda seq: (len(seq), seq)))
            table[state] = ReachabilityRecord(
                state=state,
                count=entry[_COUNT],
                min_length=entry[_MIN_LENGTH],
                sequence=entry[_SEQUENCE],
                sequences=sequences,
            )
        self._entries = {}
        return MappingProxyType(table)
