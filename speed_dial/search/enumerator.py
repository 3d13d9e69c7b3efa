"""Exhaustive, lazily streamed enumeration of move sequences.

Sequences are produced length-major: every sequence of length ``L`` comes
before any sequence of length ``L + 1``, and within one length they come in
lexicographic order of the canonical move order. Each length is an
iterative-deepening pass that walks the move tree depth first, extending the
running parent state one move at a time, so no sequence is ever re-simulated
from the rest state. The first time a state appears in the stream is
therefore a minimal-length, lexicographically smallest witness.
"""

from __future__ import annotations

from collections.abc import Iterator
from itertools import product

from speed_dial.config.constants import ALPHABET_SIZE
from speed_dial.config.types import ConfigurationError
from speed_dial.domain.mechanism import (
    MOVES,
    LockState,
    Sequence,
    apply,
    apply_sequence,
    initial_state,
)

Observation = tuple[Sequence, LockState]


def count_sequences(max_depth: int, prefix_length: int = 0) -> int:
    """Number of sequences enumerate_sequences visits for a prefix length."""
    first = max(1, prefix_length)
    return sum(ALPHABET_SIZE ** (length - prefix_length) for length in range(first, max_depth + 1))


def partition_prefixes(length: int) -> list[Sequence]:
    """All prefixes of ``length`` moves in canonical order."""
    return [tuple(prefix) for prefix in product(MOVES, repeat=length)]


def _walk_exact(start: LockState, prefix: Sequence, depth: int) -> Iterator[Observation]:
    """Yield every extension of ``prefix`` by exactly ``depth`` moves."""
    if depth == 0:
        yield prefix, start
        return
    path = list(prefix)
    # Frames of (state at this node, index of the next move to try).
    stack: list[tuple[LockState, int]] = [(start, 0)]
    while stack:
        state, index = stack[-1]
        if index == ALPHABET_SIZE:
            stack.pop()
            if stack:
                path.pop()
            continue
        stack[-1] = (state, index + 1)
        move = MOVES[index]
        successor = apply(state, move)
        if len(stack) == depth:
            yield (*path, move), successor
        else:
            path.append(move)
            stack.append((successor, 0))


def enumerate_sequences(
    max_depth: int,
    initial: LockState | None = None,
    prefix: Sequence = (),
) -> Iterator[Observation]:
    """Stream every (sequence, state) pair for sequences extending ``prefix``.

    Lengths run from ``max(1, len(prefix))`` to ``max_depth``. Raises
    ConfigurationError before yielding anything when ``max_depth < 1`` or
    the prefix is longer than ``max_depth``.
    """
    if max_depth < 1:
        raise ConfigurationError("max_depth must be >= 1")
    if len(prefix) > max_depth:
        raise ConfigurationError("prefix must not be longer than max_depth")
    return _enumerate(max_depth, initial, tuple(prefix))


def _enumerate(max_depth: int, initial: LockState | None, prefix: Sequence) -> Iterator[Observation]:
    start = apply_sequence(prefix, initial_state() if initial is None else initial)
    first = max(1, len(prefix))
    for length in range(first, max_depth + 1):
        yield from _walk_exact(start, prefix, length - len(prefix))
