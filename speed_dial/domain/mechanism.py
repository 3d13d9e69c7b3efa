"""Wheel assembly of a four-wheel speed-dial lock and its transition function.

Each slide of the dial drives three of the four wheels:

- the trailing neighbour (index ``move - 1``) moves toward ``ENGAGE_LEFT``,
- the wheel named by the slide (index ``move``) moves toward ``IDLE``,
- the leading neighbour (index ``move + 1``) moves toward ``ENGAGE_RIGHT``,

and the wheel across from the driven one is left alone. Driving a wheel
toward a marker whose shift is higher than its current one only re-seats the
coupling dog; otherwise the wheel crosses a notch and advances one ring
position. The whole rule is the literal table ``MARKER_TRANSITIONS``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple, TypeAlias

from speed_dial.config.constants import ALPHABET_SIZE, NUM_WHEELS, QUARTER_TURNS, RING_SIZE


class Marker(IntEnum):
    """Coupling marker of a wheel; the value is the dog's shift."""

    ENGAGE_LEFT = -1
    IDLE = 0
    ENGAGE_RIGHT = 1

    @property
    def symbol(self) -> str:
        return MARKER_SYMBOLS[self]


class Move(IntEnum):
    """One slide of the dial; the value is the canonical order."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def code(self) -> str:
        return MOVE_CODES[self]


MARKER_SYMBOLS: dict[Marker, str] = {
    Marker.ENGAGE_LEFT: "<",
    Marker.IDLE: "|",
    Marker.ENGAGE_RIGHT: ">",
}

MOVE_CODES: dict[Move, str] = {
    Move.UP: "U",
    Move.RIGHT: "R",
    Move.DOWN: "D",
    Move.LEFT: "L",
}

MOVES: tuple[Move, ...] = tuple(Move)
"""All moves in canonical order."""

# (current marker, target marker) -> (new marker, advances one ring position)
MARKER_TRANSITIONS: dict[tuple[Marker, Marker], tuple[Marker, bool]] = {
    (Marker.ENGAGE_LEFT, Marker.ENGAGE_LEFT): (Marker.ENGAGE_LEFT, True),
    (Marker.ENGAGE_LEFT, Marker.IDLE): (Marker.IDLE, False),
    (Marker.ENGAGE_LEFT, Marker.ENGAGE_RIGHT): (Marker.ENGAGE_RIGHT, False),
    (Marker.IDLE, Marker.ENGAGE_LEFT): (Marker.ENGAGE_LEFT, True),
    (Marker.IDLE, Marker.IDLE): (Marker.IDLE, True),
    (Marker.IDLE, Marker.ENGAGE_RIGHT): (Marker.ENGAGE_RIGHT, False),
    (Marker.ENGAGE_RIGHT, Marker.ENGAGE_LEFT): (Marker.ENGAGE_LEFT, True),
    (Marker.ENGAGE_RIGHT, Marker.IDLE): (Marker.IDLE, True),
    (Marker.ENGAGE_RIGHT, Marker.ENGAGE_RIGHT): (Marker.ENGAGE_RIGHT, True),
}

# Wheel offset relative to the move -> target marker. Offset 2 is not driven.
DRIVE_TARGETS: dict[int, Marker] = {
    -1: Marker.ENGAGE_LEFT,
    0: Marker.IDLE,
    1: Marker.ENGAGE_RIGHT,
}


class WheelState(NamedTuple):
    """One wheel: a ring position and its coupling marker."""

    position: int
    marker: Marker


class LockState(NamedTuple):
    """Immutable state of the four wheels, front to back."""

    wheels: tuple[WheelState, WheelState, WheelState, WheelState]

    def __str__(self) -> str:
        from speed_dial.domain.encoding import render_state

        return render_state(self)


Sequence: TypeAlias = tuple[Move, ...]
"""An ordered list of moves applied from some state."""

REST_WHEEL = WheelState(0, Marker.IDLE)

# Memoized successors; the reachable state space is a few thousand states.
_TRANSITION_CACHE: dict[tuple[LockState, Move], LockState] = {}


def initial_state() -> LockState:
    """Return the rest state: every wheel at position 0, centred."""
    return LockState((REST_WHEEL,) * NUM_WHEELS)  # type: ignore[arg-type]


def drive(wheel: WheelState, target: Marker) -> WheelState:
    """Drive one wheel toward ``target`` using the transition table."""
    marker, advances = MARKER_TRANSITIONS[(wheel.marker, target)]
    position = (wheel.position + 1) % RING_SIZE if advances else wheel.position
    return WheelState(position, marker)


def _compute_successor(state: LockState, move: Move) -> LockState:
    wheels = list(state.wheels)
    for offset, target in DRIVE_TARGETS.items():
        index = (move + offset) % NUM_WHEELS
        wheels[index] = drive(wheels[index], target)
    return LockState(tuple(wheels))  # type: ignore[arg-type]


def apply(state: LockState, move: Move) -> LockState:
    """Return the state reached by sliding ``move`` from ``state``.

    Total and deterministic: every (state, move) pair has exactly one
    successor.
    """
    key = (state, move)
    successor = _TRANSITION_CACHE.get(key)
    if successor is None:
        successor = _compute_successor(state, Move(move))
        _TRANSITION_CACHE[key] = successor
    return successor


def apply_sequence(sequence: Sequence, state: LockState | None = None) -> LockState:
    """Apply every move of ``sequence`` in order, starting from ``state`` or rest."""
    current = initial_state() if state is None else state
    for move in sequence:
        current = apply(current, move)
    return current


def rotate(state: LockState, quarter_turns: int = 1) -> LockState:
    """Rotate the whole assembly; wheel ``i`` moves to ``i + quarter_turns``."""
    shift = quarter_turns % QUARTER_TURNS
    if shift == 0:
        return state
    wheels = state.wheels
    return LockState(tuple(wheels[(i - shift) % NUM_WHEELS] for i in range(NUM_WHEELS)))  # type: ignore[arg-type]


def rotate_move(move: Move, quarter_turns: int = 1) -> Move:
    """Return the move equivalent to ``move`` after rotating the assembly."""
    return MOVES[(move + quarter_turns) % ALPHABET_SIZE]


def rotate_sequence(sequence: Sequence, quarter_turns: int = 1) -> Sequence:
    """Rotate every move of ``sequence`` by ``quarter_turns``."""
    return tuple(rotate_move(move, quarter_turns) for move in sequence)


def all_states() -> list[LockState]:
    """Every structurally possible LockState (reachable or not), in order."""
    wheels = [WheelState(p, m) for p in range(RING_SIZE) for m in Marker]
    return [
        LockState((a, b, c, d))
        for a in wheels
        for b in wheels
        for c in wheels
        for d in wheels
    ]
