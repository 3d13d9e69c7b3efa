"""Canonical text encodings for wheels, lock states and move sequences.

State:    ``(0|,2>,3<,3<)``  four wheel tokens, position then marker symbol.
Sequence: ``URRLLU``        one letter per move, no delimiter.

These formats must stay byte-compatible with earlier reports.
"""

from __future__ import annotations

import re

from speed_dial.config.constants import NUM_WHEELS, RING_SIZE
from speed_dial.domain.mechanism import (
    MARKER_SYMBOLS,
    MOVE_CODES,
    LockState,
    Marker,
    Move,
    Sequence,
    WheelState,
)

STATE_DELIMITER = ","

_SYMBOL_TO_MARKER = {symbol: marker for marker, symbol in MARKER_SYMBOLS.items()}
_CODE_TO_MOVE = {code: move for move, code in MOVE_CODES.items()}
_WHEEL_TOKEN = re.compile(r"^(\d+)([<|>])$")


def render_wheel(wheel: WheelState) -> str:
    return f"{wheel.position}{MARKER_SYMBOLS[wheel.marker]}"


def render_state(state: LockState) -> str:
    """Render a state as ``(w0,w1,w2,w3)``."""
    return "(" + STATE_DELIMITER.join(render_wheel(w) for w in state.wheels) + ")"


def render_sequence(sequence: Sequence) -> str:
    """Render a sequence as concatenated move letters."""
    return "".join(MOVE_CODES[move] for move in sequence)


def parse_sequence(raw: str) -> Sequence:
    """Parse ``URDL``-style text into a move sequence.

    Lower-case letters are accepted; anything else raises ValueError.
    """
    text = raw.strip().upper()
    moves: list[Move] = []
    for ch in text:
        move = _CODE_TO_MOVE.get(ch)
        if move is None:
            valid = "".join(MOVE_CODES.values())
            raise ValueError(f"invalid move {ch!r}; moves must be one of {valid}")
        moves.append(move)
    return tuple(moves)


def parse_wheel(raw: str) -> WheelState:
    match = _WHEEL_TOKEN.match(raw.strip())
    if match is None:
        raise ValueError(f"invalid wheel token {raw!r}; expected e.g. '2>'")
    position = int(match.group(1))
    if position >= RING_SIZE:
        raise ValueError(f"wheel position must be < {RING_SIZE}, got {position}")
    marker: Marker = _SYMBOL_TO_MARKER[match.group(2)]
    return WheelState(position, marker)


def parse_state(raw: str) -> LockState:
    """Parse ``(0|,2>,3<,3<)`` back into a LockState."""
    text = raw.strip()
    if not (text.startswith("(") and text.endswith(")")):
        raise ValueError(f"state must be parenthesized, got {raw!r}")
    tokens = text[1:-1].split(STATE_DELIMITER)
    if len(tokens) != NUM_WHEELS:
        raise ValueError(f"state must have {NUM_WHEELS} wheels, got {len(tokens)}")
    return LockState(tuple(parse_wheel(token) for token in tokens))  # type: ignore[arg-type]
