"""Domain layer: lock mechanism model and canonical encodings."""

from speed_dial.domain.encoding import (
    parse_sequence,
    parse_state,
    render_sequence,
    render_state,
    render_wheel,
)
from speed_dial.domain.mechanism import (
    MARKER_TRANSITIONS,
    MOVES,
    LockState,
    Marker,
    Move,
    Sequence,
    WheelState,
    apply,
    apply_sequence,
    drive,
    initial_state,
    rotate,
    rotate_move,
    rotate_sequence,
)

__all__ = [
    "LockState",
    "MARKER_TRANSITIONS",
    "MOVES",
    "Marker",
    "Move",
    "Sequence",
    "WheelState",
    "apply",
    "apply_sequence",
    "drive",
    "initial_state",
    "parse_sequence",
    "parse_state",
    "render_sequence",
    "render_state",
    "render_wheel",
    "rotate",
    "rotate_move",
    "rotate_sequence",
]
