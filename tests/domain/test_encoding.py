"""Tests for speed_dial.domain.encoding module."""

from __future__ import annotations

import pytest

from speed_dial.domain.encoding import (
    parse_sequence,
    parse_state,
    parse_wheel,
    render_sequence,
    render_state,
    render_wheel,
)
from speed_dial.domain.mechanism import LockState, Marker, Move, WheelState


def test_render_wheel_symbols() -> None:
    assert render_wheel(WheelState(0, Marker.IDLE)) == "0|"
    assert render_wheel(WheelState(2, Marker.ENGAGE_RIGHT)) == "2>"
    assert render_wheel(WheelState(3, Marker.ENGAGE_LEFT)) == "3<"


def test_render_state_matches_reference_format() -> None:
    state = LockState(
        (
            WheelState(0, Marker.IDLE),
            WheelState(2, Marker.ENGAGE_RIGHT),
            WheelState(3, Marker.ENGAGE_LEFT),
            WheelState(3, Marker.ENGAGE_LEFT),
        )
    )
    assert render_state(state) == "(0|,2>,3<,3<)"
    assert parse_state("(0|,2>,3<,3<)") == state


def test_render_sequence_has_no_delimiter() -> None:
    seq = (Move.UP, Move.RIGHT, Move.RIGHT, Move.LEFT, Move.LEFT, Move.UP)
    assert render_sequence(seq) == "URRLLU"
    assert parse_sequence("URRLLU") == seq


def test_parse_sequence_is_case_insensitive() -> None:
    assert parse_sequence(" urdl ") == (Move.UP, Move.RIGHT, Move.DOWN, Move.LEFT)


def test_parse_sequence_empty() -> None:
    assert parse_sequence("") == ()


@pytest.mark.parametrize("raw", ["UX", "U R", "1", "UP"])
def test_parse_sequence_rejects_unknown_moves(raw: str) -> None:
    with pytest.raises(ValueError, match="invalid move"):
        parse_sequence(raw)


@pytest.mark.parametrize(
    "raw",
    [
        "0|,2>,3<,3<",
        "(0|,2>,3<)",
        "(0|,2>,3<,3<,0|)",
        "(0|,2>,3<,3x)",
        "(5|,0|,0|,0|)",
        "(|,0|,0|,0|)",
    ],
)
def test_parse_state_rejects_malformed(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_state(raw)


def test_parse_wheel_strips_whitespace() -> None:
    assert parse_wheel(" 4< ") == WheelState(4, Marker.ENGAGE_LEFT)
