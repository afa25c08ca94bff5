"""Unit tests for DisplayWindow (fitting positions into the diagram)."""

import logging

import pytest

from fretchord.chord_models import MUTED, OPEN, AbsoluteFretAssignment, Fretted, Position
from fretchord.display_window import DisplayWindow, normalize_fret_positions


def _absolute(*values: object) -> AbsoluteFretAssignment:
    positions: list[Position] = []
    for value in values:
        if value == "x":
            positions.append(MUTED)
        elif value == "o":
            positions.append(OPEN)
        else:
            assert isinstance(value, int)
            positions.append(Fretted(value))
    return AbsoluteFretAssignment(positions=tuple(positions))


def test_c_major_is_left_alone() -> None:
    diagram = normalize_fret_positions(_absolute("x", 3, 2, "o", 1, "o"))
    assert diagram.labels == ["x", "3", "2", "0", "1", "0"]
    assert diagram.base_fret == 0
    assert diagram.fret_label is None


def test_a_major_shifts_fingers_but_not_open_strings() -> None:
    diagram = normalize_fret_positions(_absolute("x", "o", 2, 2, 2, "o"))
    assert diagram.positions == (MUTED, OPEN, Fretted(1), Fretted(1), Fretted(1), OPEN)
    assert diagram.base_fret == 1
    assert diagram.fret_label == "2"


def test_eb_major_high_up_the_neck() -> None:
    diagram = normalize_fret_positions(_absolute("x", "x", "x", 12, 11, 11))
    assert diagram.labels == ["x", "x", "x", "2", "1", "1"]
    assert diagram.base_fret == 10
    assert diagram.fret_label == "11"


def test_bb7_barre_chord_base_fret() -> None:
    diagram = normalize_fret_positions(_absolute(6, 8, 6, 7, 9, 6))
    assert diagram.labels == ["1", "3", "1", "2", "4", "1"]
    assert diagram.base_fret == 5


def test_all_open_chord_short_circuits() -> None:
    absolute = _absolute("o", "o", "o", "o", "o", "o")
    diagram = normalize_fret_positions(absolute)
    assert diagram.positions == absolute.positions
    assert diagram.base_fret == 0


def test_all_muted_chord_short_circuits() -> None:
    diagram = normalize_fret_positions(_absolute("x", "x", "x", "x", "x", "x"))
    assert diagram.labels == ["x"] * 6
    assert diagram.base_fret == 0


def test_fretted_zero_is_treated_as_open() -> None:
    diagram = normalize_fret_positions(_absolute("x", 0, 4, 4, 3, "o"))
    assert diagram.positions[1] == Fretted(0)
    assert diagram.labels == ["x", "0", "2", "2", "1", "0"]
    assert diagram.base_fret == 2


def test_wide_chord_starting_at_first_fret_is_not_shifted(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="fretchord.display_window"):
        diagram = normalize_fret_positions(_absolute(1, "x", "x", "x", "x", 8))

    assert diagram.labels == ["1", "x", "x", "x", "x", "8"]
    assert diagram.base_fret == 0
    assert diagram.overflow
    assert "Diagram overflow" in caplog.text


def test_overflow_after_shift_is_reported_not_clamped() -> None:
    diagram = normalize_fret_positions(_absolute("o", "o", 10, 10, 10, 15))
    assert diagram.labels == ["0", "0", "1", "1", "1", "6"]
    assert diagram.base_fret == 9
    assert diagram.overflow


def test_five_fret_span_fits_the_window() -> None:
    diagram = normalize_fret_positions(_absolute(3, 3, 3, 2, 3, 3))
    frets = [p.fret for p in diagram.positions if isinstance(p, Fretted)]
    assert max(frets) - min(frets) <= 4
    assert not diagram.overflow


def test_already_fitted_diagram_is_idempotent() -> None:
    absolute = _absolute("x", 1, 3, 5, "o", 2)
    first = normalize_fret_positions(absolute)
    again = normalize_fret_positions(AbsoluteFretAssignment(positions=first.positions))
    assert first.positions == absolute.positions
    assert again.positions == first.positions
    assert again.base_fret == first.base_fret == 0


def test_muted_and_open_strings_survive_any_shift() -> None:
    for low in range(1, 15):
        absolute = _absolute("x", "o", low, low + 2, "x", "o")
        diagram = normalize_fret_positions(absolute)
        assert diagram.positions[0] == MUTED
        assert diagram.positions[4] == MUTED
        assert diagram.positions[1] == OPEN
        assert diagram.positions[5] == OPEN


def test_custom_window_height() -> None:
    diagram = DisplayWindow(frets=4).normalize(_absolute(1, "x", "x", "x", "x", 5))
    assert diagram.window == 4
    assert diagram.overflow
