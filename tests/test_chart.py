"""End-to-end tests: chord record → absolute frets → diagram."""

import pytest

from fretchord.chart import build_chart
from fretchord.chord_models import MUTED, OPEN, Finger
from fretchord.chord_table import parse_chord_record


@pytest.mark.parametrize(
    ("markers", "notes", "absolute", "shown", "base_fret"),
    [
        ("x,3,2,0,1,0", "C,E,G,C,E", "x,3,2,0,1,0", "x,3,2,0,1,0", 0),
        ("x,0,2,2,2,0", "A,E,A,C#,E", "x,0,2,2,2,0", "x,0,1,1,1,0", 1),
        ("x,x,x,2,1,1", "G,Bb,Eb", "x,x,x,12,11,11", "x,x,x,2,1,1", 10),
        ("1,3,1,2,4,1", "Bb,F,Ab,D,Ab,Bb", "6,8,6,7,9,6", "1,3,1,2,4,1", 5),
        ("0,0,0,0,0,0", "E,A,D,G,B,E", "0,0,0,0,0,0", "0,0,0,0,0,0", 0),
        ("x,x,0,2,3,2", "D,A,D,F#", "x,x,0,2,3,2", "x,x,0,1,2,1", 1),
        ("0,2,0,0,3,0", "E,B,E,G,D,E", "0,2,0,0,3,0", "0,1,0,0,2,0", 1),
    ],
)
def test_chart_scenarios(
    markers: str, notes: str, absolute: str, shown: str, base_fret: int
) -> None:
    chart = build_chart(parse_chord_record(["T", "test", "1", markers, notes]))
    assert ",".join(chart.absolute.labels) == absolute
    assert ",".join(chart.diagram.labels) == shown
    assert chart.diagram.base_fret == base_fret


def test_chart_keeps_original_finger_markers() -> None:
    chart = build_chart(parse_chord_record(["Eb", "maj", "1", "x,x,x,2,1,1", "G,Bb,Eb"]))
    assert chart.markers == (MUTED, MUTED, MUTED, Finger(2), Finger(1), Finger(1))
    assert chart.diagnostics == ()


def test_muted_and_open_markers_pass_through_both_stages() -> None:
    chart = build_chart(parse_chord_record(["T", "t", "1", "0,x,1,4,4,0", "E,C,F,A,E"]))
    for marker, absolute, shown in zip(
        chart.markers, chart.absolute.positions, chart.diagram.positions
    ):
        if marker == MUTED:
            assert absolute == shown == MUTED
        if marker == OPEN:
            assert absolute == shown == OPEN


def test_chart_is_deterministic() -> None:
    record = parse_chord_record(["Bb", "7", "1", "1,3,1,2,4,1", "Bb,F,Ab,D,Ab,Bb"])
    assert build_chart(record) == build_chart(record)
