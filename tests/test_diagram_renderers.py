"""Unit tests for chord diagram renderers."""

import pytest

from fretchord.chart import ChordChart, build_chart
from fretchord.chord_models import ChordRecord
from fretchord.chord_table import parse_chord_record
from fretchord.diagram_renderers import DiagramLayout, HtmlSheetRenderer, SvgDiagramRenderer
from fretchord.fret_resolver import FretResolver


def _chart(line: list[str]) -> ChordChart:
    record: ChordRecord = parse_chord_record(line)
    return build_chart(record)


@pytest.fixture
def a_major() -> ChordChart:
    return _chart(["A", "maj", '"1;3;5"', "x,0,2,2,2,0", "A,E,A,C#,E"])


@pytest.fixture
def eb_major() -> ChordChart:
    return _chart(["Eb", "maj", '"1;3;5"', "x,x,x,2,1,1", "G,Bb,Eb"])


def test_layout_caps_width_at_reference_size() -> None:
    layout = DiagramLayout.for_viewport(2000)
    assert layout.width == 600
    assert layout.height == 800
    assert layout.scale == 1


def test_layout_shrinks_to_viewport_height() -> None:
    layout = DiagramLayout.for_viewport(1000, viewport_height=400)
    assert layout.height == pytest.approx(360)
    assert layout.width == pytest.approx(270)


def test_svg_has_title_and_structure(a_major: ChordChart) -> None:
    svg = SvgDiagramRenderer().render_chart(a_major)
    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")
    assert ">Amaj</text>" in svg
    assert "Structure: 1, 3, 5" in svg
    assert "Notes: A, E, A, C#, E" in svg


def test_svg_marks_muted_open_and_fingered_strings(a_major: ChordChart) -> None:
    svg = SvgDiagramRenderer().render_chart(a_major)
    assert svg.count(">X</text>") == 1
    assert svg.count('fill="none" stroke="black" stroke-width="2"/>') == 3  # outline + 2 open
    assert svg.count('fill="black"/>') == 3
    assert ">2fr</text>" in svg


def test_svg_labels_dots_with_original_finger_digits(eb_major: ChordChart) -> None:
    svg = SvgDiagramRenderer().render_chart(eb_major)
    assert 'fill="white" font-weight="bold">2</text>' in svg
    assert svg.count('fill="white" font-weight="bold">1</text>') == 2
    assert ">11fr</text>" in svg


def test_svg_without_base_fret_has_no_fret_label() -> None:
    chart = _chart(["C", "maj", '"1;3;5"', "x,3,2,0,1,0", "C,E,G,C,E"])
    assert "fr</text>" not in SvgDiagramRenderer().render_chart(chart)


def test_svg_escapes_text() -> None:
    chart = _chart(["C", "<b>", "1", "x,3,2,0,1,0", "C,E,G,C,E"])
    svg = SvgDiagramRenderer().render_chart(chart)
    assert "C&lt;b&gt;" in svg
    assert "<b>" not in svg


def test_svg_renderer_refuses_several_charts(a_major: ChordChart, eb_major: ChordChart) -> None:
    with pytest.raises(ValueError):
        SvgDiagramRenderer().render(title="", charts=[a_major, eb_major])


def test_html_sheet_has_one_card_per_chord(a_major: ChordChart, eb_major: ChordChart) -> None:
    html = HtmlSheetRenderer().render(title="My Chords", charts=[a_major, eb_major])
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>My Chords</title>" in html
    assert "<h1>My Chords</h1>" in html
    assert html.count('<div class="chord">') == 2
    assert "@media print" in html


def test_html_sheet_empty_title_no_h1() -> None:
    html = HtmlSheetRenderer().build_html("", ["<svg></svg>"])
    assert "<h1>" not in html


def test_html_sheet_escapes_title() -> None:
    html = HtmlSheetRenderer().build_html("Fur & Feathers", ["<svg></svg>"])
    assert "Fur &amp; Feathers" in html


def test_default_extensions() -> None:
    assert SvgDiagramRenderer().default_extension == ".svg"
    assert HtmlSheetRenderer().default_extension == ".html"


def test_svg_string_names_follow_the_chart_tuning() -> None:
    record = parse_chord_record(["D", "5", "1", "1,x,x,x,x,x", "D"])
    chart = build_chart(record, resolver=FretResolver(tuning=("D", "A", "D", "G", "B", "E")))
    svg = SvgDiagramRenderer().render_chart(chart)
    assert svg.count(">D</text>") == 2
    assert svg.count(">E</text>") == 1
