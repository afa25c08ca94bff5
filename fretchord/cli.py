"""fretchord CLI entry point."""

import logging
import random
import re
import sys
from pathlib import Path
from typing import NoReturn

import click

from fretchord import __version__
from fretchord.chart import ChordChart, build_chart
from fretchord.chord_models import ChordRecord
from fretchord.chord_table import ChordTableError, find_chords, load_chord_table, select_random_chord
from fretchord.diagram_renderers import (
    DiagramLayout,
    DiagramRenderer,
    HtmlSheetRenderer,
    SvgDiagramRenderer,
)
from fretchord.midi_exporter import MidiExporter

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _init_logging(verbose: bool) -> None:
    if logging.getLogger().handlers:
        return
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _fail(message: str) -> NoReturn:
    click.echo(f"  ERROR: {message}", err=True)
    sys.exit(1)


def _load(csv_file: str) -> list[ChordRecord]:
    try:
        return load_chord_table(csv_file)
    except ChordTableError as exc:
        _fail(str(exc))


def _pick(records: list[ChordRecord], names: tuple[str, ...]) -> list[ChordRecord]:
    """Return the first record for each requested name, in order."""
    picked: list[ChordRecord] = []
    for name in names:
        matches = find_chords(records, name)
        if not matches:
            _fail(f"No chord named '{name}' in the table.")
        picked.append(matches[0])
    return picked


def _chord_to_filename(name: str, extension: str) -> str:
    """Convert a chord name to a safe output filename.

    Strips characters that are invalid in filenames (the slash in "C6/9" or
    "D/F#" included) and collapses whitespace to underscores.
    """
    sanitized = re.sub(r"[^\w\s-]", "", name)
    sanitized = re.sub(r"\s+", "_", sanitized.strip())
    return f"{sanitized or 'chord'}{extension}"


def _summary(chart: ChordChart) -> str:
    absolute = ",".join(chart.absolute.labels)
    shown = ",".join(chart.diagram.labels)
    fret = f"  from fret {chart.diagram.fret_label}" if chart.diagram.fret_label else ""
    return f"{chart.record.display_name:<10} [{absolute}] -> [{shown}]{fret}"


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="fretchord")
@click.option("--verbose", "-v", is_flag=True, help="Log resolver details to stderr.")
def main(verbose: bool) -> None:
    """fretchord — guitar chord diagrams from a chord table."""
    _init_logging(verbose)


# ── list subcommand ────────────────────────────────────────────────────────────

@main.command("list")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, readable=True))
def list_chords(csv_file: str) -> None:
    """
    Print every chord in CSV_FILE with its absolute and diagram frets.
    """
    for record in _load(csv_file):
        click.echo(_summary(build_chart(record)))


# ── show subcommand ────────────────────────────────────────────────────────────

@main.command()
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option("--chord", "-c", "chord_name", default=None, metavar="NAME", help="Chord to show, e.g. Bb7.")
@click.option("--seed", type=int, default=None, help="Random seed when no chord is named.")
def show(csv_file: str, chord_name: str | None, seed: int | None) -> None:
    """
    Show how one chord resolves onto the fretboard.

    Picks a random chord unless --chord is given.

    \b
    Examples:
      fretchord show chord-fingers.csv --chord Cmaj
      fretchord show chord-fingers.csv --seed 7
    """
    records = _load(csv_file)
    if chord_name is not None:
        record = _pick(records, (chord_name,))[0]
    else:
        selected = select_random_chord(records, random.Random(seed))
        if selected is None:
            _fail("Failed to select a random chord.")
        record = selected

    chart = build_chart(record)
    click.echo(record.describe())
    click.echo(f"  Structure : {', '.join(record.structure)}")
    click.echo(f"  Notes     : {', '.join(record.note_names)}")
    click.echo(f"  Absolute  : {', '.join(chart.absolute.labels)}")
    click.echo(f"  Diagram   : {', '.join(chart.diagram.labels)}")
    if chart.diagram.fret_label:
        click.echo(f"  Base fret : {chart.diagram.fret_label}")
    for message in chart.diagnostics:
        click.echo(f"  WARNING: {message}", err=True)
    if chart.diagram.overflow:
        click.echo("  WARNING: voicing does not fit the diagram window.", err=True)


# ── render subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    "--chord",
    "-c",
    "chord_names",
    multiple=True,
    metavar="NAME",
    help="Chord to draw; repeat for several. Defaults to every chord in the table.",
)
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination file. A single chord defaults to <name>.svg, several to chords.html.",
)
@click.option(
    "--width",
    type=click.IntRange(100, 2000),
    default=600,
    show_default=True,
    help="Viewport width in pixels used to size each diagram.",
)
@click.option("--title", default="Chord Sheet", show_default=True, metavar="TEXT", help="HTML page title.")
def render(
    csv_file: str,
    chord_names: tuple[str, ...],
    output: str | None,
    width: int,
    title: str,
) -> None:
    """
    Draw chord diagrams from CSV_FILE as SVG or HTML.

    \b
    Examples:
      fretchord render chord-fingers.csv --chord Cmaj
      fretchord render chord-fingers.csv -c Amaj -c Dmaj -o sheet.html
    """
    records = _load(csv_file)
    selected = _pick(records, chord_names) if chord_names else records
    charts = [build_chart(record) for record in selected]

    svg_renderer = SvgDiagramRenderer(DiagramLayout.for_viewport(width))
    renderer: DiagramRenderer
    if output is not None:
        suffix = Path(output).suffix.lower()
        renderer = svg_renderer if suffix == ".svg" else HtmlSheetRenderer(svg_renderer)
    else:
        renderer = svg_renderer if len(charts) == 1 else HtmlSheetRenderer(svg_renderer)
        stem = charts[0].record.display_name if len(charts) == 1 else "chords"
        output = _chord_to_filename(stem, renderer.default_extension)

    click.echo(f"fretchord v{__version__}")
    click.echo(f"  Chords : {len(charts)}")
    click.echo(f"  Output : {output}")

    try:
        content = renderer.render(title=title, charts=charts)
        Path(output).write_text(content, encoding="utf-8")
    except ValueError as exc:
        _fail(f"Could not render diagrams — {exc}")
    except OSError as exc:
        _fail(f"Could not write output file — {exc}")

    click.echo(f"Done!  Open '{output}' in any browser.")


# ── midi subcommand ────────────────────────────────────────────────────────────

@main.command()
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option("--chord", "-c", "chord_names", multiple=True, required=True, metavar="NAME",
              help="Chord to play; repeat to build a progression.")
@click.option("--output", "-o", default="chords.mid", show_default=True, metavar="PATH",
              help="Destination MIDI file path.")
@click.option("--tempo", type=click.IntRange(20, 300), default=80, show_default=True,
              help="Playback tempo in BPM.")
def midi(csv_file: str, chord_names: tuple[str, ...], output: str, tempo: int) -> None:
    """
    Strum a chord progression from CSV_FILE into a MIDI file, one chord per bar.

    \b
    Examples:
      fretchord midi chord-fingers.csv -c Cmaj -c Amin -c Fmaj -c Gmaj
    """
    records = _load(csv_file)
    charts = [build_chart(record) for record in _pick(records, chord_names)]

    click.echo(f"Writing {len(charts)} chord(s) → '{output}'...")
    try:
        MidiExporter(tempo=tempo).export(charts, output)
    except OSError as exc:
        _fail(f"Could not write MIDI file — {exc}")

    click.echo(f"Done!  Open '{output}' in GarageBand, MuseScore, or any MIDI player.")
