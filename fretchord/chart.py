"""ChordChart: a chord record paired with its resolved and windowed positions."""

from __future__ import annotations

from dataclasses import dataclass

from fretchord.chord_models import (
    AbsoluteFretAssignment,
    ChordRecord,
    Marker,
    NormalizedDiagram,
)
from fretchord.display_window import DisplayWindow
from fretchord.fret_resolver import FretResolver


@dataclass(frozen=True)
class ChordChart:
    """
    Everything a renderer needs to draw one chord.

    Attributes:
        record:   The source chord record.
        absolute: Positions on the neck, before window shifting.
        diagram:  Positions inside the diagram window plus the base fret.
    """

    record: ChordRecord
    absolute: AbsoluteFretAssignment
    diagram: NormalizedDiagram

    @property
    def markers(self) -> tuple[Marker, ...]:
        """Original finger markers, used to label dots after window shifting."""
        return self.record.markers

    @property
    def diagnostics(self) -> tuple[str, ...]:
        return self.absolute.diagnostics


def build_chart(
    record: ChordRecord,
    resolver: FretResolver | None = None,
    window: DisplayWindow | None = None,
) -> ChordChart:
    """
    Resolve *record* and fit it into the diagram window.

    Raises:
        InvalidChordShape: If the record's markers and note names do not line up.
    """
    resolver = resolver or FretResolver()
    window = window or DisplayWindow()

    absolute = resolver.resolve(record)
    return ChordChart(record=record, absolute=absolute, diagram=window.normalize(absolute))
