"""Data models for chord records and their resolved fretboard positions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

STRING_COUNT = 6
DISPLAY_WINDOW_FRETS = 5

#: Open-string notes, string 6 (low E) first.
STANDARD_TUNING: tuple[str, ...] = ("E", "A", "D", "G", "B", "E")


# ── String states ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Muted:
    """A string that is not sounded."""

    @property
    def label(self) -> str:
        return "x"


@dataclass(frozen=True)
class Open:
    """A string played without fretting."""

    @property
    def label(self) -> str:
        return "0"


@dataclass(frozen=True)
class Finger:
    """A fretting-hand finger marker (1 = index … 4 = pinky)."""

    digit: int

    def __post_init__(self) -> None:
        if not 1 <= self.digit <= 4:
            raise ValueError(f"Finger digit must be 1-4, got {self.digit}.")

    @property
    def label(self) -> str:
        return str(self.digit)


@dataclass(frozen=True)
class Fretted:
    """A string stopped at a concrete fret number."""

    fret: int

    def __post_init__(self) -> None:
        if self.fret < 0:
            raise ValueError(f"Fret must be non-negative, got {self.fret}.")

    @property
    def label(self) -> str:
        return str(self.fret)


MUTED = Muted()
OPEN = Open()

#: What the chord table says to do with a string.
Marker = Union[Muted, Open, Finger]

#: Where a string ends up on the fretboard.
Position = Union[Muted, Open, Fretted]


# ── Records ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ChordRecord:
    """
    One row of the chord table.

    Attributes:
        root:       Root note as written in the table, e.g. "Bb".
        chord_type: Chord quality suffix, e.g. "maj" or "7".
        structure:  Interval labels, e.g. ("1", "3", "5").
        markers:    One marker per string, lowest string (6) first.
        note_names: One note token per non-muted string, in string order.
    """

    root: str
    chord_type: str
    structure: tuple[str, ...]
    markers: tuple[Marker, ...]
    note_names: tuple[str, ...] = field(default_factory=tuple)

    @property
    def display_name(self) -> str:
        return f"{self.root}{self.chord_type}"

    @property
    def sounded_string_count(self) -> int:
        return sum(1 for marker in self.markers if marker != MUTED)

    def is_valid(self) -> bool:
        """True when the record has six markers and one note per sounded string."""
        return (
            len(self.markers) == STRING_COUNT
            and len(self.note_names) == self.sounded_string_count
            and len(self.structure) > 0
        )

    def describe(self) -> str:
        markers = ", ".join(marker.label for marker in self.markers)
        return f"{self.display_name} chord with finger positions: {markers}"


@dataclass(frozen=True)
class AbsoluteFretAssignment:
    """
    Per-string fretboard positions before display-window shifting.

    Attributes:
        positions:   Six positions, lowest string first. Fretted values may
                     exceed 12 after octave adjustment.
        diagnostics: Messages about note names that could not be understood.
        tuning:      Open-string notes the positions were resolved against.
    """

    positions: tuple[Position, ...]
    diagnostics: tuple[str, ...] = ()
    tuning: tuple[str, ...] = STANDARD_TUNING

    @property
    def labels(self) -> list[str]:
        return [position.label for position in self.positions]


@dataclass(frozen=True)
class NormalizedDiagram:
    """
    Positions shifted into the diagram's fret window.

    Attributes:
        positions: Six positions, lowest string first.
        base_fret: How many frets the window was shifted up the neck.
        window:    Number of fret rows the diagram shows.
    """

    positions: tuple[Position, ...]
    base_fret: int = 0
    window: int = DISPLAY_WINDOW_FRETS

    @property
    def labels(self) -> list[str]:
        return [position.label for position in self.positions]

    @property
    def fret_label(self) -> str | None:
        """One-indexed starting fret shown beside the diagram, if any."""
        if self.base_fret > 0:
            return str(self.base_fret + 1)
        return None

    @property
    def overflow(self) -> bool:
        """True when a fretted string falls below the bottom of the window."""
        return any(
            isinstance(position, Fretted) and position.fret > self.window
            for position in self.positions
        )
