"""FretResolver: turns a chord record's note names into absolute fret numbers."""

import logging
from collections.abc import Sequence

from fretchord.chord_models import (
    MUTED,
    OPEN,
    STANDARD_TUNING,
    STRING_COUNT,
    AbsoluteFretAssignment,
    ChordRecord,
    Finger,
    Fretted,
    Position,
)
from fretchord.pitch import SEMITONES_PER_OCTAVE, UnknownPitchSpelling, fret_distance, pitch_class

logger = logging.getLogger(__name__)


class InvalidChordShape(ValueError):
    """Raised when a record's markers and note names do not line up."""


class FretResolver:
    """
    Assigns every string of a chord record a muted, open or fretted position.

    Algorithm overview
    ------------------
    1. **Raw assignment** – Walk the six markers in string order with a note
       cursor that advances exactly once per non-muted string. Open strings
       consume a note name without using it (their pitch is fixed by the
       tuning). Fingered strings get the chromatic distance from the open
       string to their note, which is 0-11.

    2. **Octave adjustment** – The distance is ambiguous by an octave. Take
       the highest raw fret of the chord once; every fingered string more than
       :attr:`OCTAVE_SPREAD` frets below it is moved up twelve frets. The
       maximum is not recomputed after a string moves.

    Unknown note spellings do not stop the resolution: the string is given a
    distance of 0, a warning is logged and a diagnostic is attached to the
    result.
    """

    OCTAVE_SPREAD = 6  # frets below the highest note before assuming the next octave

    def __init__(self, tuning: Sequence[str] = STANDARD_TUNING) -> None:
        """
        Args:
            tuning: Six open-string note names, lowest string first.

        Raises:
            ValueError: If the tuning does not have six recognised notes.
        """
        if len(tuning) != STRING_COUNT:
            raise ValueError(f"Tuning must name {STRING_COUNT} strings, got {len(tuning)}.")
        self.tuning = tuple(tuning)
        self._open_pitch_classes = [pitch_class(note) for note in self.tuning]

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _check_shape(self, record: ChordRecord) -> None:
        if len(record.markers) != STRING_COUNT:
            raise InvalidChordShape(
                f"{record.display_name}: expected {STRING_COUNT} finger positions, "
                f"got {len(record.markers)}."
            )
        expected = record.sounded_string_count
        if len(record.note_names) != expected:
            raise InvalidChordShape(
                f"{record.display_name}: expected {expected} note names for the "
                f"sounded strings, got {len(record.note_names)}."
            )

    def _raw_fret(self, string_index: int, note: str, diagnostics: list[str]) -> int:
        try:
            target = pitch_class(note)
        except UnknownPitchSpelling as exc:
            message = f"string {STRING_COUNT - string_index}: {exc}; using fret 0"
            logger.warning(message)
            diagnostics.append(message)
            return 0
        return fret_distance(self._open_pitch_classes[string_index], target)

    def _raw_positions(
        self, record: ChordRecord, diagnostics: list[str]
    ) -> list[Position]:
        positions: list[Position] = []
        cursor = 0  # index into note_names; advances once per non-muted string

        for string_index, marker in enumerate(record.markers):
            if marker == MUTED:
                positions.append(MUTED)
                continue

            note = record.note_names[cursor]
            cursor += 1

            if marker == OPEN:
                positions.append(OPEN)
            else:
                positions.append(Fretted(self._raw_fret(string_index, note, diagnostics)))

        return positions

    def _adjust_octaves(
        self, record: ChordRecord, positions: list[Position]
    ) -> list[Position]:
        sounded = [p.fret if isinstance(p, Fretted) else 0 for p in positions if p != MUTED]
        if not sounded:
            return positions

        threshold = max(sounded) - self.OCTAVE_SPREAD
        adjusted: list[Position] = []
        for marker, position in zip(record.markers, positions):
            if isinstance(marker, Finger) and isinstance(position, Fretted) and position.fret < threshold:
                adjusted.append(Fretted(position.fret + SEMITONES_PER_OCTAVE))
            else:
                adjusted.append(position)
        return adjusted

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, record: ChordRecord) -> AbsoluteFretAssignment:
        """
        Resolve a chord record into absolute fret positions.

        Args:
            record: Chord record with six markers and one note per sounded string.

        Returns:
            AbsoluteFretAssignment with six positions, lowest string first.

        Raises:
            InvalidChordShape: If the marker or note-name counts are wrong.
        """
        self._check_shape(record)

        diagnostics: list[str] = []
        raw = self._raw_positions(record, diagnostics)
        positions = self._adjust_octaves(record, raw)

        logger.debug(
            "%s: raw %s -> absolute %s",
            record.display_name,
            [p.label for p in raw],
            [p.label for p in positions],
        )
        return AbsoluteFretAssignment(
            positions=tuple(positions),
            diagnostics=tuple(diagnostics),
            tuning=self.tuning,
        )


def resolve_absolute_frets(record: ChordRecord) -> AbsoluteFretAssignment:
    """Resolve *record* in standard tuning."""
    return FretResolver().resolve(record)
