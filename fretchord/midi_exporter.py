"""MidiExporter: Writes resolved chord voicings as strummed chords in a MIDI file."""

import logging
from collections.abc import Sequence

from midiutil import MIDIFile

from fretchord.chart import ChordChart
from fretchord.chord_models import MUTED, Fretted
from fretchord.pitch import SEMITONES_PER_OCTAVE, pitch_class, pitch_class_to_midi

logger = logging.getLogger(__name__)

TRACK_GUITAR = 0  # Strummed chords

CHANNEL_GUITAR = 0
PROGRAM_STEEL_GUITAR = 25  # General MIDI "Acoustic Guitar (steel)", zero-based

#: Standard tuning as (pitch class, octave), string 6 (low E) first.
STANDARD_TUNING_OCTAVES: list[tuple[int, int]] = [(4, 2), (9, 2), (2, 3), (7, 3), (11, 3), (4, 4)]

#: E2 A2 D3 G3 B3 E4
OPEN_STRING_MIDI: list[int] = [pitch_class_to_midi(pc, octave) for pc, octave in STANDARD_TUNING_OCTAVES]


def open_string_midi(tuning: Sequence[str]) -> list[int]:
    """
    Return the MIDI note of each open string for *tuning*, lowest string first.

    Each string is placed in the octave nearest its standard-tuning pitch, so
    drop D lowers string 6 to D2 rather than raising it to D3.
    """
    notes: list[int] = []
    for standard, note in zip(OPEN_STRING_MIDI, tuning):
        offset = (pitch_class(note) - standard) % SEMITONES_PER_OCTAVE
        if offset > SEMITONES_PER_OCTAVE // 2:
            offset -= SEMITONES_PER_OCTAVE
        notes.append(standard + offset)
    return notes


def chart_to_midi_notes(chart: ChordChart) -> list[int]:
    """
    Return the sounding MIDI notes of a chart, lowest string first.

    Uses the absolute (not window-shifted) positions; muted strings are skipped.
    """
    notes: list[int] = []
    for open_note, position in zip(
        open_string_midi(chart.absolute.tuning), chart.absolute.positions
    ):
        if position == MUTED:
            continue
        fret = position.fret if isinstance(position, Fretted) else 0
        notes.append(open_note + fret)
    return notes


class MidiExporter:
    """
    Writes one strummed chord per bar into a Format 1 MIDI file.

    Track layout
    ------------
    Conductor — tempo only, added by midiutil

    "Guitar"
        Each chart's strings are struck low to high, :attr:`STRUM_BEATS`
        apart, and ring until the end of the bar.
    """

    DEFAULT_TEMPO = 80     # BPM
    DEFAULT_VELOCITY = 80  # MIDI velocity (0-127)
    BEATS_PER_CHORD = 4.0
    STRUM_BEATS = 0.05

    def __init__(
        self,
        tempo: int = DEFAULT_TEMPO,
        velocity: int = DEFAULT_VELOCITY,
    ) -> None:
        """
        Args:
            tempo:    Playback tempo in beats per minute.
            velocity: MIDI note-on velocity for every string.
        """
        self.tempo = tempo
        self.velocity = velocity

    def build(self, charts: Sequence[ChordChart]) -> MIDIFile:
        """Lay out *charts* one per bar and return the unsaved MIDI file."""
        midi = MIDIFile(numTracks=1, removeDuplicates=False, deinterleave=False)
        midi.addTempo(TRACK_GUITAR, 0, self.tempo)
        midi.addTrackName(TRACK_GUITAR, 0, "Guitar")
        midi.addProgramChange(TRACK_GUITAR, CHANNEL_GUITAR, 0, PROGRAM_STEEL_GUITAR)

        for bar, chart in enumerate(charts):
            start = bar * self.BEATS_PER_CHORD
            notes = chart_to_midi_notes(chart)
            if not notes:
                logger.info("%s: no sounded strings, leaving bar %d silent", chart.record.display_name, bar + 1)
                continue

            for order, pitch in enumerate(notes):
                offset = order * self.STRUM_BEATS
                midi.addNote(
                    track=TRACK_GUITAR,
                    channel=CHANNEL_GUITAR,
                    pitch=pitch,
                    time=start + offset,
                    duration=self.BEATS_PER_CHORD - offset,
                    volume=self.velocity,
                )
        return midi

    def export(self, charts: Sequence[ChordChart], output_path: str) -> None:
        """
        Render charts to a Standard MIDI File.

        Args:
            charts:      Resolved chord charts, in playing order.
            output_path: Destination file path (e.g. "chords.mid").

        Raises:
            OSError: If the output file cannot be opened for writing.
        """
        midi = self.build(charts)
        with open(output_path, "wb") as f:
            midi.writeFile(f)
