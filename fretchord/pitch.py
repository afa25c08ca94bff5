"""Pitch-class arithmetic: note spellings, fret distances and MIDI numbers."""

SEMITONES_PER_OCTAVE = 12

# Chromatic pitch class names (index 0 = C)
NOTE_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

_NATURALS: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

_ACCIDENTALS: dict[str, int] = {
    "": 0,
    "#": 1,
    "##": 2,
    "x": 2,
    "b": -1,
    "bb": -2,
}


class UnknownPitchSpelling(ValueError):
    """Raised when a note token is not a recognised pitch spelling."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown pitch spelling: {token!r}")
        self.token = token


def pitch_class(token: str) -> int:
    """
    Map a note-name token to its index in the sharps-only chromatic scale.

    A token is a natural letter followed by up to two sharps or flats, so
    enharmonic spellings land on the same pitch class:

        >>> pitch_class("Bb"), pitch_class("A#")
        (10, 10)
        >>> pitch_class("E#"), pitch_class("C##"), pitch_class("Bbb")
        (5, 2, 9)

    Args:
        token: Note name such as "C", "F#", "Eb", "Cb" or "Bbb".

    Returns:
        Pitch class 0-11 (0=C, 1=C#, ..., 11=B).

    Raises:
        UnknownPitchSpelling: If the token cannot be parsed.
    """
    name = token.strip()
    if not name or name[0] not in _NATURALS:
        raise UnknownPitchSpelling(token)

    offset = _ACCIDENTALS.get(name[1:])
    if offset is None:
        raise UnknownPitchSpelling(token)

    return (_NATURALS[name[0]] + offset) % SEMITONES_PER_OCTAVE


def fret_distance(open_pitch_class: int, target_pitch_class: int) -> int:
    """
    Return the fret (0-11) at which *target* sounds on a string tuned to *open*.

    The result is only known modulo an octave; the fret resolver decides
    whether the note actually sits twelve frets higher.
    """
    for value in (open_pitch_class, target_pitch_class):
        if not 0 <= value < SEMITONES_PER_OCTAVE:
            raise ValueError(f"Pitch class must be 0-11, got {value}.")
    return (target_pitch_class - open_pitch_class + SEMITONES_PER_OCTAVE) % SEMITONES_PER_OCTAVE


def pitch_class_to_midi(pitch_class: int, octave: int) -> int:
    """
    Convert a pitch class (0-11) and an octave number to an absolute MIDI note.

    MIDI octave numbering: C-1 = 0, C0 = 12, C1 = 24, ... C4 (Middle C) = 60.
    """
    return (octave + 1) * SEMITONES_PER_OCTAVE + pitch_class
