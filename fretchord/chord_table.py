"""ChordTable: loads chord records from the semicolon-delimited chord dataset."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from pathlib import Path

from fretchord.chord_models import MUTED, OPEN, ChordRecord, Finger, Marker

logger = logging.getLogger(__name__)

FIELD_COUNT = 5  # CHORD_ROOT;CHORD_TYPE;CHORD_STRUCTURE;FINGER_POSITIONS;NOTE_NAMES


class ChordTableError(ValueError):
    """Raised when a chord table cannot be read or holds no usable chords."""


def parse_csv_line(line: str) -> list[str]:
    """
    Split one dataset line on semicolons that are not inside double quotes.

    Quote characters are kept in the returned fields; each field is stripped.

        >>> parse_csv_line('A#;maj;"1;3;5";x,1,3,3,3,x;A#,E#,A#,C##')
        ['A#', 'maj', '"1;3;5"', 'x,1,3,3,3,x', 'A#,E#,A#,C##']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char == ";" and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def parse_marker(token: str) -> Marker:
    """Parse a finger-position token: ``x`` muted, ``0`` open, ``1``-``4`` finger."""
    value = token.strip().lower()
    if value == "x":
        return MUTED
    if value == "0":
        return OPEN
    if value.isdigit():
        return Finger(int(value))
    raise ValueError(f"Unknown finger position {token!r}.")


def _split_list(value: str, separator: str) -> tuple[str, ...]:
    if not value.strip():
        return ()
    return tuple(item.strip() for item in value.split(separator))


def parse_chord_record(fields: Sequence[str]) -> ChordRecord:
    """
    Build a ChordRecord from the five fields of one dataset line.

    Raises:
        ValueError: If there are too few fields or a finger position is unknown.
    """
    if len(fields) < FIELD_COUNT:
        raise ValueError(f"Expected {FIELD_COUNT} fields, got {len(fields)}.")

    root, chord_type, structure, finger_positions, note_names = fields[:FIELD_COUNT]
    return ChordRecord(
        root=root,
        chord_type=chord_type,
        structure=_split_list(structure.replace('"', ""), ";"),
        markers=tuple(parse_marker(token) for token in finger_positions.split(",")),
        note_names=_split_list(note_names, ","),
    )


def parse_chord_table(text: str) -> list[ChordRecord]:
    """
    Parse the full dataset text, skipping the header row.

    Lines that cannot be parsed or that describe an impossible shape are
    skipped with a warning.
    """
    records: list[ChordRecord] = []
    lines = text.strip().splitlines()

    for line_no, raw_line in enumerate(lines[1:], start=2):
        line = raw_line.strip()
        if not line:
            continue

        try:
            record = parse_chord_record(parse_csv_line(line))
        except ValueError as exc:
            logger.warning("Skipping line %d (%s): %s", line_no, exc, line)
            continue

        if not record.is_valid():
            logger.warning("Invalid chord data at line %d: %s", line_no, line)
            continue
        records.append(record)

    logger.info("Parsed %d chords from dataset", len(records))
    return records


def load_chord_table(path: str | Path) -> list[ChordRecord]:
    """
    Read and parse a chord dataset file.

    Raises:
        ChordTableError: If the file cannot be read or contains no valid chords.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ChordTableError(f"Could not read chord table '{path}': {exc}") from exc

    records = parse_chord_table(text)
    if not records:
        raise ChordTableError(f"No valid chords found in '{path}'.")
    return records


def select_random_chord(
    records: Sequence[ChordRecord], rng: random.Random | None = None
) -> ChordRecord | None:
    """Pick one record at random, or return None for an empty table."""
    if not records:
        logger.error("No chords available in dataset")
        return None

    chooser = rng if rng is not None else random.Random()
    record = chooser.choice(list(records))
    logger.debug("Selected chord: %s", record.display_name)
    return record


def find_chords(records: Sequence[ChordRecord], name: str) -> list[ChordRecord]:
    """Return every record whose display name matches *name* (case-insensitive)."""
    wanted = name.strip().lower()
    return [record for record in records if record.display_name.lower() == wanted]
