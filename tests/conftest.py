"""Shared fixtures: a small chord table in the dataset's semicolon format."""

from pathlib import Path

import pytest

CHORD_TABLE = """CHORD_ROOT;CHORD_TYPE;CHORD_STRUCTURE;FINGER_POSITIONS;NOTE_NAMES
C;maj;"1;3;5";x,3,2,0,1,0;C,E,G,C,E
A;maj;"1;3;5";x,0,2,2,2,0;A,E,A,C#,E
D;maj;"1;3;5";x,x,0,2,3,2;D,A,D,F#
Eb;maj;"1;3;5";x,x,x,2,1,1;G,Bb,Eb
Bb;7;"1;3;5;b7";1,3,1,2,4,1;Bb,F,Ab,D,Ab,Bb
"""


@pytest.fixture
def chord_table_text() -> str:
    return CHORD_TABLE


@pytest.fixture
def chord_table_path(tmp_path: Path) -> Path:
    path = tmp_path / "chord-fingers.csv"
    path.write_text(CHORD_TABLE, encoding="utf-8")
    return path
