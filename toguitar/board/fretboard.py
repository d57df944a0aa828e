from __future__ import annotations

"""Fretboard builder: tuning + fret count + spelling -> grid of Points.

grid[s][0] is the open note of string s (string 0 is the lowest string) and
grid[s][f] is that note f semitones higher.
"""

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence, Union

from ..errors import ConfigurationError
from ..theory.chromatic import ChromaticSpelling
from ..theory.note_utils import Note, ToneLike, parse_note, parse_tone, transpose_note
from ..theory.scales import Mode, get_mode


TuningEntry = Union[Note, str, int]


@dataclass
class Point:
    """One fretboard position. Only `status` is meant to change after build."""

    string: int
    grade: int
    tone: int
    note: Note
    name: str
    in_key: bool
    degree: Optional[int] = None
    status: Any = None

    @property
    def midi(self) -> int:
        return self.note.midi

    @property
    def label(self) -> str:
        return f"{self.name}{self.note.level}"


class Fretboard:
    """Rows of Points by string, each row ordered by fret."""

    def __init__(self, rows: List[List[Point]]) -> None:
        self.rows = rows

    def __getitem__(self, string: int) -> List[Point]:
        return self.rows[string]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[List[Point]]:
        return iter(self.rows)

    @property
    def string_count(self) -> int:
        return len(self.rows)

    @property
    def fret_count(self) -> int:
        return len(self.rows[0]) - 1 if self.rows else 0

    def get(self, string: int, grade: int) -> Optional[Point]:
        if 0 <= string < len(self.rows) and 0 <= grade < len(self.rows[string]):
            return self.rows[string][grade]
        return None

    def points(self) -> Iterator[Point]:
        for row in self.rows:
            yield from row


def _is_bare_tone(entry: TuningEntry) -> bool:
    if isinstance(entry, int):
        return True
    return isinstance(entry, str) and not any(c.isdigit() for c in entry)


def resolve_tuning(tuning: Sequence[TuningEntry], base_level: int = 2) -> List[Note]:
    """Return the open note of every string.

    Entries with a register ("E2", Note) are used as-is. Bare tones ("E", 4)
    are stacked upward from `base_level`, each at the lowest register above
    the previous string.
    """
    if not tuning:
        raise ConfigurationError("Tuning needs at least one string")
    notes: List[Note] = []
    for entry in tuning:
        if not _is_bare_tone(entry):
            notes.append(parse_note(entry))  # type: ignore[arg-type]
            continue
        note = Note(tone=parse_tone(entry), level=int(base_level))  # type: ignore[arg-type]
        if notes:
            while note.midi <= notes[-1].midi:
                note = Note(tone=note.tone, level=note.level + 1)
        notes.append(note)
    return notes


def build_fretboard(
    tuning: Sequence[TuningEntry],
    fret_count: int,
    spelling: ChromaticSpelling,
    base_level: int = 2,
    mode: "str | Mode | None" = None,
    root: ToneLike | None = None,
) -> Fretboard:
    """Map every (string, fret) position to a Point.

    Args:
        tuning: Open strings, lowest first.
        fret_count: Highest fret; each string gets fret_count + 1 Points.
        spelling: Names and key membership for the twelve tones.
        base_level: Register for bare-tone tuning entries.
        mode: When given, Points carry their scale degree.
        root: Key root for degree lookup (defaults to the spelling's root).
    """
    if fret_count < 0:
        raise ConfigurationError(f"fret_count must be >= 0, got {fret_count}")
    open_notes = resolve_tuning(tuning, base_level)

    degrees = {}
    if mode is not None:
        m = get_mode(mode)
        key_root = spelling.root if root is None else parse_tone(root)
        degrees = {pc: i + 1 for i, pc in enumerate(m.pitch_classes(key_root))}

    rows: List[List[Point]] = []
    for s, open_note in enumerate(open_notes):
        row: List[Point] = []
        for f in range(fret_count + 1):
            note = transpose_note(open_note, f)
            row.append(
                Point(
                    string=s,
                    grade=f,
                    tone=note.tone,
                    note=note,
                    name=spelling.name_of(note.tone),
                    in_key=spelling.in_key(note.tone),
                    degree=degrees.get(note.tone),
                )
            )
        rows.append(row)
    return Fretboard(rows)
