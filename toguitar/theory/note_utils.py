# toguitar/theory/note_utils.py
from __future__ import annotations

"""Pitch-class arithmetic and absolute notes.

A tone is a pitch class 0..11 with C = 0. A note is a tone plus a register
(scientific octave, C4 = MIDI 60).
"""

from dataclasses import dataclass
from typing import Dict, Union

from ..errors import ConfigurationError

PITCH_CLASS_NAMES_SHARP = ["C","C#","D","D#","E","F","F#","G","G#","A","A#","B"]
PITCH_CLASS_NAMES_FLAT = ["C","Db","D","Eb","E","F","Gb","G","Ab","A","Bb","B"]
NAME_TO_PC: Dict[str, int] = {
    "C":0,"B#":0, "C#":1,"Db":1, "D":2,"D#":3,"Eb":3, "E":4,"Fb":4,
    "F":5,"E#":5, "F#":6,"Gb":6, "G":7,"G#":8,"Ab":8, "A":9,"A#":10,"Bb":10, "B":11,"Cb":11
}

LETTERS = ["C", "D", "E", "F", "G", "A", "B"]
LETTER_TO_PC = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

SEMITONES_PER_OCTAVE = 12

ToneLike = Union[int, str]


def parse_tone(tone: ToneLike) -> int:
    """Return the pitch class of a tone given as int or name ("C#", "Db", "Ebb")."""
    if isinstance(tone, bool):
        raise ConfigurationError(f"Invalid tone: {tone!r}")
    if isinstance(tone, int):
        return tone % SEMITONES_PER_OCTAVE
    if not isinstance(tone, str) or not tone:
        raise ConfigurationError(f"Invalid tone: {tone!r}")
    name = tone.strip()
    if not name:
        raise ConfigurationError(f"Invalid tone: {tone!r}")
    if name in NAME_TO_PC:
        return NAME_TO_PC[name]
    letter = name[0].upper()
    if letter not in LETTER_TO_PC:
        raise ConfigurationError(f"Unsupported note name: {tone}")
    shift = 0
    for acc in name[1:]:
        if acc == "#":
            shift += 1
        elif acc == "b":
            shift -= 1
        else:
            raise ConfigurationError(f"Unsupported note name: {tone}")
    return (LETTER_TO_PC[letter] + shift) % SEMITONES_PER_OCTAVE


def transpose(tone: ToneLike, semitones: int) -> int:
    """Shift a tone by any number of semitones (mod 12)."""
    return (parse_tone(tone) + int(semitones)) % SEMITONES_PER_OCTAVE


def interval(low: ToneLike, high: ToneLike) -> int:
    """Ascending semitone distance from `low` to `high` (0..11)."""
    return (parse_tone(high) - parse_tone(low)) % SEMITONES_PER_OCTAVE


@dataclass(frozen=True)
class Note:
    """A tone at a specific register. Compare pitches through `midi`."""

    tone: int
    level: int

    @property
    def midi(self) -> int:
        return SEMITONES_PER_OCTAVE * (self.level + 1) + self.tone

    @property
    def name(self) -> str:
        return PITCH_CLASS_NAMES_SHARP[self.tone]

    def __str__(self) -> str:
        return f"{self.name}{self.level}"


def transpose_note(note: Note, semitones: int) -> Note:
    """Shift a note, carrying the register across B -> C boundaries."""
    total = note.tone + int(semitones)
    return Note(tone=total % SEMITONES_PER_OCTAVE, level=note.level + total // SEMITONES_PER_OCTAVE)


def note_name_to_midi(name: str, octave: int) -> int:
    """Middle C (C4) -> 60."""
    pc = parse_tone(name)
    return 12 * (octave + 1) + pc  # C4=60


def midi_to_note(midi: int) -> Note:
    return Note(tone=midi % SEMITONES_PER_OCTAVE, level=midi // SEMITONES_PER_OCTAVE - 1)


def parse_note(note: Union[str, Note]) -> Note:
    """Parse a note string like 'E2', 'Db3', 'G#-1' into a Note."""
    if isinstance(note, Note):
        return note
    if not isinstance(note, str) or len(note) < 2:
        raise ConfigurationError(f"Invalid note string: {note!r}")
    idx = 1
    while idx < len(note) and note[idx] in ("#", "b"):
        idx += 1
    try:
        level = int(note[idx:])
    except ValueError as e:
        raise ConfigurationError(f"Invalid octave in note string: {note}") from e
    return Note(tone=parse_tone(note[:idx]), level=level)
