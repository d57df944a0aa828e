from __future__ import annotations

"""Chromatic namer: the twelve note names of a key.

Key tones take the spelling carried by the degree chords; the remaining
(passing) tones follow the key's accidental direction.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from .chords import DegreeChord
from .keys import chromatic_name, key_accidental, key_name
from .note_utils import ToneLike, parse_tone
from .scales import Mode, get_mode


@dataclass(frozen=True)
class ChromaticSpelling:
    """Three parallel 12-length name tables for one key.

    - notes: indexed by semitone offset from the tonic
    - notes_on_c: indexed by pitch class (offset from C)
    - notes_inner_on_c: like notes_on_c, None where the tone is out of key
    """

    root: int
    notes: Tuple[str, ...]
    notes_on_c: Tuple[str, ...]
    notes_inner_on_c: Tuple[Optional[str], ...]

    @property
    def key_tones(self) -> Tuple[int, ...]:
        return tuple(pc for pc, name in enumerate(self.notes_inner_on_c) if name is not None)

    def name_of(self, tone: ToneLike) -> str:
        return self.notes_on_c[parse_tone(tone)]

    def in_key(self, tone: ToneLike) -> bool:
        return self.notes_inner_on_c[parse_tone(tone)] is not None


def get_scale_note_all(
    chords: Iterable[DegreeChord],
    key: ToneLike,
    mode: "str | Mode" = "major",
) -> ChromaticSpelling:
    """Expand the degree chords of a key into its full chromatic spelling."""
    m = get_mode(mode)
    root = parse_tone(key_name(key, m))
    accidental = key_accidental(key, m)

    in_key: Dict[int, str] = {}
    for chord in chords:
        for tone, name in zip(chord.tones, chord.names):
            in_key.setdefault(tone, name)

    notes = []
    on_c = [""] * 12
    inner_on_c: list = [None] * 12
    for offset in range(12):
        pc = (root + offset) % 12
        name = in_key.get(pc)
        if name is None:
            name = chromatic_name(pc, accidental)
        else:
            inner_on_c[pc] = name
        notes.append(name)
        on_c[pc] = name

    return ChromaticSpelling(
        root=root,
        notes=tuple(notes),
        notes_on_c=tuple(on_c),
        notes_inner_on_c=tuple(inner_on_c),
    )
