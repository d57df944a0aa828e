from __future__ import annotations

"""Degree chords: the chord built on every degree of a key.

Chords are stacked from scale thirds (degrees i, i+2, i+4[, i+6]) and tagged
from the intervals above their root.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Tuple

from ..errors import ConfigurationError
from .keys import key_name, spell_scale
from .note_utils import ToneLike, interval, parse_tone
from .scales import Mode, get_mode


CHORD_SIZES = (3, 4)

# Semitones above the chord root (root excluded) -> display tag
CHORD_TAGS: Dict[Tuple[int, ...], str] = {
    (4, 7): "",
    (3, 7): "m",
    (3, 6): "dim",
    (4, 8): "aug",
    (2, 7): "sus2",
    (5, 7): "sus4",
    (4, 7, 11): "maj7",
    (4, 7, 10): "7",
    (3, 7, 10): "m7",
    (3, 7, 11): "mMaj7",
    (3, 6, 10): "m7b5",
    (3, 6, 9): "dim7",
    (4, 8, 11): "augMaj7",
    (4, 8, 10): "aug7",
    (2, 7, 10): "7sus2",
    (5, 7, 10): "7sus4",
}

_INTERVAL_LABELS = ["1", "b2", "2", "b3", "3", "4", "b5", "5", "#5", "6", "b7", "7"]
_ROMAN = ["I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X", "XI", "XII"]


def chord_tag(tones: Tuple[int, ...]) -> str:
    """Display tag for a chord given its member tones, root first."""
    ivs = tuple(interval(tones[0], t) for t in tones[1:])
    tag = CHORD_TAGS.get(ivs)
    if tag is not None:
        return tag
    # no conventional name: spell the formula, e.g. "(1,4,b7)"
    return "(" + ",".join(["1"] + [_INTERVAL_LABELS[iv] for iv in ivs]) + ")"


@dataclass(frozen=True)
class DegreeChord:
    """A diatonic chord built on one scale degree."""

    degree: int                  # 1..N
    root: int                    # pitch class of the chord root
    tones: Tuple[int, ...]       # member pitch classes, root first
    names: Tuple[str, ...]       # spelled member names, parallel to tones
    tag: str                     # "", "m", "dim", "maj7", "m7" ...
    inversion: bool = False
    bass_index: int = 0          # index into tones of the bass member

    @property
    def root_name(self) -> str:
        return self.names[0]

    @property
    def bass(self) -> int:
        return self.tones[self.bass_index]

    @property
    def bass_name(self) -> str:
        return self.names[self.bass_index]

    @property
    def name(self) -> str:
        base = f"{self.root_name}{self.tag}"
        if self.inversion:
            return f"{base}/{self.bass_name}"
        return base

    @property
    def symbol(self) -> str:
        """Roman numeral symbol, e.g. 'I', 'ii', 'vii°', 'V7', 'iiø7'."""
        numeral = _ROMAN[(self.degree - 1) % len(_ROMAN)]
        third = interval(self.root, self.tones[1])
        if third != 4:
            numeral = numeral.lower()
        if self.tag == "dim":
            return numeral + "°"
        if self.tag == "dim7":
            return numeral + "°7"
        if self.tag == "m7b5":
            return numeral + "ø7"
        if self.tag == "aug":
            return numeral + "+"
        if self.tag in ("", "m"):
            return numeral
        if self.tag.startswith("m") and self.tag != "maj7":
            return numeral + self.tag[1:]
        return numeral + self.tag

    def with_bass(self, index: int) -> "DegreeChord":
        """Return this chord voiced over member `index` (a slash chord)."""
        idx = int(index) % len(self.tones)
        return replace(self, inversion=idx != 0, bass_index=idx)

    def __contains__(self, tone: object) -> bool:
        if isinstance(tone, (int, str)):
            return parse_tone(tone) in self.tones
        return False

    def __str__(self) -> str:
        return self.name


def _conventional_bass_index(tag: str) -> int:
    # diminished-fifth chords are conventionally voiced over their third
    if tag in ("dim", "m7b5", "dim7"):
        return 1
    return 0


def derive_degree_chords(
    root: ToneLike,
    mode: "str | Mode" = "major",
    chord_size: int = 3,
    inversion: bool = False,
) -> Tuple[DegreeChord, ...]:
    """Build one DegreeChord per degree of `mode` rooted at `root`.

    Args:
        root: Key root (pitch class or name such as "Eb").
        mode: Mode name or Mode.
        chord_size: 3 for triads, 4 for seventh chords.
        inversion: Mark chords whose conventional voicing puts a non-root
            member in the bass.

    Raises:
        ConfigurationError: Mode with fewer than 3 degrees or unsupported
            chord size.
    """
    m = get_mode(mode)
    n = m.degree_count
    if n < 3:
        raise ConfigurationError(f"Mode '{m.name}' has {n} degrees; at least 3 are needed to build chords")
    if chord_size not in CHORD_SIZES:
        raise ConfigurationError(f"Unsupported chord size: {chord_size} (expected one of {CHORD_SIZES})")

    key = key_name(root, m)
    pcs = m.pitch_classes(parse_tone(key))
    names = spell_scale(key, m)

    chords: List[DegreeChord] = []
    for i in range(n):
        members = [(i + 2 * k) % n for k in range(chord_size)]
        tones = tuple(pcs[d] for d in members)
        tag = chord_tag(tones)
        bass_index = _conventional_bass_index(tag) if inversion else 0
        chords.append(
            DegreeChord(
                degree=i + 1,
                root=tones[0],
                tones=tones,
                names=tuple(names[d] for d in members),
                tag=tag,
                inversion=bass_index != 0,
                bass_index=bass_index,
            )
        )
    return tuple(chords)
