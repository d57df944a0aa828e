from __future__ import annotations

"""Key-aware note spelling.

Chooses between sharp and flat names so that a key's own tones get distinct,
increasing letter names (F# major spells E#, A harmonic minor spells G#) and
passing tones follow the key's accidental direction.
"""

from typing import Dict, List

from ..errors import ConfigurationError
from .note_utils import (
    LETTERS,
    LETTER_TO_PC,
    PITCH_CLASS_NAMES_FLAT,
    PITCH_CLASS_NAMES_SHARP,
    ToneLike,
    parse_tone,
    transpose,
)
from .scales import Mode, get_mode


# Conventional root names when a key is given as a bare pitch class.
MAJOR_KEY_NAMES = ["C", "Db", "D", "Eb", "E", "F", "F#", "G", "Ab", "A", "Bb", "B"]
MINOR_KEY_NAMES = ["C", "C#", "D", "Eb", "E", "F", "F#", "G", "G#", "A", "Bb", "B"]

# Semitones above the tonic -> letter steps above the tonic letter, used for
# scales that are not seven-note (pentatonic, blues).
_INTERVAL_LETTER_STEPS: Dict[int, int] = {
    0: 0, 1: 1, 2: 1, 3: 2, 4: 2, 5: 3, 6: 4, 7: 4, 8: 5, 9: 5, 10: 6, 11: 6,
}


def _accidental(shift: int) -> str:
    return "#" * shift if shift > 0 else "b" * (-shift)


def _letter_name(letter: str, pc: int) -> str | None:
    shift = (pc - LETTER_TO_PC[letter]) % 12
    if shift > 6:
        shift -= 12
    if abs(shift) > 2:
        return None
    return letter + _accidental(shift)


def is_minor_mode(mode: "str | Mode") -> bool:
    """True when the mode's third degree sits a minor third above the tonic."""
    m = get_mode(mode)
    return 3 in m.intervals and 4 not in m.intervals


def default_key_name(tone: int, mode: "str | Mode" = "major") -> str:
    table = MINOR_KEY_NAMES if is_minor_mode(mode) else MAJOR_KEY_NAMES
    return table[tone % 12]


def key_name(key: ToneLike, mode: "str | Mode" = "major") -> str:
    """Normalize a key root to a display name ("c#" -> "C#", 1 -> "Db")."""
    if isinstance(key, str):
        pc = parse_tone(key)
        name = key.strip()
        name = name[0].upper() + name[1:]
        if _letter_name(name[0], pc) != name:
            raise ConfigurationError(f"Invalid key root: {key}")
        return name
    return default_key_name(parse_tone(key), mode)


def spell_scale(key: ToneLike, mode: "str | Mode" = "major") -> List[str]:
    """Return the name of every degree of `mode` rooted at `key`.

    Seven-note modes get consecutive letters; other sizes map each interval to
    its conventional degree letter (b3, 4, b5, 5, b7 ...).
    """
    m = get_mode(mode)
    root = key_name(key, m)
    root_pc = parse_tone(root)
    letter_idx = LETTERS.index(root[0])
    names: List[str] = []
    for i, iv in enumerate(m.intervals):
        steps = i if m.degree_count == 7 else _INTERVAL_LETTER_STEPS[iv]
        letter = LETTERS[(letter_idx + steps) % 7]
        pc = (root_pc + iv) % 12
        name = _letter_name(letter, pc)
        if name is None:
            name = PITCH_CLASS_NAMES_SHARP[pc]
        names.append(name)
    return names


def key_accidental(key: ToneLike, mode: "str | Mode" = "major") -> str:
    """Return "b" for flat keys and "#" for sharp (or natural) keys."""
    root = key_name(key, mode)
    if len(root) > 1:
        return "b" if root[1] == "b" else "#"
    names = spell_scale(root, mode)
    flats = sum(n.count("b") for n in names[1:])
    sharps = sum(n.count("#") for n in names[1:])
    return "b" if flats > sharps else "#"


def chromatic_name(tone: ToneLike, accidental: str = "#") -> str:
    pc = parse_tone(tone)
    return (PITCH_CLASS_NAMES_FLAT if accidental == "b" else PITCH_CLASS_NAMES_SHARP)[pc]


def spell(tone: ToneLike, key: ToneLike, mode: "str | Mode" = "major") -> str:
    """Display name of `tone` in the context of `key`/`mode`."""
    pc = parse_tone(tone)
    m = get_mode(mode)
    for scale_pc, name in zip(m.pitch_classes(parse_tone(key)), spell_scale(key, m)):
        if scale_pc == pc:
            return name
    return chromatic_name(pc, key_accidental(key, m))


def transpose_name(name: str, semitones: int) -> str:
    """Transpose a root name, keeping its flat/sharp direction."""
    accidental = "b" if "b" in name[1:] else "#"
    return chromatic_name(transpose(name, semitones), accidental)
