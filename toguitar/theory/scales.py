from __future__ import annotations

"""Mode/scale patterns for 12-TET.

Provides step patterns and utilities to map scale degrees to pitch-class
offsets. Every other component only looks at the steps and their count, so a
new mode is a single entry in MODE_PATTERNS.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..errors import ConfigurationError
from .note_utils import ToneLike, parse_tone


MODE_PATTERNS: Dict[str, Tuple[int, ...]] = {
    "major": (2, 2, 1, 2, 2, 2, 1),
    "minor": (2, 1, 2, 2, 1, 2, 2),
    "harmonic-minor": (2, 1, 2, 2, 1, 3, 1),
    "melodic-minor": (2, 1, 2, 2, 2, 2, 1),
    "major-pentatonic": (2, 2, 3, 2, 3),
    "minor-pentatonic": (3, 2, 2, 3, 2),
    "blues": (3, 2, 1, 1, 3, 2),
    "dorian": (2, 1, 2, 2, 2, 1, 2),
    "phrygian": (1, 2, 2, 2, 1, 2, 2),
    "lydian": (2, 2, 2, 1, 2, 2, 1),
    "mixolydian": (2, 2, 1, 2, 2, 1, 2),
    "locrian": (1, 2, 2, 1, 2, 2, 2),
}

_MODE_ALIASES = {
    "maj": "major",
    "ionian": "major",
    "min": "minor",
    "aeolian": "minor",
    "natural-minor": "minor",
    "nat-minor": "minor",
    "harmonic": "harmonic-minor",
    "melodic": "melodic-minor",
    "pentatonic": "major-pentatonic",
    "minor-blues": "blues",
}


def normalize_mode_name(value: str | None) -> str:
    if not value:
        return "major"
    t = value.strip().lower().replace("_", "-").replace(" ", "-")
    return _MODE_ALIASES.get(t, t)


@dataclass(frozen=True)
class Mode:
    """An immutable named interval pattern."""

    name: str
    steps: Tuple[int, ...]

    @property
    def degree_count(self) -> int:
        return len(self.steps)

    @property
    def intervals(self) -> Tuple[int, ...]:
        """Semitone offset of each degree from the tonic (first is 0)."""
        acc = 0
        out = []
        for step in self.steps:
            out.append(acc)
            acc += step
        return tuple(out)

    def pitch_classes(self, root: ToneLike = 0) -> Tuple[int, ...]:
        r = parse_tone(root)
        return tuple((r + iv) % 12 for iv in self.intervals)

    def __len__(self) -> int:
        return self.degree_count

    def __str__(self) -> str:
        return self.name


def validate_steps(name: str, steps: Tuple[int, ...]) -> Tuple[int, ...]:
    steps = tuple(int(s) for s in steps)
    if not steps or any(s <= 0 for s in steps):
        raise ConfigurationError(f"Mode '{name}' needs positive semitone steps, got {steps}")
    if sum(steps) != 12:
        raise ConfigurationError(f"Mode '{name}' steps must sum to 12, got {sum(steps)}")
    return steps


def get_mode(mode: "str | Mode") -> Mode:
    """Resolve a mode name (or pass a Mode through after validating it)."""
    if isinstance(mode, Mode):
        return Mode(mode.name, validate_steps(mode.name, mode.steps))
    name = normalize_mode_name(mode)
    steps = MODE_PATTERNS.get(name)
    if steps is None:
        raise ConfigurationError(f"Unsupported mode: {mode}")
    return Mode(name, validate_steps(name, steps))


def list_modes() -> List[str]:
    return list(MODE_PATTERNS)


def degree_to_pc(mode: "str | Mode", degree: int) -> int:
    """Return semitone offset (pitch class) from tonic for a scale degree.

    Args:
        mode: Mode name or Mode.
        degree: 1-based degree; values past the last degree wrap around.

    Returns:
        Semitone offset from tonic (0..11).
    """
    m = get_mode(mode)
    return m.intervals[(int(degree) - 1) % m.degree_count]


def build_scale_pcs(mode: "str | Mode", root: ToneLike = 0) -> List[int]:
    """Pitch classes of every degree of `mode` rooted at `root`."""
    return list(get_mode(mode).pitch_classes(root))
