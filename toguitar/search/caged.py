from __future__ import annotations

"""CAGED shapes: open chord shapes reused up the neck by transposition.

Base shapes are loaded from YAML; shifting a shape by n frets moves every
position n frets up and transposes its root name by n semitones.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..board.fretboard import Fretboard, Point
from ..config.config import load_config
from ..errors import ConfigurationError
from ..theory.keys import transpose_name
from .chord_taps import get_taps_on_board


CAGED_ORDER = ("C", "A", "G", "E", "D")


@dataclass(frozen=True)
class CagedShape:
    key: str                              # shape letter: C, A, G, E or D
    tone: str                             # root name after shifting
    tag: str                              # "", "m", "7"
    positions: Tuple[Tuple[int, int], ...]  # (string, grade)

    @property
    def name(self) -> str:
        return f"{self.tone}{self.tag}"

    def taps(self, board: Fretboard) -> List[Point]:
        return get_taps_on_board(self.positions, board)


def _caged_path() -> Path:
    # toguitar/search/caged.py -> toguitar/resources/caged.yml
    return Path(__file__).resolve().parents[1] / "resources" / "caged.yml"


_Positions = Tuple[Tuple[int, int], ...]


@lru_cache(maxsize=4)
def _read_shapes(path: str) -> Tuple[Tuple[str, Tuple[Tuple[str, _Positions], ...]], ...]:
    # yaml errors and missing files surface as ConfigurationError from load_config
    data = load_config(path)
    shapes = data.get("shapes") or {}
    out = []
    for key, variants in shapes.items():
        parsed = []
        for variant in variants or []:
            positions = variant.get("positions")
            if not positions:
                raise ConfigurationError(f"CAGED shape {key}{variant.get('tag', '')} has no positions")
            parsed.append((str(variant.get("tag", "")), tuple((int(s), int(g)) for s, g in positions)))
        out.append((str(key), tuple(parsed)))
    return tuple(out)


def load_caged_shapes(path: Optional[str] = None) -> Dict[str, List[Dict[str, Any]]]:
    """Load the base shapes keyed by shape letter.

    The file is parsed once per path; every call gets its own dict.
    """
    if path is None:
        path = str(_caged_path())
    return {
        key: [{"tag": tag, "positions": [list(p) for p in positions]} for tag, positions in variants]
        for key, variants in _read_shapes(str(path))
    }


def caged_shapes(start_grade: int = 0, path: Optional[str] = None) -> Dict[str, List[CagedShape]]:
    """Every base shape shifted `start_grade` frets up the neck."""
    shift = int(start_grade)
    out: Dict[str, List[CagedShape]] = {}
    for key, variants in load_caged_shapes(path).items():
        out[key] = [
            CagedShape(
                key=key,
                tone=transpose_name(key, shift),
                tag=str(v.get("tag", "")),
                positions=tuple((int(s), int(g) + shift) for s, g in v["positions"]),
            )
            for v in variants
        ]
    return out
