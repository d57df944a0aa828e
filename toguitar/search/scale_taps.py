from __future__ import annotations

"""Scale tap search: where the tones of a mode sit on the fretboard.

Two shapes of query share one traversal:
  - box: a single position, a few frets wide, anchored at the root Point
  - range: every string across an explicit [low, high] fret range
"""

from dataclasses import dataclass, replace
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

from ..board.fretboard import Fretboard, Point
from ..config.config import scale_search_defaults
from ..theory.note_utils import ToneLike, parse_tone
from ..theory.scales import Mode, get_mode


@dataclass(frozen=True)
class ScaleTap:
    point: Point
    degree: int
    is_root: bool

    @property
    def string(self) -> int:
        return self.point.string

    @property
    def grade(self) -> int:
        return self.point.grade

    @property
    def tone(self) -> int:
        return self.point.tone


class BoxTaps(NamedTuple):
    up: List[ScaleTap]
    down: List[ScaleTap]


def _degrees(mode: "str | Mode", root: int) -> Dict[int, int]:
    return {pc: i + 1 for i, pc in enumerate(get_mode(mode).pitch_classes(root))}


def _collect(
    board: Fretboard,
    low: int,
    high: int,
    degrees: Dict[int, int],
    root: int,
    ignore_pitch: bool = False,
) -> List[ScaleTap]:
    taps: List[ScaleTap] = []
    seen = set()
    for row in board:
        for p in row[low:high + 1]:
            if p.tone not in degrees:
                continue
            if ignore_pitch:
                if p.midi in seen:
                    continue
                seen.add(p.midi)
            taps.append(ScaleTap(point=replace(p), degree=degrees[p.tone], is_root=p.tone == root))
    return taps


def box_window(grade: int, width: int, fret_count: int) -> Tuple[int, int]:
    """Fret window of `width` frets starting at `grade`, shifted back inside the board."""
    width = max(1, min(int(width), fret_count + 1))
    start = max(0, min(int(grade), fret_count + 1 - width))
    return start, start + width - 1


def get_mode_box_taps(
    root_point: Point,
    board: Fretboard,
    mode: "str | Mode",
    scale_root: Optional[ToneLike] = None,
    width: Optional[int] = None,
) -> BoxTaps:
    """Single-position pattern around `root_point`.

    `up` runs by string then fret, `down` is the same Points reversed. The
    mode is rooted at `scale_root`, or at the root Point's tone.
    """
    if board.get(root_point.string, root_point.grade) is None:
        return BoxTaps(up=[], down=[])
    if width is None:
        width = int(scale_search_defaults()["box_width"])
    root = root_point.tone if scale_root is None else parse_tone(scale_root)
    low, high = box_window(root_point.grade, width, board.fret_count)
    up = _collect(board, low, high, _degrees(mode, root), root)
    return BoxTaps(up=up, down=list(reversed(up)))


def get_mode_range_taps(
    root: Union[Point, ToneLike],
    board: Fretboard,
    mode: "str | Mode",
    fret_range: Tuple[int, int],
    ignore_pitch: bool = False,
) -> List[ScaleTap]:
    """Every in-scale Point across all strings within `fret_range`.

    Taps whose tone equals the root tone are marked `is_root`, in any
    register. A range entirely outside the board gives an empty list; a
    partial overlap is clamped. With `ignore_pitch`, only the first Point of
    each absolute pitch is kept.
    """
    if isinstance(root, Point):
        if board.get(root.string, root.grade) is None:
            return []
        root_pc = root.tone
    else:
        root_pc = parse_tone(root)
    low, high = sorted(int(x) for x in fret_range)
    if board.string_count == 0 or high < 0 or low > board.fret_count:
        return []
    low, high = max(low, 0), min(high, board.fret_count)
    return _collect(board, low, high, _degrees(mode, root_pc), root_pc, ignore_pitch=ignore_pitch)
