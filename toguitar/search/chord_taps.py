from __future__ import annotations

"""Chord tap search: playable fingerings of a chord on a fretboard.

A fingering picks at most one Point per string. It must cover every chord
tone, keep the fretted (non-open) positions within `max_span` frets and, when
a bass tone is designated, put it on the lowest-pitched Point.
"""

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from ..board.fretboard import Fretboard, Point
from ..config.config import chord_search_defaults
from ..theory.chords import DegreeChord
from ..theory.note_utils import ToneLike, parse_tone


@dataclass(frozen=True)
class ChordTapOptions:
    max_span: int = 3
    prefer_open: bool = True
    min_strings: Optional[int] = None   # default: number of chord tones
    max_strings: Optional[int] = None   # default: every string
    fret_range: Optional[Tuple[int, int]] = None
    allow_inner_mute: bool = False
    limit: Optional[int] = None

    @classmethod
    def defaults(cls) -> "ChordTapOptions":
        cfg = chord_search_defaults()
        return cls(
            max_span=int(cfg["max_span"]),
            prefer_open=bool(cfg["prefer_open"]),
            allow_inner_mute=bool(cfg["allow_inner_mute"]),
        )


@dataclass(frozen=True)
class ChordTap:
    """One fingering; `points` are ordered from the lowest string up."""

    points: Tuple[Point, ...]
    chord: str
    string_count: int

    @property
    def span(self) -> int:
        fretted = [p.grade for p in self.points if p.grade > 0]
        return max(fretted) - min(fretted) if fretted else 0

    @property
    def open_count(self) -> int:
        return sum(1 for p in self.points if p.grade == 0)

    @property
    def start_grade(self) -> int:
        fretted = [p.grade for p in self.points if p.grade > 0]
        return min(fretted) if fretted else 0

    @property
    def frets(self) -> Tuple[Optional[int], ...]:
        """Fret per string, None for muted strings."""
        by_string = {p.string: p.grade for p in self.points}
        return tuple(by_string.get(s) for s in range(self.string_count))

    @property
    def tones(self) -> Tuple[int, ...]:
        return tuple(p.tone for p in self.points)

    @property
    def bass(self) -> Point:
        return min(self.points, key=lambda p: p.midi)


def _window(board: Fretboard, fret_range: Optional[Tuple[int, int]]) -> Optional[Tuple[int, int]]:
    if fret_range is None:
        return 0, board.fret_count
    low, high = sorted(int(x) for x in fret_range)
    low, high = max(low, 0), min(high, board.fret_count)
    if low > high:
        return None
    return low, high


def _rank_key(tap: ChordTap, prefer_open: bool):
    if prefer_open:
        return (-tap.open_count, tap.span, -len(tap.points), tap.start_grade)
    return (tap.span, -tap.open_count, -len(tap.points), tap.start_grade)


def find_chord_taps(
    tones: Iterable[ToneLike],
    board: Fretboard,
    options: Optional[ChordTapOptions] = None,
    bass: Optional[ToneLike] = None,
    label: str = "",
) -> List[ChordTap]:
    """Return ranked fingerings of `tones` on `board` (empty when none fit).

    Ranking: open-string usage first when `prefer_open`, then fret span,
    strings covered (more first) and lowest start fret.
    """
    opts = options or ChordTapOptions.defaults()
    targets = tuple(dict.fromkeys(parse_tone(t) for t in tones))
    n = board.string_count
    window = _window(board, opts.fret_range)
    if not targets or n == 0 or window is None:
        return []
    low, high = window
    target_set = set(targets)
    bass_pc = parse_tone(bass) if bass is not None else None
    min_strings = max(1, opts.min_strings if opts.min_strings is not None else len(targets))
    max_strings = min(n, opts.max_strings if opts.max_strings is not None else n)
    if min_strings > max_strings:
        return []

    candidates: List[List[Point]] = [
        [p for p in board[s][low:high + 1] if p.tone in target_set] for s in range(n)
    ]

    found: List[ChordTap] = []
    chosen: List[Point] = []

    def accept() -> None:
        if len(chosen) < min_strings:
            return
        if not target_set.issubset(p.tone for p in chosen):
            return
        if bass_pc is not None and min(chosen, key=lambda p: p.midi).tone != bass_pc:
            return
        found.append(ChordTap(points=tuple(replace(p) for p in chosen), chord=label, string_count=n))

    # run: 0 = nothing picked yet, 1 = picking, 2 = closed by a muted string
    def walk(s: int, lo: Optional[int], hi: Optional[int], run: int) -> None:
        if s == n:
            accept()
            return
        if len(chosen) + (n - s) < min_strings:
            return
        walk(s + 1, lo, hi, 2 if run == 1 and not opts.allow_inner_mute else run)
        if run == 2 or len(chosen) >= max_strings:
            return
        for p in candidates[s]:
            nlo, nhi = lo, hi
            if p.grade > 0:
                nlo = p.grade if lo is None else min(lo, p.grade)
                nhi = p.grade if hi is None else max(hi, p.grade)
                if nhi - nlo > opts.max_span:
                    continue
            chosen.append(p)
            walk(s + 1, nlo, nhi, 1)
            chosen.pop()

    walk(0, None, None, 0)
    found.sort(key=lambda tap: _rank_key(tap, opts.prefer_open))
    if opts.limit is not None:
        return found[: opts.limit]
    return found


def get_chord_taps(
    chord: DegreeChord,
    board: Fretboard,
    options: Optional[ChordTapOptions] = None,
    require_bass: bool = True,
) -> List[ChordTap]:
    """Fingerings of a degree chord with its bass (root, or the inversion bass) lowest."""
    return find_chord_taps(
        chord.tones,
        board,
        options,
        bass=chord.bass if require_bass else None,
        label=chord.name,
    )


def get_taps_on_board(positions: Sequence[Tuple[int, int]], board: Fretboard) -> List[Point]:
    """Resolve (string, grade) positions to copies of the board's Points.

    Positions outside the board are skipped.
    """
    out: List[Point] = []
    for string, grade in positions:
        point = board.get(int(string), int(grade))
        if point is not None:
            out.append(replace(point))
    return out
