from __future__ import annotations

"""Board: one fretboard session.

Holds the options plus the three artifacts derived from them (degree chords,
chromatic spelling, fretboard grid). Every mutation recomputes only the
artifacts that depend on the changed fields, publishes a new snapshot and
notifies observers once.

Lifecycle: configured on construction, self-loop on every mutation,
disposed by `dispose()` (observers dropped, further mutations rejected).
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple, Union

from pydantic import ValidationError

from ..errors import ConfigurationError
from ..events import EventBus
from ..explain import trace as xtrace, trace_board
from ..search.chord_taps import ChordTap, ChordTapOptions, get_chord_taps
from ..search.scale_taps import BoxTaps, ScaleTap, get_mode_box_taps, get_mode_range_taps
from ..theory.chords import DegreeChord, derive_degree_chords
from ..theory.chromatic import ChromaticSpelling, get_scale_note_all
from .fretboard import Fretboard, Point, build_fretboard
from .schema import CHORD_FIELDS, KEYBOARD_FIELDS, SPELLING_FIELDS, BoardOptions, BoardOptionsUpdate


CHANGE_EVENT = "change"


@dataclass(frozen=True)
class BoardSnapshot:
    """Everything a view needs, published as one value."""

    options: BoardOptions
    chords: Tuple[DegreeChord, ...]
    spelling: ChromaticSpelling
    keyboard: Fretboard


class StatusUpdate(NamedTuple):
    string: int
    grade: int
    status: Any


StatusEntry = Union[StatusUpdate, Point, Tuple[int, int, Any], Mapping[str, Any]]


def _config_error(exc: ValidationError) -> ConfigurationError:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'options'}: {err['msg']}" for err in exc.errors()
    )
    return ConfigurationError(f"Invalid board options: {problems}")


class Board:
    def __init__(
        self,
        options: Optional[Union[BoardOptions, Mapping[str, Any]]] = None,
        on_change: Optional[Callable[[BoardSnapshot], None]] = None,
        **overrides: Any,
    ) -> None:
        self._bus = EventBus()
        self._disposed = False

        base = options if options is not None else BoardOptions.defaults()
        if not isinstance(base, BoardOptions):
            base = self._merge(BoardOptions.defaults(), dict(base))
        opts = self._merge(base, self._coerce_update(None, overrides)) if overrides else base

        # chords -> spelling -> keyboard, in dependency order
        chords = self._get_chords(opts)
        spelling = self._get_notes(opts, chords)
        keyboard = self._get_keyboard(opts, spelling)
        self._snapshot = BoardSnapshot(options=opts, chords=chords, spelling=spelling, keyboard=keyboard)

        if on_change is not None:
            self._bus.subscribe(CHANGE_EVENT, on_change)
        trace_board("board_created", self._snapshot)

    # --- read accessors ---

    @property
    def snapshot(self) -> BoardSnapshot:
        return self._snapshot

    @property
    def options(self) -> BoardOptions:
        return self._snapshot.options

    @property
    def chords(self) -> Tuple[DegreeChord, ...]:
        return self._snapshot.chords

    @property
    def spelling(self) -> ChromaticSpelling:
        return self._snapshot.spelling

    @property
    def keyboard(self) -> Fretboard:
        return self._snapshot.keyboard

    @property
    def disposed(self) -> bool:
        return self._disposed

    # --- observers ---

    def subscribe(self, handler: Callable[[BoardSnapshot], None]) -> Callable[[], None]:
        """Call `handler(snapshot)` after every mutation; returns an unsubscribe callable."""
        self._ensure_active()
        return self._bus.subscribe(CHANGE_EVENT, handler)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._bus.clear()
        self._disposed = True
        xtrace("board_disposed")

    # --- mutations ---

    def set_options(self, update: Optional[Union[BoardOptionsUpdate, Mapping[str, Any]]] = None, **fields: Any) -> None:
        """Apply a partial update, recompute what depends on it, notify once.

        Raises:
            ConfigurationError: Unknown keys or invalid values; the current
                snapshot is left untouched.
        """
        self._ensure_active()
        changes = self._coerce_update(update, fields)
        current = self._snapshot
        opts = self._merge(current.options, changes)
        changed = {k for k in changes if getattr(opts, k) != getattr(current.options, k)}

        chords, spelling, keyboard = current.chords, current.spelling, current.keyboard
        recomputed: List[str] = []
        if changed & CHORD_FIELDS:
            chords = self._get_chords(opts)
            recomputed.append("chords")
        if changed & SPELLING_FIELDS:
            spelling = self._get_notes(opts, chords)
            recomputed.append("notes")
        if changed & KEYBOARD_FIELDS:
            keyboard = self._get_keyboard(opts, spelling)
            recomputed.append("keyboard")

        self._snapshot = BoardSnapshot(options=opts, chords=chords, spelling=spelling, keyboard=keyboard)
        trace_board("board_updated", self._snapshot, changed=sorted(changed), recomputed=recomputed)
        self._emit()

    def set_keyboard_status(self, updates: Iterable[StatusEntry]) -> None:
        """Overwrite the status flag of specific Points in place; notify once.

        Positions outside the grid are ignored.
        """
        self._ensure_active()
        keyboard = self._snapshot.keyboard
        applied = 0
        for entry in updates:
            string, grade, status = self._status_entry(entry)
            point = keyboard.get(string, grade)
            if point is not None:
                point.status = status
                applied += 1
        xtrace("keyboard_status", {"applied": applied})
        self._emit()

    def reset_keyboard_status(self) -> None:
        """Rebuild the grid from the current options, dropping status overrides."""
        self._ensure_active()
        current = self._snapshot
        keyboard = self._get_keyboard(current.options, current.spelling)
        self._snapshot = BoardSnapshot(
            options=current.options,
            chords=current.chords,
            spelling=current.spelling,
            keyboard=keyboard,
        )
        xtrace("keyboard_reset")
        self._emit()

    # --- queries on the current snapshot ---

    def chord_taps(self, chord: DegreeChord, options: Optional[ChordTapOptions] = None) -> List[ChordTap]:
        return get_chord_taps(chord, self._snapshot.keyboard, options)

    def mode_box_taps(self, root_point: Point, mode: Optional[str] = None, scale_root: Any = None) -> BoxTaps:
        return get_mode_box_taps(
            root_point,
            self._snapshot.keyboard,
            mode or self._snapshot.options.mode,
            scale_root=scale_root,
        )

    def mode_range_taps(
        self,
        root_point: Point,
        fret_range: Tuple[int, int],
        mode: Optional[str] = None,
        ignore_pitch: bool = False,
    ) -> List[ScaleTap]:
        return get_mode_range_taps(
            root_point,
            self._snapshot.keyboard,
            mode or self._snapshot.options.mode,
            fret_range,
            ignore_pitch=ignore_pitch,
        )

    # --- internals ---

    def _ensure_active(self) -> None:
        if self._disposed:
            raise RuntimeError("Board has been disposed")

    def _emit(self) -> None:
        self._bus.emit(CHANGE_EVENT, self._snapshot)

    @staticmethod
    def _coerce_update(update: Any, fields: Dict[str, Any]) -> Dict[str, Any]:
        try:
            if isinstance(update, BoardOptionsUpdate):
                changes = update.changes()
                if fields:
                    changes.update(BoardOptionsUpdate.model_validate(fields).changes())
                return changes
            data = dict(update or {})
            data.update(fields)
            return BoardOptionsUpdate.model_validate(data).changes()
        except ValidationError as e:
            raise _config_error(e) from e

    @staticmethod
    def _merge(options: BoardOptions, changes: Dict[str, Any]) -> BoardOptions:
        if not changes:
            return options
        data = options.model_dump()
        data.update(changes)
        try:
            return BoardOptions.model_validate(data)
        except ValidationError as e:
            raise _config_error(e) from e

    @staticmethod
    def _status_entry(entry: StatusEntry) -> Tuple[int, int, Any]:
        if isinstance(entry, Point):
            return entry.string, entry.grade, entry.status
        if isinstance(entry, Mapping):
            return int(entry["string"]), int(entry["grade"]), entry.get("status")
        string, grade, status = entry
        return int(string), int(grade), status

    @staticmethod
    def _get_chords(options: BoardOptions) -> Tuple[DegreeChord, ...]:
        return derive_degree_chords(
            options.scale,
            options.mode,
            chord_size=options.chord_size,
            inversion=options.inversion,
        )

    @staticmethod
    def _get_notes(options: BoardOptions, chords: Tuple[DegreeChord, ...]) -> ChromaticSpelling:
        return get_scale_note_all(chords, options.scale, options.mode)

    @staticmethod
    def _get_keyboard(options: BoardOptions, spelling: ChromaticSpelling) -> Fretboard:
        return build_fretboard(
            options.tuning,
            options.fret_count,
            spelling,
            base_level=options.base_level,
            mode=options.mode,
            root=options.scale,
        )
