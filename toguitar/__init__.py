"""toguitar: fretboard music-theory engine.

Derives the degree chords and note spelling of a key, maps a tuning onto a
fretboard grid, and searches that grid for chord and scale fingerings.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .errors import ConfigurationError
from .theory.note_utils import Note, parse_note, parse_tone, transpose, transpose_note
from .theory.keys import spell, transpose_name
from .theory.scales import Mode, get_mode, list_modes
from .theory.chords import DegreeChord, derive_degree_chords
from .theory.chromatic import ChromaticSpelling, get_scale_note_all
from .board import (
    Board,
    BoardOptions,
    BoardOptionsUpdate,
    BoardSnapshot,
    Fretboard,
    Point,
    StatusUpdate,
    build_fretboard,
)
from .search import (
    BoxTaps,
    CagedShape,
    ChordTap,
    ChordTapOptions,
    ScaleTap,
    caged_shapes,
    find_chord_taps,
    get_chord_taps,
    get_mode_box_taps,
    get_mode_range_taps,
    get_taps_on_board,
)

__all__ = [
    "__version__",
    "ConfigurationError",
    "Note",
    "parse_note",
    "parse_tone",
    "transpose",
    "transpose_note",
    "spell",
    "transpose_name",
    "Mode",
    "get_mode",
    "list_modes",
    "DegreeChord",
    "derive_degree_chords",
    "ChromaticSpelling",
    "get_scale_note_all",
    "Board",
    "BoardOptions",
    "BoardOptionsUpdate",
    "BoardSnapshot",
    "Fretboard",
    "Point",
    "StatusUpdate",
    "build_fretboard",
    "BoxTaps",
    "CagedShape",
    "ChordTap",
    "ChordTapOptions",
    "ScaleTap",
    "caged_shapes",
    "find_chord_taps",
    "get_chord_taps",
    "get_mode_box_taps",
    "get_mode_range_taps",
    "get_taps_on_board",
]
