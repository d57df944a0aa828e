"""Tap searches over a fretboard snapshot."""

from .chord_taps import ChordTap, ChordTapOptions, find_chord_taps, get_chord_taps, get_taps_on_board  # noqa: F401
from .scale_taps import BoxTaps, ScaleTap, get_mode_box_taps, get_mode_range_taps  # noqa: F401
from .caged import CagedShape, caged_shapes, load_caged_shapes  # noqa: F401
