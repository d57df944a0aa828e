"""Fretboard grid and the board session that keeps it in sync with its options."""

from .fretboard import Fretboard, Point, build_fretboard, resolve_tuning  # noqa: F401
from .schema import BoardOptions, BoardOptionsUpdate  # noqa: F401
from .board import Board, BoardSnapshot, StatusUpdate  # noqa: F401
