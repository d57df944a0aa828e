from __future__ import annotations

"""Explain Mode: terse trace lines for board milestones.

Off by default. Once switched on with `enable()`, the board prints one line
per milestone (creation, option update, status override, reset, disposal):

    [EXPLAIN] board_updated :: {"key":"A","mode":"minor",...,"recomputed":["chords"]}
"""

import json
from typing import Any, Dict, Optional

PREFIX = "[EXPLAIN]"

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def board_fields(snapshot: Any) -> Dict[str, Any]:
    """Flatten a board snapshot into the fields worth showing in a trace."""
    opts = snapshot.options
    keyboard = snapshot.keyboard
    return {
        "key": opts.scale,
        "mode": opts.mode,
        "chords": [c.name for c in snapshot.chords],
        "tuning": list(opts.tuning),
        "strings": keyboard.string_count,
        "frets": keyboard.fret_count,
    }


def trace(event: str, payload: Optional[Dict[str, Any]] = None) -> None:
    if not _ENABLED:
        return
    if not payload:
        print(f"{PREFIX} {event}")
        return
    # values json cannot encode (Notes, Points) fall back to str()
    body = json.dumps(payload, separators=(",", ":"), default=str)
    print(f"{PREFIX} {event} :: {body}")


def trace_board(event: str, snapshot: Any, **extra: Any) -> None:
    """Trace `event` with the board's key, mode, chords and grid size."""
    if not _ENABLED:
        return
    payload = board_fields(snapshot)
    payload.update(extra)
    trace(event, payload)
