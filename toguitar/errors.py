from __future__ import annotations

"""Error types raised by the fretboard engine."""


class ConfigurationError(ValueError):
    """Malformed board configuration (mode, tuning, fret count, note names...).

    Raised before anything is recomputed, so the previous board state stays
    in effect.
    """
