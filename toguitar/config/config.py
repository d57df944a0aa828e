from __future__ import annotations

"""Configuration loading and validation for toguitar.

This module loads YAML configuration, applies defaults, and validates
that modes, tunings and search settings are sane before a board is built.
"""

import sys
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..errors import ConfigurationError
from ..theory.note_utils import parse_note
from ..theory.scales import MODE_PATTERNS, normalize_mode_name


ALLOWED_CHORD_SIZES = {3, 4}

DEFAULT_TUNINGS: Dict[str, List[str]] = {
    "standard": ["E2", "A2", "D3", "G3", "B3", "E4"],
}


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Config file is not valid YAML: {path}") from e


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def _warn(msg: str) -> None:
    print(f"WARNING: {msg}", file=sys.stderr)


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unsupported enumerations fall back to their defaults with a warning;
    tunings that cannot be parsed raise ConfigurationError.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("board", {})
    cfg.setdefault("tunings", {})
    cfg.setdefault("chord_search", {})
    cfg.setdefault("scale_search", {})

    board = cfg["board"]
    tunings = cfg["tunings"]
    chord_search = cfg["chord_search"]
    scale_search = cfg["scale_search"]

    for name, notes in DEFAULT_TUNINGS.items():
        tunings.setdefault(name, list(notes))

    board.setdefault("mode", "major")
    board.setdefault("scale", "C")
    board.setdefault("chord_size", 3)
    board.setdefault("inversion", False)
    board.setdefault("tuning", "standard")
    board.setdefault("fret_count", 16)
    board.setdefault("base_level", 2)

    chord_search.setdefault("max_span", 3)
    chord_search.setdefault("prefer_open", True)
    chord_search.setdefault("allow_inner_mute", False)

    scale_search.setdefault("box_width", 4)

    # Tunings must parse as notes
    for name, notes in tunings.items():
        if not notes:
            raise ConfigurationError(f"Tuning '{name}' has no strings")
        tunings[name] = [str(parse_note(str(n))) if any(c.isdigit() for c in str(n)) else str(n) for n in notes]

    # Enum validations
    mode = normalize_mode_name(board.get("mode"))
    if mode not in MODE_PATTERNS:
        _warn(f"Unsupported mode '{board.get('mode')}', using 'major'.")
        mode = "major"
    board["mode"] = mode

    if board.get("chord_size") not in ALLOWED_CHORD_SIZES:
        _warn(f"Unsupported chord_size '{board.get('chord_size')}', using 3.")
        board["chord_size"] = 3

    tuning = board.get("tuning")
    if isinstance(tuning, str) and tuning not in tunings:
        _warn(f"Unknown tuning '{tuning}', using 'standard'.")
        board["tuning"] = "standard"

    try:
        fret_count = int(board.get("fret_count"))
    except (TypeError, ValueError):
        fret_count = 0
    if fret_count < 1:
        _warn(f"Invalid fret_count '{board.get('fret_count')}', using 16.")
        fret_count = 16
    board["fret_count"] = fret_count

    if int(chord_search.get("max_span", 0)) < 0:
        _warn("chord_search.max_span must be >= 0, using 3.")
        chord_search["max_span"] = 3

    if int(scale_search.get("box_width", 0)) < 1:
        _warn("scale_search.box_width must be >= 1, using 4.")
        scale_search["box_width"] = 4

    return cfg


@lru_cache(maxsize=1)
def _default_config() -> Dict[str, Any]:
    return validate_config(load_config())


def get_tunings() -> Dict[str, List[str]]:
    return {name: list(notes) for name, notes in _default_config()["tunings"].items()}


def get_tuning(name: str) -> List[str]:
    """Return the open strings of a named tuning, lowest string first."""
    tunings = _default_config()["tunings"]
    if name not in tunings:
        raise ConfigurationError(f"Unknown tuning: {name}")
    return list(tunings[name])


def default_board_options() -> Dict[str, Any]:
    """Board defaults with the named tuning resolved to its open strings."""
    board = dict(_default_config()["board"])
    if isinstance(board["tuning"], str):
        board["tuning"] = get_tuning(board["tuning"])
    return board


def chord_search_defaults() -> Dict[str, Any]:
    return dict(_default_config()["chord_search"])


def scale_search_defaults() -> Dict[str, Any]:
    return dict(_default_config()["scale_search"])
