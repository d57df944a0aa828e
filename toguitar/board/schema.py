from __future__ import annotations

"""Pydantic models for board options and typed partial updates."""

from typing import Any, Dict, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config.config import default_board_options, get_tuning
from ..theory.chords import CHORD_SIZES
from ..theory.keys import key_name
from ..theory.note_utils import Note, parse_note, parse_tone
from ..theory.scales import MODE_PATTERNS, normalize_mode_name


# --- Constants ---

CHORD_FIELDS = frozenset({"mode", "scale", "chord_size", "inversion"})
SPELLING_FIELDS = frozenset({"mode", "scale"})
KEYBOARD_FIELDS = frozenset({"mode", "scale", "tuning", "fret_count", "base_level"})


def _tuning_entry(entry: Any) -> str:
    if isinstance(entry, Note):
        return str(entry)
    if isinstance(entry, bool):
        raise ValueError(f"Invalid tuning entry: {entry!r}")
    if isinstance(entry, int):
        return key_name(entry)
    text = str(entry).strip()
    if any(c.isdigit() for c in text):
        return str(parse_note(text))
    parse_tone(text)
    return text[0].upper() + text[1:]


# --- Pydantic models ---

class BoardOptions(BaseModel):
    """A complete, validated board configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: str = "major"
    scale: str = "C"
    chord_size: int = 3
    inversion: bool = False
    tuning: Tuple[str, ...] = ("E2", "A2", "D3", "G3", "B3", "E4")
    fret_count: int = Field(16, ge=1, le=36)
    base_level: int = Field(2, ge=-1, le=9)

    @model_validator(mode="before")
    @classmethod
    def _key_from_pitch_class(cls, data: Any) -> Any:
        # integer roots take their conventional name for the mode
        if isinstance(data, dict) and isinstance(data.get("scale"), int) and not isinstance(data.get("scale"), bool):
            data = dict(data)
            mode = normalize_mode_name(data.get("mode"))
            data["scale"] = key_name(data["scale"], mode if mode in MODE_PATTERNS else "major")
        return data

    @field_validator("mode")
    @classmethod
    def _known_mode(cls, v: str) -> str:
        name = normalize_mode_name(v)
        if name not in MODE_PATTERNS:
            raise ValueError(f"unsupported mode '{v}'")
        return name

    @field_validator("scale")
    @classmethod
    def _valid_root(cls, v: str) -> str:
        return key_name(v)

    @field_validator("chord_size")
    @classmethod
    def _chord_size(cls, v: int) -> int:
        if v not in CHORD_SIZES:
            raise ValueError(f"chord_size must be one of {CHORD_SIZES}")
        return v

    @field_validator("tuning", mode="before")
    @classmethod
    def _resolve_tuning(cls, v: Any) -> Tuple[str, ...]:
        if isinstance(v, str):
            v = get_tuning(v)
        entries = tuple(_tuning_entry(e) for e in v)
        if not entries:
            raise ValueError("tuning needs at least one string")
        return entries

    @classmethod
    def defaults(cls) -> "BoardOptions":
        """Options from the packaged defaults.yml."""
        return cls.model_validate(default_board_options())


class BoardOptionsUpdate(BaseModel):
    """Partial update: every field optional, no other keys accepted."""

    model_config = ConfigDict(extra="forbid")

    mode: Optional[str] = None
    scale: Optional[Union[str, int]] = None
    chord_size: Optional[int] = None
    inversion: Optional[bool] = None
    tuning: Optional[Union[str, Sequence[Any]]] = None
    fret_count: Optional[int] = None
    base_level: Optional[int] = None

    def changes(self) -> Dict[str, Any]:
        # read attributes directly: dumping would turn Note entries into dicts
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }
