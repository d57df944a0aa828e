"""Theory layer: tones, modes, key spelling, degree chords.

Everything here is pure; the board builds on these functions.
"""

from .note_utils import Note, parse_note, parse_tone, transpose, transpose_note  # noqa: F401
from .scales import Mode, get_mode, list_modes  # noqa: F401
from .keys import spell, spell_scale, transpose_name  # noqa: F401
from .chords import DegreeChord, derive_degree_chords  # noqa: F401
from .chromatic import ChromaticSpelling, get_scale_note_all  # noqa: F401
