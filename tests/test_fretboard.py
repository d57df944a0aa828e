import unittest

from toguitar.board.fretboard import build_fretboard, resolve_tuning
from toguitar.errors import ConfigurationError
from toguitar.theory.chords import derive_degree_chords
from toguitar.theory.chromatic import get_scale_note_all
from toguitar.theory.note_utils import Note, parse_note

STANDARD = ["E2", "A2", "D3", "G3", "B3", "E4"]


def _spelling(key="C", mode="major"):
    return get_scale_note_all(derive_degree_chords(key, mode), key, mode)


class TuningTests(unittest.TestCase):
    def test_bare_tones_stack_upward(self) -> None:
        notes = resolve_tuning(["E", "A", "D", "G", "B", "E"], base_level=2)
        self.assertEqual([str(n) for n in notes], STANDARD)

    def test_explicit_registers_are_kept(self) -> None:
        notes = resolve_tuning(["G4", "C4", "E4", "A4"])
        self.assertEqual(notes[0], Note(7, 4))
        self.assertEqual(notes[1], Note(0, 4))

    def test_empty_tuning(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_tuning([])


class FretboardTests(unittest.TestCase):
    def test_dimensions_and_open_strings(self) -> None:
        for frets in (0, 1, 12, 24):
            board = build_fretboard(STANDARD, frets, _spelling())
            self.assertEqual(board.string_count, 6)
            self.assertEqual(board.fret_count, frets)
            for s, open_note in enumerate(STANDARD):
                self.assertEqual(len(board[s]), frets + 1)
                self.assertEqual(board[s][0].note, parse_note(open_note))
                self.assertEqual(board[s][0].tone, parse_note(open_note).tone)

    def test_register_carries_along_the_string(self) -> None:
        board = build_fretboard(STANDARD, 12, _spelling())
        self.assertEqual(board[0][12].note, Note(4, 3))
        self.assertEqual(board[0][8].note, Note(0, 3))
        self.assertEqual(board[0][7].note, Note(11, 2))
        self.assertEqual(board[5][8].note, Note(0, 5))
        self.assertEqual(board[2][3].label, "F3")

    def test_key_membership_and_degrees(self) -> None:
        board = build_fretboard(STANDARD, 12, _spelling(), mode="major", root="C")
        self.assertTrue(board[0][1].in_key)      # F
        self.assertFalse(board[0][2].in_key)     # F#
        self.assertEqual(board[1][3].degree, 1)  # C on the A string
        self.assertEqual(board[0][0].degree, 3)  # E
        self.assertIsNone(board[0][2].degree)

    def test_names_follow_the_spelling(self) -> None:
        board = build_fretboard(STANDARD, 5, _spelling("F"))
        self.assertEqual(board[1][1].name, "Bb")
        self.assertEqual(board[0][2].name, "Gb")

    def test_get_and_iteration(self) -> None:
        board = build_fretboard(STANDARD, 3, _spelling())
        self.assertIsNone(board.get(6, 0))
        self.assertIsNone(board.get(0, 4))
        self.assertEqual(board.get(1, 2).tone, 11)
        self.assertEqual(len(list(board.points())), 6 * 4)
        self.assertEqual(len(board), 6)

    def test_negative_fret_count(self) -> None:
        with self.assertRaises(ConfigurationError):
            build_fretboard(STANDARD, -1, _spelling())


if __name__ == "__main__":
    unittest.main()
