import os
import tempfile
import unittest

from toguitar.board.fretboard import build_fretboard
from toguitar.errors import ConfigurationError
from toguitar.search.caged import CAGED_ORDER, caged_shapes, load_caged_shapes
from toguitar.theory.chords import derive_degree_chords
from toguitar.theory.chromatic import get_scale_note_all

STANDARD = ["E2", "A2", "D3", "G3", "B3", "E4"]


class CagedTests(unittest.TestCase):
    def setUp(self) -> None:
        spelling = get_scale_note_all(derive_degree_chords("C", "major"), "C", "major")
        self.board = build_fretboard(STANDARD, 16, spelling)

    def test_shape_letters(self) -> None:
        self.assertEqual(tuple(caged_shapes()), CAGED_ORDER)

    def test_open_position_is_unshifted(self) -> None:
        c = caged_shapes()["C"][0]
        self.assertEqual(c.name, "C")
        self.assertEqual({p.tone for p in c.taps(self.board)}, {0, 4, 7})

    def test_c_shape_two_frets_up_is_d(self) -> None:
        d = caged_shapes(2)["C"][0]
        self.assertEqual(d.tone, "D")
        self.assertEqual(d.positions, ((1, 5), (2, 4), (3, 2), (4, 3), (5, 2)))
        self.assertEqual({p.tone for p in d.taps(self.board)}, {2, 6, 9})

    def test_e_shape_variants_at_fifth_fret(self) -> None:
        shapes = caged_shapes(5)["E"]
        major, minor = shapes[0], shapes[1]
        self.assertEqual(major.name, "A")
        self.assertEqual({p.tone for p in major.taps(self.board)}, {9, 1, 4})
        self.assertEqual(minor.name, "Am")
        self.assertEqual({p.tone for p in minor.taps(self.board)}, {9, 0, 4})

    def test_positions_past_the_board_are_dropped(self) -> None:
        g = caged_shapes(15)["G"][0]
        taps = g.taps(self.board)
        self.assertLess(len(taps), len(g.positions))
        self.assertTrue(all(p.grade <= 16 for p in taps))

    def test_missing_file(self) -> None:
        with self.assertRaises(ConfigurationError):
            caged_shapes(path="/nonexistent/caged.yml")

    def test_malformed_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "caged.yml")
            with open(path, "w", encoding="utf-8") as f:
                f.write("shapes: {C: [unclosed\n")
            with self.assertRaises(ConfigurationError):
                load_caged_shapes(path)
            empty = os.path.join(tmp, "empty.yml")
            with open(empty, "w", encoding="utf-8") as f:
                f.write("shapes:\n  C:\n    - tag: \"\"\n      positions: []\n")
            with self.assertRaises(ConfigurationError):
                caged_shapes(path=empty)

    def test_callers_get_independent_copies(self) -> None:
        first = load_caged_shapes()
        first["C"][0]["positions"].clear()
        del first["E"]
        second = load_caged_shapes()
        self.assertIn("E", second)
        self.assertEqual(len(second["C"][0]["positions"]), 5)
        self.assertEqual(caged_shapes()["C"][0].positions[0], (1, 3))


if __name__ == "__main__":
    unittest.main()
