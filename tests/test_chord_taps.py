import unittest

from toguitar.board.fretboard import build_fretboard
from toguitar.search.chord_taps import (
    ChordTapOptions,
    find_chord_taps,
    get_chord_taps,
    get_taps_on_board,
)
from toguitar.theory.chords import derive_degree_chords
from toguitar.theory.chromatic import get_scale_note_all

STANDARD = ["E2", "A2", "D3", "G3", "B3", "E4"]


def _board(frets=12, key="C", mode="major"):
    chords = derive_degree_chords(key, mode)
    return build_fretboard(STANDARD, frets, get_scale_note_all(chords, key, mode)), chords


class ChordTapTests(unittest.TestCase):
    def setUp(self) -> None:
        self.board, self.chords = _board()
        self.c_major = self.chords[0]

    def test_open_c_shape_is_found_and_ranked_high(self) -> None:
        taps = get_chord_taps(self.c_major, self.board)
        frets = [t.frets for t in taps]
        self.assertIn((None, 3, 2, 0, 1, 0), frets)
        idx = frets.index((None, 3, 2, 0, 1, 0))
        for later in taps:
            if later.open_count == 0:
                self.assertGreater(taps.index(later), idx)
        self.assertEqual(taps[idx].chord, "C")

    def test_every_tap_is_playable(self) -> None:
        taps = get_chord_taps(self.c_major, self.board)
        self.assertTrue(taps)
        for tap in taps:
            self.assertTrue({0, 4, 7}.issubset(tap.tones))
            self.assertLessEqual(tap.span, 3)
            self.assertEqual(tap.bass.tone, 0)
            strings = sorted(p.string for p in tap.points)
            self.assertEqual(len(strings), len(set(strings)))
            # no muted string between two played strings
            self.assertEqual(strings, list(range(strings[0], strings[-1] + 1)))

    def test_inverted_bass(self) -> None:
        first_inversion = self.c_major.with_bass(1)
        taps = get_chord_taps(first_inversion, self.board)
        self.assertTrue(taps)
        self.assertTrue(all(t.bass.tone == 4 for t in taps))
        self.assertIn((0, 3, 2, 0, 1, 0), [t.frets for t in taps])

    def test_range_outside_board(self) -> None:
        opts = ChordTapOptions(fret_range=(20, 24))
        self.assertEqual(get_chord_taps(self.c_major, self.board, opts), [])

    def test_too_few_strings(self) -> None:
        opts = ChordTapOptions(max_strings=2)
        self.assertEqual(get_chord_taps(self.c_major, self.board, opts), [])

    def test_limit_and_fret_range(self) -> None:
        taps = get_chord_taps(self.c_major, self.board, ChordTapOptions(limit=3))
        self.assertLessEqual(len(taps), 3)
        upper = get_chord_taps(self.c_major, self.board, ChordTapOptions(fret_range=(7, 10)))
        self.assertTrue(upper)
        for tap in upper:
            self.assertTrue(all(7 <= p.grade <= 10 for p in tap.points))

    def test_span_first_ranking(self) -> None:
        taps = get_chord_taps(self.c_major, self.board, ChordTapOptions(prefer_open=False))
        spans = [t.span for t in taps]
        self.assertEqual(spans, sorted(spans))

    def test_inner_mutes_widen_the_search(self) -> None:
        strict = find_chord_taps((0, 4, 7), self.board)
        loose = find_chord_taps((0, 4, 7), self.board, ChordTapOptions(allow_inner_mute=True))
        self.assertGreater(len(loose), len(strict))
        strict_frets = {t.frets for t in strict}
        self.assertTrue(strict_frets.issubset({t.frets for t in loose}))

    def test_results_are_copies(self) -> None:
        tap = get_chord_taps(self.c_major, self.board)[0]
        point = tap.points[0]
        point.status = "checked"
        self.assertIsNone(self.board[point.string][point.grade].status)

    def test_empty_tones(self) -> None:
        self.assertEqual(find_chord_taps([], self.board), [])


class TapsOnBoardTests(unittest.TestCase):
    def test_positions_resolve_to_points(self) -> None:
        board, _ = _board()
        points = get_taps_on_board([(0, 3), (9, 9), (1, 13)], board)
        self.assertEqual(len(points), 1)
        self.assertEqual(points[0].tone, 7)
        self.assertIsNot(points[0], board[0][3])


if __name__ == "__main__":
    unittest.main()
