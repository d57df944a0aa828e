import unittest

from toguitar.errors import ConfigurationError
from toguitar.theory.keys import (
    default_key_name,
    key_accidental,
    key_name,
    spell,
    spell_scale,
    transpose_name,
)
from toguitar.theory.scales import MODE_PATTERNS, Mode, build_scale_pcs, degree_to_pc, get_mode


class ModeTableTests(unittest.TestCase):
    def test_every_pattern_spans_an_octave(self) -> None:
        for name, steps in MODE_PATTERNS.items():
            self.assertEqual(sum(steps), 12, name)

    def test_degree_counts(self) -> None:
        self.assertEqual(get_mode("major").degree_count, 7)
        self.assertEqual(get_mode("minor-pentatonic").degree_count, 5)
        self.assertEqual(get_mode("major-pentatonic").degree_count, 5)
        self.assertEqual(get_mode("blues").degree_count, 6)
        self.assertEqual(len(get_mode("locrian")), 7)

    def test_aliases(self) -> None:
        self.assertEqual(get_mode("aeolian").name, "minor")
        self.assertEqual(get_mode("natural_minor").name, "minor")
        self.assertEqual(get_mode("Ionian").name, "major")
        self.assertEqual(get_mode("minor_pentatonic").name, "minor-pentatonic")

    def test_unknown_and_degenerate_modes(self) -> None:
        with self.assertRaises(ConfigurationError):
            get_mode("hypolydian")
        with self.assertRaises(ConfigurationError):
            get_mode(Mode("short", (2, 2, 2)))
        with self.assertRaises(ConfigurationError):
            get_mode(Mode("negative", (14, -2)))

    def test_degree_helpers(self) -> None:
        self.assertEqual(degree_to_pc("major", 5), 7)
        self.assertEqual(degree_to_pc("harmonic-minor", 7), 11)
        self.assertEqual(build_scale_pcs("minor-pentatonic", "A"), [9, 0, 2, 4, 7])


class SpellingTests(unittest.TestCase):
    def test_seven_note_scales_use_every_letter(self) -> None:
        self.assertEqual(spell_scale("C", "major"), ["C", "D", "E", "F", "G", "A", "B"])
        self.assertEqual(spell_scale("F#", "major"), ["F#", "G#", "A#", "B", "C#", "D#", "E#"])
        self.assertEqual(spell_scale("A", "harmonic-minor"), ["A", "B", "C", "D", "E", "F", "G#"])
        self.assertEqual(spell_scale("Eb", "major"), ["Eb", "F", "G", "Ab", "Bb", "C", "D"])

    def test_short_scales_use_degree_letters(self) -> None:
        self.assertEqual(spell_scale("A", "minor-pentatonic"), ["A", "C", "D", "E", "G"])
        self.assertEqual(spell_scale("C", "major-pentatonic"), ["C", "D", "E", "G", "A"])
        self.assertEqual(spell_scale("A", "blues"), ["A", "C", "D", "Eb", "E", "G"])

    def test_key_direction(self) -> None:
        self.assertEqual(key_accidental("F"), "b")
        self.assertEqual(key_accidental("G"), "#")
        self.assertEqual(key_accidental("D", "minor"), "b")
        self.assertEqual(key_accidental("Db"), "b")

    def test_spell_in_and_out_of_key(self) -> None:
        self.assertEqual(spell(10, "F"), "Bb")
        self.assertEqual(spell(6, "F"), "Gb")
        self.assertEqual(spell(6, "G"), "F#")
        self.assertEqual(spell(10, "D"), "A#")
        self.assertEqual(spell(5, "F#"), "E#")

    def test_key_names(self) -> None:
        self.assertEqual(default_key_name(1, "major"), "Db")
        self.assertEqual(default_key_name(1, "minor"), "C#")
        self.assertEqual(key_name("c#"), "C#")
        self.assertEqual(key_name(10), "Bb")
        with self.assertRaises(ConfigurationError):
            key_name("Q")

    def test_transpose_name_keeps_direction(self) -> None:
        self.assertEqual(transpose_name("C", 2), "D")
        self.assertEqual(transpose_name("A", 1), "A#")
        self.assertEqual(transpose_name("Bb", 2), "C")
        self.assertEqual(transpose_name("Eb", 3), "Gb")
        self.assertEqual(transpose_name("E", -12), "E")


if __name__ == "__main__":
    unittest.main()
