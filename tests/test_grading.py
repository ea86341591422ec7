"""
Unit tests for free-form answer grading.
"""
import unittest

from trivia.grading import check_freeform_answer
from trivia.settings import FuzzyMatchSettings


class TestCheckFreeformAnswer(unittest.TestCase):

    def setUp(self):
        self.per_word = FuzzyMatchSettings(enabled=True, min_length=4, mode="per-word",
                                           base_distance=1, per_word_distance=1)
        self.fixed = FuzzyMatchSettings(enabled=True, min_length=4, mode="fixed",
                                        base_distance=1, per_word_distance=5)
        self.disabled = FuzzyMatchSettings(enabled=False)

    def test_exact_match_any_case(self):
        self.assertTrue(check_freeform_answer("paris", "Paris", self.disabled))
        self.assertTrue(check_freeform_answer("  PARIS ", "Paris", self.disabled))

    def test_typo_rejected_when_fuzzy_disabled(self):
        self.assertFalse(check_freeform_answer("Pari", "Paris", self.disabled))

    def test_per_word_mode(self):
        self.assertTrue(check_freeform_answer("Unted Stats", "United States", self.per_word))
        self.assertFalse(check_freeform_answer("Germany", "United States", self.per_word))

    def test_fixed_mode_ignores_word_count(self):
        self.assertTrue(check_freeform_answer("Unite States", "United States", self.fixed))
        self.assertFalse(check_freeform_answer("Unted Stats", "United States", self.fixed))

    def test_short_answers_are_exact_only(self):
        self.assertFalse(check_freeform_answer("Zeu", "Zeus", FuzzyMatchSettings(enabled=True, min_length=5)))
        self.assertTrue(check_freeform_answer("Zeu", "Zeus", FuzzyMatchSettings(enabled=True, min_length=4)))

    def test_numbers_are_exact_only(self):
        self.assertFalse(check_freeform_answer("1946", "1945", self.per_word))
        self.assertFalse(check_freeform_answer("-12.6", "-12.5", self.per_word))
        self.assertTrue(check_freeform_answer("1945", "1945", self.per_word))

    def test_mode_is_case_insensitive(self):
        settings = FuzzyMatchSettings(enabled=True, mode="PER-WORD", base_distance=0, per_word_distance=1)
        self.assertTrue(check_freeform_answer("Pari", "Paris", settings))


if __name__ == '__main__':
    unittest.main()
