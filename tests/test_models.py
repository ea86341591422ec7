"""
Unit tests for question classification and rendering.
"""
import random
import unittest
from collections import Counter

from trivia.models import Difficulty, MultipleChoiceQuestion, RawQuestion


def make_question(question="What is the capital of France?", correct="Paris",
                  incorrect=("London", "Berlin", "Madrid")) -> RawQuestion:
    return RawQuestion(
        category="Geography",
        difficulty="easy",
        question=question,
        correct_answer=correct,
        incorrect_answers=tuple(incorrect),
    )


class TestClassification(unittest.TestCase):

    def test_true_false(self):
        self.assertTrue(make_question(correct="True", incorrect=("False",)).is_true_false())
        self.assertTrue(make_question(correct="false", incorrect=("True",)).is_true_false())
        self.assertFalse(make_question().is_true_false())

    def test_unsuitable_phrasing(self):
        for text in ["Which planet is largest?", "What are the colours of the flag?",
                     "This is not a real question, right?", "In WHICH year?"]:
            self.assertFalse(make_question(question=text).is_suitable_for_freeform(3), text)

    def test_answer_word_limit(self):
        self.assertTrue(make_question(correct="The Great Wall").is_suitable_for_freeform(3))
        self.assertFalse(make_question(correct="The Great Wall Of").is_suitable_for_freeform(3))

    def test_plain_question_is_suitable(self):
        self.assertTrue(make_question().is_suitable_for_freeform(3))


class TestFreeformRendering(unittest.TestCase):

    def test_true_false_prefix(self):
        question = make_question(question="The sky is blue.", correct="True", incorrect=("False",))
        rendered = question.to_freeform("True or false?")
        self.assertEqual(rendered.question, "True or false? The sky is blue.")
        self.assertEqual(rendered.answer, "True")

    def test_no_prefix_for_regular_questions(self):
        rendered = make_question().to_freeform("True or false?")
        self.assertEqual(rendered.question, "What is the capital of France?")
        self.assertEqual(rendered.answer, "Paris")

    def test_empty_prefix(self):
        question = make_question(question="The sky is blue.", correct="True")
        self.assertEqual(question.to_freeform("").question, "The sky is blue.")
        self.assertEqual(question.to_freeform(None).question, "The sky is blue.")


class TestMultipleChoiceRendering(unittest.TestCase):

    def test_labels_and_correct_letter(self):
        question = make_question()
        for seed in range(20):
            rendered = question.to_multiple_choice(random.Random(seed))

            self.assertEqual(len(rendered.answers), 4)
            self.assertEqual([a[:3] for a in rendered.answers], ["A. ", "B. ", "C. ", "D. "])

            index = ord(rendered.correct_answer) - ord("A")
            self.assertEqual(rendered.answers[index], f"{rendered.correct_answer}. Paris")
            self.assertEqual(sorted(a[3:] for a in rendered.answers), ["Berlin", "London", "Madrid", "Paris"])

    def test_no_incorrect_answers(self):
        rendered = make_question(incorrect=()).to_multiple_choice()
        self.assertEqual(rendered.answers, ("A. Paris",))
        self.assertEqual(rendered.correct_answer, "A")

    def test_shuffle_moves_correct_answer(self):
        question = make_question()
        rng = random.Random(1234)
        letters = Counter(question.to_multiple_choice(rng).correct_answer for _ in range(400))
        self.assertEqual(set(letters), {"A", "B", "C", "D"})

    def test_is_correct(self):
        rendered = MultipleChoiceQuestion("Q?", ("A. x", "B. y"), "B")
        self.assertTrue(rendered.is_correct("b"))
        self.assertTrue(rendered.is_correct(" B "))
        self.assertFalse(rendered.is_correct("A"))


class TestDifficulty(unittest.TestCase):

    def test_values(self):
        self.assertEqual(Difficulty("hard"), Difficulty.HARD)
        with self.assertRaises(ValueError):
            Difficulty("impossible")


if __name__ == '__main__':
    unittest.main()
