import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from trivia.text_match import count_words

# Phrasings that expect one of the listed options or admit several answers
UNSUITABLE_FREEFORM_PHRASES = ("which", "what are", "is not")


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class FreeformQuestion:
    question: str
    answer: str


@dataclass(frozen=True)
class MultipleChoiceQuestion:
    question: str
    answers: Tuple[str, ...]  # "A. ...", "B. ...", in display order
    correct_answer: str  # letter of the correct option

    def is_correct(self, letter: str) -> bool:
        return letter.strip().upper() == self.correct_answer


@dataclass(frozen=True)
class RawQuestion:
    """A question as delivered by Open Trivia DB, already decoded"""
    category: Optional[str]
    difficulty: Optional[str]
    question: str
    correct_answer: str
    incorrect_answers: Tuple[str, ...] = ()

    def is_true_false(self) -> bool:
        return self.correct_answer.lower() in ("true", "false")

    def is_suitable_for_freeform(self, max_answer_words: int) -> bool:
        """
        Check whether the question can be answered by typing it out.

        Questions that refer to the options ("Which of these...") or that
        have several valid answers are rejected, as are answers too long to
        reasonably type exactly.
        """
        lower_question = self.question.lower()
        if any(phrase in lower_question for phrase in UNSUITABLE_FREEFORM_PHRASES):
            return False
        return count_words(self.correct_answer) <= max_answer_words

    def to_freeform(self, true_false_prefix: Optional[str] = None) -> FreeformQuestion:
        """Render as a typed-answer question, prefixing true/false statements"""
        if self.is_true_false() and true_false_prefix:
            text = f"{true_false_prefix} {self.question}"
        else:
            text = self.question
        return FreeformQuestion(text, self.correct_answer)

    def to_multiple_choice(self, rng: Optional[random.Random] = None) -> MultipleChoiceQuestion:
        """Render with shuffled, lettered options (A., B., ...)"""
        options = [self.correct_answer, *self.incorrect_answers]
        (rng or random).shuffle(options)

        # First match wins if the API repeats the correct text among the wrong ones
        correct_letter = chr(ord("A") + options.index(self.correct_answer))
        labelled = tuple(f"{chr(ord('A') + i)}. {option}" for i, option in enumerate(options))

        return MultipleChoiceQuestion(self.question, labelled, correct_letter)
