# trivia/grading.py - Free-form answer checking

import logging

from trivia.settings import FuzzyMatchSettings
from trivia.text_match import fuzzy_equal, fuzzy_equal_by_words, is_numeric

logger = logging.getLogger(__name__)

PER_WORD_MODE = "per-word"


def check_freeform_answer(candidate: str, correct_answer: str, fuzzy: FuzzyMatchSettings) -> bool:
    """
    Grade a typed answer against the correct one.

    Exact (case-insensitive) matches always win. Fuzzy tolerance is only
    applied to answers at least fuzzy.min_length long and never to numbers,
    where a single typo changes the meaning ("1945" vs "1946").
    """
    candidate = candidate.strip()

    if candidate.lower() == correct_answer.lower():
        return True

    if not fuzzy.enabled:
        return False

    if len(correct_answer) < fuzzy.min_length or is_numeric(correct_answer, "-."):
        return False

    if fuzzy.mode.lower() == PER_WORD_MODE:
        matched = fuzzy_equal_by_words(candidate, correct_answer, fuzzy.base_distance, fuzzy.per_word_distance)
    else:
        matched = fuzzy_equal(candidate, correct_answer, fuzzy.base_distance)

    if matched:
        logger.debug(f"Fuzzy matched '{candidate}' to '{correct_answer}'")
    return matched
