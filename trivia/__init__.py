"""
Trivia Question Feed

Prefetching Open Trivia DB client with free-form and multiple-choice caches,
plus fuzzy answer grading for typed answers.
"""

from .models import Difficulty, FreeformQuestion, MultipleChoiceQuestion, RawQuestion
from .settings import FuzzyMatchSettings, OpenTriviaSettings
from .grading import check_freeform_answer
from .question_cache import CacheKind, TriviaCacheService

__all__ = [
    'Difficulty',
    'FreeformQuestion',
    'MultipleChoiceQuestion',
    'RawQuestion',
    'FuzzyMatchSettings',
    'OpenTriviaSettings',
    'check_freeform_answer',
    'CacheKind',
    'TriviaCacheService',
]
