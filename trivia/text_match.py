# trivia/text_match.py - Edit distance and fuzzy string comparison

from typing import Optional


def edit_distance(s1: str, s2: str) -> int:
    """
    Levenshtein distance between two strings.

    Counts the minimum number of single-character insertions, deletions and
    substitutions needed to turn s1 into s2. Only two rows of the matrix are
    kept in memory. Comparison is case-sensitive.
    """
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    prev = list(range(len(s2) + 1))
    curr = [0] * (len(s2) + 1)

    for i, c1 in enumerate(s1, start=1):
        curr[0] = i
        for j, c2 in enumerate(s2, start=1):
            cost = 0 if c1 == c2 else 1
            curr[j] = min(curr[j - 1] + 1, prev[j] + 1, prev[j - 1] + cost)
        prev, curr = curr, prev

    return prev[len(s2)]


def count_words(text: Optional[str]) -> int:
    """Number of whitespace-separated words, 0 for empty/blank input"""
    if not text or not text.strip():
        return 0
    return len(text.split())


def is_numeric(text: Optional[str], allowed: str = "") -> bool:
    """True if text is non-empty and made only of digits and allowed characters"""
    if not text:
        return False
    return all(c.isdigit() or c in allowed for c in text)


def fuzzy_equal(value: str, target: str, max_distance: int) -> bool:
    """Case-insensitive match allowing up to max_distance edits"""
    if value.lower() == target.lower():
        return True
    if max_distance <= 0:
        return False
    return edit_distance(value.lower(), target.lower()) <= max_distance


def fuzzy_equal_by_words(value: str, target: str, base_distance: int, per_word_distance: int) -> bool:
    """
    Fuzzy match whose tolerance grows with the length of the target.

    The allowed distance is base_distance + words(target) * per_word_distance,
    so "United States" gets more slack than "Paris".
    """
    if value.lower() == target.lower():
        return True

    max_distance = base_distance + count_words(target) * per_word_distance
    return fuzzy_equal(value, target, max_distance)
