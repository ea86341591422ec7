# trivia/providers/opentdb_parser.py - Response decoding for Open Trivia DB
#
# The API only ever answers with one of two small, fixed shapes, so responses
# are scanned by hand instead of going through a JSON library. Every lookup
# failure degrades to a missing field or an empty list; nothing here raises
# for string input.

import base64
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from trivia.models import RawQuestion

logger = logging.getLogger(__name__)

# Response codes documented at https://opentdb.com/api_config.php
RESPONSE_MALFORMED = -1
RESPONSE_SUCCESS = 0
RESPONSE_NO_RESULTS = 1
RESPONSE_INVALID_PARAMETER = 2
RESPONSE_TOKEN_NOT_FOUND = 3
RESPONSE_TOKEN_EMPTY = 4
RESPONSE_RATE_LIMIT = 5

_SIMPLE_ESCAPES = {
    '"': '"',
    '\\': '\\',
    '/': '/',
    'n': '\n',
    'r': '\r',
    't': '\t',
    'b': '\b',
    'f': '\f',
}


@dataclass(frozen=True)
class ParseResult:
    """Outcome of one API round trip"""
    response_code: int
    questions: List[RawQuestion] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.response_code == RESPONSE_SUCCESS


def decode_base64(value: Optional[str]) -> Optional[str]:
    """Decode a base64 transport value, returning it untouched if it isn't one"""
    if not value:
        return value
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except ValueError:
        # Covers binascii.Error and UnicodeDecodeError: plain-text response
        return value


def unescape_json(value: Optional[str]) -> Optional[str]:
    """Resolve the standard JSON escapes; unknown escapes are kept as written"""
    if value is None or "\\" not in value:
        return value

    result = []
    i = 0
    while i < len(value):
        c = value[i]
        if c == "\\" and i + 1 < len(value) and value[i + 1] in _SIMPLE_ESCAPES:
            result.append(_SIMPLE_ESCAPES[value[i + 1]])
            i += 2
            continue
        result.append(c)
        i += 1
    return "".join(result)


def find_closing_quote(text: str, start: int) -> int:
    """Index of the quote ending a string whose body starts at start, or -1"""
    i = start
    while i < len(text):
        c = text[i]
        if c == "\\" and i + 1 < len(text):
            i += 2
            continue
        if c == '"':
            return i
        i += 1
    return -1


def find_matching(text: str, start: int, open_char: str, close_char: str) -> int:
    """
    Index of the bracket closing the one at start, or -1.

    Quoted strings are skipped, including escaped quotes inside them, so
    braces or brackets that appear in question text never shift the depth.
    """
    if start < 0 or start >= len(text) or text[start] != open_char:
        return -1

    depth = 1
    i = start + 1
    while i < len(text):
        c = text[i]
        if c == '"':
            end = find_closing_quote(text, i + 1)
            if end == -1:
                return -1
            i = end + 1
            continue
        if c == open_char:
            depth += 1
        elif c == close_char:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _iter_objects(text: str, start: int, end: int) -> Iterator[Tuple[int, int]]:
    """Yield (start, end) of each top-level {...} between start and end"""
    pos = start
    while pos < end:
        obj_start = text.find("{", pos, end)
        if obj_start == -1:
            return
        obj_end = find_matching(text, obj_start, "{", "}")
        if obj_end == -1 or obj_end > end:
            return
        yield obj_start, obj_end
        pos = obj_end + 1


def _find_value_start(text: str, key: str) -> int:
    """Index just past the colon following "key", or -1"""
    key_pos = text.find(f'"{key}"')
    if key_pos == -1:
        return -1
    colon = text.find(":", key_pos + len(key) + 2)
    if colon == -1:
        return -1
    return colon + 1


def extract_string_value(text: str, key: str) -> Optional[str]:
    """Unescaped string value of "key", or None if absent or not a string"""
    pos = _find_value_start(text, key)
    if pos == -1:
        return None

    while pos < len(text) and text[pos].isspace():
        pos += 1
    if pos >= len(text) or text[pos] != '"':
        return None

    end = find_closing_quote(text, pos + 1)
    if end == -1:
        return None
    return unescape_json(text[pos + 1:end])


def extract_string_array(text: str, key: str) -> List[str]:
    """Decoded string elements of the array under "key", [] on any problem"""
    values: List[str] = []
    pos = _find_value_start(text, key)
    if pos == -1:
        return values

    array_start = text.find("[", pos)
    array_end = find_matching(text, array_start, "[", "]")
    if array_end == -1:
        return values

    pos = array_start + 1
    while pos < array_end:
        quote = text.find('"', pos, array_end)
        if quote == -1:
            break
        end = find_closing_quote(text, quote + 1)
        if end == -1 or end > array_end:
            break
        values.append(decode_base64(unescape_json(text[quote + 1:end])))
        pos = end + 1
    return values


def parse_status(text: str) -> int:
    """The response_code of a response, or RESPONSE_MALFORMED"""
    pos = _find_value_start(text, "response_code")
    if pos == -1:
        return RESPONSE_MALFORMED

    while pos < len(text) and text[pos].isspace():
        pos += 1

    end = pos
    if end < len(text) and text[end] == "-":
        end += 1
    while end < len(text) and text[end].isdigit():
        end += 1

    try:
        return int(text[pos:end])
    except ValueError:
        return RESPONSE_MALFORMED


def parse_question(text: str) -> Optional[RawQuestion]:
    """Build a RawQuestion from one results object, None if it is incomplete"""
    question = decode_base64(extract_string_value(text, "question"))
    correct_answer = decode_base64(extract_string_value(text, "correct_answer"))

    if question is None or correct_answer is None:
        return None

    return RawQuestion(
        category=decode_base64(extract_string_value(text, "category")),
        difficulty=decode_base64(extract_string_value(text, "difficulty")),
        question=question,
        correct_answer=correct_answer,
        incorrect_answers=tuple(extract_string_array(text, "incorrect_answers")),
    )


def parse(text: str) -> ParseResult:
    """Decode an api.php response into its status and questions"""
    response_code = parse_status(text)
    if response_code != RESPONSE_SUCCESS:
        return ParseResult(response_code)

    results_pos = text.find('"results"')
    if results_pos == -1:
        return ParseResult(response_code)

    array_start = text.find("[", results_pos)
    array_end = find_matching(text, array_start, "[", "]")
    if array_end == -1:
        logger.debug("Results array is not terminated, treating as empty")
        return ParseResult(response_code)

    questions = []
    skipped = 0
    for obj_start, obj_end in _iter_objects(text, array_start + 1, array_end):
        question = parse_question(text[obj_start:obj_end + 1])
        if question is None:
            skipped += 1
            continue
        questions.append(question)

    if skipped:
        logger.debug(f"Skipped {skipped} incomplete question records")

    return ParseResult(response_code, questions)


def extract_token(text: str) -> Optional[str]:
    """Session token from an api_token.php response"""
    token = extract_string_value(text, "token")
    return token or None
