# trivia/providers/__init__.py - Open Trivia DB transport and response decoding

from trivia.providers.opentdb import OpenTDBClient, API_BASE_URL, TOKEN_URL
from trivia.providers.opentdb_parser import ParseResult, parse, parse_status, decode_base64

__all__ = [
    "OpenTDBClient",
    "API_BASE_URL",
    "TOKEN_URL",
    "ParseResult",
    "parse",
    "parse_status",
    "decode_base64",
]
