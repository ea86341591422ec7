# trivia/question_cache.py - Prefetching question cache for Open Trivia DB
#
# Questions are fetched in batches by scheduled background callbacks and
# served instantly from two in-memory queues. Callers never wait on the
# network: an empty queue simply yields None.

import logging
import random
import threading
import time
from collections import deque
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Deque, Dict, Optional, Tuple
from urllib.parse import urlencode

from trivia.models import FreeformQuestion, MultipleChoiceQuestion, RawQuestion
from trivia.providers import opentdb_parser
from trivia.providers.opentdb import API_BASE_URL, TOKEN_URL, OpenTDBClient
from trivia.scheduler import TICK_SECONDS, TaskScheduler, seconds_to_ticks
from trivia.settings import OpenTriviaSettings, get_config_value

logger = logging.getLogger(__name__)

BATCH_SIZE = 10
DEFAULT_RATE_LIMIT_SECONDS = 5.0
MAX_FREEFORM_ANSWER_WORDS = 3
MIN_DELAY_TICKS = 1
TOKEN_BOOTSTRAP_DELAY_TICKS = 20

TRUE_FALSE_PREFIX_KEY = "true-or-false-prefix"
DEFAULT_TRUE_FALSE_PREFIX = "True or false?"


class CacheKind(Enum):
    FREEFORM = "freeform"
    MULTIPLE_CHOICE = "multiple"

    @property
    def api_type(self) -> Optional[str]:
        """Value of the API's type filter; free-form takes any type"""
        return "multiple" if self is CacheKind.MULTIPLE_CHOICE else None


class TriviaCacheService:
    """
    Owns the free-form and multiple-choice question caches.

    One instance is created at startup and shared by every game. All API
    traffic goes through the scheduler, spaced at least rate_limit_seconds
    apart across both caches, and at most one refill per cache is pending or
    running at any time.
    """

    def __init__(self, client: OpenTDBClient, scheduler: TaskScheduler,
                 config_module=None, messages: Optional[Dict[str, str]] = None,
                 rate_limit_seconds: float = DEFAULT_RATE_LIMIT_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self._client = client
        self._scheduler = scheduler
        self._config = config_module
        self._messages = messages if messages is not None else get_config_value(config_module, "MESSAGES", {})
        self._rate_limit = rate_limit_seconds
        self._clock = clock

        # deque append/popleft are atomic, so games and refills share these freely
        self._caches: Dict[CacheKind, Deque[RawQuestion]] = {kind: deque() for kind in CacheKind}
        self._fetching: Dict[CacheKind, bool] = {kind: False for kind in CacheKind}

        self._lock = threading.Lock()
        self._session_token: Optional[str] = None
        self._last_request_time: Optional[float] = None
        self._token_requests_queued = 0
        self._initialized = False

        self.cache_hits = 0
        self.cache_misses = 0

    @property
    def session_token(self) -> Optional[str]:
        return self._session_token

    @property
    def debug(self) -> bool:
        return bool(get_config_value(self._config, "DEBUG", False))

    def cache_size(self, kind: CacheKind) -> int:
        return len(self._caches[kind])

    def is_fetching(self, kind: CacheKind) -> bool:
        return self._fetching[kind]

    def initialize(self) -> None:
        """Schedule the one-time session token request"""
        with self._lock:
            if self._initialized:
                return
            self._initialized = True

        logger.info("Initializing Open Trivia DB service...")
        if not self._schedule_token_request(self.fetch_session_token, TOKEN_BOOTSTRAP_DELAY_TICKS):
            # Try again on the next question request
            with self._lock:
                self._initialized = False

    # Question retrieval

    def get_freeform_question(self, settings: OpenTriviaSettings) -> Optional[FreeformQuestion]:
        """Next cached free-form question, or None if disabled or empty"""
        question = self._take(CacheKind.FREEFORM, settings)
        if question is None:
            return None

        prefix = self._messages.get(TRUE_FALSE_PREFIX_KEY, DEFAULT_TRUE_FALSE_PREFIX)
        return question.to_freeform(prefix)

    def get_multiple_choice_question(self, settings: OpenTriviaSettings) -> Optional[MultipleChoiceQuestion]:
        """Next cached multiple-choice question, or None if disabled or empty"""
        question = self._take(CacheKind.MULTIPLE_CHOICE, settings)
        if question is None:
            return None
        return question.to_multiple_choice()

    def _take(self, kind: CacheKind, settings: OpenTriviaSettings) -> Optional[RawQuestion]:
        if not settings.enabled:
            return None

        if not self._initialized:
            self.initialize()

        cache = self._caches[kind]
        try:
            question = cache.popleft()
        except IndexError:
            question = None

        if len(cache) < settings.refill_threshold:
            self.request_refill(kind, settings)

        with self._lock:
            if question is None:
                self.cache_misses += 1
            else:
                self.cache_hits += 1
        return question

    # Refilling

    def request_refill(self, kind: CacheKind, settings: OpenTriviaSettings) -> bool:
        """Schedule a background refill of one cache; True if one was scheduled"""
        with self._lock:
            if self._fetching[kind] or len(self._caches[kind]) >= settings.cache_size:
                return False
            self._fetching[kind] = True

        async def refill():
            with self._fetch_guard(kind):
                await self.fetch_questions(kind, settings)

        refill.__name__ = f"refill_{kind.value}"

        delay = self._schedule_api_call(refill)
        if delay is None:
            with self._lock:
                self._fetching[kind] = False
            return False

        if self.debug:
            logger.info(f"Scheduled {kind.value} refill in {delay} ticks")
        return True

    def _schedule_api_call(self, callback, min_ticks: int = MIN_DELAY_TICKS) -> Optional[int]:
        """Hand an API call to the scheduler in the next free slot; returns the delay"""
        delay, previous = self._reserve_request_slot(min_ticks)
        try:
            self._scheduler.run_delayed(callback, delay)
            return delay
        except Exception as e:
            # e.g. no event loop to run on during shutdown
            logger.error(f"Could not schedule {callback.__name__}: {e}", exc_info=True)
            with self._lock:
                self._last_request_time = previous
            return None

    @contextmanager
    def _fetch_guard(self, kind: CacheKind):
        """Clears the in-flight flag however the fetch ends"""
        try:
            yield
        finally:
            with self._lock:
                self._fetching[kind] = False

    def calculate_delay(self) -> int:
        """Ticks until the rate-limit window since the last request has passed"""
        if self._last_request_time is None:
            return MIN_DELAY_TICKS

        elapsed = self._clock() - self._last_request_time
        if elapsed >= self._rate_limit:
            return MIN_DELAY_TICKS
        return max(MIN_DELAY_TICKS, seconds_to_ticks(self._rate_limit - elapsed))

    def _reserve_request_slot(self, min_ticks: int = MIN_DELAY_TICKS) -> Tuple[int, Optional[float]]:
        """
        Pick the delay for a new API call and claim that slot.

        The claimed time is stored as the last request time so a call
        scheduled right after this one queues up behind it instead of
        firing in the same window. Returns the delay and the previous
        last request time, for releasing the slot if scheduling fails.
        """
        with self._lock:
            previous = self._last_request_time
            ticks = max(min_ticks, self.calculate_delay())
            self._last_request_time = self._clock() + ticks * TICK_SECONDS
            return ticks, previous

    def _mark_request_complete(self) -> None:
        with self._lock:
            now = self._clock()
            if self._last_request_time is None or now > self._last_request_time:
                self._last_request_time = now

    def build_api_url(self, kind: CacheKind, settings: OpenTriviaSettings) -> str:
        params = {"amount": str(BATCH_SIZE)}

        if kind.api_type:
            params["type"] = kind.api_type

        params["encode"] = "base64"

        if settings.categories:
            params["category"] = str(random.choice(settings.categories))

        if settings.difficulty:
            params["difficulty"] = settings.difficulty

        if self._session_token:
            params["token"] = self._session_token

        return f"{API_BASE_URL}?{urlencode(params)}"

    async def fetch_questions(self, kind: CacheKind, settings: OpenTriviaSettings) -> int:
        """Fetch one batch into the given cache; returns the number queued"""
        try:
            response = await self._client.get_text(self.build_api_url(kind, settings))
            if response is None:
                logger.warning("Failed to fetch questions from Open Trivia DB")
                return 0

            self._mark_request_complete()
            result = opentdb_parser.parse(response)

            if result.response_code == opentdb_parser.RESPONSE_SUCCESS:
                return self._store_questions(kind, result.questions)

            if result.response_code == opentdb_parser.RESPONSE_TOKEN_NOT_FOUND:
                logger.warning("Open Trivia DB token not found, requesting new token")
                self._schedule_token_request(self.fetch_session_token)
            elif result.response_code == opentdb_parser.RESPONSE_TOKEN_EMPTY:
                logger.info("Open Trivia DB token exhausted, resetting token")
                self._schedule_token_request(self.reset_session_token)
            else:
                logger.warning(f"Open Trivia DB API returned code: {result.response_code}")
            return 0

        except Exception as e:
            logger.error(f"Error fetching questions from Open Trivia DB: {e}", exc_info=True)
            return 0

    def _store_questions(self, kind: CacheKind, questions) -> int:
        cache = self._caches[kind]
        added = 0

        for question in questions:
            # Free-form games can't grade "which of these" or long answers fairly
            if kind is CacheKind.FREEFORM and not question.is_suitable_for_freeform(MAX_FREEFORM_ANSWER_WORDS):
                continue
            cache.append(question)
            added += 1

        if self.debug:
            if added < len(questions):
                logger.info(f"Fetched {added}/{len(questions)} {kind.value} questions from Open Trivia DB (filtered unsuitable)")
            else:
                logger.info(f"Fetched {added} {kind.value} questions from Open Trivia DB")
        return added

    # Session token

    def _schedule_token_request(self, operation: Callable, min_ticks: int = MIN_DELAY_TICKS,
                                follow_up: bool = False) -> bool:
        """
        Schedule a token acquisition or reset unless one is already queued.

        follow_up is for a token operation chaining into another; the new
        request counts as queued before the current one finishes, so nothing
        else slips in between.
        """
        with self._lock:
            if self._token_requests_queued and not follow_up:
                return False
            self._token_requests_queued += 1

        async def token_request():
            try:
                await operation()
            finally:
                with self._lock:
                    self._token_requests_queued -= 1

        token_request.__name__ = operation.__name__

        if self._schedule_api_call(token_request, min_ticks) is None:
            with self._lock:
                self._token_requests_queued -= 1
            return False
        return True

    async def fetch_session_token(self) -> Optional[str]:
        """Request a new session token; the old one is kept on failure"""
        try:
            response = await self._client.get_text(f"{TOKEN_URL}?{urlencode({'command': 'request'})}")
            if response is None:
                return None
            self._mark_request_complete()

            token = opentdb_parser.extract_token(response)
            if token is None:
                logger.warning("Open Trivia DB token response had no token")
                return None

            self._session_token = token
            if self.debug:
                logger.info("Obtained Open Trivia DB session token")
            return token

        except Exception as e:
            logger.error(f"Error fetching Open Trivia DB session token: {e}", exc_info=True)
            return None

    async def reset_session_token(self) -> bool:
        """
        Ask the API to forget which questions this token has seen.

        Without a token, or if the reset can't be delivered or is rejected,
        a fresh token is requested instead.
        """
        token = self._session_token
        if not token:
            await self.fetch_session_token()
            return False

        try:
            params = urlencode({"command": "reset", "token": token})
            response = await self._client.get_text(f"{TOKEN_URL}?{params}")
            if response is not None:
                self._mark_request_complete()
                status = opentdb_parser.parse_status(response)
                if status == opentdb_parser.RESPONSE_SUCCESS:
                    if self.debug:
                        logger.info("Reset Open Trivia DB session token")
                    return True
                logger.warning(f"Open Trivia DB token reset returned code: {status}")
        except Exception as e:
            logger.error(f"Error resetting Open Trivia DB session token: {e}", exc_info=True)

        # A token the server doesn't accept is safest replaced outright
        self._schedule_token_request(self.fetch_session_token, follow_up=True)
        return False

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics for debugging"""
        total = self.cache_hits + self.cache_misses
        return {
            'freeform_cached': self.cache_size(CacheKind.FREEFORM),
            'multiple_choice_cached': self.cache_size(CacheKind.MULTIPLE_CHOICE),
            'freeform_fetching': self.is_fetching(CacheKind.FREEFORM),
            'multiple_choice_fetching': self.is_fetching(CacheKind.MULTIPLE_CHOICE),
            'has_token': self._session_token is not None,
            'cache_hits': self.cache_hits,
            'cache_misses': self.cache_misses,
            'hit_rate': self.cache_hits / total if total > 0 else 0
        }
