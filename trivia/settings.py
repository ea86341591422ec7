# trivia/settings.py - Settings consumed by the question service and grader

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from trivia.categories import resolve_category
from trivia.models import Difficulty

logger = logging.getLogger(__name__)


def get_config_value(config_module, key: str, default: Any) -> Any:
    """Get configuration value with fallback to default"""
    if config_module is not None and hasattr(config_module, key):
        value = getattr(config_module, key)
        if value is not None or default is None:
            return value
    return default


@dataclass(frozen=True)
class OpenTriviaSettings:
    enabled: bool = False
    cache_size: int = 20
    refill_threshold: int = 5
    categories: Tuple[int, ...] = ()
    difficulty: Optional[str] = None

    def __post_init__(self):
        if self.difficulty is None:
            return
        try:
            normalized = Difficulty(str(self.difficulty).lower()).value
        except ValueError:
            logger.warning(f"Ignoring unknown difficulty '{self.difficulty}'")
            normalized = None
        # Frozen dataclass: write through object.__setattr__
        object.__setattr__(self, "difficulty", normalized)


@dataclass(frozen=True)
class FuzzyMatchSettings:
    enabled: bool = False
    min_length: int = 4
    mode: str = "per-word"
    base_distance: int = 1
    per_word_distance: int = 1


def resolve_categories(values: Iterable[Any]) -> Tuple[int, ...]:
    """Turn configured category ids/names into OpenTDB ids, skipping unknowns"""
    resolved = []
    for value in values or ():
        category_id = resolve_category(value)
        if category_id is None:
            logger.warning(f"Unknown Open Trivia DB category '{value}' - skipping")
            continue
        if category_id not in resolved:
            resolved.append(category_id)
    return tuple(resolved)


def load_open_trivia_settings(config_module=None) -> OpenTriviaSettings:
    defaults = OpenTriviaSettings()
    return OpenTriviaSettings(
        enabled=bool(get_config_value(config_module, "OPENTDB_ENABLED", defaults.enabled)),
        cache_size=int(get_config_value(config_module, "OPENTDB_CACHE_SIZE", defaults.cache_size)),
        refill_threshold=int(get_config_value(config_module, "OPENTDB_REFILL_THRESHOLD", defaults.refill_threshold)),
        categories=resolve_categories(get_config_value(config_module, "OPENTDB_CATEGORIES", ())),
        difficulty=get_config_value(config_module, "OPENTDB_DIFFICULTY", None) or None,
    )


def load_fuzzy_match_settings(config_module=None) -> FuzzyMatchSettings:
    defaults = FuzzyMatchSettings()
    return FuzzyMatchSettings(
        enabled=bool(get_config_value(config_module, "FUZZY_ENABLED", defaults.enabled)),
        min_length=int(get_config_value(config_module, "FUZZY_MIN_LENGTH", defaults.min_length)),
        mode=str(get_config_value(config_module, "FUZZY_MODE", defaults.mode)),
        base_distance=int(get_config_value(config_module, "FUZZY_BASE_DISTANCE", defaults.base_distance)),
        per_word_distance=int(get_config_value(config_module, "FUZZY_PER_WORD_DISTANCE", defaults.per_word_distance)),
    )
