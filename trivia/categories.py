# trivia/categories.py - Open Trivia DB category catalogue

from dataclasses import dataclass
from typing import Dict, List, Optional, Union


@dataclass(frozen=True)
class CategoryMapping:
    """An OpenTDB category and the names it can be configured by"""
    category_id: int
    name: str  # Full name as returned by the API
    short_name: str  # Friendly name for config files


OPENTDB_CATEGORY_MAP: Dict[int, CategoryMapping] = {
    9: CategoryMapping(9, "General Knowledge", "General"),
    10: CategoryMapping(10, "Entertainment: Books", "Books"),
    11: CategoryMapping(11, "Entertainment: Film", "Film"),
    12: CategoryMapping(12, "Entertainment: Music", "Music"),
    13: CategoryMapping(13, "Entertainment: Musicals & Theatres", "Theatre"),
    14: CategoryMapping(14, "Entertainment: Television", "Television"),
    15: CategoryMapping(15, "Entertainment: Video Games", "Video Games"),
    16: CategoryMapping(16, "Entertainment: Board Games", "Board Games"),
    17: CategoryMapping(17, "Science & Nature", "Science"),
    18: CategoryMapping(18, "Science: Computers", "Computers"),
    19: CategoryMapping(19, "Science: Mathematics", "Math"),
    20: CategoryMapping(20, "Mythology", "Mythology"),
    21: CategoryMapping(21, "Sports", "Sports"),
    22: CategoryMapping(22, "Geography", "Geography"),
    23: CategoryMapping(23, "History", "History"),
    24: CategoryMapping(24, "Politics", "Politics"),
    25: CategoryMapping(25, "Art", "Art"),
    26: CategoryMapping(26, "Celebrities", "Celebrities"),
    27: CategoryMapping(27, "Animals", "Animals"),
    28: CategoryMapping(28, "Vehicles", "Vehicles"),
    29: CategoryMapping(29, "Entertainment: Comics", "Comics"),
    30: CategoryMapping(30, "Science: Gadgets", "Gadgets"),
    31: CategoryMapping(31, "Entertainment: Japanese Anime & Manga", "Anime & Manga"),
    32: CategoryMapping(32, "Entertainment: Cartoon & Animations", "Cartoons"),
}


def resolve_category(value: Union[int, str]) -> Optional[int]:
    """Map a category id or (full or short) name to its OpenTDB id"""
    if isinstance(value, int):
        return value if value in OPENTDB_CATEGORY_MAP else None

    text = str(value).strip()
    if text.isdigit():
        return resolve_category(int(text))

    lowered = text.lower()
    for mapping in OPENTDB_CATEGORY_MAP.values():
        if lowered in (mapping.name.lower(), mapping.short_name.lower()):
            return mapping.category_id
    return None


def get_category_name(category_id: int) -> Optional[str]:
    mapping = OPENTDB_CATEGORY_MAP.get(category_id)
    return mapping.name if mapping else None


def get_category_choices() -> List[str]:
    """Lines describing every category, for help output"""
    return [
        f"{mapping.category_id:>3}  {mapping.short_name:<14} {mapping.name}"
        for mapping in OPENTDB_CATEGORY_MAP.values()
    ]
