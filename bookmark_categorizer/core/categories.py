import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..config.constants import DEFAULT_CATEGORY_NAME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Category:
    """A user-defined bookmark category, supplied by the caller's store"""
    id: int
    name: str
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Category':
        return cls(
            id=int(data['id']),
            name=str(data.get('name') or ''),
            description=data.get('description')
        )


def load_categories(raw_categories: Iterable[Any]) -> List[Category]:
    """Accept Category objects or plain dicts and reject an empty taxonomy"""
    categories = [
        cat if isinstance(cat, Category) else Category.from_dict(cat)
        for cat in raw_categories
    ]
    if not categories:
        raise ValueError("At least one category is required for categorization")
    return categories


def find_category_by_name(categories: List[Category], name: str) -> Optional[Category]:
    """Exact, case-insensitive name match"""
    wanted = name.strip().lower()
    for category in categories:
        if category.name.lower() == wanted:
            return category
    return None


def find_category_by_partial_name(categories: List[Category], name: str) -> Optional[Category]:
    """Substring match in either direction, first category in taxonomy order wins"""
    wanted = name.strip().lower()
    if not wanted:
        return None
    for category in categories:
        category_name = category.name.lower()
        if not category_name:
            continue
        if wanted in category_name or category_name in wanted:
            return category
    return None


def match_category(categories: List[Category], name: Optional[str]) -> Optional[Category]:
    """
    Resolve a free-text name to a category: exact match first, then substring
    match in either direction. Blank names never match.
    """
    if not name or not name.strip():
        return None
    return find_category_by_name(categories, name) or find_category_by_partial_name(categories, name)


def get_default_category(categories: List[Category]) -> Category:
    """The 'Uncategorized' category, or the first category when none is named so"""
    if not categories:
        raise ValueError("Cannot pick a default category from an empty taxonomy")
    return find_category_by_name(categories, DEFAULT_CATEGORY_NAME) or categories[0]
