import logging
from typing import Dict, List, Mapping, Optional, Tuple

from ..config.constants import KEYWORD_SETS
from .categories import Category, match_category

logger = logging.getLogger(__name__)


class KeywordMatcher:
    """Static keyword rules shared by the statistical scorer"""

    @staticmethod
    def get_keyword_sets() -> Mapping[str, Tuple[str, ...]]:
        """Topic label -> keyword substrings, read-only"""
        return KEYWORD_SETS

    @staticmethod
    def contains_keywords(text: str, keywords: List[str]) -> bool:
        """Check if text contains any of the given keywords (case-insensitive substring)"""
        lowercase_text = text.lower()
        return any(keyword.lower() in lowercase_text for keyword in keywords if keyword)

    @classmethod
    def find_topic_for_name(cls, category_name: str) -> Optional[str]:
        """
        Find the keyword topic that best fits a category name: an exact
        (case-insensitive) label match first, then a substring match in
        either direction. Returns None when nothing fits.
        """
        name = category_name.strip().lower()
        if not name:
            return None

        topics = list(cls.get_keyword_sets())
        for topic in topics:
            if topic.lower() == name:
                return topic
        for topic in topics:
            label = topic.lower()
            if label in name or name in label:
                return topic
        return None

    @classmethod
    def find_category_for_topic(cls, categories: List[Category], topic: str) -> Optional[Category]:
        """Resolve a topic label to a category with the same fuzzy rule"""
        return match_category(categories, topic)

    @classmethod
    def get_keyword_sets_by_id(cls, categories: List[Category]) -> Dict[int, List[str]]:
        """
        Map each category id to the keyword list of its best matching topic.
        Categories without a matching topic get their own lowercased name as
        the only keyword. Rebuild whenever the taxonomy changes.
        """
        keyword_sets = cls.get_keyword_sets()
        keyword_map = {}

        for category in categories:
            topic = cls.find_topic_for_name(category.name)
            if topic is not None:
                keyword_map[category.id] = list(keyword_sets[topic])
                logger.debug(f"Category '{category.name}' uses keyword set '{topic}'")
            else:
                keyword_map[category.id] = [category.name.lower()]

        return keyword_map
