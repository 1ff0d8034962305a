from typing import Iterable, List, Optional

from .categories import Category, get_default_category, load_categories, match_category


class BaseCategorizer:
    """
    Abstract interface for one stage of the categorization chain.

    A stage returns a category id, or None when it cannot decide, which hands
    the text to the next stage. Stages never raise for bad input text or
    remote failures.
    """

    name = 'base'

    def __init__(self, categories: Iterable):
        self.categories: List[Category] = load_categories(categories)

    def categorize(self, text: str) -> Optional[int]:
        raise NotImplementedError("categorize must be implemented by subclasses")

    def categorize_batch(self, texts: List[str]) -> List[Optional[int]]:
        """Default batch behaviour: one categorize call per text, order preserved"""
        return [self.categorize(text) for text in texts]

    def get_default_category_id(self) -> int:
        return get_default_category(self.categories).id

    def resolve_category_name(self, name: Optional[str]) -> Optional[int]:
        """Map a predicted category name onto the taxonomy, None if it does not fit"""
        category = match_category(self.categories, name)
        return category.id if category else None
