"""
Core functionality for the bookmark categorizer.
This package contains text normalization, keyword rules, the TF-IDF and
LLM categorizers, and the chain that combines them.
"""

from .categories import Category, get_default_category
from .llm_categorizer import LLMCategorizer
from .ml_categorizer import MLCategorizer, create_categorizer
from .tfidf_categorizer import TfIdfCategorizer

__all__ = [
    'Category',
    'LLMCategorizer',
    'MLCategorizer',
    'TfIdfCategorizer',
    'create_categorizer',
    'get_default_category',
]
