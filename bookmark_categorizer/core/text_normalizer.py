"""
Text normalization for bookmark categorization.
Lowercases post text, splits it into alphanumeric tokens and drops English stopwords.
"""

import logging
import re
from functools import lru_cache
from typing import FrozenSet, Iterable, List, Optional

import nltk
from nltk.corpus import stopwords

logger = logging.getLogger(__name__)

# Anything that is not a lowercase ASCII letter or digit separates tokens
TOKEN_SEPARATOR = re.compile(r'[^a-z0-9]+')


@lru_cache(maxsize=1)
def get_stop_words() -> FrozenSet[str]:
    """Load the English stopword list from NLTK, downloading it on first use"""
    try:
        return frozenset(stopwords.words('english'))
    except LookupError:
        logger.info("NLTK stopwords corpus missing, downloading...")

    try:
        nltk.download('stopwords', quiet=True)
        return frozenset(stopwords.words('english'))
    except Exception as e:
        logger.warning(f"Could not load NLTK stopwords, continuing without them: {e}")
        return frozenset()


def tokenize(text: str) -> List[str]:
    """Lowercase and split on any non-alphanumeric run, dropping empty tokens"""
    if not text:
        return []
    return [token for token in TOKEN_SEPARATOR.split(text.lower()) if token]


def normalize(text: str, stop_words: Optional[Iterable[str]] = None) -> List[str]:
    """
    Turn raw post text into the token sequence used for scoring.

    Args:
        text: Raw post body
        stop_words: Stopwords to remove, defaults to the NLTK English list

    Returns:
        Tokens in original order. An empty list means the text carries no
        usable signal and callers should fall back to the default category.
    """
    tokens = tokenize(text)
    if not tokens:
        return []

    if stop_words is None:
        stop_words = get_stop_words()
    elif not isinstance(stop_words, (set, frozenset)):
        stop_words = frozenset(stop_words)

    return [token for token in tokens if token not in stop_words]
