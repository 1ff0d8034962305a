"""
Statistical fallback categorizer.

Scores post text against every category with a TF-IDF index built from the
category names, descriptions and keyword sets, then applies keyword and
heuristic boosts computed on the raw text. Pure and deterministic for a given
taxonomy, so it is always the last stage of the chain.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

from ..config.constants import (
    LONG_READ_MARKERS,
    LONG_TEXT_BOOST,
    LONG_TEXT_THRESHOLD,
    QUOTE_MARK_BOOST,
    QUOTE_MARKS,
    TOPIC_KEYWORD_BOOST,
)
from .base_categorizer import BaseCategorizer
from .categories import Category, match_category
from .keyword_matcher import KeywordMatcher
from .text_normalizer import normalize

logger = logging.getLogger(__name__)

# Keyword documents are added this many times to outweigh short descriptions
KEYWORD_DOCUMENT_REPEAT = 2


def _pretokenized(document: Sequence[str]) -> List[str]:
    return list(document)


class TfIdfIndex:
    """
    Immutable term-weighting index over a fixed list of tokenized documents.

    Raw term counts come from a CountVectorizer fitted on the documents. The
    weight of a term is tf * (1 + ln(N / (1 + df))), which stays finite for
    terms no document contains.
    """

    def __init__(self, documents: Sequence[Sequence[str]]):
        documents = [list(doc) for doc in documents]
        self.n_documents = len(documents)

        if any(documents):
            vectorizer = CountVectorizer(analyzer=_pretokenized)
            self.term_counts = vectorizer.fit_transform(documents).toarray()
            self.vocabulary: Dict[str, int] = {
                term: int(column) for term, column in vectorizer.vocabulary_.items()
            }
        else:
            # CountVectorizer refuses an empty vocabulary
            self.term_counts = np.zeros((self.n_documents, 0), dtype=np.int64)
            self.vocabulary = {}

        self.term_counts.setflags(write=False)
        self.document_frequency = (self.term_counts > 0).sum(axis=0)

    def __len__(self) -> int:
        return self.n_documents

    def idf(self, term: str) -> float:
        if not self.n_documents:
            return 0.0
        column = self.vocabulary.get(term)
        df = int(self.document_frequency[column]) if column is not None else 0
        return 1.0 + math.log(self.n_documents / (1.0 + df))

    def tfidf(self, term: str, document_index: int) -> float:
        column = self.vocabulary.get(term)
        if column is None:
            return 0.0
        tf = int(self.term_counts[document_index, column])
        if tf == 0:
            return 0.0
        return tf * self.idf(term)


class TfIdfCategorizer(BaseCategorizer):
    """Enhanced TF-IDF categorizer with integrated keyword matching"""

    name = 'tfidf'

    def __init__(self, categories: Iterable, stop_words: Optional[Iterable[str]] = None):
        super().__init__(categories)
        self.stop_words = frozenset(stop_words) if stop_words is not None else None
        self.keyword_sets = KeywordMatcher.get_keyword_sets()
        self.keywords_by_category = KeywordMatcher.get_keyword_sets_by_id(self.categories)

        self.index, self.document_positions = self._train_model()

        # Boost targets depend only on the taxonomy, resolve them once
        self.topic_categories: Dict[str, Optional[Category]] = {
            topic: KeywordMatcher.find_category_for_topic(self.categories, topic)
            for topic in self.keyword_sets
        }
        self.quotes_category = match_category(self.categories, 'quotes')
        self.long_read_category = next(
            (cat for cat in self.categories
             if any(marker in cat.name.lower() for marker in LONG_READ_MARKERS)),
            None
        )
        logger.info(f"TF-IDF categorizer trained on {len(self.index)} documents "
                    f"for {len(self.categories)} categories")

    def _train_model(self) -> Tuple[TfIdfIndex, Dict[int, List[int]]]:
        """One name/description document per category plus repeated keyword documents"""
        documents = []
        positions = {}

        for category in self.categories:
            own_positions = [len(documents)]
            documents.append(normalize(f"{category.name} {category.description or ''}", self.stop_words))

            keywords = self.keywords_by_category.get(category.id, [])
            if keywords:
                keyword_tokens = normalize(' '.join(keywords), self.stop_words)
                for _ in range(KEYWORD_DOCUMENT_REPEAT):
                    own_positions.append(len(documents))
                    documents.append(keyword_tokens)

            positions[category.id] = own_positions

        return TfIdfIndex(documents), positions

    def categorize(self, text: str) -> int:
        tokens = normalize(text or '', self.stop_words)
        if not tokens:
            logger.debug("No usable tokens, using default category")
            return self.get_default_category_id()

        scores = self.calculate_category_scores(tokens)
        scores = self.apply_keyword_matching(text, scores)
        best_id, best_score = self.pick_best(scores)

        if best_id is None:
            logger.debug("No category scored above zero, using default category")
            return self.get_default_category_id()

        logger.info(f"TF-IDF with keyword matching categorized as category {best_id} "
                    f"(score: {best_score:.3f})")
        return best_id

    def score(self, text: str) -> Dict[int, float]:
        """Final per-category scores for text, before picking a winner"""
        tokens = normalize(text or '', self.stop_words)
        if not tokens:
            return {category.id: 0.0 for category in self.categories}
        return self.apply_keyword_matching(text, self.calculate_category_scores(tokens))

    def calculate_category_scores(self, tokens: List[str]) -> Dict[int, float]:
        """Keyword overlap (+1 per token) plus TF-IDF weight of each token"""
        scores = {category.id: 0.0 for category in self.categories}

        for token in tokens:
            for category in self.categories:
                keywords = self.keywords_by_category[category.id]
                if any(keyword and (token in keyword or keyword in token) for keyword in keywords):
                    scores[category.id] += 1.0

                scores[category.id] += sum(
                    self.index.tfidf(token, position)
                    for position in self.document_positions[category.id]
                )

        return scores

    def apply_keyword_matching(self, text: str, scores: Dict[int, float]) -> Dict[int, float]:
        """Boost scores from signals in the raw, unnormalized text"""
        updated_scores = dict(scores)

        for topic, keywords in self.keyword_sets.items():
            category = self.topic_categories.get(topic)
            if category and KeywordMatcher.contains_keywords(text, keywords):
                updated_scores[category.id] += TOPIC_KEYWORD_BOOST
                logger.debug(f"Keyword match found for category: {category.name}")

        if self.quotes_category and any(mark in text for mark in QUOTE_MARKS):
            updated_scores[self.quotes_category.id] += QUOTE_MARK_BOOST
            logger.debug("Quotation marks detected, boosting quotes category")

        if self.long_read_category and len(text) > LONG_TEXT_THRESHOLD:
            updated_scores[self.long_read_category.id] += LONG_TEXT_BOOST
            logger.debug(f"Long text detected ({len(text)} chars), boosting "
                         f"{self.long_read_category.name}")

        return updated_scores

    @staticmethod
    def pick_best(scores: Dict[int, float]) -> Tuple[Optional[int], float]:
        """Highest positive score wins; ties go to the lowest category id"""
        best_id = None
        best_score = 0.0
        for category_id in sorted(scores):
            if scores[category_id] > best_score:
                best_id = category_id
                best_score = scores[category_id]
        return best_id, best_score
