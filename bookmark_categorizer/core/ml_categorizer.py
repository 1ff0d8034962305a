import logging
from typing import Iterable, List, Optional, Sequence

from ..config.config import Config
from .base_categorizer import BaseCategorizer
from .categories import Category, get_default_category, load_categories
from .llm_categorizer import LLMCategorizer
from .tfidf_categorizer import TfIdfCategorizer

logger = logging.getLogger(__name__)

# LLM options that replace a Config setting when passed to create_categorizer
OPTION_SETTINGS = {
    'model_id': 'LLM_MODEL_ID',
    'timeout': 'LLM_TIMEOUT_SECONDS',
    'batch_size': 'LLM_BATCH_SIZE',
    'batch_delay': 'LLM_BATCH_DELAY_SECONDS',
}


class MLCategorizer:
    """
    Chain of categorizer stages evaluated in order.

    Each stage may return None to pass the text on. The result is always an
    id from the taxonomy: when every stage passes, the default category is used.
    """

    def __init__(self, categories: Iterable, stages: Sequence[BaseCategorizer]):
        self.categories: List[Category] = load_categories(categories)
        if not stages:
            raise ValueError("At least one categorizer stage is required")
        self.stages = tuple(stages)
        self.default_category_id = get_default_category(self.categories).id

    def _run_stage(self, stage: BaseCategorizer, text: str) -> Optional[int]:
        try:
            return stage.categorize(text)
        except Exception as e:
            logger.error(f"Categorizer stage '{stage.name}' failed: {e}")
            return None

    def categorize(self, text: str) -> int:
        """Categorize one text using the chain of stages"""
        for stage in self.stages:
            result = self._run_stage(stage, text)
            if result is not None:
                return result
            logger.debug(f"Stage '{stage.name}' could not decide, trying next stage")

        return self.default_category_id

    def categorize_batch(self, texts: Sequence[str]) -> List[int]:
        """
        Categorize many texts, preserving input order.

        The first stage handles the whole batch in one go. Positions it could
        not resolve are sent through the full single-item chain, so a partly
        successful batch keeps its successes.
        """
        texts = list(texts)
        if not texts:
            return []

        first_stage = self.stages[0]
        try:
            batch_results = first_stage.categorize_batch(texts)
            if len(batch_results) != len(texts):
                raise ValueError(f"expected {len(texts)} results, got {len(batch_results)}")
        except Exception as e:
            logger.error(f"Batch categorization with '{first_stage.name}' failed, "
                         f"processing items individually: {e}")
            return [self.categorize(text) for text in texts]

        results = []
        fallbacks = 0
        for text, result in zip(texts, batch_results):
            if result is None:
                fallbacks += 1
                result = self.categorize(text)
            results.append(result)

        if fallbacks:
            logger.info(f"{fallbacks}/{len(texts)} items fell back to single-item categorization")
        return results


def create_categorizer(
    categories: Iterable,
    api_key: Optional[str] = None,
    **llm_options
) -> MLCategorizer:
    """
    Build the categorization chain: remote LLM first, TF-IDF fallback.

    Without an API key (argument or HUGGINGFACE_API_KEY) only the TF-IDF stage
    is used. Keyword arguments override the LLM settings read from Config;
    overridden settings are not validated.
    """
    categories = load_categories(categories)
    overridden = [setting for option, setting in OPTION_SETTINGS.items() if option in llm_options]
    settings = Config.validate(skip=overridden)
    api_key = api_key or Config.HUGGINGFACE_API_KEY

    stages: List[BaseCategorizer] = []
    if api_key or llm_options.get('client') is not None:
        options = {
            'provider': settings['provider'],
            'model_id': settings['model_id'],
            'timeout': settings['timeout'],
            'batch_size': settings['batch_size'],
            'batch_delay': settings['batch_delay'],
        }
        options.update(llm_options)
        stages.append(LLMCategorizer(categories, api_key, **options))
    else:
        logger.warning("HUGGINGFACE_API_KEY not found in environment variables. "
                       "Using fallback categorization only.")

    stages.append(TfIdfCategorizer(categories))
    return MLCategorizer(categories, stages)
