"""
Remote LLM categorizer.

Sends bookmark text plus the category taxonomy to a chat-completion model on
the Hugging Face inference router and maps the answer back onto the taxonomy.
Every remote failure is logged and turned into None so the chain can fall
back to the statistical scorer.
"""

import json
import logging
import re
import time
from typing import Any, Callable, Iterable, List, Optional

from .base_categorizer import BaseCategorizer

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = 'novita'
DEFAULT_MODEL_ID = 'deepseek-ai/DeepSeek-V3-0324'
DEFAULT_BATCH_SIZE = 10
DEFAULT_BATCH_DELAY_SECONDS = 1.0
DEFAULT_TIMEOUT_SECONDS = 30.0

SINGLE_MAX_TOKENS = 50
BATCH_MAX_TOKENS_PER_ITEM = 40

CODE_FENCE = re.compile(r'```[a-zA-Z]*')
ORDINAL_PREFIX = re.compile(r'^\s*\d+\s*[.):]\s*')
# Characters models like to wrap a bare answer in
ANSWER_WRAPPING = ' \t"\'`*.'


class ClassificationServiceError(RuntimeError):
    """Raised for empty or malformed answers from the classification service"""


def _build_default_client(api_key: str, provider: str, timeout: float) -> Any:
    from huggingface_hub import InferenceClient

    return InferenceClient(provider=provider, api_key=api_key, timeout=timeout)


def strip_code_fences(response: str) -> str:
    return CODE_FENCE.sub('', response or '').strip()


def parse_single_response(response: str) -> str:
    """The first non-empty line of the answer is the candidate category name"""
    for line in (response or '').strip().splitlines():
        candidate = line.strip(ANSWER_WRAPPING)
        if candidate:
            return candidate
    return ''


def _parse_structured_answer(response: str, expected: int) -> Optional[List[Optional[str]]]:
    start = response.find('{')
    end = response.rfind('}')
    if start < 0 or end <= start:
        return None

    try:
        data = json.loads(response[start:end + 1])
    except ValueError:
        return None

    results = data.get('results') if isinstance(data, dict) else None
    if not isinstance(results, list):
        return None

    names: List[Optional[str]] = [None] * expected
    for entry in results:
        if not isinstance(entry, dict):
            continue
        index = entry.get('index')
        category = entry.get('category')
        if isinstance(index, str) and index.strip().isdigit():
            index = int(index.strip())
        if isinstance(index, bool) or not isinstance(index, int):
            continue
        if not 1 <= index <= expected:
            continue
        if isinstance(category, str) and category.strip():
            names[index - 1] = category.strip()
    return names


def _parse_line_answer(response: str, expected: int) -> List[Optional[str]]:
    lines = [line.strip() for line in response.splitlines() if line.strip()]
    names: List[Optional[str]] = []
    for line in lines[:expected]:
        name = ORDINAL_PREFIX.sub('', line).strip(ANSWER_WRAPPING)
        names.append(name or None)
    names.extend([None] * (expected - len(names)))
    return names


def parse_batch_response(response: str, expected: int) -> List[Optional[str]]:
    """
    Parse a batch answer into one category name (or None) per request slot.

    Tries the structured ``{"results": [{"index": n, "category": ...}]}`` form
    first, ignoring entries with bad indices. If no JSON object can be parsed
    at all, line i of the answer is read as the name for request i.
    """
    cleaned = strip_code_fences(response)
    names = _parse_structured_answer(cleaned, expected)
    if names is None:
        logger.warning("Could not parse JSON from batch response, falling back to line parsing")
        names = _parse_line_answer(cleaned, expected)
    return names


class LLMCategorizer(BaseCategorizer):
    """Categorizer backed by a remote chat-completion model"""

    name = 'llm'

    def __init__(
        self,
        categories: Iterable,
        api_key: Optional[str] = None,
        *,
        client: Any = None,
        provider: str = DEFAULT_PROVIDER,
        model_id: str = DEFAULT_MODEL_ID,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay: float = DEFAULT_BATCH_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(categories)
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        if batch_delay < 0:
            raise ValueError("batch_delay cannot be negative")
        if client is None and not api_key:
            raise ValueError("An API key or a client is required for the LLM categorizer")

        self.provider = provider
        self.model_id = model_id
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self._sleep = sleep
        self._clock = clock
        self._last_request_at: Optional[float] = None
        self.client = client or _build_default_client(api_key, provider, timeout)
        logger.info(f"✅ LLMCategorizer initialized with {model_id} via {provider}")

    def categorize(self, text: str) -> Optional[int]:
        if not text or not text.strip():
            return None

        try:
            logger.info("Trying LLM categorization...")
            response = self._complete(self.create_prompt(text), max_tokens=SINGLE_MAX_TOKENS)
            predicted = parse_single_response(response)
            logger.debug(f"LLM response: {response!r}, parsed category: {predicted!r}")

            category_id = self.resolve_category_name(predicted)
            if category_id is None:
                logger.info(f"LLM answer '{predicted}' matches no category, falling back")
            return category_id
        except Exception as e:
            logger.error(f"Error with LLM categorization: {e}")
            return None

    def categorize_batch(self, texts: List[str]) -> List[Optional[int]]:
        """
        Categorize many texts with one request per chunk.

        Returns a list aligned with texts. A chunk whose request fails gets
        None in every slot and the remaining chunks are still processed.
        Every remote request, single or batch, starts at least batch_delay
        seconds after the previous one.
        """
        texts = list(texts)
        results: List[Optional[int]] = []

        for chunk_number, start in enumerate(range(0, len(texts), self.batch_size)):
            chunk = texts[start:start + self.batch_size]
            try:
                response = self._complete(
                    self.create_batch_prompt(chunk),
                    max_tokens=BATCH_MAX_TOKENS_PER_ITEM * len(chunk) + 50
                )
                names = parse_batch_response(response, len(chunk))
                chunk_results = [
                    self.resolve_category_name(name) if text and text.strip() else None
                    for text, name in zip(chunk, names)
                ]
            except Exception as e:
                logger.error(f"Error in LLM batch chunk starting at {start}: {e}")
                chunk_results = [None] * len(chunk)

            resolved = sum(1 for result in chunk_results if result is not None)
            logger.info(f"LLM batch chunk {chunk_number + 1}: resolved {resolved}/{len(chunk)}")
            results.extend(chunk_results)

        return results

    def _category_list(self) -> str:
        return '\n'.join(f"- {c.name}: {c.description or ''}" for c in self.categories)

    def create_prompt(self, text: str) -> str:
        return f"""You are a bookmark categorization assistant. Given the following text, categorize it into one of these categories:

{self._category_list()}

Text to categorize: "{text}"

Respond with ONLY the category name, nothing else."""

    def create_batch_prompt(self, texts: List[str]) -> str:
        numbered = '\n'.join(f'{i}. "{text}"' for i, text in enumerate(texts, 1))
        return f"""You are a bookmark categorization assistant. Categorize each of the following {len(texts)} texts into one of these categories:

{self._category_list()}

Texts to categorize:
{numbered}

Respond in the following JSON format only:
{{"results": [{{"index": 1, "category": "CATEGORY_NAME"}}, {{"index": 2, "category": "CATEGORY_NAME"}}]}}

Use each text's number as its index and the exact category name from the list."""

    def _wait_for_request_slot(self):
        """Sleep until batch_delay has passed since the previous remote request"""
        if self._last_request_at is None or self.batch_delay <= 0:
            return
        remaining = self.batch_delay - (self._clock() - self._last_request_at)
        if remaining > 0:
            logger.debug(f"Waiting {remaining:.2f}s before the next LLM request")
            self._sleep(remaining)

    def _complete(self, prompt: str, max_tokens: int) -> str:
        self._wait_for_request_slot()
        try:
            completion = self.client.chat_completion(
                messages=[{'role': 'user', 'content': prompt}],
                model=self.model_id,
                max_tokens=max_tokens,
                temperature=0
            )
        finally:
            self._last_request_at = self._clock()

        choices = getattr(completion, 'choices', None)
        if choices is None and isinstance(completion, dict):
            choices = completion.get('choices')
        if not choices:
            raise ClassificationServiceError(f"Completion from {self.model_id} has no choices")

        first = choices[0]
        message = first.get('message') if isinstance(first, dict) else getattr(first, 'message', None)
        content = message.get('content') if isinstance(message, dict) else getattr(message, 'content', None)
        if not content or not str(content).strip():
            raise ClassificationServiceError(f"Completion from {self.model_id} returned empty text")
        return str(content)
