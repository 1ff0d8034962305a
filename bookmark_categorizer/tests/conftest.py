import pytest
from types import SimpleNamespace
from unittest.mock import Mock, patch

from bookmark_categorizer.config.constants import DEFAULT_BOOKMARK_CATEGORIES
from bookmark_categorizer.core.categories import load_categories

# Small fixed stopword list so scoring does not depend on downloaded NLTK data
TEST_STOP_WORDS = frozenset([
    'a', 'an', 'the', 'is', 'are', 'was', 'be', 'to', 'of', 'and', 'or', 'in', 'on',
    'for', 'with', 'this', 'that', 'it', 'do', 'not', 'there', 'no', 'i', 'we', 'you',
    'me', 'my', 'your', 'at', 'by', 'from', 'so', 'just', 'what', 'how', 's'
])


@pytest.fixture(autouse=True)
def pinned_stop_words():
    """Keep tests offline and deterministic"""
    with patch('bookmark_categorizer.core.text_normalizer.get_stop_words',
               return_value=TEST_STOP_WORDS):
        yield TEST_STOP_WORDS


@pytest.fixture
def categories():
    """The default eight-category taxonomy"""
    return load_categories(DEFAULT_BOOKMARK_CATEGORIES)


def make_completion(content):
    """Shape of a chat completion returned by the inference client"""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def mock_client():
    """Inference client stub answering 'Career Tips' by default"""
    client = Mock()
    client.chat_completion.return_value = make_completion('Career Tips')
    return client


@pytest.fixture
def completion():
    """Factory for chat completion stubs"""
    return make_completion


class FakeClock:
    """Monotonic clock that only moves forward when slept on"""

    def __init__(self):
        self.now = 0.0
        self.events = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.events.append(('sleep', seconds))
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()
