import math

import pytest

from bookmark_categorizer.core.categories import Category
from bookmark_categorizer.core.tfidf_categorizer import TfIdfCategorizer, TfIdfIndex


@pytest.fixture
def categorizer(categories):
    return TfIdfCategorizer(categories)


def test_quote_scenario():
    categorizer = TfIdfCategorizer([Category(1, 'Quotes', ''), Category(2, 'Uncategorized', '')])
    assert categorizer.categorize('"Do or do not, there is no try."') == 1


def test_empty_text_uses_uncategorized():
    categorizer = TfIdfCategorizer([Category(1, 'Career Tips'), Category(2, 'uncategorized')])
    assert categorizer.categorize('') == 2
    assert categorizer.categorize('   ') == 2


def test_empty_text_without_uncategorized_uses_first_category():
    categorizer = TfIdfCategorizer([Category(5, 'Misc', '')])
    assert categorizer.categorize('') == 5
    assert categorizer.categorize('   ') == 5


def test_no_signal_uses_default(categorizer):
    assert categorizer.categorize('zzz qqq') == 8


def test_long_text_boosts_reading_category():
    categorizer = TfIdfCategorizer([Category(1, 'Interesting Reads', ''), Category(2, 'Uncategorized', '')])
    long_text = 'zzz ' * 150
    short_text = 'zzz ' * 12
    assert len(long_text) == 600

    assert categorizer.categorize(long_text) == 1
    assert categorizer.categorize(short_text) == 2
    assert categorizer.score(long_text)[1] > categorizer.score(short_text)[1]


def test_job_post_lands_in_job_opportunities(categorizer):
    text = "We are hiring! Apply now for a remote internship, DM me your portfolio"
    assert categorizer.categorize(text) == 5


def test_career_advice_lands_in_career_tips(categorizer):
    text = "Tips for your next job interview: practice, negotiate salary, and update your resume"
    assert categorizer.categorize(text) == 4


def test_quotation_marks_boost_quotes_category(categorizer):
    scores_plain = categorizer.score('zzz qqq')
    scores_quoted = categorizer.score('"zzz qqq"')
    assert scores_quoted[6] - scores_plain[6] >= 5


def test_categorize_is_deterministic(categories):
    text = "Fascinating long read about the history of programming languages"
    first = TfIdfCategorizer(categories)
    second = TfIdfCategorizer(categories)
    assert first.categorize(text) == first.categorize(text) == second.categorize(text)


@pytest.mark.parametrize('text', [
    '',
    '🚀🚀🚀',
    'Check out this new automation tool for your workflow',
    'Did you know octopuses have three hearts?',
    '"Stay hungry, stay foolish."',
    'x' * 1000,
])
def test_result_is_always_in_taxonomy(categorizer, categories, text):
    assert categorizer.categorize(text) in {category.id for category in categories}


def test_pick_best_prefers_lowest_id_on_ties():
    assert TfIdfCategorizer.pick_best({3: 1.0, 1: 1.0, 2: 0.5}) == (1, 1.0)
    assert TfIdfCategorizer.pick_best({1: 0.0, 2: 0.0}) == (None, 0.0)


def test_index_weights():
    index = TfIdfIndex([['a', 'b'], ['a']])
    assert len(index) == 2
    assert index.idf('a') == pytest.approx(1 + math.log(2 / 3))
    assert index.tfidf('b', 0) == pytest.approx(1.0)
    assert index.tfidf('b', 1) == 0.0
    assert index.tfidf('zzz', 0) == 0.0


def test_index_uses_raw_term_counts():
    index = TfIdfIndex([['a', 'a', 'b'], ['b'], ['c']])
    assert index.vocabulary.keys() == {'a', 'b', 'c'}
    assert index.term_counts.tolist() == [[2, 1, 0], [0, 1, 0], [0, 0, 1]]
    assert index.document_frequency.tolist() == [1, 2, 1]
    assert index.tfidf('a', 0) == pytest.approx(2 * (1 + math.log(3 / 2)))
    assert index.idf('zzz') == pytest.approx(1 + math.log(3))


def test_index_is_read_only():
    index = TfIdfIndex([['a'], ['b']])
    with pytest.raises(ValueError):
        index.term_counts[0, 0] = 5


def test_index_without_terms():
    index = TfIdfIndex([[], []])
    assert len(index) == 2
    assert index.tfidf('a', 0) == 0.0
    assert index.idf('a') == pytest.approx(1 + math.log(2))


def test_stop_word_only_taxonomy_uses_default():
    categorizer = TfIdfCategorizer(
        [Category(1, 'The'), Category(2, 'Uncategorized')],
        stop_words=['the', 'uncategorized']
    )
    assert categorizer.categorize('the') == 2
    assert categorizer.categorize('zzz') == 2


def test_keyword_documents_are_repeated(categories):
    categorizer = TfIdfCategorizer(categories)
    assert len(categorizer.index) == 3 * len(categories)
    for positions in categorizer.document_positions.values():
        assert len(positions) == 3


def test_empty_taxonomy_rejected():
    with pytest.raises(ValueError):
        TfIdfCategorizer([])
