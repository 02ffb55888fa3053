"""Тесты SentimentAnalyzer."""

import pytest

from nlu.sentiment import BundledLexicon, SentimentAnalyzer


@pytest.fixture(scope="module")
def analyzer():
    return SentimentAnalyzer()


def test_positive(analyzer):
    result = analyzer.analyze("en", "I love cats")
    assert result.vote == "positive"
    assert result.score == 3
    assert result.num_words == 3
    assert result.num_hits == 1
    assert result.comparative == pytest.approx(1.0)
    assert result.locale == "en"


def test_negative(analyzer):
    assert analyzer.analyze("en", "This is a terrible idea").vote == "negative"


def test_neutral(analyzer):
    result = analyzer.analyze("en", "The table is made of wood")
    assert result.vote == "neutral"
    assert result.score == 0
    assert result.num_hits == 0


def test_negation_inverts_polarity(analyzer):
    assert analyzer.analyze("en", "I don't love cats").vote == "negative"
    assert analyzer.analyze("en", "not bad at all").vote == "positive"


def test_other_languages(analyzer):
    assert analyzer.analyze("es", "Me encanta este lugar").vote == "positive"
    assert analyzer.analyze("fr", "Je n'aime pas ça").vote == "negative"
    assert analyzer.analyze("de-DE", "Das Wetter ist schön").vote == "positive"


def test_unsupported_locale_is_neutral(analyzer):
    result = analyzer.analyze("ja", "私の鍵")
    assert result.vote == "neutral"
    assert result.score == 0
    assert result.num_words == 3


def test_empty_text(analyzer):
    result = analyzer.analyze("en", "")
    assert result.vote == "neutral"
    assert result.comparative == 0


def test_custom_lexicon():
    lexicon = BundledLexicon({"en": {"words": {"meh": -1}, "negations": []}})
    analyzer = SentimentAnalyzer(lexicon=lexicon)
    assert analyzer.analyze("en", "meh").vote == "negative"
    assert analyzer.analyze("en", "love").vote == "neutral"
    assert analyzer.analyze("es", "meh").vote == "neutral"
