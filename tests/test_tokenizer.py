"""Тесты Tokenizer."""

import pytest

from nlu.tokenizer import Tokenizer


@pytest.fixture
def tokenizer():
    return Tokenizer()


def test_lowercase_and_stem(tokenizer):
    assert tokenizer.tokenize("en", "I've lost my Keys") == ["i", "ve", "lost", "my", "key"]


def test_without_stemming(tokenizer):
    assert tokenizer.tokenize("en", "Running dogs", stem=False) == ["running", "dogs"]
    assert tokenizer.tokenize("en", "Running dogs") == ["run", "dog"]


def test_placeholders_are_kept(tokenizer):
    assert tokenizer.tokenize("en", "I saw %Hero%") == ["i", "saw", "%Hero%"]


def test_cjk_characters_are_separate_tokens(tokenizer):
    assert tokenizer.tokenize("ja", "私の鍵") == ["私", "の", "鍵"]


def test_locale_without_stemmer(tokenizer):
    assert tokenizer.tokenize("xx", "Running") == ["running"]


def test_regional_locale_uses_language_stemmer(tokenizer):
    assert tokenizer.tokenize("en-US", "keys") == ["key"]


def test_empty_text(tokenizer):
    assert tokenizer.tokenize("en", "") == []
    assert tokenizer.tokenize("en", "?!") == []
