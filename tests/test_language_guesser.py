"""Тесты LanguageGuesser."""

import pytest

from nlu.language_guesser import LanguageGuesser, extract_ngrams


@pytest.fixture(scope="module")
def guesser():
    return LanguageGuesser()


def test_extract_ngrams():
    ngrams = extract_ngrams("Hi")
    assert ngrams == {" h": 1, "hi": 1, "i ": 1, " hi": 1, "hi ": 1}


def test_bundled_profiles(guesser):
    assert {"en", "es", "fr", "ja"} <= set(guesser.languages)


@pytest.mark.parametrize(
    "utterance, expected",
    [
        ("what is?", "en"),
        ("¿Qué es?", "es"),
        ("Dónde están las llaves", "es"),
        ("Where are my keys", "en"),
    ],
)
def test_guess_english_or_spanish(guesser, utterance, expected):
    assert guesser.guess(utterance, ["en", "es"]) == expected


def test_guess_french_or_japanese(guesser):
    assert guesser.guess("où sont mes clés", ["fr", "ja"]) == "fr"
    assert guesser.guess("私の鍵はどこにありますか", ["fr", "ja"]) == "ja"


def test_regional_locale_matches_language_profile(guesser):
    assert guesser.guess("what is this", ["es", "en-US"]) == "en-US"


def test_tie_goes_to_first_candidate(guesser):
    assert guesser.guess("12345", ["es", "en"]) == "es"
    assert guesser.guess("12345", ["en", "es"]) == "en"


def test_candidate_without_profile_scores_zero(guesser):
    scores = dict(guesser.guess_all("hello", ["xx", "en"]))
    assert scores["xx"] == 0.0
    assert scores["en"] > 0.0
    assert guesser.guess("hello", ["xx", "en"]) == "en"


def test_guess_all_is_sorted(guesser):
    scores = guesser.guess_all("where are my keys", ["es", "fr", "en"])
    assert scores[0][0] == "en"
    assert [s for _, s in scores] == sorted((s for _, s in scores), reverse=True)


def test_empty_candidates(guesser):
    with pytest.raises(ValueError):
        guesser.guess("hello", [])


def test_custom_samples():
    guesser = LanguageGuesser(samples={"aa": "aaaa aaa", "bb": "bbbb bbb"})
    assert guesser.guess("bb", ["aa", "bb"]) == "bb"
