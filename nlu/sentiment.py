"""
Sentiment Analyzer - тональность фразы по словарю весов слов.

Не зависит от обучения классификаторов: работает сразу после создания
менеджера для всех языков, для которых есть лексикон.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from config.constants import SENTIMENT_NEGATIVE, SENTIMENT_NEUTRAL, SENTIMENT_POSITIVE
from nlu.models import SentimentResult, locale_to_iso2
from nlu.tokenizer import Tokenizer
from utils.logger import setup_logger

logger = setup_logger(name="sentiment", level=logging.INFO)

LEXICON_PATH = Path(__file__).parent / "data" / "sentiment_lexicon.json"

# Сколько следующих токенов действует отрицание ("don't really like")
NEGATION_WINDOW = 2


class BundledLexicon:
    """
    Лексикон из nlu/data/sentiment_lexicon.json.

    Формат: {язык: {"words": {слово: вес}, "negations": [слово, ...]}}.
    Локали сопоставляются с языками по ISO2 коду.
    """

    def __init__(self, data: Optional[Dict[str, Dict]] = None):
        if data is None:
            with open(LEXICON_PATH, "r", encoding="utf-8") as f:
                data = json.load(f)

        self._words: Dict[str, Dict[str, float]] = {}
        self._negations: Dict[str, frozenset] = {}
        for language, lexicon in data.items():
            self._words[language] = {word.lower(): float(weight) for word, weight in lexicon.get("words", {}).items()}
            self._negations[language] = frozenset(word.lower() for word in lexicon.get("negations", []))

    def supports(self, locale: Optional[str]) -> bool:
        return locale_to_iso2(locale) in self._words

    def lookup(self, locale: Optional[str], token: str) -> Optional[float]:
        """Вес слова или None, если слова нет в лексиконе."""
        return self._words.get(locale_to_iso2(locale), {}).get(token)

    def is_negation(self, locale: Optional[str], token: str) -> bool:
        return token in self._negations.get(locale_to_iso2(locale), ())


class SentimentAnalyzer:
    """
    Считает тональность как сумму весов слов из лексикона.

    Слово-отрицание меняет знак веса ближайшего следующего слова из
    лексикона в пределах NEGATION_WINDOW токенов.
    """

    def __init__(self, lexicon=None, tokenizer: Optional[Tokenizer] = None):
        self.lexicon = lexicon or BundledLexicon()
        self.tokenizer = tokenizer or Tokenizer()

    def analyze(self, locale: Optional[str], text: str) -> SentimentResult:
        """
        Оценить тональность фразы.

        Args:
            locale: Локаль фразы
            text: Исходный текст

        Returns:
            SentimentResult; для языка без лексикона - нейтральный результат
        """
        tokens = self.tokenizer.tokenize(locale, text, stem=False)

        if not self.lexicon.supports(locale):
            logger.debug(f"Лексикон тональности для локали {locale} не найден")
            return SentimentResult(
                score=0.0,
                comparative=0.0,
                vote=SENTIMENT_NEUTRAL,
                num_words=len(tokens),
                num_hits=0,
                locale=locale,
            )

        score = 0.0
        hits = 0
        negation_left = 0
        for token in tokens:
            if self.lexicon.is_negation(locale, token):
                negation_left = NEGATION_WINDOW
                continue

            weight = self.lexicon.lookup(locale, token)
            if weight is not None:
                if negation_left:
                    weight = -weight
                    negation_left = 0
                score += weight
                hits += 1
            elif negation_left:
                negation_left -= 1

        if score > 0:
            vote = SENTIMENT_POSITIVE
        elif score < 0:
            vote = SENTIMENT_NEGATIVE
        else:
            vote = SENTIMENT_NEUTRAL

        return SentimentResult(
            score=score,
            comparative=score / len(tokens) if tokens else 0.0,
            vote=vote,
            num_words=len(tokens),
            num_hits=hits,
            locale=locale,
        )
