"""
Language Guesser - определение языка фразы по символьным n-граммам.

Для каждого известного языка заранее строится профиль частот биграмм и
триграмм символов по образцам текста из nlu/data/language_samples.json.
Фраза сравнивается с профилями кандидатов по косинусной близости.
"""

import json
import logging
import math
import re
from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from nlu.models.locale import locale_to_iso2
from utils.logger import setup_logger

logger = setup_logger(name="language_guesser", level=logging.INFO)

SAMPLES_PATH = Path(__file__).parent / "data" / "language_samples.json"
WORD_PATTERN = re.compile(r"[^\W\d_]+")
NGRAM_SIZES = (2, 3)


def extract_ngrams(text: str) -> Counter:
    """
    Посчитать биграммы и триграммы символов.

    Каждое слово дополняется пробелами с двух сторон, чтобы начала и
    концы слов давали собственные n-граммы.
    """
    counts = Counter()
    for word in WORD_PATTERN.findall(text.lower()):
        padded = f" {word} "
        for size in NGRAM_SIZES:
            for i in range(len(padded) - size + 1):
                counts[padded[i:i + size]] += 1
    return counts


class LanguageGuesser:
    """
    Угадывает язык фразы среди заданного набора кандидатов.

    Профили неизменяемы после создания, поэтому guess() - чистая функция
    от текста и списка кандидатов.
    """

    def __init__(self, samples: Optional[Dict[str, str]] = None):
        if samples is None:
            samples = self._load_samples()

        self._profiles: Dict[str, Counter] = {}
        self._norms: Dict[str, float] = {}
        for language, text in samples.items():
            profile = extract_ngrams(text)
            self._profiles[language] = profile
            self._norms[language] = math.sqrt(sum(v * v for v in profile.values()))

        logger.debug(f"LanguageGuesser: загружено {len(self._profiles)} профилей языков")

    @staticmethod
    def _load_samples() -> Dict[str, str]:
        with open(SAMPLES_PATH, "r", encoding="utf-8") as f:
            return json.load(f)

    @property
    def languages(self) -> List[str]:
        return list(self._profiles)

    def guess(self, utterance: str, candidates: Sequence[str]) -> str:
        """
        Определить язык фразы.

        Args:
            utterance: Текст фразы
            candidates: Локали-кандидаты в порядке регистрации

        Returns:
            Локаль с наибольшей близостью; при равенстве - первая из кандидатов

        Raises:
            ValueError: Если список кандидатов пуст
        """
        return self.guess_all(utterance, candidates)[0][0]

    def guess_all(self, utterance: str, candidates: Sequence[str]) -> List[Tuple[str, float]]:
        """
        Оценить всех кандидатов.

        Returns:
            Пары (локаль, близость), от лучшей к худшей; порядок равных
            оценок совпадает с порядком кандидатов
        """
        if not candidates:
            raise ValueError("At least one candidate locale is required")

        ngrams = extract_ngrams(utterance or "")
        norm = math.sqrt(sum(v * v for v in ngrams.values()))

        scores = [(locale, self._similarity(ngrams, norm, locale)) for locale in candidates]
        # sorted() стабилен: при равных оценках выигрывает кандидат, зарегистрированный раньше
        return sorted(scores, key=lambda item: item[1], reverse=True)

    def _similarity(self, ngrams: Counter, norm: float, locale: str) -> float:
        language = locale_to_iso2(locale)
        profile = self._profiles.get(language)
        if not profile or not norm:
            return 0.0
        dot = sum(count * profile.get(gram, 0) for gram, count in ngrams.items())
        return dot / (norm * self._norms[language])
