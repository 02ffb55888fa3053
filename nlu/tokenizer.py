"""
Tokenizer - нормализация текста в токены для классификатора.

Текст приводится к нижнему регистру, режется на слова и стеммится
стеммером Snowball из nltk (если для языка он есть). Иероглифы и кана
не разделяются пробелами, поэтому каждый такой символ - отдельный токен.
Плейсхолдеры %entity% остаются одним токеном без изменений.
"""

import logging
import re
from typing import Dict, List, Optional

from nltk.stem.snowball import SnowballStemmer

from config.constants import SNOWBALL_LANGUAGES
from nlu.models.locale import locale_to_iso2
from utils.logger import setup_logger

logger = setup_logger(name="tokenizer", level=logging.INFO)

PLACEHOLDER_PATTERN = re.compile(r"%(\w+)%")
TOKEN_PATTERN = re.compile(r"%\w+%|\w+")
CJK_PATTERN = re.compile(r"([\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff])")


class Tokenizer:
    """
    Токенизатор со стеммингом по локали.

    Стеммеры создаются лениво и кэшируются по языку.
    """

    def __init__(self):
        self._stemmers: Dict[str, Optional[SnowballStemmer]] = {}

    def tokenize(self, locale: Optional[str], text: str, stem: bool = True) -> List[str]:
        """
        Разбить текст на нормализованные токены.

        Args:
            locale: Код локали (определяет стеммер)
            text: Исходный текст
            stem: Применять ли стемминг

        Returns:
            Список токенов в порядке появления
        """
        if not text:
            return []

        text = CJK_PATTERN.sub(r" \1 ", text)
        tokens = []
        for token in TOKEN_PATTERN.findall(text):
            if PLACEHOLDER_PATTERN.fullmatch(token):
                tokens.append(token)
                continue
            token = token.lower()
            if stem:
                token = self.stem(locale, token)
            tokens.append(token)
        return tokens

    def stem(self, locale: Optional[str], token: str) -> str:
        """Стемминг одного токена; без стеммера токен возвращается как есть."""
        stemmer = self._get_stemmer(locale)
        if stemmer is None:
            return token
        return stemmer.stem(token)

    def _get_stemmer(self, locale: Optional[str]) -> Optional[SnowballStemmer]:
        iso2 = locale_to_iso2(locale)
        if iso2 in self._stemmers:
            return self._stemmers[iso2]

        language = SNOWBALL_LANGUAGES.get(iso2)
        stemmer = SnowballStemmer(language) if language else None
        if stemmer is None:
            logger.debug(f"Стеммер для локали {locale} не найден, токены не стеммятся")
        self._stemmers[iso2] = stemmer
        return stemmer
