"""
Named Entity Matcher.

Реестр именованных сущностей (сущность -> вариант -> локаль -> алиасы),
раскрытие плейсхолдеров %entity% в обучающих фразах и поиск алиасов в
сыром тексте пользователя.
"""

import itertools
import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz

from config.constants import GLOBAL_LOCALE
from nlu.models import EntityMatch
from utils.logger import setup_logger

logger = setup_logger(name="entity_extractor", level=logging.INFO)

PLACEHOLDER_PATTERN = re.compile(r"%(\w+)%")
WORD_PATTERN = re.compile(r"\w+(?:['-]\w+)*")
CJK_PATTERN = re.compile(r"[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]")

# (start, end, accuracy, order, entity, option, alias)
Candidate = Tuple[int, int, float, int, str, str, str]


def _lower(text: str) -> str:
    """Нижний регистр без изменения длины строки (позиции должны совпадать)."""
    return "".join(c.lower() if len(c.lower()) == 1 else c for c in text)


def _is_word_char(char: str) -> bool:
    return char.isalnum() and not CJK_PATTERN.match(char)


class NamedEntityMatcher:
    """
    Реестр именованных сущностей и поиск их алиасов в тексте.

    Алиасы без указания локалей считаются глобальными и подходят для
    любого языка.
    """

    def __init__(self, threshold: float = 0.8):
        self.threshold = threshold
        self._entities: Dict[str, Dict[str, Dict[str, List[str]]]] = {}
        self._expansions: Dict[Tuple[str, str], Tuple[str, ...]] = {}

    @property
    def entity_names(self) -> List[str]:
        return list(self._entities)

    def add_named_entity_text(
        self,
        entity: str,
        option: str,
        locales: Optional[Sequence[str]] = None,
        aliases: Optional[Sequence[str]] = None,
    ):
        """
        Зарегистрировать алиасы варианта сущности.

        Args:
            entity: Имя сущности ("hero")
            option: Имя варианта ("spiderman")
            locales: Локали, для которых действуют алиасы; пусто - для всех
            aliases: Поверхностные формы ("Spiderman", "Spider-man")
        """
        if isinstance(locales, str):
            locales = [locales]
        if isinstance(aliases, str):
            aliases = [aliases]

        by_locale = self._entities.setdefault(entity, {}).setdefault(option, {})
        for locale in locales or [GLOBAL_LOCALE]:
            known = by_locale.setdefault(locale, [])
            for alias in aliases or []:
                if alias and alias not in known:
                    known.append(alias)

        self._expansions.clear()
        logger.debug(f"Сущность {entity}/{option}: алиасы {list(aliases or [])} для {list(locales or [GLOBAL_LOCALE])}")

    def remove_named_entity_text(
        self,
        entity: str,
        option: str,
        locales: Optional[Sequence[str]] = None,
        aliases: Optional[Sequence[str]] = None,
    ):
        """
        Удалить алиасы варианта сущности.

        Без списка алиасов удаляются все алиасы указанных локалей. Пустые
        варианты и сущности удаляются из реестра.
        """
        if isinstance(locales, str):
            locales = [locales]
        if isinstance(aliases, str):
            aliases = [aliases]

        options = self._entities.get(entity)
        if not options or option not in options:
            return
        by_locale = options[option]

        for locale in locales or [GLOBAL_LOCALE]:
            if locale not in by_locale:
                continue
            if aliases:
                by_locale[locale] = [a for a in by_locale[locale] if a not in aliases]
            else:
                by_locale[locale] = []
            if not by_locale[locale]:
                del by_locale[locale]

        if not by_locale:
            del options[option]
        if not options:
            del self._entities[entity]

        self._expansions.clear()

    def get_aliases(self, entity: str, locale: Optional[str]) -> List[Tuple[str, str]]:
        """
        Алиасы сущности, действующие для локали: зарегистрированные
        ровно для неё и глобальные.

        Returns:
            Пары (вариант, алиас) в порядке регистрации
        """
        result = []
        for option, by_locale in self._entities.get(entity, {}).items():
            seen = set()
            for key, aliases in by_locale.items():
                if key != GLOBAL_LOCALE and key != locale:
                    continue
                for alias in aliases:
                    if alias not in seen:
                        seen.add(alias)
                        result.append((option, alias))
        return result

    @staticmethod
    def get_placeholders(text: str) -> List[str]:
        """Имена сущностей из плейсхолдеров %entity% в порядке появления."""
        names = []
        for name in PLACEHOLDER_PATTERN.findall(text or ""):
            if name not in names:
                names.append(name)
        return names

    def expand_placeholders(self, locale: Optional[str], text: str) -> Tuple[str, ...]:
        """
        Раскрыть плейсхолдеры обучающей фразы.

        Каждый %entity% заменяется каждым алиасом сущности для локали,
        по всем сочетаниям плейсхолдеров. Плейсхолдер сущности без алиасов
        остаётся в тексте как есть. Результат кэшируется до изменения реестра.

        Returns:
            Кортеж раскрытых фраз (сама фраза, если плейсхолдеров нет)
        """
        key = (locale, text)
        cached = self._expansions.get(key)
        if cached is not None:
            return cached

        names = []
        choices = []
        for name in self.get_placeholders(text):
            aliases = list(dict.fromkeys(alias for _, alias in self.get_aliases(name, locale)))
            if aliases:
                names.append(name)
                choices.append(aliases)

        variants = []
        for combination in itertools.product(*choices):
            variant = text
            for name, alias in zip(names, combination):
                variant = variant.replace(f"%{name}%", alias)
            variants.append(variant)

        result = tuple(dict.fromkeys(variants))
        self._expansions[key] = result
        return result

    def find_entities(
        self,
        locale: Optional[str],
        text: str,
        entity_names: Optional[Iterable[str]] = None,
    ) -> List[EntityMatch]:
        """
        Найти сущности в сыром тексте.

        Args:
            locale: Локаль текста
            text: Исходный текст (без стемминга)
            entity_names: Какие сущности искать; None - все из реестра

        Returns:
            Найденные сущности слева направо
        """
        if not text:
            return []

        names = list(self._entities) if entity_names is None else list(entity_names)
        lowered = _lower(text)
        words = [(m.start(), m.end()) for m in WORD_PATTERN.finditer(lowered)]

        candidates: List[Candidate] = []
        order = 0
        for name in names:
            for option, alias in self.get_aliases(name, locale):
                alias_lower = _lower(alias)
                for start, end, accuracy in self._exact_matches(text, lowered, alias_lower):
                    candidates.append((start, end, accuracy, order, name, option, alias))
                if self.threshold < 1:
                    for start, end, accuracy in self._fuzzy_matches(lowered, words, alias_lower):
                        candidates.append((start, end, accuracy, order, name, option, alias))
                order += 1

        return [
            EntityMatch(
                entity=name,
                option=option,
                source_text=alias,
                utterance_text=text[start:end],
                start_pos=start,
                end_pos=end,
                accuracy=accuracy,
            )
            for start, end, accuracy, _, name, option, alias in self._resolve_overlaps(candidates)
        ]

    def _exact_matches(self, text: str, lowered: str, alias_lower: str) -> List[Tuple[int, int, float]]:
        matches = []
        start = 0
        while True:
            pos = lowered.find(alias_lower, start)
            if pos == -1:
                break
            end = pos + len(alias_lower)

            # Проверяем границы слов
            left_ok = pos == 0 or not (_is_word_char(text[pos - 1]) and _is_word_char(text[pos]))
            right_ok = end == len(text) or not (_is_word_char(text[end - 1]) and _is_word_char(text[end]))
            if left_ok and right_ok:
                matches.append((pos, end, 1.0))

            start = pos + 1
        return matches

    def _fuzzy_matches(
        self,
        lowered: str,
        words: List[Tuple[int, int]],
        alias_lower: str,
    ) -> List[Tuple[int, int, float]]:
        size = len(WORD_PATTERN.findall(alias_lower))
        if not size:
            return []

        matches = []
        for i in range(len(words) - size + 1):
            start, end = words[i][0], words[i + size - 1][1]
            accuracy = fuzz.ratio(alias_lower, lowered[start:end]) / 100
            # Точные совпадения уже найдены поиском подстроки
            if self.threshold <= accuracy < 1:
                matches.append((start, end, accuracy))
        return matches

    @staticmethod
    def _resolve_overlaps(candidates: List[Candidate]) -> List[Candidate]:
        """Жадно выбрать непересекающиеся совпадения: точные раньше нечётких, затем длиннее, точнее, левее."""
        ordered = sorted(candidates, key=lambda c: (c[2] < 1, -(c[1] - c[0]), -c[2], c[0], c[3]))
        selected: List[Candidate] = []
        for candidate in ordered:
            start, end = candidate[0], candidate[1]
            if all(end <= other[0] or other[1] <= start for other in selected):
                selected.append(candidate)

        # Сортируем по позиции в тексте
        selected.sort(key=lambda c: c[0])
        return selected

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, List[str]]]]:
        return {
            entity: {
                option: {locale: list(aliases) for locale, aliases in by_locale.items()}
                for option, by_locale in options.items()
            }
            for entity, options in self._entities.items()
        }

    def load_dict(self, data: Dict[str, Dict[str, Dict[str, List[str]]]]):
        """Заменить реестр сохранённым состоянием."""
        self._entities = {
            entity: {
                option: {locale: list(aliases) for locale, aliases in by_locale.items()}
                for option, by_locale in options.items()
            }
            for entity, options in data.items()
        }
        self._expansions.clear()
