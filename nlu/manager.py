"""
NLP Manager - основной пайплайн обработки фраз.

Объединяет определение языка, классификацию намерений, извлечение
сущностей, анализ тональности и выбор готового ответа.
"""

import logging
import random
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from config import Config
from config.constants import NONE_INTENT
from nlu.answers import AnswerManager
from nlu.classifiers import IntentClassifier, NamedEntityMatcher
from nlu.exceptions import ClassifierNotFound, PersistenceError
from nlu.language_guesser import LanguageGuesser
from nlu.models import (
    Classification,
    Explicit,
    Guess,
    ProcessResult,
    is_equal_classification,
    is_none_classification,
    locale_to_iso2,
    to_locale_choice,
)
from nlu.persistence import load_state, save_state
from nlu.sentiment import SentimentAnalyzer
from nlu.tokenizer import Tokenizer
from utils.logger import setup_logger

logger = setup_logger(name="nlp_manager", level=logging.INFO)

LocaleArg = Union[None, str, Explicit, Guess]


class NlpManager:
    """
    Главный пайплайн обработки естественного языка.

    Использует:
    - по одному классификатору намерений на каждую локаль
    - реестр именованных сущностей, общий для всех локалей
    - определитель языка для фраз без указанной локали
    - анализатор тональности и хранилище готовых ответов

    Все операции синхронные; экземпляр не предназначен для одновременного
    использования из нескольких потоков.
    """

    def __init__(
        self,
        languages: Optional[Union[str, Sequence[str]]] = None,
        config: Optional[Config] = None,
        tokenizer: Optional[Tokenizer] = None,
        ner_manager: Optional[NamedEntityMatcher] = None,
        guesser: Optional[LanguageGuesser] = None,
        sentiment: Optional[SentimentAnalyzer] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or Config()

        self.tokenizer = tokenizer or Tokenizer()
        self.ner_manager = ner_manager or NamedEntityMatcher(threshold=self.config.NER_THRESHOLD)
        self.guesser = guesser or LanguageGuesser()
        self.sentiment = sentiment or SentimentAnalyzer(tokenizer=self.tokenizer)
        self.nlg_manager = AnswerManager(rng=rng)

        self.languages: List[str] = []
        self.classifiers: Dict[str, IntentClassifier] = {}
        self.intent_entities: Dict[str, List[str]] = {}

        if languages:
            self.add_language(languages)

    def _create_classifier(self, locale: str) -> IntentClassifier:
        return IntentClassifier(
            locale,
            tokenizer=self.tokenizer,
            ner_manager=self.ner_manager,
            max_iter=self.config.CLASSIFIER_MAX_ITER,
            c=self.config.CLASSIFIER_C,
            threshold=self.config.CLASSIFIER_THRESHOLD,
        )

    def add_language(self, locales: Union[str, Iterable[str]]):
        """
        Зарегистрировать одну или несколько локалей.

        Для новой локали создаётся пустой классификатор; уже известные
        локали не меняются.
        """
        if isinstance(locales, str):
            locales = [locales]

        for locale in locales:
            if locale in self.classifiers:
                continue
            self.languages.append(locale)
            self.classifiers[locale] = self._create_classifier(locale)
            logger.info(f"Добавлен язык {locale}")

    def guess_language(self, utterance: str) -> Optional[str]:
        """
        Определить язык фразы среди зарегистрированных локалей.

        Returns:
            Локаль или None, если ни одной локали не зарегистрировано
        """
        return self._guess_among(utterance, self.languages)

    def _guess_among(self, utterance: str, candidates: Sequence[str]) -> Optional[str]:
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]
        return self.guesser.guess(utterance, candidates)

    def _resolve_locale(self, locale: LocaleArg, utterance: str, for_classification: bool = False) -> Optional[str]:
        choice = to_locale_choice(locale)
        if isinstance(choice, Explicit):
            return choice.locale

        candidates = self.languages
        if for_classification and self.config.GUESS_SCOPE == "trained":
            trained = [lang for lang in self.languages if self.classifiers[lang].is_trained]
            candidates = trained or self.languages

        guessed = self._guess_among(utterance, candidates)
        logger.debug(f"Язык фразы {utterance!r} определён как {guessed}")
        return guessed

    def _get_classifier(self, locale: Optional[str]) -> IntentClassifier:
        classifier = self.classifiers.get(locale)
        if classifier is None:
            raise ClassifierNotFound(locale)
        return classifier

    def _check_locales(self, locales: Optional[Union[str, Sequence[str]]]):
        if isinstance(locales, str):
            locales = [locales]
        for locale in locales or []:
            self._get_classifier(locale)

    def add_document(self, locale: LocaleArg, utterance: str, intent: str) -> bool:
        """
        Добавить обучающую фразу.

        Args:
            locale: Локаль; None - угадать по тексту
            utterance: Текст фразы, может содержать %entity%
            intent: Метка намерения

        Returns:
            False, если такой документ уже был

        Raises:
            ClassifierNotFound: Если локаль не зарегистрирована
            InvalidDocument: Если текст или метка пустые
        """
        classifier = self._get_classifier(self._resolve_locale(locale, utterance))
        added = classifier.add_document(utterance, intent)

        entities = self.intent_entities.setdefault(intent, [])
        for name in self.ner_manager.get_placeholders(utterance):
            if name not in entities:
                entities.append(name)
        return added

    def remove_document(self, locale: LocaleArg, utterance: str, intent: str) -> bool:
        """
        Удалить обучающую фразу (точное совпадение текста и метки).

        Raises:
            ClassifierNotFound: Если локаль не зарегистрирована
        """
        classifier = self._get_classifier(self._resolve_locale(locale, utterance))
        removed = classifier.remove_document(utterance, intent)
        if removed:
            self._rebuild_intent_entities(intent)
        return removed

    def _rebuild_intent_entities(self, intent: str):
        names = []
        has_documents = False
        for locale in self.languages:
            for document in self.classifiers[locale].docs:
                if document.intent != intent:
                    continue
                has_documents = True
                for name in self.ner_manager.get_placeholders(document.utterance):
                    if name not in names:
                        names.append(name)

        if has_documents:
            self.intent_entities[intent] = names
        else:
            self.intent_entities.pop(intent, None)

    def add_named_entity_text(
        self,
        entity: str,
        option: str,
        locales: Optional[Union[str, Sequence[str]]] = None,
        aliases: Optional[Union[str, Sequence[str]]] = None,
    ):
        """
        Зарегистрировать алиасы варианта сущности.

        Модели, обученные раньше, увидят новые алиасы только после train().

        Raises:
            ClassifierNotFound: Если какая-то из локалей не зарегистрирована
        """
        self._check_locales(locales)
        self.ner_manager.add_named_entity_text(entity, option, locales, aliases)

    def remove_named_entity_text(
        self,
        entity: str,
        option: str,
        locales: Optional[Union[str, Sequence[str]]] = None,
        aliases: Optional[Union[str, Sequence[str]]] = None,
    ):
        self._check_locales(locales)
        self.ner_manager.remove_named_entity_text(entity, option, locales, aliases)

    def add_answer(self, locale: str, intent: str, answer: str) -> bool:
        self._get_classifier(locale)
        return self.nlg_manager.add_answer(locale, intent, answer)

    def remove_answer(self, locale: str, intent: str, answer: str) -> bool:
        self._get_classifier(locale)
        return self.nlg_manager.remove_answer(locale, intent, answer)

    def train(self):
        """Обучить классификаторы всех локалей."""
        for locale in self.languages:
            self.classifiers[locale].train()
        logger.info(f"Обучение завершено для языков: {', '.join(self.languages) or '-'}")

    @staticmethod
    def is_equal_classification(classifications: Sequence[Classification]) -> bool:
        return is_equal_classification(classifications)

    @staticmethod
    def _locale_and_utterance(locale: LocaleArg, utterance: Optional[str]):
        # С одним аргументом это фраза, а локаль угадывается
        if utterance is None and isinstance(locale, str):
            return None, locale
        return locale, utterance

    def classify(self, locale: LocaleArg, utterance: Optional[str] = None) -> List[Classification]:
        """
        Классифицировать фразу.

        Args:
            locale: Локаль; None - угадать по тексту. Если передан только
                один аргумент, он считается фразой
            utterance: Текст фразы

        Returns:
            Распределение уверенности по намерениям, по убыванию

        Raises:
            ClassifierNotFound: Если локаль не зарегистрирована
        """
        locale, utterance = self._locale_and_utterance(locale, utterance)
        classifier = self._get_classifier(self._resolve_locale(locale, utterance, for_classification=True))
        return classifier.classify(utterance)

    def process(self, locale: LocaleArg, utterance: Optional[str] = None) -> ProcessResult:
        """
        Обработать фразу: язык, намерение, сущности, тональность, ответ.

        Args:
            locale: Локаль; None - угадать по тексту. Если передан только
                один аргумент, он считается фразой
            utterance: Текст фразы

        Returns:
            ProcessResult с результатами обработки

        Raises:
            ClassifierNotFound: Если локаль не зарегистрирована
        """
        locale, utterance = self._locale_and_utterance(locale, utterance)
        locale = self._resolve_locale(locale, utterance, for_classification=True)
        classifier = self._get_classifier(locale)
        classification = classifier.classify(utterance)

        result = ProcessResult(
            locale=locale,
            locale_iso2=locale_to_iso2(locale),
            utterance=utterance,
            classification=classification,
        )

        # Распределение без явного лидера ничего не говорит о намерении
        no_winner = len(classification) > 1 and is_equal_classification(classification)
        if is_none_classification(classification) or no_winner:
            result.intent = NONE_INTENT
            result.score = 1.0
        else:
            result.intent = classification[0].label
            result.score = classification[0].value

        entity_names = self.intent_entities.get(result.intent)
        if entity_names:
            result.entities = self.ner_manager.find_entities(locale, utterance, entity_names)

        result.sentiment = self.sentiment.analyze(locale, utterance)
        result.answer = self.nlg_manager.find_answer(locale, result.intent)

        logger.debug(f"[{locale}] {utterance!r} -> {result.intent} ({result.score:.3f})")
        return result

    def export(self) -> Dict[str, Any]:
        """Снимок состояния менеджера в виде JSON-совместимого словаря."""
        return {
            "languages": list(self.languages),
            "classifiers": {locale: self.classifiers[locale].to_dict() for locale in self.languages},
            "intent_entities": {intent: list(names) for intent, names in self.intent_entities.items()},
            "entities": self.ner_manager.to_dict(),
            "answers": self.nlg_manager.to_dict(),
        }

    def import_state(self, data: Dict[str, Any]):
        """
        Заменить состояние менеджера снимком из export().

        Raises:
            PersistenceError: Если снимок некорректен; менеджер при этом не меняется
        """
        try:
            languages = list(dict.fromkeys(data["languages"]))
            classifiers = {}
            for locale in languages:
                classifier = self._create_classifier(locale)
                classifier.load_dict(data["classifiers"][locale])
                classifiers[locale] = classifier
            intent_entities = {
                intent: list(names) for intent, names in data.get("intent_entities", {}).items()
            }
            answers = AnswerManager(rng=self.nlg_manager.rng)
            answers.load_dict(data.get("answers", {}))
            # Последним: реестр сущностей заменяется целиком или не меняется вовсе
            self.ner_manager.load_dict(data.get("entities", {}))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise PersistenceError(f"Invalid model state: {e}") from e

        self.languages = languages
        self.classifiers = classifiers
        self.intent_entities = intent_entities
        self.nlg_manager = answers

    def save(self, path: Optional[str] = None):
        """
        Сохранить модель в файл.

        Args:
            path: Путь к файлу; по умолчанию Config.MODEL_PATH
        """
        save_state(path or self.config.MODEL_PATH, self.export())

    def load(self, path: Optional[str] = None):
        """
        Загрузить модель из файла.

        Raises:
            PersistenceError: Если файла нет или он повреждён; менеджер при этом не меняется
        """
        self.import_state(load_state(path or self.config.MODEL_PATH))
