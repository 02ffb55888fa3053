"""
Answer Manager - готовые ответы для намерений (NLG).
"""

import logging
import random
from typing import Dict, List, Optional

from utils.logger import setup_logger

logger = setup_logger(name="answers", level=logging.INFO)


class AnswerManager:
    """
    Хранилище ответов: локаль -> намерение -> список ответов.

    Ответы только добавляются; точные дубликаты игнорируются. Выбор ответа
    равновероятный, генератор случайных чисел можно передать снаружи.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._answers: Dict[str, Dict[str, List[str]]] = {}

    def add_answer(self, locale: str, intent: str, answer: str) -> bool:
        """
        Добавить ответ.

        Returns:
            False, если такой ответ уже есть
        """
        answers = self._answers.setdefault(locale, {}).setdefault(intent, [])
        if answer in answers:
            return False
        answers.append(answer)
        return True

    def remove_answer(self, locale: str, intent: str, answer: str) -> bool:
        answers = self._answers.get(locale, {}).get(intent)
        if not answers or answer not in answers:
            return False

        answers.remove(answer)
        if not answers:
            del self._answers[locale][intent]
        if not self._answers[locale]:
            del self._answers[locale]
        return True

    def find_all_answers(self, locale: str, intent: str) -> List[str]:
        return list(self._answers.get(locale, {}).get(intent, []))

    def find_answer(self, locale: str, intent: str) -> Optional[str]:
        """
        Случайный ответ для намерения.

        Returns:
            Ответ или None, если для намерения ничего не зарегистрировано
        """
        answers = self._answers.get(locale, {}).get(intent)
        if not answers:
            return None
        return self.rng.choice(answers)

    def to_dict(self) -> Dict[str, Dict[str, List[str]]]:
        return {
            locale: {intent: list(answers) for intent, answers in intents.items()}
            for locale, intents in self._answers.items()
        }

    def load_dict(self, data: Dict[str, Dict[str, List[str]]]):
        self._answers = {
            locale: {intent: list(answers) for intent, answers in intents.items()}
            for locale, intents in data.items()
        }
        logger.debug(f"Загружены ответы для {len(self._answers)} локалей")
