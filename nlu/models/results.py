"""Pipeline result models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from config.constants import NONE_INTENT
from .entities import EntityMatch
from .intents import Classification


@dataclass(frozen=True)
class SentimentResult:
    """
    Результат анализа тональности.

    Attributes:
        score: Суммарный вес слов из лексикона
        comparative: score, делённый на количество слов
        vote: "positive", "negative" или "neutral"
        num_words: Количество слов в тексте
        num_hits: Количество слов, найденных в лексиконе
        locale: Локаль, по лексикону которой считали
    """
    score: float
    comparative: float
    vote: str
    num_words: int
    num_hits: int
    locale: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "comparative": self.comparative,
            "vote": self.vote,
            "num_words": self.num_words,
            "num_hits": self.num_hits,
            "locale": self.locale,
        }


@dataclass
class ProcessResult:
    """
    Результат обработки фразы менеджером.

    Attributes:
        locale: Локаль, в которой классифицировали фразу
        locale_iso2: Двухбуквенный код локали
        utterance: Исходная фраза
        classification: Полное распределение уверенности
        intent: Выбранное намерение ("None", если выбрать нельзя)
        score: Уверенность выбранного намерения
        entities: Найденные сущности слева направо
        sentiment: Тональность фразы
        answer: Ответ для намерения, если ответы зарегистрированы
    """
    locale: str
    locale_iso2: Optional[str]
    utterance: str
    classification: List[Classification]
    intent: str = NONE_INTENT
    score: float = 1.0
    entities: List[EntityMatch] = field(default_factory=list)
    sentiment: Optional[SentimentResult] = None
    answer: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "locale": self.locale,
            "locale_iso2": self.locale_iso2,
            "utterance": self.utterance,
            "classification": [item.to_dict() for item in self.classification],
            "intent": self.intent,
            "score": self.score,
            "entities": [entity.to_dict() for entity in self.entities],
            "sentiment": self.sentiment.to_dict() if self.sentiment else None,
        }
        if self.answer is not None:
            result["answer"] = self.answer
        return result
