"""Entity models for NLU."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class EntityMatch:
    """
    Сущность, найденная в тексте по алиасам.

    Attributes:
        entity: Имя сущности (например, "hero")
        option: Вариант сущности (например, "spiderman")
        source_text: Алиас в том виде, в котором он был зарегистрирован
        utterance_text: Фрагмент исходного текста, с которым совпал алиас
        start_pos: Начальная позиция в тексте
        end_pos: Конечная позиция в тексте (не включительно)
        accuracy: Степень совпадения (1.0 - точное совпадение)
    """
    entity: str
    option: str
    source_text: str
    utterance_text: str
    start_pos: int
    end_pos: int
    accuracy: float = 1.0

    @property
    def len(self) -> int:
        return self.end_pos - self.start_pos

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entity": self.entity,
            "option": self.option,
            "source_text": self.source_text,
            "utterance_text": self.utterance_text,
            "start_pos": self.start_pos,
            "end_pos": self.end_pos,
            "len": self.len,
            "accuracy": self.accuracy,
        }
