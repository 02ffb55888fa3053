"""Training document model."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Document:
    """
    Обучающий документ классификатора.

    Текст хранится как есть: плейсхолдеры вида %entity% раскрываются
    только при обучении.

    Attributes:
        utterance: Текст фразы
        intent: Метка намерения
    """
    utterance: str
    intent: str

    def to_dict(self) -> Dict[str, Any]:
        return {"utterance": self.utterance, "intent": self.intent}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        return cls(utterance=data["utterance"], intent=data["intent"])
