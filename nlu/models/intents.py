"""Intent classification models for NLU."""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from config.constants import NONE_INTENT


@dataclass(frozen=True)
class Classification:
    """
    Одна строка распределения уверенности по намерениям.

    Attributes:
        label: Метка намерения
        value: Уверенность (0.0 - 1.0)
    """
    label: str
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "value": self.value}


def none_classification() -> List[Classification]:
    """Распределение-заглушка: намерение "None" с уверенностью 1."""
    return [Classification(NONE_INTENT, 1.0)]


def is_none_classification(classifications: Sequence[Classification]) -> bool:
    """Проверяет, что классификатор вернул заглушку "None"."""
    return not classifications or classifications[0].label == NONE_INTENT


def is_equal_classification(classifications: Sequence[Classification]) -> bool:
    """
    Проверяет, что у всех строк распределения одинаковая уверенность.

    Такое распределение не несёт никакого сигнала, и менеджер в этом
    случае возвращает намерение "None".

    Args:
        classifications: Распределение уверенности

    Returns:
        True, если все значения равны с точностью до погрешности float
    """
    if not classifications:
        return True
    first = classifications[0].value
    return all(math.isclose(item.value, first, rel_tol=1e-9, abs_tol=1e-12) for item in classifications)
