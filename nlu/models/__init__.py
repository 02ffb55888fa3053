"""NLU Models - dataclasses для работы с NLU."""

from .documents import Document
from .intents import (
    Classification,
    is_equal_classification,
    is_none_classification,
    none_classification,
)
from .entities import EntityMatch
from .locale import GUESS, Explicit, Guess, LocaleChoice, locale_to_iso2, to_locale_choice
from .results import ProcessResult, SentimentResult

__all__ = [
    "Document",
    "Classification",
    "is_equal_classification",
    "is_none_classification",
    "none_classification",
    "EntityMatch",
    "GUESS",
    "Explicit",
    "Guess",
    "LocaleChoice",
    "locale_to_iso2",
    "to_locale_choice",
    "ProcessResult",
    "SentimentResult",
]
