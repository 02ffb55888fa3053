"""
NLU (Natural Language Understanding) модуль.

Обеспечивает понимание пользовательских фраз на нескольких языках:
- Определение языка фразы
- Классификация намерений (intents)
- Извлечение именованных сущностей (entities)
- Анализ тональности
- Выбор готового ответа для намерения
"""

from .answers import AnswerManager
from .classifiers import IntentClassifier, NamedEntityMatcher
from .exceptions import ClassifierNotFound, InvalidDocument, NLUError, PersistenceError
from .language_guesser import LanguageGuesser
from .manager import NlpManager
from .models import (
    GUESS,
    Classification,
    Document,
    EntityMatch,
    Explicit,
    Guess,
    ProcessResult,
    SentimentResult,
)
from .sentiment import BundledLexicon, SentimentAnalyzer
from .tokenizer import Tokenizer

__all__ = [
    # Manager
    "NlpManager",
    # Components
    "AnswerManager",
    "IntentClassifier",
    "NamedEntityMatcher",
    "LanguageGuesser",
    "SentimentAnalyzer",
    "BundledLexicon",
    "Tokenizer",
    # Models
    "GUESS",
    "Classification",
    "Document",
    "EntityMatch",
    "Explicit",
    "Guess",
    "ProcessResult",
    "SentimentResult",
    # Errors
    "NLUError",
    "ClassifierNotFound",
    "InvalidDocument",
    "PersistenceError",
]
