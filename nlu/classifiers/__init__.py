"""NLU Classifiers - классификатор намерений и поиск именованных сущностей."""

from .intent_classifier import ClassifierModel, IntentClassifier
from .entity_extractor import NamedEntityMatcher

__all__ = [
    "ClassifierModel",
    "IntentClassifier",
    "NamedEntityMatcher",
]
