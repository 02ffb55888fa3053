"""Общие фикстуры тестов NLU ядра."""

import random

import pytest

from nlu import NlpManager

FRENCH_DOCUMENTS = [
    ("Bonjour", "greet"),
    ("bonne nuit", "greet"),
    ("Bonsoir", "greet"),
    ("J'ai perdu mes clés", "keys"),
    ("Je ne trouve pas mes clés", "keys"),
    ("Je ne me souviens pas où sont mes clés", "keys"),
]

JAPANESE_DOCUMENTS = [
    ("おはようございます", "greet"),
    ("こんにちは", "greet"),
    ("おやすみ", "greet"),
    ("私は私の鍵を紛失した", "keys"),
    ("私は私の鍵がどこにあるのか覚えていない", "keys"),
    ("私は私の鍵が見つからない", "keys"),
]

HERO_ENTITIES = [
    ("hero", "spiderman", ["Spiderman", "Spider-man"]),
    ("hero", "iron man", ["iron man", "iron-man"]),
    ("hero", "thor", ["Thor"]),
    ("food", "burguer", ["Burguer", "Hamburguer"]),
    ("food", "pizza", ["pizza"]),
    ("food", "pasta", ["Pasta", "spaghetti"]),
]

HERO_DOCUMENTS = [
    ("I saw %hero% eating %food%", "sawhero"),
    ("I have seen %hero%, he was eating %food%", "sawhero"),
    ("I want to eat %food%", "wanteat"),
]


def add_hero_training(manager: NlpManager):
    for entity, option, aliases in HERO_ENTITIES:
        manager.add_named_entity_text(entity, option, ["en"], aliases)
    for utterance, intent in HERO_DOCUMENTS:
        manager.add_document("en", utterance, intent)


@pytest.fixture
def manager():
    return NlpManager(rng=random.Random(42))


@pytest.fixture
def french_manager():
    manager = NlpManager(languages=["fr", "ja"])
    for utterance, intent in FRENCH_DOCUMENTS:
        manager.add_document("fr", utterance, intent)
    manager.train()
    return manager


@pytest.fixture
def hero_manager():
    manager = NlpManager(languages=["en"])
    add_hero_training(manager)
    manager.train()
    return manager
