from dataclasses import dataclass
from typing import Optional

GUESS_SCOPES = ("all", "trained")


@dataclass
class Config:
    """Конфигурация NLU ядра из переменных окружения"""
    # Настройки логирования
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Файл модели для save()/load()
    MODEL_PATH: str = "model.nlp"

    # Обучение классификатора
    CLASSIFIER_MAX_ITER: int = 1000
    # Обратная сила L2-регуляризации (параметр C логистической регрессии)
    CLASSIFIER_C: float = 100.0
    CLASSIFIER_THRESHOLD: float = 0.3

    # Поиск именованных сущностей
    NER_THRESHOLD: float = 0.8

    # Среди каких языков угадывать локаль: "all" или "trained"
    GUESS_SCOPE: str = "all"

    def __post_init__(self):
        if self.CLASSIFIER_MAX_ITER < 1:
            raise ValueError("CLASSIFIER_MAX_ITER must be a positive integer")
        if self.CLASSIFIER_C <= 0:
            raise ValueError("CLASSIFIER_C must be positive")
        if not 0 <= self.CLASSIFIER_THRESHOLD <= 1:
            raise ValueError("CLASSIFIER_THRESHOLD must be within [0, 1]")
        if not 0 < self.NER_THRESHOLD <= 1:
            raise ValueError("NER_THRESHOLD must be within (0, 1]")
        if self.GUESS_SCOPE not in GUESS_SCOPES:
            raise ValueError(f"GUESS_SCOPE must be one of {GUESS_SCOPES}, got {self.GUESS_SCOPE!r}")


def load_config() -> Config:
    """
    Загрузка конфигурации из переменных окружения

    Returns:
        Config: Объект конфигурации

    Raises:
        ValueError: Если значение переменной некорректно
    """
    import os
    from dotenv import load_dotenv

    load_dotenv()

    return Config(
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        LOG_FILE=os.getenv("LOG_FILE") or None,
        MODEL_PATH=os.getenv("MODEL_PATH", "model.nlp"),
        CLASSIFIER_MAX_ITER=int(os.getenv("CLASSIFIER_MAX_ITER", "1000")),
        CLASSIFIER_C=float(os.getenv("CLASSIFIER_C", "100.0")),
        CLASSIFIER_THRESHOLD=float(os.getenv("CLASSIFIER_THRESHOLD", "0.3")),
        NER_THRESHOLD=float(os.getenv("NER_THRESHOLD", "0.8")),
        GUESS_SCOPE=os.getenv("GUESS_SCOPE", "all"),
    )
