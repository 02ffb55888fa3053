"""
Настройка логирования с ротацией
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Создаёт (или донастраивает уже созданный) логгер.

    Args:
        name: Имя логгера
        log_file: Путь к файлу лога; без него пишем только в консоль
        level: Уровень логирования (число или строка вроде "INFO")
        max_bytes: Размер файла, после которого происходит ротация
        backup_count: Сколько старых файлов хранить

    Returns:
        Настроенный logging.Logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT)

    # Повторный вызов не должен дублировать обработчики
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file and not _has_file_handler(logger, log_file):
        directory = os.path.dirname(log_file)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def _has_file_handler(logger: logging.Logger, log_file: str) -> bool:
    path = os.path.abspath(log_file)
    return any(
        isinstance(h, RotatingFileHandler) and h.baseFilename == path
        for h in logger.handlers
    )


# Логгеры модулей NLU ядра
NLU_LOGGERS = (
    "nlp_manager",
    "intent_classifier",
    "entity_extractor",
    "language_guesser",
    "tokenizer",
    "sentiment",
    "answers",
    "persistence",
)


def configure_logging(
    log_file: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
) -> None:
    """
    Применить уровень и файл лога ко всем логгерам NLU ядра.

    Вызывается один раз из точки входа приложения, например
    configure_logging(config.LOG_FILE, config.LOG_LEVEL).
    """
    for name in NLU_LOGGERS:
        setup_logger(name=name, log_file=log_file, level=level)
