"""
Сохранение состояния менеджера в JSON файл модели.

Запись атомарная: сначала во временный файл рядом, затем os.replace,
поэтому прерванное сохранение не портит предыдущую модель.
"""

import json
import logging
import os
import tempfile
from typing import Any, Dict

from config.constants import MODEL_FORMAT_VERSION
from nlu.exceptions import PersistenceError
from utils.logger import setup_logger

logger = setup_logger(name="persistence", level=logging.INFO)


def save_state(path: str, state: Dict[str, Any]):
    """
    Записать состояние в файл модели.

    Args:
        path: Путь к файлу
        state: Словарь, полученный из NlpManager.export()

    Raises:
        PersistenceError: Если файл не удалось записать
    """
    payload = {"version": MODEL_FORMAT_VERSION, **state}
    directory = os.path.dirname(os.path.abspath(path))

    try:
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".model-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Ошибка при сохранении модели в {path}: {e}")
        raise PersistenceError(f"Failed to save model to {path}: {e}") from e

    logger.info(f"Модель сохранена в {path}")


def load_state(path: str) -> Dict[str, Any]:
    """
    Прочитать состояние из файла модели.

    Returns:
        Словарь состояния (без поля version)

    Raises:
        PersistenceError: Если файла нет, он повреждён или версия не поддерживается
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Ошибка при загрузке модели из {path}: {e}")
        raise PersistenceError(f"Failed to load model from {path}: {e}") from e

    if not isinstance(payload, dict):
        raise PersistenceError(f"Failed to load model from {path}: unexpected content")

    version = payload.pop("version", None)
    if version != MODEL_FORMAT_VERSION:
        raise PersistenceError(f"Unsupported model format version {version!r} in {path}")

    logger.info(f"Модель загружена из {path}")
    return payload
