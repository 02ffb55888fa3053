"""
Ошибки NLU ядра.

Необученная модель ошибкой не считается: классификатор в этом случае
возвращает намерение "None" с уверенностью 1.
"""


class NLUError(Exception):
    """Базовая ошибка NLU ядра."""


class ClassifierNotFound(NLUError):
    """Для локали не зарегистрирован классификатор (язык не добавлен)."""

    def __init__(self, locale):
        self.locale = locale
        super().__init__(f"Classifier not found for locale {locale}")


class InvalidDocument(NLUError, ValueError):
    """Пустой или некорректный обучающий документ."""


class PersistenceError(NLUError):
    """Не удалось сохранить или загрузить состояние менеджера."""
