"""Locale selection models."""

import re
from dataclasses import dataclass
from typing import Optional, Union

from config.constants import ISO2_ALIASES


@dataclass(frozen=True)
class Explicit:
    """Локаль указана явно."""
    locale: str


@dataclass(frozen=True)
class Guess:
    """Локаль не указана: её нужно угадать по тексту."""


GUESS = Guess()

LocaleChoice = Union[Explicit, Guess]


def to_locale_choice(locale: Union[None, str, Explicit, Guess]) -> LocaleChoice:
    """
    Приводит аргумент locale публичного API к Explicit | Guess.

    Args:
        locale: None или пустая строка (угадать), код локали или готовый выбор

    Returns:
        Explicit или GUESS
    """
    if isinstance(locale, (Explicit, Guess)):
        return locale
    if locale is None:
        return GUESS
    if isinstance(locale, str):
        return Explicit(locale) if locale.strip() else GUESS
    raise TypeError(f"locale must be a string, Explicit, Guess or None, got {type(locale).__name__}")


def locale_to_iso2(locale: Optional[str]) -> Optional[str]:
    """
    Нормализует код локали к двухбуквенному ISO 639-1.

    "en-US" -> "en", "eng" -> "en", "jp" -> "ja".
    """
    if not locale:
        return None
    code = re.split(r"[-_]", locale.strip().lower(), maxsplit=1)[0]
    return ISO2_ALIASES.get(code, code[:2])
