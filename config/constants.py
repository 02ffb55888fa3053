"""
Статичные константы NLU ядра

Здесь должны быть только константы, которые:
- Не изменяются между окружениями (dev/prod)
- Не являются секретами
- Определяют поведение ядра
"""

# Метка намерения, когда классификация невозможна
NONE_INTENT = "None"

# Ключ локали для алиасов без ограничения по языку
GLOBAL_LOCALE = "*"

# Версия формата файла модели
MODEL_FORMAT_VERSION = 1

# Голоса анализатора тональности
SENTIMENT_POSITIVE = "positive"
SENTIMENT_NEGATIVE = "negative"
SENTIMENT_NEUTRAL = "neutral"

# Нормализация кодов языков к ISO 639-1
ISO2_ALIASES = {
    "eng": "en", "spa": "es", "fra": "fr", "fre": "fr", "deu": "de", "ger": "de",
    "ita": "it", "por": "pt", "nld": "nl", "dut": "nl", "cat": "ca", "rus": "ru",
    "jpn": "ja", "jp": "ja", "zho": "zh", "chi": "zh", "kor": "ko", "ara": "ar",
    "tur": "tr",
}

# Языки, для которых nltk предоставляет стеммер Snowball
SNOWBALL_LANGUAGES = {
    "ar": "arabic",
    "da": "danish",
    "de": "german",
    "en": "english",
    "es": "spanish",
    "fi": "finnish",
    "fr": "french",
    "hu": "hungarian",
    "it": "italian",
    "nl": "dutch",
    "no": "norwegian",
    "pt": "portuguese",
    "ro": "romanian",
    "ru": "russian",
    "sv": "swedish",
}
