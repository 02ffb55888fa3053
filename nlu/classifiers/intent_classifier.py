"""
Intent Classifier.

Классификатор намерений для одной локали: мешок нормализованных токенов
(CountVectorizer) и логистическая регрессия scikit-learn.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer
from sklearn.linear_model import LogisticRegression
from sklearn.preprocessing import normalize

from nlu.exceptions import InvalidDocument
from nlu.models import Classification, Document, none_classification
from nlu.tokenizer import Tokenizer
from utils.logger import setup_logger

logger = setup_logger(name="intent_classifier", level=logging.INFO)


def _passthrough(tokens: Sequence[str]) -> Sequence[str]:
    """Анализатор для CountVectorizer: фразы уже разбиты Tokenizer'ом."""
    return tokens


def build_vectorizer(vocabulary: Optional[Sequence[str]] = None) -> CountVectorizer:
    """Бинарный мешок токенов; с готовым словарём обучение не нужно."""
    return CountVectorizer(
        analyzer=_passthrough,
        binary=True,
        dtype=np.float64,
        vocabulary=list(vocabulary) if vocabulary is not None else None,
    )


class ClassifierModel:
    """
    Обученная модель: словарь признаков, метки и логистическая регрессия.

    Attributes:
        vectorizer: CountVectorizer с зафиксированным словарём
        labels: Метки намерений в порядке classes_ регрессии
        estimator: LogisticRegression; None, если метка одна
    """

    def __init__(
        self,
        vectorizer: CountVectorizer,
        labels: Sequence[str],
        estimator: Optional[LogisticRegression] = None,
    ):
        self.vectorizer = vectorizer
        self.labels = list(labels)
        self.estimator = estimator

    @property
    def vocabulary(self) -> List[str]:
        index = self.vectorizer.vocabulary_
        return sorted(index, key=index.get)

    def vectorize(self, tokens: Sequence[str]):
        """
        Бинарный вектор признаков с L2-нормировкой.

        Returns:
            Разреженная строка или None, если ни одного токена нет в словаре
        """
        vector = self.vectorizer.transform([list(tokens)])
        if vector.nnz == 0:
            return None
        return normalize(vector, norm="l2")

    def predict(self, vector) -> np.ndarray:
        if self.estimator is None:
            return np.ones(1)
        return self.estimator.predict_proba(vector)[0]

    def to_dict(self) -> Dict[str, Any]:
        data = {"vocabulary": self.vocabulary, "labels": self.labels, "coef": [], "intercept": []}
        if self.estimator is not None:
            data["coef"] = self.estimator.coef_.tolist()
            data["intercept"] = self.estimator.intercept_.tolist()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassifierModel":
        """
        Восстановить модель без повторного обучения.

        Raises:
            ValueError: Если размеры коэффициентов не сходятся со словарём и метками
        """
        vocabulary = list(data["vocabulary"])
        labels = list(data["labels"])
        vectorizer = build_vectorizer(vocabulary)
        # transform() с заданным словарём работает и без fit()
        vectorizer.fit([vocabulary])

        if len(labels) < 2:
            return cls(vectorizer, labels)

        # Бинарная регрессия хранит одну строку коэффициентов
        rows = 1 if len(labels) == 2 else len(labels)
        coef = np.array(data["coef"], dtype=float).reshape(rows, len(vocabulary))
        intercept = np.array(data.get("intercept") or [0.0] * rows, dtype=float).reshape(rows)

        estimator = LogisticRegression()
        estimator.classes_ = np.array(labels)
        estimator.coef_ = coef
        estimator.intercept_ = intercept
        estimator.n_features_in_ = len(vocabulary)
        return cls(vectorizer, labels, estimator)


class IntentClassifier:
    """
    Классификатор намерений одной локали.

    Хранит обучающие документы и модель, построенную по ним при последнем
    вызове train(). Изменения документов попадают в модель только после
    следующего train().
    """

    def __init__(
        self,
        locale: str,
        tokenizer: Optional[Tokenizer] = None,
        ner_manager=None,
        max_iter: int = 1000,
        c: float = 100.0,
        threshold: float = 0.3,
    ):
        self.locale = locale
        self.tokenizer = tokenizer or Tokenizer()
        self.ner_manager = ner_manager
        self.max_iter = max_iter
        self.c = c
        self.threshold = threshold

        self.docs: List[Document] = []
        self.model: Optional[ClassifierModel] = None

    @property
    def is_trained(self) -> bool:
        return self.model is not None

    @property
    def labels(self) -> List[str]:
        return list(self.model.labels) if self.model else []

    def add_document(self, utterance: str, intent: str) -> bool:
        """
        Добавить обучающий документ.

        Args:
            utterance: Текст фразы (может содержать %entity%)
            intent: Метка намерения

        Returns:
            False, если такой документ уже есть

        Raises:
            InvalidDocument: Если текст или метка пустые
        """
        if not isinstance(utterance, str) or not utterance.strip():
            raise InvalidDocument("Document utterance must be a non-empty string")
        if not isinstance(intent, str) or not intent.strip():
            raise InvalidDocument("Document intent must be a non-empty string")

        document = Document(utterance, intent)
        if document in self.docs:
            return False
        self.docs.append(document)
        return True

    def remove_document(self, utterance: str, intent: str) -> bool:
        """
        Удалить документ по точному совпадению текста и метки.

        Returns:
            False, если документа не было
        """
        document = Document(utterance, intent)
        if document not in self.docs:
            return False
        self.docs.remove(document)
        return True

    def get_training_examples(self) -> List[Tuple[List[str], str]]:
        """Документы с раскрытыми плейсхолдерами, разбитые на токены."""
        examples = []
        for document in self.docs:
            if self.ner_manager is not None:
                texts = self.ner_manager.expand_placeholders(self.locale, document.utterance)
            else:
                texts = (document.utterance,)
            for text in texts:
                tokens = self.tokenizer.tokenize(self.locale, text)
                if tokens:
                    examples.append((tokens, document.intent))
        return examples

    def train(self):
        """Перестроить модель по всем текущим документам."""
        examples = self.get_training_examples()
        if not examples:
            self.model = None
            logger.info(f"[{self.locale}] Нет документов для обучения, модель сброшена")
            return

        vectorizer = build_vectorizer()
        features = normalize(vectorizer.fit_transform([tokens for tokens, _ in examples]), norm="l2")
        targets = [label for _, label in examples]

        labels = list(dict.fromkeys(targets))
        estimator = None
        # С одной меткой обучать нечего: уверенность всегда 1
        if len(labels) > 1:
            estimator = LogisticRegression(
                C=self.c,
                fit_intercept=False,
                max_iter=self.max_iter,
            )
            estimator.fit(features, targets)
            labels = [str(label) for label in estimator.classes_]

        # Модель подменяется целиком, classify() не видит промежуточного состояния
        self.model = ClassifierModel(vectorizer, labels, estimator)
        logger.info(
            f"[{self.locale}] Модель обучена: {len(examples)} примеров, "
            f"{len(labels)} намерений, {len(vectorizer.vocabulary_)} признаков"
        )

    def classify(self, utterance: str) -> List[Classification]:
        """
        Классифицировать фразу.

        Args:
            utterance: Текст фразы

        Returns:
            Распределение уверенности по всем намерениям модели, по убыванию;
            [None: 1], если модели нет, фраза не содержит известных токенов
            или ни одно намерение не набрало порога
        """
        model = self.model
        if model is None:
            return none_classification()

        vector = model.vectorize(self.tokenizer.tokenize(self.locale, utterance))
        if vector is None:
            return none_classification()

        probabilities = model.predict(vector)
        classifications = sorted(
            (Classification(label, float(value)) for label, value in zip(model.labels, probabilities)),
            key=lambda item: item.value,
            reverse=True,
        )
        if classifications[0].value < self.threshold:
            return none_classification()
        return classifications

    def to_dict(self) -> Dict[str, Any]:
        return {
            "locale": self.locale,
            "docs": [document.to_dict() for document in self.docs],
            "model": self.model.to_dict() if self.model else None,
        }

    def load_dict(self, data: Dict[str, Any]):
        """Заменить документы и модель сохранённым состоянием."""
        self.docs = [Document.from_dict(item) for item in data.get("docs", [])]
        model = data.get("model")
        self.model = ClassifierModel.from_dict(model) if model else None
