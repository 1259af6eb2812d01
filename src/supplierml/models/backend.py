# path: src/supplierml/models/backend.py
"""
Classification backends for SupplierML.

The trainer only talks to the narrow `ClassificationBackend` protocol
(fit / transform / predict / evaluate). `SdcaClassificationBackend` is the
default implementation, built on scikit-learn:

    category  -> label key (order of first appearance)
    features  -> concatenated (delivery_time, quality, cost) vector
    trainer   -> StandardScaler + multinomial maximum-entropy model
                 fitted with the stochastic "saga" solver
    prediction key -> category string
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol

import numpy as np
import pandas as pd
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from supplierml.config import (
    LABEL_COLUMN,
    MAX_ITER,
    RANDOM_STATE,
    TOLERANCE,
)
from supplierml.data.schema import SupplierRecord
from supplierml.exceptions import DataLoadError
from supplierml.features.feature_builder import (
    LabelKeyMap,
    build_feature_matrix,
    decode_labels,
    encode_labels,
    fit_label_keys,
    record_to_features,
)
from supplierml.models.metrics import EvaluationResult, compute_multiclass_metrics
from supplierml.utils.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class TrainConfig:
    """
    Configuration for the maximum-entropy trainer.

    Attributes
    ----------
    max_iter : int
        Maximum number of passes over the training data.
    tol : float
        Stopping tolerance.
    random_state : int
        Random seed for reproducibility.
    """

    max_iter: int = MAX_ITER
    tol: float = TOLERANCE
    random_state: int = RANDOM_STATE


@dataclass
class TrainedModel:
    """Fitted pipeline plus the label key mapping used to train it."""

    pipeline: Pipeline
    label_keys: LabelKeyMap
    n_training_rows: int

    @property
    def class_labels(self) -> List[str]:
        return list(self.label_keys.classes)


@dataclass
class ScoredDataset:
    """Output of `transform`: true keys, predicted keys and probabilities."""

    y_true: np.ndarray
    y_pred: np.ndarray
    y_proba: np.ndarray
    num_classes: int


class ClassificationBackend(Protocol):
    """The machine-learning capability the trainer delegates to."""

    def fit(self, dataset: pd.DataFrame) -> TrainedModel: ...

    def transform(self, model: TrainedModel, dataset: pd.DataFrame) -> ScoredDataset: ...

    def predict(self, model: TrainedModel, record: SupplierRecord) -> str: ...

    def evaluate(self, predictions: ScoredDataset) -> EvaluationResult: ...


class SdcaClassificationBackend:
    """scikit-learn implementation of `ClassificationBackend`."""

    def __init__(self, cfg: TrainConfig | None = None) -> None:
        self.cfg = cfg if cfg is not None else TrainConfig()

    def _build_pipeline(self) -> Pipeline:
        return Pipeline(
            steps=[
                ("scaler", StandardScaler()),
                (
                    "classifier",
                    LogisticRegression(
                        solver="saga",
                        max_iter=self.cfg.max_iter,
                        tol=self.cfg.tol,
                        random_state=self.cfg.random_state,
                    ),
                ),
            ]
        )

    def fit(self, dataset: pd.DataFrame) -> TrainedModel:
        label_keys, y = fit_label_keys(dataset)
        if len(label_keys) < 2:
            raise DataLoadError(
                "Training data must contain at least two distinct categories, "
                f"found {label_keys.classes}."
            )

        X = build_feature_matrix(dataset)
        logger.info(
            "Fitting classifier on %d rows, %d classes: %s",
            X.shape[0],
            len(label_keys),
            label_keys.classes,
        )

        pipeline = self._build_pipeline()
        pipeline.fit(X, y)

        return TrainedModel(
            pipeline=pipeline,
            label_keys=label_keys,
            n_training_rows=int(X.shape[0]),
        )

    def transform(self, model: TrainedModel, dataset: pd.DataFrame) -> ScoredDataset:
        y_true = encode_labels(model.label_keys, dataset[LABEL_COLUMN])
        X = build_feature_matrix(dataset)

        y_proba = model.pipeline.predict_proba(X)
        # classifier columns follow classes_, which are the keys 0..n-1
        y_pred = np.argmax(y_proba, axis=1)

        return ScoredDataset(
            y_true=np.asarray(y_true, dtype=int),
            y_pred=np.asarray(y_pred, dtype=int),
            y_proba=y_proba,
            num_classes=len(model.label_keys),
        )

    def predict(self, model: TrainedModel, record: SupplierRecord) -> str:
        X = record_to_features(record)
        key = model.pipeline.predict(X)
        return decode_labels(model.label_keys, key)[0]

    def evaluate(self, predictions: ScoredDataset) -> EvaluationResult:
        return compute_multiclass_metrics(
            y_true=predictions.y_true,
            y_pred=predictions.y_pred,
            y_proba=predictions.y_proba,
            num_classes=predictions.num_classes,
        )
