# path: src/supplierml/models/trainer.py
"""
Model lifecycle for SupplierML.

`ModelTrainer` owns the single model slot of the service. The slot holds a
`(TrainerState, model)` pair guarded by one lock, held for the whole of every
train / classify / evaluate call:

- classify/evaluate never observe a half-replaced model,
- concurrent trainings run one after another,
- a failed training leaves the previous state and model in place.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Optional

from supplierml.data.data_loader import load_supplier_dataset
from supplierml.data.schema import Prediction, SupplierRecord
from supplierml.exceptions import ModelNotTrainedError
from supplierml.models.backend import (
    ClassificationBackend,
    SdcaClassificationBackend,
    TrainedModel,
)
from supplierml.models.metrics import EvaluationResult
from supplierml.utils.logging_utils import get_logger
from supplierml.utils.paths import PathLike

logger = get_logger(__name__)


class TrainerState(str, Enum):
    UNTRAINED = "untrained"
    TRAINED = "trained"


class ModelTrainer:
    """Train, classify and evaluate through a `ClassificationBackend`."""

    def __init__(self, backend: Optional[ClassificationBackend] = None) -> None:
        self._backend: ClassificationBackend = (
            backend if backend is not None else SdcaClassificationBackend()
        )
        self._lock = threading.Lock()
        self._state = TrainerState.UNTRAINED
        self._model: Optional[TrainedModel] = None

    @property
    def state(self) -> TrainerState:
        with self._lock:
            return self._state

    @property
    def is_trained(self) -> bool:
        return self.state is TrainerState.TRAINED

    def train(self, dataset_path: PathLike) -> None:
        """
        Fit a new model from a CSV dataset and make it the current one.

        Raises
        ------
        DataLoadError
            If the dataset cannot be loaded or is malformed.
        """
        with self._lock:
            df = load_supplier_dataset(dataset_path)
            model = self._backend.fit(df)

            replaced = self._model is not None
            self._model = model
            self._state = TrainerState.TRAINED

        logger.info(
            "Model trained from %s (%d rows, classes %s)%s.",
            dataset_path,
            model.n_training_rows,
            model.class_labels,
            ", previous model replaced" if replaced else "",
        )

    def classify(self, record: SupplierRecord) -> Prediction:
        """
        Predict the category of one supplier record.

        Raises
        ------
        ModelNotTrainedError
            If no training has succeeded yet.
        """
        with self._lock:
            model = self._require_model()
            label = self._backend.predict(model, record)
        return Prediction(predicted_category=label)

    def evaluate(self, test_dataset_path: PathLike) -> EvaluationResult:
        """
        Score a labelled test dataset with the current model.

        Raises
        ------
        ModelNotTrainedError
            If no training has succeeded yet.
        DataLoadError
            If the test dataset cannot be loaded or is malformed.
        """
        with self._lock:
            model = self._require_model()
            df = load_supplier_dataset(test_dataset_path)
            predictions = self._backend.transform(model, df)
            result = self._backend.evaluate(predictions)

        logger.info(
            "Evaluated model on %s: micro_accuracy=%.3f macro_accuracy=%.3f log_loss=%.3f",
            test_dataset_path,
            result.micro_accuracy,
            result.macro_accuracy,
            result.log_loss,
        )
        return result

    def _require_model(self) -> TrainedModel:
        if self._state is not TrainerState.TRAINED or self._model is None:
            raise ModelNotTrainedError()
        return self._model
