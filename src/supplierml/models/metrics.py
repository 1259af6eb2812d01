# path: src/supplierml/models/metrics.py
"""
Metrics utilities for SupplierML models.

- `compute_multiclass_metrics` produces the aggregate evaluation report
  (accuracies, log loss, confusion matrix) for a set of predictions.
- `per_class_metrics` derives precision/recall/F1 per class from a
  confusion matrix.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Sequence

import numpy as np
from sklearn.metrics import accuracy_score, confusion_matrix, log_loss, recall_score

from supplierml.config import METRIC_DECIMALS
from supplierml.exceptions import InvalidMatrixError

ConfusionMatrix = List[List[int]]


@dataclass
class EvaluationResult:
    """Aggregate metrics for one evaluation run."""

    macro_accuracy: float
    micro_accuracy: float
    log_loss: float
    log_loss_reduction: float
    confusion_matrix: ConfusionMatrix = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ClassMetrics:
    """Precision, recall and F1 of a single class."""

    class_label: str
    precision: float
    recall: float
    f1: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _prior_log_loss(y_true: np.ndarray, num_classes: int) -> float:
    """Log loss of a predictor that always answers the label distribution."""
    counts = np.bincount(y_true, minlength=num_classes).astype(float)
    priors = counts[counts > 0] / counts.sum()
    return float(-(priors * np.log(priors)).sum())


def compute_multiclass_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    y_proba: np.ndarray,
    num_classes: int,
) -> EvaluationResult:
    """
    Compute the aggregate multiclass evaluation metrics.

    Parameters
    ----------
    y_true : np.ndarray
        True label keys (0..num_classes-1).
    y_pred : np.ndarray
        Predicted label keys.
    y_proba : np.ndarray
        Predicted probabilities with shape (n_samples, num_classes), columns
        ordered by label key.
    num_classes : int
        Number of classes known to the model.

    Returns
    -------
    EvaluationResult
        micro accuracy (fraction correct), macro accuracy (mean per-class
        accuracy over the classes present in y_true), log loss, log loss
        reduction relative to the label prior, and a num_classes x
        num_classes confusion matrix.
    """
    y_true = np.asarray(y_true, dtype=int)
    y_pred = np.asarray(y_pred, dtype=int)
    labels = np.arange(num_classes)

    micro = accuracy_score(y_true, y_pred)
    macro = recall_score(
        y_true,
        y_pred,
        labels=np.unique(y_true),
        average="macro",
        zero_division=0,
    )

    ll = log_loss(y_true, y_proba, labels=labels)
    prior_ll = _prior_log_loss(y_true, num_classes)
    # single-class test sets have a zero prior; report no reduction
    ll_reduction = 1.0 - ll / prior_ll if prior_ll > 0 else 0.0

    cm = confusion_matrix(y_true, y_pred, labels=labels)

    return EvaluationResult(
        macro_accuracy=float(macro),
        micro_accuracy=float(micro),
        log_loss=float(ll),
        log_loss_reduction=float(ll_reduction),
        confusion_matrix=cm.astype(int).tolist(),
    )


def _validate_matrix(matrix: Sequence[Sequence[int]]) -> np.ndarray:
    try:
        counts = np.asarray(matrix, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidMatrixError(f"Confusion matrix is not rectangular: {exc}") from exc

    if counts.ndim != 2 or counts.shape[0] != counts.shape[1]:
        raise InvalidMatrixError(
            f"Confusion matrix must be square, got shape {counts.shape}."
        )
    if np.isnan(counts).any() or (counts < 0).any():
        raise InvalidMatrixError("Confusion matrix counts must be non-negative.")
    return counts


def _safe_ratio(num: float, den: float) -> float:
    return 0.0 if den == 0 else num / den


def per_class_metrics(matrix: Sequence[Sequence[int]]) -> List[ClassMetrics]:
    """
    Derive precision, recall and F1 for every class of a confusion matrix.

    Row i holds the true class i, column j the predicted class j. Zero
    denominators yield 0 instead of an error, so classes that never occur or
    are never predicted still get a well-formed entry.

    Classes are labelled "Class {i}" by index; the original category
    strings are not mapped back.

    Parameters
    ----------
    matrix : sequence of sequences of int
        Square confusion matrix with non-negative counts.

    Returns
    -------
    list[ClassMetrics]
        One entry per row, in index order, values rounded to METRIC_DECIMALS.

    Raises
    ------
    InvalidMatrixError
        If the matrix is not square or contains negative counts.
    """
    if len(matrix) == 0:
        return []

    counts = _validate_matrix(matrix)
    diagonal = np.diag(counts)
    row_sums = counts.sum(axis=1)
    col_sums = counts.sum(axis=0)

    results: List[ClassMetrics] = []
    for i in range(counts.shape[0]):
        tp = float(diagonal[i])
        fn = float(row_sums[i] - tp)
        fp = float(col_sums[i] - tp)

        precision = _safe_ratio(tp, tp + fp)
        recall = _safe_ratio(tp, tp + fn)
        f1 = _safe_ratio(2 * precision * recall, precision + recall)

        results.append(
            ClassMetrics(
                class_label=f"Class {i}",
                precision=round(precision, METRIC_DECIMALS),
                recall=round(recall, METRIC_DECIMALS),
                f1=round(f1, METRIC_DECIMALS),
            )
        )

    return results
