# path: src/supplierml/features/feature_builder.py
"""
Feature engineering utilities for SupplierML.

This module turns validated supplier data into model-ready inputs:

- Encodes the text `category` as an integer label key, numbered in order
  of first appearance.
- Concatenates the three numeric fields into one feature vector per row.
- Decodes predicted label keys back to their category strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

import numpy as np
import pandas as pd

from supplierml.config import FEATURE_COLUMNS, LABEL_COLUMN
from supplierml.data.schema import SupplierRecord
from supplierml.exceptions import DataLoadError


def build_feature_matrix(df: pd.DataFrame) -> np.ndarray:
    """
    Concatenate the numeric supplier fields into a (n_rows, 3) float matrix.

    Column order is always FEATURE_COLUMNS, regardless of the DataFrame order.
    """
    missing = [c for c in FEATURE_COLUMNS if c not in df.columns]
    if missing:
        raise DataLoadError(f"Feature columns missing from dataset: {missing}")
    return df[FEATURE_COLUMNS].to_numpy(dtype=float)


def record_to_features(record: SupplierRecord) -> np.ndarray:
    """Build a single-row feature matrix from one SupplierRecord."""
    return np.asarray(
        [[float(getattr(record, col)) for col in FEATURE_COLUMNS]],
        dtype=float,
    )


@dataclass
class LabelKeyMap:
    """
    Category string <-> label key mapping fixed at training time.

    `classes[k]` is the category with key k. Keys follow the order in which
    categories first appear in the training data.
    """

    classes: List[str]

    def __post_init__(self) -> None:
        self._index: Dict[str, int] = {c: k for k, c in enumerate(self.classes)}

    def __len__(self) -> int:
        return len(self.classes)

    def __contains__(self, label: object) -> bool:
        return label in self._index

    def key_of(self, label: str) -> int:
        return self._index[label]


def fit_label_keys(df: pd.DataFrame) -> Tuple[LabelKeyMap, np.ndarray]:
    """
    Assign a label key to each distinct category and encode the label column.

    Returns
    -------
    (LabelKeyMap, numpy.ndarray)
        The key mapping and the encoded keys for every row.
    """
    labels = df[LABEL_COLUMN].astype(str)
    label_keys = LabelKeyMap(classes=[str(v) for v in pd.unique(labels)])
    return label_keys, encode_labels(label_keys, labels)


def encode_labels(label_keys: LabelKeyMap, labels: Iterable[str]) -> np.ndarray:
    """
    Map category strings to the keys assigned at training time.

    Raises
    ------
    DataLoadError
        If a category was never seen during training.
    """
    values: List[str] = [str(v) for v in labels]
    unseen = sorted({v for v in values if v not in label_keys})
    if unseen:
        raise DataLoadError(
            f"Dataset contains categories not seen during training: {unseen}"
        )
    return np.asarray([label_keys.key_of(v) for v in values], dtype=int)


def decode_labels(label_keys: LabelKeyMap, keys: np.ndarray) -> List[str]:
    """Map predicted label keys back to their category strings."""
    return [label_keys.classes[int(k)] for k in np.asarray(keys, dtype=int)]
