"""
Schema and validation utilities for supplier datasets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from supplierml.config import FEATURE_COLUMNS, LABEL_COLUMN, SUPPLIER_COLUMNS
from supplierml.exceptions import DataLoadError
from supplierml.utils.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class SupplierRecord:
    """
    A single supplier row.

    Used both as a training row (category required) and as an inference
    request (category absent or ignored).
    """

    delivery_time: float
    quality: float
    cost: float
    category: Optional[str] = None


@dataclass
class Prediction:
    """Predicted category for one SupplierRecord."""

    predicted_category: str


def validate_supplier_df(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate that a DataFrame conforms to the supplier dataset schema.

    Checks:
    - At least one data row.
    - Exactly len(SUPPLIER_COLUMNS) columns; they are renamed positionally,
      whatever the header says.
    - Feature columns are numeric and finite (coerced to float).
    - Every row carries a category.

    Parameters
    ----------
    df : pandas.DataFrame
        Dataset as read from CSV.

    Returns
    -------
    pandas.DataFrame
        A validated copy with canonical column names and dtypes.

    Raises
    ------
    DataLoadError
        If any of the checks fail.
    """
    if df.shape[1] != len(SUPPLIER_COLUMNS):
        raise DataLoadError(
            f"Expected {len(SUPPLIER_COLUMNS)} columns "
            f"({', '.join(SUPPLIER_COLUMNS)}), found {df.shape[1]}."
        )
    if df.empty:
        raise DataLoadError("Dataset contains no rows.")

    df = df.copy()
    df.columns = SUPPLIER_COLUMNS

    for col in FEATURE_COLUMNS:
        try:
            df[col] = pd.to_numeric(df[col], errors="raise").astype(float)
        except (TypeError, ValueError) as exc:
            raise DataLoadError(
                f"Column '{col}' must contain only numeric values."
            ) from exc

    if not np.isfinite(df[FEATURE_COLUMNS].to_numpy()).all():
        raise DataLoadError("Feature columns contain missing or non-finite values.")

    if df[LABEL_COLUMN].isna().any():
        raise DataLoadError(f"Some rows are missing a '{LABEL_COLUMN}' value.")
    df[LABEL_COLUMN] = df[LABEL_COLUMN].astype(str).str.strip()
    logger.debug("Validated %d supplier rows.", len(df))

    return df
