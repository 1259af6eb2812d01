"""
Data loading utilities for SupplierML.

This module provides functions to load supplier datasets from CSV and to store
uploaded CSV files before training.
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Optional

import pandas as pd

from supplierml.config import CSV_SEPARATOR
from supplierml.data.schema import validate_supplier_df
from supplierml.exceptions import DataLoadError
from supplierml.utils.logging_utils import get_logger
from supplierml.utils.paths import PathLike, get_upload_path

logger = get_logger(__name__)


def load_supplier_dataset(path: PathLike) -> pd.DataFrame:
    """
    Load a supplier dataset from a CSV file and validate it.

    Parameters
    ----------
    path : pathlib.Path | str
        Path to a comma-separated file with a header row and the columns
        delivery_time, quality, cost, category (in that order).

    Returns
    -------
    pandas.DataFrame
        Validated supplier DataFrame.

    Raises
    ------
    DataLoadError
        If the file is missing, unreadable, empty or malformed.
    """
    csv_path = Path(path)
    if not csv_path.is_file():
        raise DataLoadError(f"Dataset file not found: {csv_path}")

    logger.info("Loading supplier data from %s", csv_path)
    try:
        with csv_path.open("r", encoding="utf-8", newline="") as fh:
            df = pd.read_csv(fh, sep=CSV_SEPARATOR, header=0)
    except pd.errors.EmptyDataError as exc:
        raise DataLoadError(f"Dataset file is empty: {csv_path}") from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Dataset file is malformed: {csv_path} ({exc})") from exc
    except OSError as exc:
        raise DataLoadError(f"Cannot read dataset file {csv_path}: {exc}") from exc

    try:
        df = validate_supplier_df(df)
    except DataLoadError as exc:
        logger.warning("Rejected dataset %s: %s", csv_path, exc)
        raise

    logger.info("Loaded %d valid supplier rows.", len(df))
    return df


def save_uploaded_dataset(
    content: bytes,
    filename: Optional[str],
    upload_dir: Optional[PathLike] = None,
) -> Path:
    """
    Write an uploaded CSV payload to the upload directory.

    Parameters
    ----------
    content : bytes
        Raw file content sent by the client.
    filename : str | None
        Client-side filename; its sanitized stem and suffix are kept around a
        unique random part, so concurrent uploads never share a file.
    upload_dir : pathlib.Path | str | None
        Target directory, defaults to config.UPLOAD_DIR.

    Returns
    -------
    pathlib.Path
        Path of the written file. The caller owns it and should delete it.

    Raises
    ------
    DataLoadError
        If the payload is empty or cannot be written.
    """
    if not content:
        raise DataLoadError("Uploaded CSV file is empty.")

    target = get_upload_path(filename, upload_dir)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=target.parent,
            prefix=f"{target.stem}-",
            suffix=target.suffix or ".csv",
            delete=False,
        ) as fh:
            out_path = Path(fh.name)
            fh.write(content)
    except OSError as exc:
        raise DataLoadError(f"Cannot store uploaded file {target.name}: {exc}") from exc

    logger.info("Stored uploaded dataset (%d bytes) at %s", len(content), out_path)
    return out_path
