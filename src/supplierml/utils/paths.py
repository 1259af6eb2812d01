"""
Helper functions for file and directory paths used in SupplierML.
"""

from pathlib import Path, PurePath
from typing import Union

from supplierml.config import (
    RAW_DATA_DIR,
    TEST_DATASET_FILENAME,
    TRAIN_DATASET_FILENAME,
    UPLOAD_DIR,
)

PathLike = Union[str, Path]


def get_raw_data_path(filename: str | None = None) -> Path:
    """
    Return the path to a dataset under data/raw.

    Parameters
    ----------
    filename : str | None
        Specific filename, or None for the default training CSV.
    """
    if filename is None:
        filename = TRAIN_DATASET_FILENAME
    return RAW_DATA_DIR / filename


def get_test_data_path() -> Path:
    """Return the path to the sample evaluation CSV."""
    return RAW_DATA_DIR / TEST_DATASET_FILENAME


def get_upload_path(filename: str | None, upload_dir: PathLike | None = None) -> Path:
    """
    Return the location where an uploaded file should be stored.

    Only the final component of the client-supplied name is kept, so names
    like "../../etc/passwd" cannot escape the upload directory.

    Parameters
    ----------
    filename : str | None
        Name sent by the client. Falls back to "upload.csv" when missing.
    upload_dir : str | Path | None
        Target directory, defaults to config.UPLOAD_DIR.

    Returns
    -------
    Path
        Full path inside the upload directory.
    """
    base_dir = Path(upload_dir) if upload_dir is not None else UPLOAD_DIR
    # normalize Windows separators so .name strips every parent
    safe_name = PurePath((filename or "").replace("\\", "/")).name
    if safe_name in ("", ".", ".."):
        safe_name = "upload.csv"
    return base_dir / safe_name
