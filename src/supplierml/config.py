"""
Global configuration for the SupplierML project.

This module centralizes paths, dataset column names and solver parameters,
so you can tweak them in one place.
"""

import tempfile
from pathlib import Path

# Project root = folder that contains "src", "data", "tests", etc.
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]

# Data directories
DATA_DIR: Path = PROJECT_ROOT / "data"
RAW_DATA_DIR: Path = DATA_DIR / "raw"

# Sample datasets shipped with the repo
TRAIN_DATASET_FILENAME: str = "suppliers_train.csv"
TEST_DATASET_FILENAME: str = "suppliers_test.csv"

# Uploaded CSV files are written here before training
UPLOAD_DIR: Path = Path(tempfile.gettempdir()) / "supplierml_uploads"

# Dataset format: comma separated, header row, columns in this exact order
CSV_SEPARATOR: str = ","
SUPPLIER_COLUMNS = ["delivery_time", "quality", "cost", "category"]
FEATURE_COLUMNS = ["delivery_time", "quality", "cost"]
LABEL_COLUMN: str = "category"

# Trainer parameters
MAX_ITER: int = 1000
TOLERANCE: float = 1e-4

# Reproducibility
RANDOM_STATE: int = 42

# Per-class metrics are rounded to this many decimals
METRIC_DECIMALS: int = 3

# Logging: handlers are attached to the "supplierml" package logger only
LOGGER_NAME: str = "supplierml"
LOG_LEVEL: str = "INFO"
LOG_FORMAT: str = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
