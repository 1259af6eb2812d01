"""
Logging utilities for SupplierML.

All SupplierML loggers live under the "supplierml" package logger. The first
call to `get_logger` gives that logger a stdout handler with the project
format, leaving the root logger (and whatever uvicorn configures there) alone.
"""

import logging
import sys
from typing import Optional

from supplierml.config import LOG_FORMAT, LOG_LEVEL, LOGGER_NAME


def _configure_package_logger() -> logging.Logger:
    package_logger = logging.getLogger(LOGGER_NAME)
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        package_logger.setLevel(LOG_LEVEL)
        package_logger.propagate = False
    return package_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a logger inside the "supplierml" hierarchy.

    Parameters
    ----------
    name : str | None
        Usually `__name__`. Names outside the package are nested under it;
        None returns the package logger itself.
    """
    package_logger = _configure_package_logger()
    if name is None or name == LOGGER_NAME:
        return package_logger
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return package_logger.getChild(name)
