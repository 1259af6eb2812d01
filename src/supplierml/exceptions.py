"""
Exception types raised by SupplierML.

The API layer maps each of these to an HTTP error response carrying the
exception message.
"""


class SupplierMLError(Exception):
    """Base class for all SupplierML errors."""


class DataLoadError(SupplierMLError):
    """A dataset file is missing, unreadable, empty or malformed."""


class ModelNotTrainedError(SupplierMLError):
    """A classify/evaluate call was made before any successful training."""

    def __init__(self, message: str = "Model has not been trained yet.") -> None:
        super().__init__(message)


class InvalidMatrixError(SupplierMLError):
    """A confusion matrix is not square or holds invalid counts."""
