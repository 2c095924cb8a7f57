"""Dataset pipeline exception hierarchy.

All pipeline exceptions derive from :class:`DatasetError` so callers can catch
every data-preparation failure uniformly.
"""

from __future__ import annotations


class DatasetError(Exception):
    """Base class for data-preparation errors."""


class ConfigError(DatasetError):
    """Raised when pipeline parameters or settings are invalid."""


class FormatError(DatasetError):
    """Raised when the CSV structure is malformed or incomplete."""


class EmptyDatasetError(DatasetError):
    """Raised when no valid symbol survives parsing."""


class NoCommonCalendarError(DatasetError):
    """Raised when the symbols share no trading dates."""


class InsufficientDataError(DatasetError):
    """Raised when the aligned calendar is too short to form any window."""


class EmptySplitError(DatasetError):
    """Raised when the train/test split would leave a partition empty."""


class DatasetNotLoadedError(DatasetError):
    """Raised when a dataset is prepared before any CSV was loaded."""


class DatasetDisposedError(DatasetError):
    """Raised when tensors are accessed after the dataset was disposed."""


__all__ = [
    "DatasetError",
    "ConfigError",
    "FormatError",
    "EmptyDatasetError",
    "NoCommonCalendarError",
    "InsufficientDataError",
    "EmptySplitError",
    "DatasetNotLoadedError",
    "DatasetDisposedError",
]
