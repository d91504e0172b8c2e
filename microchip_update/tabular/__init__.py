"""Spreadsheet-tolerant CSV rows and files."""

from .file import ColumnCountError, HeaderMismatchError, TabularFile, TabularFileError
from .row import TabularRow

__all__ = [
    "ColumnCountError",
    "HeaderMismatchError",
    "TabularFile",
    "TabularFileError",
    "TabularRow",
]
