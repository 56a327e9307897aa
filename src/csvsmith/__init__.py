"""csvsmith - in-place, column-scoped find and replace for CSV files."""

from .engine import (
    CsvFormat,
    CsvRewriter,
    ErrorKind,
    InvalidFormatError,
    RewriteIOError,
    SourceNotFoundError,
    UpdateError,
    UpdateResult,
    update_row_values,
)

__version__ = "0.1.0"

__all__ = [
    "CsvFormat",
    "CsvRewriter",
    "ErrorKind",
    "InvalidFormatError",
    "RewriteIOError",
    "SourceNotFoundError",
    "UpdateError",
    "UpdateResult",
    "update_row_values",
]
