"""Transactional CSV column rewriting engine."""

from .errors import (
    ErrorKind,
    UpdateError,
    SourceNotFoundError,
    InvalidFormatError,
    RewriteIOError,
)
from .models import CsvFormat, UpdateRequest, UpdateResult
from .rewriter import CsvRewriter, update_row_values
from .transformer import Row, RowTransformer, transform_row

__all__ = [
    "ErrorKind",
    "UpdateError",
    "SourceNotFoundError",
    "InvalidFormatError",
    "RewriteIOError",
    "CsvFormat",
    "UpdateRequest",
    "UpdateResult",
    "CsvRewriter",
    "update_row_values",
    "Row",
    "RowTransformer",
    "transform_row",
]
