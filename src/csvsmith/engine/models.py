"""Data models for column value updates."""

import codecs
import csv
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import Settings, settings as default_settings


class CsvFormat(BaseModel):
    """CSV dialect shared by the reader and the writer."""

    model_config = ConfigDict(frozen=True)

    delimiter: str = ","
    quote_char: str = '"'
    line_terminator: str = "\r\n"
    encoding: str = "utf-8"
    allow_duplicate_header_names: bool = False
    allow_missing_column_names: bool = False

    @field_validator("delimiter", "quote_char")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("must be a single character")
        return value

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"unknown encoding: {value}")
        return value

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "CsvFormat":
        """Build the dialect from application settings."""
        config = config or default_settings
        return cls(
            delimiter=config.csv_delimiter,
            quote_char=config.csv_quote_char,
            line_terminator=config.csv_line_terminator,
            encoding=config.csv_encoding,
            allow_duplicate_header_names=config.csv_allow_duplicate_header_names,
            allow_missing_column_names=config.csv_allow_missing_column_names,
        )

    def reader_options(self) -> dict:
        """Keyword arguments for csv.reader."""
        return {
            "delimiter": self.delimiter,
            "quotechar": self.quote_char,
            "doublequote": True,
            "strict": True,
        }

    def writer_options(self) -> dict:
        """Keyword arguments for csv.writer (RFC 4180 minimal quoting)."""
        return {
            "delimiter": self.delimiter,
            "quotechar": self.quote_char,
            "doublequote": True,
            "lineterminator": self.line_terminator,
            "quoting": csv.QUOTE_MINIMAL,
        }


class UpdateRequest(BaseModel):
    """A single column-scoped find and replace request."""

    model_config = ConfigDict(frozen=True, strict=True)

    path: Path
    column: str
    old_value: str
    new_value: str

    @field_validator("path", mode="before")
    @classmethod
    def _coerce_path(cls, value):
        # Accept plain strings for the path, nothing else is coerced
        if isinstance(value, str):
            return Path(value)
        return value


class UpdateResult(BaseModel):
    """Outcome of an update that completed without failure."""

    path: Path
    column: str
    modified: bool  # True only when the source was replaced
    rows_read: int = 0
    rows_replaced: int = 0
    dry_run: bool = False
    header: list[str] = Field(default_factory=list)
