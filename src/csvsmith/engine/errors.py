"""Typed failures raised by the transactional rewriter."""

from enum import Enum
from pathlib import Path
from typing import Optional


class ErrorKind(str, Enum):
    """Failure taxonomy surfaced to callers."""

    NOT_FOUND = "not_found"
    INVALID_FORMAT = "invalid_format"
    IO_ERROR = "io_error"


class UpdateError(Exception):
    """Base class for all update failures.

    The source file is guaranteed to be in its original state whenever one of
    these is raised.
    """

    kind: ErrorKind = ErrorKind.IO_ERROR

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


class SourceNotFoundError(UpdateError):
    """The source file does not exist or cannot be opened for reading."""

    kind = ErrorKind.NOT_FOUND


class InvalidFormatError(UpdateError):
    """The header is invalid or a record cannot be decoded against it."""

    kind = ErrorKind.INVALID_FORMAT

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        line_number: Optional[int] = None,
    ):
        super().__init__(message, path)
        self.line_number = line_number

    def __str__(self) -> str:
        text = super().__str__()
        if self.line_number is not None:
            return f"{text} at line {self.line_number}"
        return text


class RewriteIOError(UpdateError):
    """Staging, writing or publishing the rewritten file failed."""

    kind = ErrorKind.IO_ERROR
