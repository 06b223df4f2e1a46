"""
Error types raised by strictcsv.

Every failure is a ``CsvError`` carrying an ``ErrorKind`` and a message.
Out-of-memory is special: there is exactly one ``CsvOutOfMemoryError``
instance, ``OUT_OF_MEMORY``, because building a fresh error object is
exactly what may fail in that situation. Being shared, it keeps the
traceback of its last raise; callers that catch it and carry on should
set its ``__traceback__`` and ``__context__`` to ``None``.
"""

from enum import IntEnum
from typing import Optional


class ErrorKind(IntEnum):
    """Error codes, numbered as in the C library."""
    OUT_OF_MEMORY = 1
    INVALID_FIELD_DELIMITER = 2
    IO = 3
    INVALID_FORMAT = 4
    INVALID_QUOTE_STYLE = 5
    INVALID_LINEBREAK = 6


class CsvError(Exception):
    """Base exception for strictcsv errors."""

    kind = None

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        return self.message


class CsvOutOfMemoryError(CsvError, MemoryError):
    """Raised when a buffer or row cannot grow."""

    kind = ErrorKind.OUT_OF_MEMORY


class CsvConfigError(CsvError, ValueError):
    """Raised when a parser or writer is constructed with bad options."""

    kind = ErrorKind.INVALID_FIELD_DELIMITER


class CsvIOError(CsvError, OSError):
    """Raised when the underlying stream fails to read or write."""

    kind = ErrorKind.IO


class CsvFormatError(CsvError):
    """Raised when the input breaks the quoting rules."""

    kind = ErrorKind.INVALID_FORMAT

    def __init__(self, message: str, line: Optional[int] = None):
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)
        self.line = line


OUT_OF_MEMORY = CsvOutOfMemoryError("out of memory")

_CONFIG_KINDS = (
    ErrorKind.INVALID_FIELD_DELIMITER,
    ErrorKind.INVALID_QUOTE_STYLE,
    ErrorKind.INVALID_LINEBREAK,
)


def make_error(kind: ErrorKind, message: str) -> CsvError:
    """
    Build the error matching ``kind``.

    Asking for an out-of-memory error always yields the shared
    ``OUT_OF_MEMORY`` instance.
    """
    kind = ErrorKind(kind)
    if kind is ErrorKind.OUT_OF_MEMORY:
        return OUT_OF_MEMORY
    if kind in _CONFIG_KINDS:
        return CsvConfigError(message, kind)
    if kind is ErrorKind.IO:
        return CsvIOError(message)
    return CsvFormatError(message)


def release_error(err: CsvError) -> None:
    """
    Drop the references an error holds (traceback, cause, context).

    The shared ``OUT_OF_MEMORY`` instance is left untouched.
    """
    if err is OUT_OF_MEMORY or err.kind is ErrorKind.OUT_OF_MEMORY:
        return
    err.__traceback__ = None
    err.__cause__ = None
    err.__context__ = None
