"""Configuration values shared by the parser and the writer."""

from enum import IntEnum
from typing import Union

from .errors import CsvConfigError, ErrorKind

QUOTE = b'"'
CR = b'\r'
LF = b'\n'
DEFAULT_DELIMITER = b','

_FORBIDDEN_DELIMITERS = (CR, LF, QUOTE)

DelimiterLike = Union[str, bytes, int]


class QuoteStyle(IntEnum):
    ALL = 0      # every field is quoted
    MINIMAL = 1  # only fields containing special bytes are quoted


class LineBreak(IntEnum):
    LF = 0
    CRLF = 1
    CR = 2

    @property
    def sequence(self) -> bytes:
        return _LINEBREAK_BYTES[self]


_LINEBREAK_BYTES = {
    LineBreak.LF: b'\n',
    LineBreak.CRLF: b'\r\n',
    LineBreak.CR: b'\r',
}

QUOTE_ALL = QuoteStyle.ALL
QUOTE_MINIMAL = QuoteStyle.MINIMAL
LINEBREAK_LF = LineBreak.LF
LINEBREAK_CRLF = LineBreak.CRLF
LINEBREAK_CR = LineBreak.CR


def validate_delimiter(delimiter: DelimiterLike) -> bytes:
    """Normalize ``delimiter`` to a single byte, rejecting CR, LF and quote."""
    if isinstance(delimiter, str):
        if len(delimiter) != 1:
            raise CsvConfigError(
                f"Delimiter must be a single character, got {delimiter!r} "
                f"(length {len(delimiter)}). Multi-byte delimiters are not supported.",
                ErrorKind.INVALID_FIELD_DELIMITER,
            )
        try:
            delimiter = delimiter.encode('latin-1')
        except UnicodeEncodeError:
            raise CsvConfigError(
                f"Delimiter {delimiter!r} does not fit in a single byte",
                ErrorKind.INVALID_FIELD_DELIMITER,
            ) from None
    elif isinstance(delimiter, int) and not isinstance(delimiter, bool):
        if not 0 <= delimiter <= 255:
            raise CsvConfigError(
                f"Delimiter byte out of range: {delimiter}",
                ErrorKind.INVALID_FIELD_DELIMITER,
            )
        delimiter = bytes((delimiter,))
    elif isinstance(delimiter, (bytes, bytearray)):
        if len(delimiter) != 1:
            raise CsvConfigError(
                f"Delimiter must be a single byte, got {bytes(delimiter)!r}",
                ErrorKind.INVALID_FIELD_DELIMITER,
            )
        delimiter = bytes(delimiter)
    else:
        raise CsvConfigError(
            f"Unsupported delimiter type: {type(delimiter).__name__}",
            ErrorKind.INVALID_FIELD_DELIMITER,
        )

    if delimiter in _FORBIDDEN_DELIMITERS:
        raise CsvConfigError("invalid field delimiter", ErrorKind.INVALID_FIELD_DELIMITER)
    return delimiter


def validate_quote_style(quote_style) -> QuoteStyle:
    if isinstance(quote_style, str):
        try:
            return QuoteStyle[quote_style.upper()]
        except KeyError:
            raise CsvConfigError("invalid quote style", ErrorKind.INVALID_QUOTE_STYLE) from None
    try:
        return QuoteStyle(quote_style)
    except ValueError:
        raise CsvConfigError("invalid quote style", ErrorKind.INVALID_QUOTE_STYLE) from None


def validate_line_break(line_break) -> LineBreak:
    if isinstance(line_break, str):
        try:
            return LineBreak[line_break.upper()]
        except KeyError:
            raise CsvConfigError("invalid line break", ErrorKind.INVALID_LINEBREAK) from None
    try:
        return LineBreak(line_break)
    except ValueError:
        raise CsvConfigError("invalid line break", ErrorKind.INVALID_LINEBREAK) from None
