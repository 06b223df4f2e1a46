"""
strictcsv writer - serializes rows so that ``Parser`` reads them back
unchanged.

A row with zero fields is written as an empty line and a row holding a
single empty field is written as ``""``, whatever the quote style.
"""

import logging
from typing import BinaryIO, Iterable, Union

from .options import (
    CR,
    DEFAULT_DELIMITER,
    LF,
    QUOTE,
    DelimiterLike,
    LineBreak,
    QuoteStyle,
    validate_delimiter,
    validate_line_break,
    validate_quote_style,
)
from .row import FieldLike, Row
from .stream import ByteSink

logger = logging.getLogger(__name__)

DOUBLE_QUOTES = QUOTE + QUOTE


class Writer:
    """
    Streaming CSV writer.

    Like ``Parser``, the writer does not own ``stream`` and never closes it.

    Args:
        stream: Binary writable (or a ``ByteSink``)
        delimiter: Field delimiter (default: ',')
        quote_style: ``QuoteStyle.MINIMAL`` (default) or ``QuoteStyle.ALL``
        line_break: ``LineBreak.LF`` (default), ``LineBreak.CRLF`` or ``LineBreak.CR``

    Raises:
        CsvConfigError: If any option is invalid
    """

    def __init__(
        self,
        stream: Union[BinaryIO, ByteSink],
        delimiter: DelimiterLike = DEFAULT_DELIMITER,
        quote_style: Union[QuoteStyle, int, str] = QuoteStyle.MINIMAL,
        line_break: Union[LineBreak, int, str] = LineBreak.LF,
    ):
        self._delimiter = validate_delimiter(delimiter)
        self._quote_style = validate_quote_style(quote_style)
        self._line_break = validate_line_break(line_break)
        self._sink = stream if isinstance(stream, ByteSink) else ByteSink(stream)
        self._special = (self._delimiter, QUOTE, CR, LF)

    @property
    def delimiter(self) -> bytes:
        return self._delimiter

    @property
    def quote_style(self) -> QuoteStyle:
        return self._quote_style

    @property
    def line_break(self) -> LineBreak:
        return self._line_break

    def _needs_quote(self, field: bytes) -> bool:
        if self._quote_style == QuoteStyle.ALL:
            return True
        return any(s in field for s in self._special)

    def _write_field(self, field: bytes, field_idx: int, field_count: int) -> None:
        need_quote = self._needs_quote(field)
        write = self._sink.write

        if need_quote:
            write(QUOTE)
        write(field.replace(QUOTE, DOUBLE_QUOTES))
        if need_quote:
            write(QUOTE)

        # delimiter only between fields
        if field_idx < field_count - 1:
            write(self._delimiter)

    def write_row(self, row: Row) -> None:
        """
        Write one row followed by the configured line break.

        Raises:
            CsvIOError: If writing to the stream fails
        """
        field_count = row.field_count()
        if field_count == 0:
            pass
        elif field_count == 1 and row.field_at(0) == b'':
            self._sink.write(DOUBLE_QUOTES)
        else:
            for i in range(field_count):
                self._write_field(row.field_at(i), i, field_count)

        self._sink.write(self._line_break.sequence)

    def write_rows(self, rows: Iterable[Row]) -> int:
        """Write every row from ``rows``; returns how many were written."""
        count = 0
        for row in rows:
            self.write_row(row)
            count += 1
        logger.debug("Wrote %d rows", count)
        return count

    def write_fields(self, fields: Iterable[FieldLike], encoding: str = 'utf-8') -> None:
        """Write a row given as plain values; ``str`` values are encoded."""
        self.write_row(Row.from_fields(fields, encoding=encoding))

    def flush(self) -> None:
        self._sink.flush()
