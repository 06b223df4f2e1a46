"""
strictcsv parser - a streaming, byte-at-a-time CSV state machine.

Rows are separated by CR, LF or CR LF. Fields are separated by a single
configurable byte and may be wrapped in double quotes; a quote inside a
quoted field is written as two quotes. The parser is strict: a quote in
an unquoted field, anything but a delimiter or line break after a
closing quote, and an unclosed quote at end of input are all errors.
"""

import logging
from typing import BinaryIO, Iterator, Optional, Union

from .buffer import FieldBuffer
from .errors import CsvFormatError
from .options import CR, DEFAULT_DELIMITER, LF, QUOTE, DelimiterLike, validate_delimiter
from .row import Row
from .stream import EOF, ByteSource

logger = logging.getLogger(__name__)

# parse states
ST_START = 0    # about to begin a field, nothing of it consumed yet
ST_INFIELD = 1  # inside a field


class Parser:
    """
    Streaming CSV parser.

    The parser does not own ``stream``; close it yourself once parsing
    is done. This keeps stdin and pipes usable as sources.

    Example:
        >>> with open('data.csv', 'rb') as f:
        ...     for row in Parser(f):
        ...         print(row.decode())
    """

    def __init__(
        self,
        stream: Union[BinaryIO, ByteSource],
        delimiter: DelimiterLike = DEFAULT_DELIMITER,
    ):
        self._delimiter = validate_delimiter(delimiter)
        self._source = stream if isinstance(stream, ByteSource) else ByteSource(stream)
        self._line_num = 0

    @property
    def delimiter(self) -> bytes:
        return self._delimiter

    @property
    def line_num(self) -> int:
        """Number of line breaks consumed so far, quoted ones included."""
        return self._line_num

    def _consume_end_of_line(self, c: bytes) -> None:
        # a CR may be followed by an LF belonging to the same line break
        self._line_num += 1
        if c == CR:
            lookahead = self._source.getc()
            if lookahead != LF:
                self._source.ungetc(lookahead)

    def _format_error(self, message: str) -> CsvFormatError:
        err = CsvFormatError(message, line=self._line_num + 1)
        logger.debug("Parse error: %s", err)
        return err

    def next_row(self) -> Optional[Row]:
        """
        Parse and return the next row.

        Returns:
            The next ``Row`` (possibly with zero fields for an empty line),
            or ``None`` once the input is exhausted.

        Raises:
            CsvFormatError: If the input breaks the quoting rules
            CsvIOError: If reading from the stream fails
            CsvOutOfMemoryError: If the field buffer or row cannot grow
        """
        buffer = FieldBuffer()
        row = Row()
        getc = self._source.getc
        delimiter = self._delimiter

        state = ST_START
        quoted = False

        while True:
            c = getc()
            if state == ST_START:
                if c == QUOTE:
                    quoted = True
                    state = ST_INFIELD
                elif c == EOF:
                    # a pending delimiter means there is one more (empty) field
                    if row.field_count() > 0:
                        row.append_field(buffer.contents())
                        return row
                    return None
                elif c == CR or c == LF:
                    self._consume_end_of_line(c)
                    if row.field_count() > 0:
                        row.append_field(buffer.contents())
                    return row
                elif c == delimiter:
                    row.append_field(buffer.contents())
                    buffer.reset()
                    quoted = False
                else:
                    buffer.append(c)
                    state = ST_INFIELD

            else:  # ST_INFIELD
                if c == QUOTE:
                    if not quoted:
                        raise self._format_error('quote(") should be quoted')

                    lookahead = getc()
                    if lookahead == QUOTE:
                        buffer.append(QUOTE)
                    elif lookahead == delimiter:
                        row.append_field(buffer.contents())
                        buffer.reset()
                        state = ST_START
                        quoted = False
                    elif lookahead == CR or lookahead == LF:
                        self._consume_end_of_line(lookahead)
                        row.append_field(buffer.contents())
                        return row
                    elif lookahead == EOF:
                        row.append_field(buffer.contents())
                        return row
                    else:
                        raise self._format_error(
                            "closing quote can only be followed by a line break or field delimiter"
                        )
                elif c == EOF:
                    if quoted:
                        raise self._format_error("unclosed quote")
                    # the next call returns None
                    row.append_field(buffer.contents())
                    return row
                elif c == CR or c == LF:
                    if quoted:
                        if c == LF or not self._peek_is_lf():
                            self._line_num += 1
                        buffer.append(c)
                    else:
                        self._consume_end_of_line(c)
                        row.append_field(buffer.contents())
                        return row
                elif c == delimiter:
                    if quoted:
                        buffer.append(c)
                    else:
                        row.append_field(buffer.contents())
                        buffer.reset()
                        state = ST_START
                        quoted = False
                else:
                    buffer.append(c)

    def _peek_is_lf(self) -> bool:
        # a quoted CR LF counts as one line; the LF bumps the counter
        lookahead = self._source.getc()
        self._source.ungetc(lookahead)
        return lookahead == LF

    def __iter__(self) -> Iterator[Row]:
        return self

    def __next__(self) -> Row:
        row = self.next_row()
        if row is None:
            raise StopIteration
        return row
