"""
strictcsv - a strict, streaming CSV reader and writer

Bytes go in one at a time and rows of byte-string fields come out; the
writer produces output the parser reads back unchanged.
"""

__version__ = '0.1.0'

from .errors import (
    OUT_OF_MEMORY,
    CsvConfigError,
    CsvError,
    CsvFormatError,
    CsvIOError,
    CsvOutOfMemoryError,
    ErrorKind,
    make_error,
    release_error,
)
from .options import (
    DEFAULT_DELIMITER,
    LINEBREAK_CR,
    LINEBREAK_CRLF,
    LINEBREAK_LF,
    QUOTE_ALL,
    QUOTE_MINIMAL,
    LineBreak,
    QuoteStyle,
)
from .buffer import FieldBuffer
from .row import Row
from .stream import ByteSink, ByteSource
from .parser import Parser
from .writer import Writer
from .files import (
    FileWriter,
    Reader,
    count_rows,
    open_reader,
    open_writer,
    parse_bytes,
    parse_file,
    parse_string,
)
from .dump import dump_cursor, dump_sqlite_table

__all__ = [
    'Parser',
    'Writer',
    'Row',
    'FieldBuffer',
    'ByteSource',
    'ByteSink',
    'Reader',
    'FileWriter',
    'open_reader',
    'open_writer',
    'parse_bytes',
    'parse_string',
    'parse_file',
    'count_rows',
    'dump_cursor',
    'dump_sqlite_table',
    'QuoteStyle',
    'LineBreak',
    'QUOTE_ALL',
    'QUOTE_MINIMAL',
    'LINEBREAK_LF',
    'LINEBREAK_CRLF',
    'LINEBREAK_CR',
    'DEFAULT_DELIMITER',
    'ErrorKind',
    'CsvError',
    'CsvConfigError',
    'CsvIOError',
    'CsvFormatError',
    'CsvOutOfMemoryError',
    'OUT_OF_MEMORY',
    'make_error',
    'release_error',
]
