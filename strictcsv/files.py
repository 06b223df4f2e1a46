"""
Convenience helpers on top of ``Parser`` and ``Writer``.

Everything here still goes through the streaming parser one byte at a
time; the helpers only take care of opening files and collecting rows.
"""

import io
import logging
import os
from typing import Iterator, List, Optional, Union

from .errors import CsvError, CsvIOError
from .options import DEFAULT_DELIMITER, DelimiterLike
from .parser import Parser
from .row import Row
from .writer import Writer

logger = logging.getLogger(__name__)

PathLike = Union[str, 'os.PathLike[str]']


def _open(path: PathLike, mode: str):
    try:
        return open(path, mode)
    except OSError as e:
        raise CsvIOError(f"Cannot open file {path}: {e}") from e


class Reader:
    """
    Row-by-row reader over a file it opened itself.

    Unlike ``Parser``, a ``Reader`` owns its file and closes it on
    ``close()`` or when leaving a ``with`` block.

    Example:
        >>> with open_reader('data.csv') as reader:
        ...     for row in reader:
        ...         print(row.decode())
        ...         if row[0] == b'stop':
        ...             break
    """

    def __init__(self, path: PathLike, delimiter: DelimiterLike = DEFAULT_DELIMITER):
        self._path = path
        self._file = _open(path, 'rb')
        try:
            self._parser = Parser(self._file, delimiter=delimiter)
        except CsvError:
            self._file.close()
            raise
        logger.debug("Opened %s for reading", path)

    @property
    def parser(self) -> Parser:
        return self._parser

    @property
    def closed(self) -> bool:
        return self._file.closed

    def next(self) -> Optional[Row]:
        """Return the next row, or ``None`` at end of file."""
        if self.closed:
            raise ValueError("I/O operation on closed reader")
        return self._parser.next_row()

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()
            logger.debug("Closed %s", self._path)

    def __iter__(self) -> Iterator[Row]:
        return self

    def __next__(self) -> Row:
        row = self.next()
        if row is None:
            raise StopIteration
        return row

    def __enter__(self) -> 'Reader':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False


class FileWriter(Writer):
    """A ``Writer`` that owns the file it writes to."""

    def __init__(self, path: PathLike, **options):
        self._path = path
        self._file = _open(path, 'wb')
        try:
            super().__init__(self._file, **options)
        except CsvError:
            self._file.close()
            raise
        logger.debug("Opened %s for writing", path)

    @property
    def closed(self) -> bool:
        return self._file.closed

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()
            logger.debug("Closed %s", self._path)

    def __enter__(self) -> 'FileWriter':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False


def open_reader(path: PathLike, delimiter: DelimiterLike = DEFAULT_DELIMITER) -> Reader:
    """
    Open a CSV file for row-by-row iteration.

    Args:
        path: Path to the CSV file
        delimiter: Field delimiter (default: ',')

    Returns:
        A ``Reader`` usable in for-loops or as a context manager.

    Raises:
        CsvIOError: If the file cannot be opened
        CsvConfigError: If the delimiter is invalid
    """
    return Reader(path, delimiter=delimiter)


def open_writer(path: PathLike, **options) -> FileWriter:
    """Open ``path`` for writing; ``options`` are passed to ``Writer``."""
    return FileWriter(path, **options)


def parse_bytes(data: bytes, delimiter: DelimiterLike = DEFAULT_DELIMITER) -> List[Row]:
    """Parse CSV bytes and return all rows."""
    return list(Parser(io.BytesIO(data), delimiter=delimiter))


def parse_string(
    content: str,
    delimiter: DelimiterLike = DEFAULT_DELIMITER,
    encoding: str = 'utf-8',
) -> List[List[str]]:
    """
    Parse a CSV string and return all rows as lists of ``str``.

    Example:
        >>> parse_string("a,b,c\\n1,2,3")
        [['a', 'b', 'c'], ['1', '2', '3']]
    """
    try:
        data = content.encode(encoding)
    except UnicodeError as e:
        raise CsvError(f"Failed to encode content: {e}") from e
    try:
        return [row.decode(encoding) for row in Parser(io.BytesIO(data), delimiter=delimiter)]
    except UnicodeError as e:
        raise CsvError(f"Failed to decode field: {e}") from e


def parse_file(path: PathLike, delimiter: DelimiterLike = DEFAULT_DELIMITER) -> List[Row]:
    """Parse a CSV file and return all rows."""
    with open_reader(path, delimiter=delimiter) as reader:
        return list(reader)


def count_rows(path: PathLike, delimiter: DelimiterLike = DEFAULT_DELIMITER) -> int:
    """Count the rows in a CSV file without keeping them around."""
    count = 0
    with open_reader(path, delimiter=delimiter) as reader:
        for _ in reader:
            count += 1
    return count
