"""Dump DB-API query results to CSV."""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional

from .errors import CsvError
from .files import PathLike, open_writer
from .row import Row
from .writer import Writer

logger = logging.getLogger(__name__)


def _to_field(value: Any, null: bytes, encoding: str) -> bytes:
    if value is None:
        return null
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return str(value).encode(encoding)


def dump_cursor(
    cursor,
    writer: Writer,
    null: str = '',
    header: bool = True,
    encoding: str = 'utf-8',
) -> int:
    """
    Write the rows of an executed DB-API cursor through ``writer``.

    The column names from ``cursor.description`` form the first row
    unless ``header`` is false. ``None`` values become ``null``.

    Returns:
        Number of data rows written (the header is not counted).
    """
    null_bytes = null.encode(encoding)
    row = Row()

    if header:
        for column in cursor.description or ():
            row.append_field(str(column[0]).encode(encoding))
        writer.write_row(row)
        row.reset()

    count = 0
    for record in cursor:
        for value in record:
            row.append_field(_to_field(value, null_bytes, encoding))
        writer.write_row(row)
        row.reset()
        count += 1

    logger.debug("Dumped %d rows", count)
    return count


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def dump_sqlite_table(
    db_path: PathLike,
    table: str,
    out_path: Optional[PathLike] = None,
    **options,
) -> int:
    """
    Dump every row of ``table`` in a SQLite database to a CSV file.

    Args:
        db_path: Path to the SQLite database
        table: Table name
        out_path: Output file (default: ``<table>.csv``)
        **options: Passed to ``Writer`` (delimiter, quote_style, line_break)

    Returns:
        Number of data rows written.

    Raises:
        CsvError: If the database cannot be read
        CsvIOError: If the output file cannot be written
    """
    if out_path is None:
        out_path = f"{table}.csv"

    # mode=ro never creates the file
    uri = Path(db_path).absolute().as_uri() + '?mode=ro'
    try:
        conn = sqlite3.connect(uri, uri=True)
    except sqlite3.Error as e:
        raise CsvError(f"Cannot open database {db_path}: {e}") from e

    try:
        try:
            cursor = conn.execute(f"SELECT * FROM {_quote_identifier(table)}")
        except sqlite3.Error as e:
            raise CsvError(f"Query on table {table} failed: {e}") from e
        with open_writer(out_path, **options) as writer:
            return dump_cursor(cursor, writer)
    finally:
        conn.close()
