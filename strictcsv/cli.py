"""
strictcsv command line.

    # Print every row of a file
    strictcsv read data.csv

    # Re-serialize as tab separated, every field quoted, CRLF line breaks
    strictcsv convert data.csv out.tsv --out-delimiter '\\t' --quote-all --line-break crlf

    # Dump a SQLite table to <table>.csv
    strictcsv dump app.db users
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .dump import dump_sqlite_table
from .errors import OUT_OF_MEMORY, CsvError
from .options import QuoteStyle, validate_delimiter, validate_line_break
from .parser import Parser
from .writer import Writer

logger = logging.getLogger(__name__)

_ESCAPES = {'\\t': '\t', 'tab': '\t'}


def _delimiter(value: str) -> str:
    return _ESCAPES.get(value, value)


def _report(action: str, err: CsvError) -> int:
    code = int(err.kind) if err.kind is not None else 0
    print(f"{action} failed: code={code}, message={err.message}", file=sys.stderr)
    if err is OUT_OF_MEMORY:
        # the shared instance would otherwise keep the failing frames alive
        err.__traceback__ = None
        err.__context__ = None
    return 1


def cmd_read(args) -> int:
    try:
        f = open(args.file, 'rb')
    except OSError as e:
        print(f"open: {e}", file=sys.stderr)
        return 1

    with f:
        try:
            parser = Parser(f, delimiter=args.delimiter)
        except CsvError as e:
            return _report("create csv parser", e)

        row_count = 0
        try:
            for row in parser:
                row_count += 1
                fields = ",\t".join(row.decode(args.encoding, errors='replace'))
                print(f"row={row_count},field_count={row.field_count()}: {fields}<NL>")
        except CsvError as e:
            return _report("parse csv", e)

    print("\n==============================")
    print(f"parse succeeded!\nrow_count={row_count}")
    return 0


def cmd_convert(args) -> int:
    # options are checked before any file is opened
    try:
        delimiter = validate_delimiter(args.delimiter)
        out_delimiter = validate_delimiter(args.out_delimiter or args.delimiter)
        line_break = validate_line_break(args.line_break)
    except CsvError as e:
        return _report("convert csv", e)

    own_src = args.input != '-'
    own_dst = args.output != '-'
    src = dst = None
    try:
        src = open(args.input, 'rb') if own_src else sys.stdin.buffer
        dst = open(args.output, 'wb') if own_dst else sys.stdout.buffer
    except OSError as e:
        print(f"open: {e}", file=sys.stderr)
        if own_src and src is not None:
            src.close()
        return 1

    try:
        parser = Parser(src, delimiter=delimiter)
        writer = Writer(
            dst,
            delimiter=out_delimiter,
            quote_style=QuoteStyle.ALL if args.quote_all else QuoteStyle.MINIMAL,
            line_break=line_break,
        )
        count = writer.write_rows(parser)
        writer.flush()
    except CsvError as e:
        return _report("convert csv", e)
    finally:
        if own_src:
            src.close()
        if own_dst:
            dst.close()

    logger.info("Converted %d rows", count)
    return 0


def cmd_dump(args) -> int:
    try:
        count = dump_sqlite_table(args.database, args.table, args.output)
    except CsvError as e:
        return _report("dump table", e)
    logger.info("Dumped %d rows from %s", count, args.table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='strictcsv', description='Strict streaming CSV tools')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    sub = parser.add_subparsers(dest='command', required=True)

    p_read = sub.add_parser('read', help='Print every row of a CSV file')
    p_read.add_argument('file', help='CSV file to read')
    p_read.add_argument('-d', '--delimiter', type=_delimiter, default=',', help='Field delimiter')
    p_read.add_argument('--encoding', default='utf-8', help='Encoding used to display fields')
    p_read.set_defaults(func=cmd_read)

    p_conv = sub.add_parser('convert', help='Re-serialize a CSV file')
    p_conv.add_argument('input', help="Input file ('-' for stdin)")
    p_conv.add_argument('output', help="Output file ('-' for stdout)")
    p_conv.add_argument('-d', '--delimiter', type=_delimiter, default=',', help='Input field delimiter')
    p_conv.add_argument('--out-delimiter', type=_delimiter, help='Output field delimiter (default: same as input)')
    p_conv.add_argument('--quote-all', action='store_true', help='Quote every field')
    p_conv.add_argument('--line-break', choices=['lf', 'crlf', 'cr'], default='lf', help='Output line break')
    p_conv.set_defaults(func=cmd_convert)

    p_dump = sub.add_parser('dump', help='Dump a SQLite table to CSV')
    p_dump.add_argument('database', help='SQLite database file')
    p_dump.add_argument('table', help='Table name')
    p_dump.add_argument('-o', '--output', help='Output file (default: TABLE.csv)')
    p_dump.set_defaults(func=cmd_dump)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
