#!/usr/bin/env python3

"""
Benchmark comparison: strictcsv vs other Python CSV readers

Compared libraries:
- strictcsv: streaming byte-at-a-time parser (this package)
- stdlib csv: Python's built-in csv module
- pandas: Popular DataFrame library
- polars: Rust-based DataFrame library

# Install dependencies
pip install -e '.[bench]'

# Run benchmark with 100k rows x 10 columns
python benchmarks/benchmark.py --rows 100000 --cols 10

# Include quoted fields with embedded delimiters and line breaks
python benchmarks/benchmark.py --rows 100000 --quoted

# Use an existing CSV file
python benchmarks/benchmark.py --file /path/to/data.csv

# Only time strictcsv (read and write)
python benchmarks/benchmark.py --only-strictcsv
"""

import argparse
import io
import os
import tempfile
import time


def generate_csv(filepath: str, rows: int, cols: int, quoted: bool = False) -> int:
    """Generate a test CSV file and return its size in bytes."""
    import strictcsv

    print(f"Generating CSV: {rows:,} rows x {cols} columns...")
    start = time.perf_counter()

    with strictcsv.open_writer(filepath) as writer:
        writer.write_fields([f'col{i}' for i in range(cols)])
        for row_num in range(rows):
            if quoted:
                writer.write_fields([f'value "{row_num}", {i}\nnext' for i in range(cols)])
            else:
                writer.write_fields([f'value_{row_num}_{i}' for i in range(cols)])

    elapsed = time.perf_counter() - start
    size = os.path.getsize(filepath)
    print(f"  Done in {elapsed:.2f}s, file size: {size / (1024**2):.1f} MB")
    return size


def benchmark_strictcsv(filepath: str) -> tuple:
    """Benchmark strictcsv streaming parser."""
    import strictcsv

    print("Benchmarking strictcsv...")

    start = time.perf_counter()
    row_count = 0
    cols = 0
    with strictcsv.open_reader(filepath) as reader:
        for row in reader:
            if row_count == 0:
                cols = row.field_count()
            row_count += 1
    parse_time = time.perf_counter() - start

    return {
        'parse_time': parse_time,
        'parse_rows': row_count - 1,  # exclude header
        'parse_cols': cols,
    }, None


def benchmark_strictcsv_write(filepath: str) -> tuple:
    """Benchmark strictcsv writer by re-serializing the parsed file to memory."""
    import strictcsv

    print("Benchmarking strictcsv (write)...")

    rows = strictcsv.parse_file(filepath)
    out = io.BytesIO()
    start = time.perf_counter()
    strictcsv.Writer(out).write_rows(rows)
    write_time = time.perf_counter() - start

    return {
        'parse_time': write_time,
        'parse_rows': len(rows) - 1,
        'parse_cols': rows[0].field_count() if rows else 0,
    }, None


def benchmark_stdlib(filepath: str) -> tuple:
    """Benchmark Python stdlib csv reader."""
    import csv

    print("Benchmarking stdlib csv...")

    start = time.perf_counter()
    with open(filepath, 'r', newline='') as f:
        reader = csv.reader(f)
        rows = list(reader)
    parse_time = time.perf_counter() - start

    return {
        'parse_time': parse_time,
        'parse_rows': len(rows) - 1,  # exclude header
        'parse_cols': len(rows[0]) if rows else 0,
    }, None


def benchmark_pandas(filepath: str) -> tuple:
    """Benchmark pandas CSV reader."""
    try:
        import pandas as pd
    except ImportError:
        return None, "pandas not installed"

    print("Benchmarking pandas...")

    start = time.perf_counter()
    df = pd.read_csv(filepath)
    parse_time = time.perf_counter() - start

    return {
        'parse_time': parse_time,
        'parse_rows': len(df),
        'parse_cols': len(df.columns),
    }, None


def benchmark_polars(filepath: str) -> tuple:
    """Benchmark polars CSV reader."""
    try:
        import polars as pl
    except ImportError:
        return None, "polars not installed"

    print("Benchmarking polars...")

    start = time.perf_counter()
    df = pl.read_csv(filepath)
    parse_time = time.perf_counter() - start

    return {
        'parse_time': parse_time,
        'parse_rows': len(df),
        'parse_cols': len(df.columns),
    }, None


def format_throughput(file_size: int, parse_time: float) -> str:
    """Calculate and format throughput in MB/s."""
    if parse_time > 0:
        mb_per_sec = (file_size / (1024**2)) / parse_time
        return f"{mb_per_sec:.1f} MB/s"
    return "N/A"


def main():
    parser = argparse.ArgumentParser(description='Benchmark CSV parsers')
    parser.add_argument('--rows', type=int, default=100_000, help='Number of rows')
    parser.add_argument('--cols', type=int, default=10, help='Number of columns')
    parser.add_argument('--quoted', action='store_true', help='Generate fields that need quoting')
    parser.add_argument('--file', type=str, help='Use existing CSV file instead of generating')
    parser.add_argument('--only-strictcsv', action='store_true', help='Only benchmark strictcsv')
    args = parser.parse_args()

    if args.file:
        filepath = args.file
        file_size = os.path.getsize(filepath)
        print(f"Using existing file: {filepath} ({file_size / (1024**2):.1f} MB)")
    else:
        fd, filepath = tempfile.mkstemp(suffix='.csv')
        os.close(fd)
        file_size = generate_csv(filepath, args.rows, args.cols, quoted=args.quoted)

    print(f"\n{'='*60}")
    print(f"BENCHMARK: {args.rows:,} rows x {args.cols} columns")
    print(f"File size: {file_size / (1024**2):.1f} MB")
    print(f"{'='*60}\n")

    results = {}

    results['strictcsv'], err = benchmark_strictcsv(filepath)
    results['strictcsv-write'], err = benchmark_strictcsv_write(filepath)

    if not args.only_strictcsv:
        results['stdlib'], err = benchmark_stdlib(filepath)

        results['pandas'], err = benchmark_pandas(filepath)
        if err:
            print(f"  Skipped: {err}")

        results['polars'], err = benchmark_polars(filepath)
        if err:
            print(f"  Skipped: {err}")

    print(f"\n{'='*60}")
    print("RESULTS")
    print(f"{'='*60}")
    print(f"{'Library':<16} {'Time':>12} {'Throughput':>14} {'Rows':>12}")
    print(f"{'-'*60}")

    for name, result in sorted(results.items(), key=lambda x: x[1]['parse_time'] if x[1] else float('inf')):
        if result:
            throughput = format_throughput(file_size, result['parse_time'])
            print(f"{name:<16} {result['parse_time']:>10.3f}s {throughput:>14} {result['parse_rows']:>12,}")

    if not args.file:
        os.unlink(filepath)
        print("\nCleaned up temporary file")


if __name__ == '__main__':
    main()
