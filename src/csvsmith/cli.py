"""Command-line interface for csvsmith."""

import argparse
import logging
import sys
from typing import Optional

from .config import settings
from .engine import CsvFormat, CsvRewriter, UpdateError


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="csvsmith - In-place find and replace for a single CSV column"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--delimiter", default=None, help=f"Field delimiter (default: {settings.csv_delimiter!r})"
    )
    parser.add_argument(
        "--encoding", default=None, help=f"File encoding (default: {settings.csv_encoding})"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Replace command
    replace_parser = subparsers.add_parser(
        "replace", help="Replace a value in one column of a CSV file"
    )
    replace_parser.add_argument("path", help="CSV file to update in place")
    replace_parser.add_argument("column", help="Header name of the column to search")
    replace_parser.add_argument("old_value", help="Exact value to replace")
    replace_parser.add_argument("new_value", help="Replacement value")
    replace_parser.add_argument(
        "--dry-run", action="store_true", help="Report matches without writing"
    )

    # Columns command
    columns_parser = subparsers.add_parser(
        "columns", help="List the header names of a CSV file"
    )
    columns_parser.add_argument("path", help="CSV file to inspect")

    args = parser.parse_args(argv)

    try:
        configure_logging(args.verbose)
    except ValueError as e:
        parser.error(str(e))

    if args.command is None:
        parser.print_help()
        return 1

    try:
        rewriter = build_rewriter(args.delimiter, args.encoding)
    except ValueError as e:
        parser.error(f"invalid CSV dialect option: {e}")

    if args.command == "replace":
        return run_replace(
            rewriter, args.path, args.column, args.old_value, args.new_value, args.dry_run
        )
    return run_columns(rewriter, args.path)


def configure_logging(verbose: bool = False):
    """Set up root logging from settings."""
    if verbose or settings.debug:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(settings.log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"invalid LOG_LEVEL: {settings.log_level!r}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_rewriter(delimiter: Optional[str] = None, encoding: Optional[str] = None) -> CsvRewriter:
    """Create a rewriter, applying any dialect overrides from the command line."""
    csv_format = CsvFormat.from_settings(settings)
    overrides = {}
    if delimiter is not None:
        overrides["delimiter"] = delimiter
    if encoding is not None:
        overrides["encoding"] = encoding
    if overrides:
        csv_format = CsvFormat(**{**csv_format.model_dump(), **overrides})
    return CsvRewriter(csv_format=csv_format)


def run_replace(
    rewriter: CsvRewriter,
    path: str,
    column: str,
    old_value: str,
    new_value: str,
    dry_run: bool = False,
) -> int:
    """Run a replacement and print a one-line summary."""
    try:
        result = rewriter.update(path, column, old_value, new_value, dry_run=dry_run)
    except UpdateError as e:
        print(f"Error [{e.kind.value}]: {e}", file=sys.stderr)
        return 1

    if column not in result.header:
        print(f"Column '{column}' not found in {path}; file left unchanged.")
    elif result.dry_run:
        print(f"{result.rows_replaced} of {result.rows_read} rows would be updated in {path}.")
    else:
        print(f"Updated {result.rows_replaced} of {result.rows_read} rows in {path}.")
    return 0


def run_columns(rewriter: CsvRewriter, path: str) -> int:
    """Print the header names of a CSV file, one per line."""
    try:
        header = rewriter.read_header(path)
    except UpdateError as e:
        print(f"Error [{e.kind.value}]: {e}", file=sys.stderr)
        return 1

    for name in header:
        print(name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
