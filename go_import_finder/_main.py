from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO

from go_import_finder._data import ImportRecord
from go_import_finder._data import Range
from go_import_finder._errors import ImportFinderError
from go_import_finder._errors import InputReadFailure
from go_import_finder._extract import extract
from go_import_finder._format import format_error
from go_import_finder._format import serialize
from go_import_finder._positions import COLUMN_UNITS
from go_import_finder._positions import translate
from go_import_finder._unquote import unquote

logger = logging.getLogger(__name__)


def find_imports(
    source: bytes,
    filename: str = "src.go",
    column_unit: str = "byte",
) -> list[ImportRecord]:
    """Find the imports of a Go source file, in editor coordinates.

    Raises:
        ParseFailure: If the package clause or import block is malformed
        LiteralDecodeFailure: If an import path cannot be unquoted
    """
    records: list[ImportRecord] = []

    for raw in extract(source, filename=filename, column_unit=column_unit):
        records.append(
            ImportRecord(
                name=unquote(raw.literal),
                range=Range(start=translate(raw.start), end=translate(raw.end)),
            ),
        )

    return records


def run(
    source: bytes,
    filename: str = "src.go",
    column_unit: str = "byte",
) -> tuple[int, str]:
    """Process one input buffer.

    Returns:
        Tuple of (exit status, payload). The payload is JSON when the
        status is 0 and a diagnostic message otherwise.
    """
    try:
        records = find_imports(source, filename=filename, column_unit=column_unit)
        return 0, serialize(records)
    except ImportFinderError as e:
        return 1, format_error(e)


def read_input(stream: BinaryIO) -> bytes:
    """Read a whole stream into memory."""
    try:
        return stream.read()
    except OSError as e:
        raise InputReadFailure(f"failed to read input: {e}") from e


def main() -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Read a Go source file from stdin and print its imports as JSON."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output:
  [{"name": "fmt", "range": {"start": {"line": 2, "character": 7},
                             "end": {"line": 2, "character": 12}}}]

Examples:
  %(prog)s < main.go
  %(prog)s --column-unit utf-16 < main.go
        """,
    )
    parser.add_argument(
        "--filename",
        default="src.go",
        help="File name used in diagnostics (default: %(default)s)",
    )
    parser.add_argument(
        "--column-unit",
        choices=COLUMN_UNITS,
        default="byte",
        help="Unit that columns are counted in (default: %(default)s)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output to stderr",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
        )

    try:
        source = read_input(sys.stdin.buffer)
    except InputReadFailure as e:
        print(format_error(e), file=sys.stderr)
        return 1

    logger.debug("read %d byte(s) from stdin", len(source))

    status, payload = run(
        source, filename=args.filename, column_unit=args.column_unit,
    )
    if status == 0:
        sys.stdout.write(payload)
    else:
        print(payload, file=sys.stderr)
    return status


if __name__ == "__main__":
    raise SystemExit(main())
