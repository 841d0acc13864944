from __future__ import annotations

from go_import_finder._data import Position

# Units a native column can be measured in. The Go toolchain reports byte
# columns; editors speaking LSP expect UTF-16 code units.
COLUMN_UNITS = ("byte", "utf-16")


def translate(native: Position) -> Position:
    """Convert a 1-based native position into a 0-based editor position."""
    return Position(line=native.line - 1, character=native.character - 1)


def native_position(
    source: bytes,
    offset: int,
    point: tuple[int, int],
    column_unit: str = "byte",
) -> Position:
    """Build a native position from a parser point.

    Args:
        source: The whole input buffer
        offset: Byte offset of the point in ``source``
        point: 0-based (row, byte column) as reported by the parser
        column_unit: One of ``COLUMN_UNITS``

    With the ``byte`` unit the column diverges from what an editor shows
    whenever multi-byte characters precede the point on the same line.
    """
    row, column = point

    if column_unit == "byte":
        return Position(line=row + 1, character=column + 1)
    if column_unit != "utf-16":
        raise ValueError(f"Unknown column unit: {column_unit!r}")

    prefix = source[offset - column:offset].decode("utf-8", errors="replace")
    units = len(prefix.encode("utf-16-le")) // 2
    return Position(line=row + 1, character=units + 1)
