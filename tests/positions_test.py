"""Tests for position translation and column measurement."""
from __future__ import annotations

import pytest

from go_import_finder import Position
from go_import_finder import native_position
from go_import_finder import translate


@pytest.mark.parametrize(
    ('native', 'expected'),
    (
        pytest.param(Position(1, 1), Position(0, 0), id='origin'),
        pytest.param(Position(3, 8), Position(2, 7), id='typical import'),
        pytest.param(Position(120, 1), Position(119, 0), id='first column'),
    ),
)
def test_translate(native, expected):
    assert translate(native) == expected


def test_translate_does_not_mutate():
    native = Position(3, 8)
    translate(native)
    assert native == Position(3, 8)


# =============================================================================
# native_position
# =============================================================================


def test_byte_columns_on_ascii_line():
    source = b'import "fmt"'
    assert native_position(source, 7, (0, 7)) == Position(1, 8)


def test_byte_columns_count_multibyte_characters():
    # "é" is two bytes in UTF-8 but one character in an editor
    source = '/* héllo */ "fmt"'.encode()
    offset = source.index(b'"')
    assert offset == 13
    assert native_position(source, offset, (0, offset)) == Position(1, 14)


def test_utf16_columns_on_multibyte_line():
    source = '/* héllo */ "fmt"'.encode()
    offset = source.index(b'"')
    pos = native_position(source, offset, (0, offset), column_unit='utf-16')
    assert pos == Position(1, 13)


def test_utf16_columns_count_surrogate_pairs():
    # Characters outside the BMP take two UTF-16 code units
    source = '/* \U0001F600 */ "x"'.encode()
    offset = source.index(b'"')
    pos = native_position(source, offset, (0, offset), column_unit='utf-16')
    assert pos == Position(1, 10)


def test_utf16_columns_only_measure_current_line():
    source = 'package é\n"x"'.encode()
    offset = source.index(b'"')
    pos = native_position(source, offset, (1, 0), column_unit='utf-16')
    assert pos == Position(2, 1)


def test_unknown_column_unit():
    with pytest.raises(ValueError, match='Unknown column unit'):
        native_position(b'x', 0, (0, 0), column_unit='rune')
