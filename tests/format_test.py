"""Tests for output formatting (_format.py)."""

from __future__ import annotations

import json

from go_import_finder import ImportRecord
from go_import_finder import ParseFailure
from go_import_finder import Position
from go_import_finder import Range
from go_import_finder import format_error
from go_import_finder import serialize


def _record(name: str, line: int = 2, start: int = 7, end: int = 12) -> ImportRecord:
    return ImportRecord(
        name=name,
        range=Range(start=Position(line, start), end=Position(line, end)),
    )


def test_serialize_empty_is_array():
    """An empty result is [] and never null."""
    assert serialize([]) == '[]'


def test_serialize_single_record():
    assert serialize([_record('fmt')]) == (
        '[{"name":"fmt","range":{"start":{"line":2,"character":7},'
        '"end":{"line":2,"character":12}}}]'
    )


def test_serialize_preserves_order():
    records = [_record('c', line=2), _record('a', line=3), _record('b', line=4)]
    decoded = json.loads(serialize(records))
    assert [item['name'] for item in decoded] == ['c', 'a', 'b']


def test_serialize_field_names():
    (item,) = json.loads(serialize([_record('os')]))
    assert list(item) == ['name', 'range']
    assert list(item['range']) == ['start', 'end']
    assert list(item['range']['start']) == ['line', 'character']


def test_serialize_keeps_non_ascii():
    assert '"name":"café"' in serialize([_record('café')])


def test_serialize_escapes_html_characters():
    payload = serialize([_record('a<b>&c')])
    assert '"name":"a\\u003cb\\u003e\\u0026c"' in payload
    assert json.loads(payload)[0]['name'] == 'a<b>&c'


def test_serialize_escapes_quotes_and_control_characters():
    payload = serialize([_record('a"b\tc')])
    assert json.loads(payload)[0]['name'] == 'a"b\tc'


def test_format_error_is_verbatim():
    error = ParseFailure("src.go:1:1: expected 'package', found 'EOF'")
    assert format_error(error) == "src.go:1:1: expected 'package', found 'EOF'"
