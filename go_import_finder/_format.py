from __future__ import annotations

import json
from typing import Any

from go_import_finder._data import ImportRecord
from go_import_finder._data import Position
from go_import_finder._errors import ImportFinderError
from go_import_finder._errors import SerializationFailure

# Escapes applied by Go's encoding/json, kept so output matches byte for byte
_HTML_SAFE = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _position(pos: Position) -> dict[str, int]:
    return {"line": pos.line, "character": pos.character}


def to_json_obj(record: ImportRecord) -> dict[str, Any]:
    return {
        "name": record.name,
        "range": {
            "start": _position(record.range.start),
            "end": _position(record.range.end),
        },
    }


def serialize(records: list[ImportRecord]) -> str:
    """Encode import records as a compact JSON array.

    An empty list encodes as ``[]``.
    """
    try:
        payload = json.dumps(
            [to_json_obj(record) for record in records],
            separators=(",", ":"),
            ensure_ascii=False,
        )
    except (TypeError, ValueError) as e:
        raise SerializationFailure(f"failed to encode imports: {e}") from e

    for char, escape in _HTML_SAFE:
        payload = payload.replace(char, escape)
    return payload


def format_error(error: ImportFinderError) -> str:
    """Diagnostic text for the error channel, never JSON."""
    return error.message
