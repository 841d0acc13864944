from __future__ import annotations

from go_import_finder._data import ImportRecord
from go_import_finder._data import Position
from go_import_finder._data import Range
from go_import_finder._data import RawImport
from go_import_finder._errors import ImportFinderError
from go_import_finder._errors import InputReadFailure
from go_import_finder._errors import LiteralDecodeFailure
from go_import_finder._errors import ParseFailure
from go_import_finder._errors import SerializationFailure
from go_import_finder._extract import extract
from go_import_finder._format import format_error
from go_import_finder._format import serialize
from go_import_finder._main import find_imports
from go_import_finder._main import main
from go_import_finder._main import read_input
from go_import_finder._main import run
from go_import_finder._positions import native_position
from go_import_finder._positions import translate
from go_import_finder._unquote import unquote

__all__ = [
    # Data types
    "Position",
    "Range",
    "RawImport",
    "ImportRecord",
    # Errors
    "ImportFinderError",
    "InputReadFailure",
    "ParseFailure",
    "LiteralDecodeFailure",
    "SerializationFailure",
    # Pipeline stages
    "extract",
    "unquote",
    "native_position",
    "translate",
    "serialize",
    "format_error",
    # Driver
    "find_imports",
    "read_input",
    "run",
    "main",
]
