from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    """A (line, character) pair.

    Native positions are 1-based in both axes, editor positions are 0-based.
    """

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position  # Exclusive, just past the closing quote


@dataclass(frozen=True)
class RawImport:
    """An import path literal as found by the parser, still quoted."""

    literal: bytes
    start: Position  # Native coordinates
    end: Position


@dataclass(frozen=True)
class ImportRecord:
    """An import with its unquoted path and editor-coordinate range."""

    name: str
    range: Range
