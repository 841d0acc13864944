from __future__ import annotations


class ImportFinderError(Exception):
    """Base class for every failure that ends an invocation."""

    @property
    def message(self) -> str:
        return str(self)


class InputReadFailure(ImportFinderError):
    pass


class ParseFailure(ImportFinderError):
    pass


class LiteralDecodeFailure(ImportFinderError):
    pass


class SerializationFailure(ImportFinderError):
    pass
