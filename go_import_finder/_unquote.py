from __future__ import annotations

import string

from go_import_finder._errors import LiteralDecodeFailure

_SIMPLE_ESCAPES = {
    ord("a"): b"\a",
    ord("b"): b"\b",
    ord("f"): b"\f",
    ord("n"): b"\n",
    ord("r"): b"\r",
    ord("t"): b"\t",
    ord("v"): b"\v",
    ord("\\"): b"\\",
    ord('"'): b'"',
}

_OCT_DIGITS = frozenset(string.octdigits.encode())
_HEX_DIGITS = frozenset(string.hexdigits.encode())


def _invalid(literal: bytes) -> LiteralDecodeFailure:
    text = literal.decode("utf-8", errors="replace")
    return LiteralDecodeFailure(f"invalid syntax: {text}")


def _digits(body: bytes, start: int, count: int, allowed: frozenset[int]) -> bytes | None:
    digits = body[start:start + count]
    if len(digits) != count or not all(d in allowed for d in digits):
        return None
    return digits


def unquote(literal: bytes) -> str:
    """Unquote a Go string literal into the string it denotes.

    Handles raw (backquoted) and interpreted (double-quoted) literals the way
    ``strconv.Unquote`` does. The literal text itself must be valid UTF-8;
    bytes produced by octal or hex escapes that do not form valid UTF-8 come
    back as U+FFFD.

    Raises:
        LiteralDecodeFailure: If the literal is malformed
    """
    if len(literal) < 2 or literal[:1] != literal[-1:]:
        raise _invalid(literal)

    try:
        literal.decode("utf-8")
    except UnicodeDecodeError as e:
        raise LiteralDecodeFailure(
            f"illegal UTF-8 encoding at byte {e.start} of import path",
        ) from e

    quote = literal[:1]
    body = literal[1:-1]

    if quote == b"`":
        if b"`" in body:
            raise _invalid(literal)
        # Carriage returns are discarded from raw literals
        return body.replace(b"\r", b"").decode("utf-8")

    if quote != b'"':
        raise _invalid(literal)

    out = bytearray()
    i = 0
    while i < len(body):
        c = body[i]
        if c in (ord('"'), ord("\n")):
            raise _invalid(literal)
        if c != ord("\\"):
            out.append(c)
            i += 1
            continue

        if i + 1 >= len(body):
            raise _invalid(literal)
        esc = body[i + 1]

        if esc in _SIMPLE_ESCAPES:
            out += _SIMPLE_ESCAPES[esc]
            i += 2
        elif esc in _OCT_DIGITS:
            digits = _digits(body, i + 1, 3, _OCT_DIGITS)
            if digits is None or int(digits, 8) > 0xFF:
                raise _invalid(literal)
            out.append(int(digits, 8))
            i += 4
        elif esc == ord("x"):
            digits = _digits(body, i + 2, 2, _HEX_DIGITS)
            if digits is None:
                raise _invalid(literal)
            out.append(int(digits, 16))
            i += 4
        elif esc in (ord("u"), ord("U")):
            count = 4 if esc == ord("u") else 8
            digits = _digits(body, i + 2, count, _HEX_DIGITS)
            if digits is None:
                raise _invalid(literal)
            code_point = int(digits, 16)
            # Surrogate halves and values past the Unicode range are not runes
            if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
                raise _invalid(literal)
            out += chr(code_point).encode("utf-8")
            i += 2 + count
        else:
            # Includes \' which is only legal in rune literals
            raise _invalid(literal)

    return bytes(out).decode("utf-8", errors="replace")
