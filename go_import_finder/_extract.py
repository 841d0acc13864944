from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Iterator

import tree_sitter
import tree_sitter_go

from go_import_finder._data import Position
from go_import_finder._data import RawImport
from go_import_finder._errors import ParseFailure
from go_import_finder._positions import native_position

logger = logging.getLogger(__name__)

GO_LANGUAGE = tree_sitter.Language(tree_sitter_go.language())

# Keywords that can only start declarations after the import block
_BODY_KEYWORDS = frozenset((b"func", b"type", b"var", b"const"))

_TERMINATORS = frozenset(("\n", ";", "\x00"))

_STRING_TYPES = frozenset(("interpreted_string_literal", "raw_string_literal"))

_ALIAS_TYPES = frozenset(
    ("identifier", "package_identifier", "blank_identifier", "dot", ".", "_"),
)

# Tokens the Go scanner classifies as literals (identifiers included)
_LITERAL_TYPES = frozenset((
    "identifier",
    "package_identifier",
    "field_identifier",
    "type_identifier",
    "blank_identifier",
    "int_literal",
    "float_literal",
    "imaginary_literal",
    "rune_literal",
))

_parser: tree_sitter.Parser | None = None


def _get_parser() -> tree_sitter.Parser:
    global _parser
    if _parser is None:
        _parser = tree_sitter.Parser(GO_LANGUAGE)
    return _parser


def _leaves(node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Yield the tokens under a node in source order."""
    if not node.children:
        yield node
        return
    for child in node.children:
        yield from _leaves(child)


def _tokens(nodes: Iterable[tree_sitter.Node]) -> Iterator[tree_sitter.Node]:
    """Yield the tokens under several nodes, comments left out."""
    for node in nodes:
        for leaf in _leaves(node):
            if leaf.type != "comment":
                yield leaf


def _first_error(node: tree_sitter.Node) -> tree_sitter.Node | None:
    """Find the first ERROR or MISSING node in source order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing or child.type == "ERROR":
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _point_at(source: bytes, offset: int) -> tuple[int, int]:
    line_start = source.rfind(b"\n", 0, offset) + 1
    return source.count(b"\n", 0, offset), offset - line_start


def _position_at(source: bytes, offset: int) -> Position:
    return native_position(source, offset, _point_at(source, offset))


def _eof_position(source: bytes) -> Position:
    """Native position of the end of input.

    A trailing newline does not open a new line, as in Go's token.File.
    """
    if not source.endswith(b"\n"):
        return _position_at(source, len(source))
    pos = _position_at(source, len(source) - 1)
    return Position(line=pos.line, character=pos.character + 1)


def _node_position(source: bytes, node: tree_sitter.Node) -> Position:
    return native_position(source, node.start_byte, node.start_point)


def _is_string(token: tree_sitter.Node) -> bool:
    if token.type in _STRING_TYPES:
        return True
    return token.parent is not None and token.parent.type in _STRING_TYPES


def _found(token: tree_sitter.Node | None) -> str:
    """Render a token the way Go's parser does after "found"."""
    if token is None or (not token.text and not token.is_missing):
        return "'EOF'"
    if token.type == "\n":
        return "newline"
    if _is_string(token):
        node = token if token.type in _STRING_TYPES else token.parent
        return node.text.decode("utf-8", errors="replace")
    text = token.text.decode("utf-8", errors="replace")
    if token.type in _LITERAL_TYPES:
        return text
    return f"'{text}'"


def _describe(node: tree_sitter.Node) -> str:
    if node.is_missing:
        return f"expected '{node.type}'"
    for leaf in _leaves(node):
        if leaf.text:
            token = leaf.text.decode("utf-8", errors="replace")
            return f"unexpected {token!r}"
    return "unexpected EOF"


def _error_at(filename: str, pos: Position, description: str) -> ParseFailure:
    return ParseFailure(f"{filename}:{pos.line}:{pos.character}: {description}")


def _syntax_error(
    source: bytes,
    node: tree_sitter.Node,
    filename: str,
    description: str | None = None,
) -> ParseFailure:
    """Build a ParseFailure pointing at the first error under ``node``."""
    culprit = _first_error(node) or node
    if description is None:
        description = _describe(culprit)
    return _error_at(filename, _node_position(source, culprit), description)


def _import_path_error(
    source: bytes,
    tokens: Iterator[tree_sitter.Node],
    filename: str,
) -> ParseFailure | None:
    """Report a bad first import spec the way Go's parser does.

    Returns None when the first spec has a string path, leaving the
    description to the generic error report.
    """
    for keyword in tokens:
        if keyword.type == "import":
            break
    else:
        return None

    prev = keyword
    token = next(tokens, None)
    while token is not None and (token.type == "(" or token.type in _TERMINATORS):
        # Newlines after "import" and "(" are not statement terminators
        prev, token = token, next(tokens, None)

    has_alias = (
        token is not None
        and token.type in _ALIAS_TYPES
        and not token.is_missing
    )
    if has_alias:
        prev, token = token, next(tokens, None)

    if token is not None and not token.is_missing:
        if _is_string(token):
            return None
        if token.type in _LITERAL_TYPES:
            pos = _node_position(source, token)
            return _error_at(filename, pos, "import path must be a string")

    if token is None or not token.text and not token.is_missing:
        pos = _eof_position(source)
    elif has_alias and token.start_point[0] > prev.end_point[0]:
        # The newline after the alias stands in for the missing path
        pos = _position_at(source, source.index(b"\n", prev.end_byte))
    else:
        pos = _node_position(source, token)
    return _error_at(filename, pos, "missing import path")


def _import_error(
    source: bytes,
    root: tree_sitter.Node,
    index: int,
    filename: str,
) -> ParseFailure:
    """Build a ParseFailure for a broken import at ``root.children[index]``."""
    tokens = _tokens(root.children[index:])
    error = _import_path_error(source, tokens, filename)
    if error is not None:
        return error
    return _syntax_error(source, root.children[index], filename)


def _opens_import(node: tree_sitter.Node) -> bool:
    """Whether a top-level ERROR node belongs to the import block.

    True when an ``import`` keyword shows up before any keyword that
    starts a later declaration.
    """
    for leaf in _leaves(node):
        if leaf.text == b"import":
            return True
        if leaf.text in _BODY_KEYWORDS:
            return False
    return False


def _header_declarations(
    source: bytes,
    root: tree_sitter.Node,
    filename: str,
) -> list[tree_sitter.Node]:
    """Validate the package clause and collect the import declarations.

    The package clause and every import declaration must be followed by a
    terminator. Everything after the last import declaration is ignored,
    so errors further down the file do not matter.
    """
    declarations: list[tree_sitter.Node] = []
    seen_package = False
    expect_terminator = False

    for index, child in enumerate(root.children):
        if child.type == "comment":
            continue
        if child.is_missing:
            raise _syntax_error(source, child, filename)

        if expect_terminator:
            if child.type in _TERMINATORS:
                expect_terminator = False
                continue
            token = next(_tokens([child]), None)
            raise _error_at(
                filename,
                _node_position(source, token or child),
                f"expected ';', found {_found(token)}",
            )

        if child.type in _TERMINATORS:
            continue

        if not seen_package:
            if child.type == "ERROR" or child.has_error:
                raise _syntax_error(source, child, filename)
            if child.type != "package_clause":
                token = next(_tokens([child]), None)
                raise _error_at(
                    filename,
                    _node_position(source, token or child),
                    f"expected 'package', found {_found(token)}",
                )
            seen_package = True
            expect_terminator = True
            continue

        if child.type == "import_declaration":
            if child.has_error:
                raise _import_error(source, root, index, filename)
            declarations.append(child)
            expect_terminator = True
            continue

        if child.type == "ERROR" and _opens_import(child):
            raise _import_error(source, root, index, filename)

        logger.debug("import block ends at %s on line %d", child.type, child.start_point[0] + 1)
        break

    if not seen_package:
        raise _error_at(filename, _eof_position(source), "expected 'package', found 'EOF'")

    return declarations


def _import_specs(declaration: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    for child in declaration.named_children:
        if child.type == "import_spec":
            yield child
        elif child.type == "import_spec_list":
            for spec in child.named_children:
                if spec.type == "import_spec":
                    yield spec


def extract(
    source: bytes,
    filename: str = "src.go",
    column_unit: str = "byte",
) -> list[RawImport]:
    """Extract the import path literals of a Go source file.

    Only the package clause and the import declarations are required to be
    well formed. Literals are returned quoted, in source order.

    Raises:
        ParseFailure: If the package clause or an import declaration is
            malformed, or a path literal is not valid UTF-8
    """
    tree = _get_parser().parse(source)
    declarations = _header_declarations(source, tree.root_node, filename)

    imports: list[RawImport] = []
    for declaration in declarations:
        for spec in _import_specs(declaration):
            path = spec.child_by_field_name("path")
            if path is None:
                raise _syntax_error(source, spec, filename, "missing import path")
            try:
                path.text.decode("utf-8")
            except UnicodeDecodeError as e:
                pos = _position_at(source, path.start_byte + e.start)
                raise _error_at(filename, pos, "illegal UTF-8 encoding") from e
            imports.append(
                RawImport(
                    literal=path.text,
                    start=native_position(source, path.start_byte, path.start_point, column_unit),
                    end=native_position(source, path.end_byte, path.end_point, column_unit),
                ),
            )

    logger.debug("found %d import(s) in %d declaration(s)", len(imports), len(declarations))
    return imports
