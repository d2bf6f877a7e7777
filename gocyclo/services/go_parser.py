import logging
from dataclasses import dataclass
from typing import Optional

import tree_sitter_go as tsgo
from tree_sitter import Language, Parser, Node

from gocyclo.errors import GoSyntaxError, TraversalError

# Load Go grammar
GO_LANGUAGE = Language(tsgo.language())

logger = logging.getLogger(__name__)


@dataclass
class ParsedFile:
    filename: str
    package_name: str
    # The `source_file` node; its children are the top-level declarations.
    root: Node


class GoParser:
    def __init__(self):
        self.parser = Parser(GO_LANGUAGE)

    def parse_file(self, file_path: str) -> ParsedFile:
        try:
            with open(file_path, 'rb') as f:
                content = f.read()
        except OSError as e:
            logger.error(f"Failed to read {file_path}: {e}")
            raise TraversalError(file_path, e.strerror or str(e)) from e

        return self.parse_source(content, file_path)

    def parse_source(self, content: bytes, filename: str = "<source>") -> ParsedFile:
        tree = self.parser.parse(content)
        root = tree.root_node

        if root.has_error:
            bad = _first_error_node(root) or root
            line = bad.start_point.row + 1
            column = bad.start_point.column + 1
            detail = "syntax error"
            if bad.is_missing:
                detail = f"missing '{bad.type}'"
            logger.error(f"Syntax error in {filename} at {line}:{column}")
            raise GoSyntaxError(filename, line, column, detail)

        package_name = _check_top_level(root, filename)
        return ParsedFile(filename=filename, package_name=package_name, root=root)


# Declarations allowed after the package clause and the imports.
TOP_LEVEL_DECLARATION_TYPES = frozenset({
    'function_declaration',
    'method_declaration',
    'type_declaration',
    'const_declaration',
    'var_declaration',
})


def _check_top_level(root: Node, filename: str) -> str:
    """
    Enforce Go's file layout and return the package name.

    The grammar is looser than the language: it accepts statements at top
    level and package or import clauses in any order. A Go file is one
    package clause, then imports, then declarations.
    """
    package_name = None
    imports_allowed = True
    for child in root.named_children:
        if child.type == 'comment':
            continue

        if package_name is None:
            if child.type != 'package_clause':
                _raise_at(child, filename, "expected 'package'")
            package_name = _package_identifier(child)
        elif child.type == 'import_declaration':
            if not imports_allowed:
                _raise_at(child, filename, "imports must appear before other declarations")
        elif child.type in TOP_LEVEL_DECLARATION_TYPES:
            imports_allowed = False
        elif child.type == 'package_clause':
            _raise_at(child, filename, "unexpected second package clause")
        else:
            _raise_at(child, filename, f"non-declaration statement outside function body ({child.type})")

    if package_name is None:
        raise GoSyntaxError(filename, 1, 1, "expected 'package'")
    return package_name


def _raise_at(node: Node, filename: str, detail: str) -> None:
    line = node.start_point.row + 1
    column = node.start_point.column + 1
    logger.error(f"Syntax error in {filename} at {line}:{column}: {detail}")
    raise GoSyntaxError(filename, line, column, detail)


def _package_identifier(clause: Node) -> str:
    for part in clause.children:
        if part.type == 'package_identifier':
            return part.text.decode('utf-8')
    return ""


def _first_error_node(node: Node) -> Optional[Node]:
    """
    Return the first ERROR or missing node in document order.

    tree-sitter never fails outright; malformed input is recovered into
    ERROR nodes (unexpected tokens) or zero-width missing nodes.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == 'ERROR' or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


_go_parser = None


def get_go_parser() -> GoParser:
    global _go_parser
    if _go_parser is None:
        _go_parser = GoParser()
    return _go_parser
