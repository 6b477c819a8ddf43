from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional

import tree_sitter_c
import tree_sitter_cpp
from tree_sitter import Language, Parser

from cycloscan.core.errors import FrontendError
from cycloscan.frontend.base import (
    Frontend,
    FunctionDecl,
    NodeKind,
    SourceLocation,
    SyntaxNode,
    TranslationUnit,
)
from cycloscan.frontend.linemap import LineMap


logger = logging.getLogger(__name__)


LANGUAGE_EXTENSIONS = {
    "c": {".c", ".i", ".h"},
    "cpp": {".cc", ".cpp", ".cxx", ".c++", ".C", ".ii", ".hpp", ".hh", ".hxx", ".h++"},
}

DECISION_NODE_TYPES = {
    "if_statement": NodeKind.IF,
    "switch_statement": NodeKind.SWITCH,
    "for_statement": NodeKind.FOR,
    "while_statement": NodeKind.WHILE,
    "do_statement": NodeKind.DO_WHILE,
    "conditional_expression": NodeKind.CONDITIONAL,
}

PROTOTYPE_NODE_TYPES = {"declaration", "field_declaration"}

# Clauses that replace a body without defining one.
BODYLESS_CLAUSES = {"default_method_clause", "delete_method_clause", "pure_virtual_clause"}

DECLARATOR_WRAPPERS = {
    "function_declarator",
    "pointer_declarator",
    "reference_declarator",
    "attributed_declarator",
    "parenthesized_declarator",
    "array_declarator",
}

NAME_NODE_TYPES = {
    "identifier",
    "field_identifier",
    "type_identifier",
    "destructor_name",
    "operator_name",
}

LAMBDA_NAME = "operator()"


@lru_cache(maxsize=None)
def _language(name: str) -> Language:
    if name == "c":
        return Language(tree_sitter_c.language())
    return Language(tree_sitter_cpp.language())


def language_for_path(path: str) -> Optional[str]:
    suffix = Path(path).suffix
    for candidate in (suffix, suffix.lower()):
        for name, extensions in LANGUAGE_EXTENSIONS.items():
            if candidate in extensions:
                return name
    return None


@dataclass(frozen=True)
class _ParsedSource:
    path: str
    source: bytes
    line_map: LineMap

    def text(self, node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _normalize_operator(text: str) -> str:
    rest = " ".join(text[len("operator"):].split())
    if rest and (rest[0].isalpha() or rest[0] == "_"):
        return f"operator {rest}"
    return "operator" + rest.replace(" ", "")


def _declarator_name(parsed: _ParsedSource, node) -> Optional[str]:
    while node is not None:
        if node.type in DECLARATOR_WRAPPERS:
            inner = node.child_by_field_name("declarator")
            if inner is None and node.named_children:
                inner = node.named_children[-1]
            node = inner
        elif node.type in {"qualified_identifier", "template_function"}:
            node = node.child_by_field_name("name")
        elif node.type == "operator_name":
            return _normalize_operator(parsed.text(node))
        elif node.type == "operator_cast":
            return _normalize_operator(parsed.text(node).split("(", 1)[0])
        elif node.type in NAME_NODE_TYPES:
            return " ".join(parsed.text(node).split())
        else:
            return None
    return None


def _name_node(node):
    """The innermost node naming a declarator, used as the defining location."""
    while node is not None and node.type in DECLARATOR_WRAPPERS | {"qualified_identifier", "template_function"}:
        inner = node.child_by_field_name("declarator")
        if inner is None:
            inner = node.child_by_field_name("name")
        if inner is None and node.named_children:
            inner = node.named_children[-1]
        if inner is None:
            break
        node = inner
    return node


def _has_function_declarator(node) -> bool:
    while node is not None:
        if node.type == "function_declarator":
            return True
        if node.type not in DECLARATOR_WRAPPERS:
            return False
        node = node.child_by_field_name("declarator")
    return False


class TreeSitterFunction(FunctionDecl):
    def __init__(self, parsed: _ParsedSource, node, name: str, name_node, body, is_definition: bool):
        self._parsed = parsed
        self._node = node
        self._name = name
        self._name_node = name_node
        self._body = body
        self._is_definition = is_definition

    @property
    def name(self) -> str:
        return self._name

    @property
    def location(self) -> SourceLocation:
        row, column = self._name_node.start_point
        return self._parsed.line_map.resolve(row, column)

    @property
    def body(self) -> Optional[SyntaxNode]:
        if self._body is None:
            return None
        return TreeSitterNode(self._parsed, self._body)

    @property
    def is_definition(self) -> bool:
        return self._is_definition


class TreeSitterNode(SyntaxNode):
    def __init__(self, parsed: _ParsedSource, node):
        self._parsed = parsed
        self._node = node

    @property
    def kind(self) -> NodeKind:
        return DECISION_NODE_TYPES.get(self._node.type, NodeKind.OTHER)

    @property
    def type(self) -> str:
        return self._node.type

    def children(self) -> Iterable[SyntaxNode]:
        return [TreeSitterNode(self._parsed, child) for child in self._node.children]

    def as_function(self) -> Optional[FunctionDecl]:
        node = self._node
        if node.type == "lambda_expression":
            body = node.child_by_field_name("body")
            return TreeSitterFunction(self._parsed, node, LAMBDA_NAME, node, body, True)
        if node.type == "function_definition":
            return self._definition(node)
        if node.type in PROTOTYPE_NODE_TYPES:
            return self._prototype(node)
        return None

    def _definition(self, node) -> Optional[FunctionDecl]:
        declarator = node.child_by_field_name("declarator")
        name = _declarator_name(self._parsed, declarator)
        if name is None:
            return None
        body = node.child_by_field_name("body")
        is_definition = True
        if body is None:
            for child in node.children:
                if child.type == "try_block":
                    body = child
                    break
                if child.type in BODYLESS_CLAUSES:
                    is_definition = False
                    break
        return TreeSitterFunction(
            self._parsed, node, name, _name_node(declarator), body, is_definition
        )

    def _prototype(self, node) -> Optional[FunctionDecl]:
        declarator = node.child_by_field_name("declarator")
        if not _has_function_declarator(declarator):
            return None
        name = _declarator_name(self._parsed, declarator)
        if name is None:
            return None
        return TreeSitterFunction(self._parsed, node, name, _name_node(declarator), None, False)


class TreeSitterFrontend(Frontend):
    """C and C++ frontend built on tree-sitter grammars."""

    name = "treesitter"

    def __init__(self, language: Optional[str] = None):
        self.language = language

    def parse(self, path: str, source: Optional[bytes] = None) -> TranslationUnit:
        language = self.language or language_for_path(path)
        if language is None:
            raise FrontendError(f"Unsupported source file: {path}")
        if source is None:
            try:
                source = Path(path).read_bytes()
            except OSError as exc:
                raise FrontendError(f"Cannot read {path}: {exc}") from exc
        line_map, cleaned = LineMap.scan(path, source)
        parser = Parser(_language(language))
        tree = parser.parse(cleaned)
        if tree.root_node.has_error:
            logger.debug("Syntax errors in %s; analyzing recovered tree", path)
        parsed = _ParsedSource(path=path, source=cleaned, line_map=line_map)
        return TranslationUnit(path=path, language=language, root=TreeSitterNode(parsed, tree.root_node))
