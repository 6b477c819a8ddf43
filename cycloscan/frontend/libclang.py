"""
Frontend backed by libclang (``clang.cindex``).

Unlike the tree-sitter frontend this one sees a real translation unit:
``#include`` directives are expanded, so declarations from headers show up
with their own locations and system-header flags.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from clang import cindex
from clang.cindex import CursorKind

from cycloscan.core.errors import FrontendError
from cycloscan.frontend.base import (
    Frontend,
    FunctionDecl,
    LocationError,
    NodeKind,
    SourceLocation,
    SyntaxNode,
    TranslationUnit,
)
from cycloscan.frontend.treesitter import language_for_path


logger = logging.getLogger(__name__)


DECISION_CURSOR_KINDS = {
    CursorKind.IF_STMT: NodeKind.IF,
    CursorKind.SWITCH_STMT: NodeKind.SWITCH,
    CursorKind.FOR_STMT: NodeKind.FOR,
    CursorKind.WHILE_STMT: NodeKind.WHILE,
    CursorKind.DO_STMT: NodeKind.DO_WHILE,
    CursorKind.CONDITIONAL_OPERATOR: NodeKind.CONDITIONAL,
}

FUNCTION_CURSOR_KINDS = {
    CursorKind.FUNCTION_DECL,
    CursorKind.CXX_METHOD,
    CursorKind.CONSTRUCTOR,
    CursorKind.DESTRUCTOR,
    CursorKind.CONVERSION_FUNCTION,
    CursorKind.FUNCTION_TEMPLATE,
}

BODY_CURSOR_KINDS = {CursorKind.COMPOUND_STMT, CursorKind.CXX_TRY_STMT}

LAMBDA_NAME = "operator()"


def _body_of(cursor) -> Optional[object]:
    body = None
    for child in cursor.get_children():
        try:
            kind = child.kind
        except ValueError:
            continue
        if kind in BODY_CURSOR_KINDS:
            body = child
    return body


class ClangFunction(FunctionDecl):
    def __init__(self, cursor, name: str, is_definition: bool):
        self._cursor = cursor
        self._name = name
        self._is_definition = is_definition

    @property
    def name(self) -> str:
        return self._name

    @property
    def location(self) -> SourceLocation:
        location = self._cursor.location
        if location.file is None:
            raise LocationError(f"declaration of {self._name} has no source file")
        return SourceLocation(
            path=location.file.name,
            line=location.line,
            column=location.column,
            in_system_header=bool(getattr(location, "is_in_system_header", False)),
        )

    @property
    def body(self) -> Optional[SyntaxNode]:
        body = _body_of(self._cursor)
        if body is None:
            return None
        return ClangNode(body)

    @property
    def is_definition(self) -> bool:
        return self._is_definition


class ClangNode(SyntaxNode):
    def __init__(self, cursor):
        self._cursor = cursor

    @property
    def kind(self) -> NodeKind:
        try:
            return DECISION_CURSOR_KINDS.get(self._cursor.kind, NodeKind.OTHER)
        except ValueError:
            # Cursor kinds newer than the bindings know about.
            return NodeKind.OTHER

    def children(self) -> Iterable[SyntaxNode]:
        return [ClangNode(child) for child in self._cursor.get_children()]

    def as_function(self) -> Optional[FunctionDecl]:
        cursor = self._cursor
        try:
            kind = cursor.kind
        except ValueError:
            return None
        if kind == CursorKind.LAMBDA_EXPR:
            return ClangFunction(cursor, LAMBDA_NAME, True)
        if kind in FUNCTION_CURSOR_KINDS:
            return ClangFunction(cursor, cursor.spelling, cursor.is_definition())
        return None


class ClangFrontend(Frontend):
    """Parses translation units through libclang."""

    name = "clang"

    def __init__(self, args: Optional[List[str]] = None):
        self.args = list(args or [])
        try:
            self._index = cindex.Index.create()
        except cindex.LibclangError as exc:
            raise FrontendError(f"libclang shared library not found: {exc}") from exc

    def parse(self, path: str, source: Optional[bytes] = None) -> TranslationUnit:
        unsaved = [(path, source.decode("utf-8", errors="replace"))] if source is not None else None
        try:
            tu = self._index.parse(path, args=self.args, unsaved_files=unsaved)
        except cindex.TranslationUnitLoadError as exc:
            raise FrontendError(f"libclang could not parse {path}: {exc}") from exc
        for diagnostic in tu.diagnostics:
            if diagnostic.severity >= cindex.Diagnostic.Error:
                logger.warning("%s: %s", path, diagnostic.spelling)
        language = language_for_path(path) or "c"
        return TranslationUnit(path=path, language=language, root=ClangNode(tu.cursor))
