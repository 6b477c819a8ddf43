"""
Frontend interface consumed by the complexity analyzer.

A frontend turns source text into a tree of ``SyntaxNode`` objects. The
analyzer never looks at a frontend's native node types: it only needs

- a closed ``NodeKind`` classification for every node,
- child enumeration for generic recursive descent,
- for function declarations, a display name, a resolvable source location
  and an optional body.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from cycloscan.core.errors import CycloscanError


class NodeKind(Enum):
    """Decision-bearing node kinds. Everything else is ``OTHER``."""
    IF = "if"
    SWITCH = "switch"
    FOR = "for"
    WHILE = "while"
    DO_WHILE = "do_while"
    CONDITIONAL = "conditional"
    OTHER = "other"


DECISION_KINDS = frozenset(kind for kind in NodeKind if kind is not NodeKind.OTHER)


class LocationError(CycloscanError):
    """A declaration's location cannot be resolved to an originating file."""


@dataclass(frozen=True)
class SourceLocation:
    path: str
    line: int
    column: int
    in_system_header: bool = False

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


class SyntaxNode(ABC):
    """A node of a frontend's syntax tree."""

    @property
    @abstractmethod
    def kind(self) -> NodeKind:
        ...

    @abstractmethod
    def children(self) -> Iterable["SyntaxNode"]:
        ...

    def as_function(self) -> Optional["FunctionDecl"]:
        """Return the function declared by this node, if any."""
        return None


class FunctionDecl(ABC):
    """A function declaration as seen by the walker."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def location(self) -> SourceLocation:
        """Defining location. Raises ``LocationError`` when unresolvable."""

    @property
    @abstractmethod
    def body(self) -> Optional[SyntaxNode]:
        ...

    @property
    @abstractmethod
    def is_definition(self) -> bool:
        ...


@dataclass(frozen=True)
class TranslationUnit:
    path: str
    language: str
    root: SyntaxNode


class Frontend(ABC):
    """Parses one translation unit into a ``TranslationUnit``."""

    name = "generic"

    @abstractmethod
    def parse(self, path: str, source: Optional[bytes] = None) -> TranslationUnit:
        ...
