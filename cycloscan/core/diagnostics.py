"""
Compiler-style diagnostics.

The engine mirrors the way a compiler frontend hands out custom diagnostic
IDs: a caller registers a message template once, then reports that ID at a
source location with arguments. Every run gets its own engine.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, TextIO, Tuple

from cycloscan.frontend.base import SourceLocation


class Level(Enum):
    """Diagnostic severity levels."""
    REMARK = "remark"
    NOTE = "note"
    WARNING = "warning"
    ERROR = "error"


class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[91m"
    MAGENTA = "\033[95m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"


LEVEL_COLORS = {
    Level.REMARK: Colors.BLUE,
    Level.NOTE: Colors.CYAN,
    Level.WARNING: Colors.MAGENTA,
    Level.ERROR: Colors.RED,
}


@dataclass(frozen=True)
class Diagnostic:
    level: Level
    location: SourceLocation
    message: str
    diag_id: int

    def __str__(self) -> str:
        return f"{self.location}: {self.level.value}: {self.message}"


def supports_color(stream: TextIO) -> bool:
    """Check if a stream is a terminal that can show colors."""
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class DiagnosticsEngine:
    """
    Collects diagnostics and optionally renders them to a stream.

    ``custom_diag_id`` registers a message template such as
    ``"Cyclomatic Complexity: {0}"`` and returns an integer ID. Registering
    the same level and template again returns the same ID.
    """

    def __init__(self, stream: Optional[TextIO] = None, use_color: bool = True):
        self.stream = stream
        self.use_color = use_color and stream is not None and supports_color(stream)
        self.diagnostics: List[Diagnostic] = []
        self._templates: List[Tuple[Level, str]] = []

    @classmethod
    def to_stderr(cls, use_color: bool = True) -> "DiagnosticsEngine":
        return cls(stream=sys.stderr, use_color=use_color)

    def custom_diag_id(self, level: Level, template: str) -> int:
        key = (level, template)
        if key in self._templates:
            return self._templates.index(key)
        self._templates.append(key)
        return len(self._templates) - 1

    def report(self, location: SourceLocation, diag_id: int, *args: Any) -> Diagnostic:
        try:
            level, template = self._templates[diag_id]
        except IndexError:
            raise ValueError(f"Unknown diagnostic id: {diag_id}") from None
        diagnostic = Diagnostic(
            level=level,
            location=location,
            message=template.format(*args),
            diag_id=diag_id,
        )
        self.diagnostics.append(diagnostic)
        if self.stream is not None:
            self.stream.write(self.render(diagnostic) + "\n")
        return diagnostic

    def render(self, diagnostic: Diagnostic) -> str:
        if not self.use_color:
            return str(diagnostic)
        color = LEVEL_COLORS.get(diagnostic.level, "")
        return (
            f"{Colors.BOLD}{diagnostic.location}: {Colors.RESET}"
            f"{Colors.BOLD}{color}{diagnostic.level.value}:{Colors.RESET} "
            f"{Colors.BOLD}{diagnostic.message}{Colors.RESET}"
        )

    def count(self, level: Optional[Level] = None) -> int:
        if level is None:
            return len(self.diagnostics)
        return sum(1 for diagnostic in self.diagnostics if diagnostic.level is level)
