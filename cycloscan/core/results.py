"""
Result data structures for a complexity analysis run.

One ``AnalysisResult`` is produced per translation unit. Its
``ComplexityMap`` is owned by that run only and is never shared.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from cycloscan.frontend.base import SourceLocation


logger = logging.getLogger(__name__)


class ComplexityMap:
    """
    Function name to cyclomatic complexity, iterated in lexicographic order.

    A name holds at most one entry. Recording a name again (overloads that
    share a display name, same-named functions in different scopes)
    overwrites the earlier value.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, int] = {}

    def record(self, name: str, complexity: int) -> None:
        if name in self._entries:
            logger.debug(
                "Function name %r recorded again; %d replaces %d",
                name, complexity, self._entries[name],
            )
        self._entries[name] = complexity

    def items(self) -> List[Tuple[str, int]]:
        return sorted(self._entries.items())

    def to_dict(self) -> Dict[str, int]:
        return dict(self.items())

    def __getitem__(self, name: str) -> int:
        return self._entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ComplexityMap({self.to_dict()!r})"


@dataclass(frozen=True)
class FunctionResult:
    """The complexity computed for one function definition."""
    name: str
    complexity: int
    location: SourceLocation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "complexity": self.complexity,
            "file_path": self.location.path,
            "line": self.location.line,
            "column": self.location.column,
        }


@dataclass
class AnalysisResult:
    """Outcome of analyzing one translation unit."""
    unit_path: str
    complexities: ComplexityMap = field(default_factory=ComplexityMap)
    functions: List[FunctionResult] = field(default_factory=list)
    report_path: Optional[str] = None
    report_written: bool = False
    excluded: int = 0
    anomalies: int = 0
    error: Optional[str] = None
    diagnostics: List[Any] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None and (self.report_path is None or self.report_written)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit": self.unit_path,
            "complexities": self.complexities.to_dict(),
            "functions": [function.to_dict() for function in self.functions],
            "report_path": self.report_path,
            "report_written": self.report_written,
            "excluded": self.excluded,
            "anomalies": self.anomalies,
            "error": self.error,
            "diagnostics": [str(diagnostic) for diagnostic in self.diagnostics],
        }
