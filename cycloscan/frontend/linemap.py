"""
Line map for preprocessed sources.

Preprocessor output (``cc -E``) carries GNU linemarkers such as::

    # 1 "/usr/include/stdio.h" 1 3 4

which say that the following physical line is line 1 of ``stdio.h`` and,
through flag ``3``, that the text comes from a system header. ``#line``
directives carry the same information without flags. ``LineMap`` records
these markers so that any physical row of the buffer can be resolved to the
file that originally contained it.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import List, Optional, Tuple

from cycloscan.frontend.base import LocationError, SourceLocation


LINEMARKER_RE = re.compile(
    rb'^[ \t]*#[ \t]*(?:line[ \t]+)?(\d+)(?:[ \t]+"((?:[^"\\]|\\.)*)")?((?:[ \t]+\d+)*)[ \t]*\r?$'
)

SYSTEM_HEADER_FLAG = 3


@dataclass(frozen=True)
class _Segment:
    start_row: int
    first_line: int
    path: Optional[str]
    in_system_header: bool


def _unescape(raw: bytes) -> str:
    text = raw.decode("utf-8", errors="replace")
    return re.sub(r"\\(.)", r"\1", text)


def _is_pseudo_file(path: str) -> bool:
    return not path or (path.startswith("<") and path.endswith(">"))


class LineMap:
    """Maps physical rows of a buffer to originating file locations."""

    def __init__(self, path: str, segments: Optional[List[_Segment]] = None):
        self.path = path
        self._segments = segments or [_Segment(0, 1, path, False)]
        self._starts = [segment.start_row for segment in self._segments]

    @classmethod
    def scan(cls, path: str, source: bytes) -> Tuple["LineMap", bytes]:
        """
        Build a line map from ``source``.

        Returns the map and a copy of the source in which every marker line
        is replaced with spaces of the same length, so byte offsets and row
        numbers stay valid for the parser.
        """
        segments = [_Segment(0, 1, path, False)]
        lines = source.split(b"\n")
        cleaned = []
        for row, line in enumerate(lines):
            match = LINEMARKER_RE.match(line)
            if match is None:
                cleaned.append(line)
                continue
            cleaned.append(b" " * len(line))
            current = segments[-1]
            file_name = match.group(2)
            if file_name is None:
                target = current.path
                in_system = current.in_system_header
            else:
                target = _unescape(file_name)
                flags = {int(flag) for flag in match.group(3).split()}
                in_system = SYSTEM_HEADER_FLAG in flags
                if _is_pseudo_file(target):
                    target = None
            segments.append(_Segment(row + 1, int(match.group(1)), target, in_system))
        return cls(path, segments), b"\n".join(cleaned)

    @property
    def has_markers(self) -> bool:
        return len(self._segments) > 1

    def resolve(self, row: int, column: int = 0) -> SourceLocation:
        """Resolve a 0-based physical row and column."""
        if row < 0:
            raise LocationError(f"invalid row {row} in {self.path}")
        segment = self._segments[bisect_right(self._starts, row) - 1]
        if segment.path is None:
            raise LocationError(f"row {row} of {self.path} has no originating file")
        return SourceLocation(
            path=segment.path,
            line=segment.first_line + (row - segment.start_row),
            column=column + 1,
            in_system_header=segment.in_system_header,
        )
