"""
Which function declarations get analyzed.

Only code written in a primary source file is reported. A declaration is
excluded when its location is in a system header, when its file has a
header extension, or when its location cannot be resolved at all.
"""

import logging
import os
from typing import Iterable, Optional

from cycloscan.frontend.base import FunctionDecl, LocationError, SourceLocation


logger = logging.getLogger(__name__)

DEFAULT_HEADER_EXTENSIONS = (".h", ".hpp", ".hh", ".hxx", ".h++", ".inc")

DEFAULT_SYSTEM_INCLUDE_DIRS = ("/usr/include", "/usr/local/include")


def _normalize_dir(path: str) -> str:
    return os.path.normpath(path).rstrip(os.sep) + os.sep


class EligibilityPolicy:
    def __init__(
        self,
        header_extensions: Optional[Iterable[str]] = None,
        system_include_dirs: Optional[Iterable[str]] = None,
    ):
        if header_extensions is None:
            header_extensions = DEFAULT_HEADER_EXTENSIONS
        if system_include_dirs is None:
            system_include_dirs = DEFAULT_SYSTEM_INCLUDE_DIRS
        self.header_extensions = tuple(header_extensions)
        self.system_include_dirs = tuple(_normalize_dir(d) for d in system_include_dirs)

    def is_header(self, path: str) -> bool:
        return path.endswith(self.header_extensions)

    def is_system_path(self, path: str) -> bool:
        normalized = os.path.normpath(path)
        return any(normalized.startswith(prefix) for prefix in self.system_include_dirs)

    def eligible_location(self, decl: FunctionDecl) -> Optional[SourceLocation]:
        """Return the declaration's location if it is analyzable, else None."""
        try:
            location = decl.location
        except LocationError as exc:
            logger.debug("Excluding %s: %s", decl.name, exc)
            return None
        if location.in_system_header or self.is_system_path(location.path):
            logger.debug("Excluding %s: system header %s", decl.name, location.path)
            return None
        if self.is_header(location.path):
            logger.debug("Excluding %s: header file %s", decl.name, location.path)
            return None
        return location

    def is_excluded(self, decl: FunctionDecl) -> bool:
        return self.eligible_location(decl) is None
