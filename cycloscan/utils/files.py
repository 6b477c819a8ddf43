from __future__ import annotations

from pathlib import Path
from typing import Iterable

from cycloscan.frontend.treesitter import language_for_path


IGNORED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".vscode",
    ".venv",
    "node_modules",
    "dist",
    "build",
    "target",
    "vendor",
    "third_party",
    "bin",
    "obj",
    "out",
}


def iter_translation_units(root: str, header_extensions: Iterable[str]) -> Iterable[str]:
    """
    Yield primary source files under ``root``.

    A file path is yielded as given. Directories are searched recursively in
    sorted order, skipping headers and build/vendor directories.
    """
    headers = tuple(header_extensions)
    root_path = Path(root)
    if root_path.is_file():
        yield str(root_path)
        return
    for path in sorted(root_path.rglob("*")):
        if not path.is_file():
            continue
        if any(part in IGNORED_DIRS for part in path.relative_to(root_path).parts):
            continue
        if str(path).endswith(headers):
            continue
        if language_for_path(str(path)) is None:
            continue
        yield str(path)
