"""
Source frontends.

The analyzer consumes the abstract interface in ``cycloscan.frontend.base``;
the modules here provide concrete implementations:

- ``treesitter``: C/C++ grammars from tree-sitter (default)
- ``libclang``: full translation units through ``clang.cindex``
"""

from typing import Any, Dict, Optional

from cycloscan.core.errors import FrontendError
from cycloscan.frontend.base import (
    DECISION_KINDS,
    Frontend,
    FunctionDecl,
    LocationError,
    NodeKind,
    SourceLocation,
    SyntaxNode,
    TranslationUnit,
)
from cycloscan.frontend.treesitter import TreeSitterFrontend, language_for_path

__all__ = [
    "DECISION_KINDS",
    "Frontend",
    "FunctionDecl",
    "LocationError",
    "NodeKind",
    "SourceLocation",
    "SyntaxNode",
    "TranslationUnit",
    "TreeSitterFrontend",
    "get_frontend",
    "language_for_path",
]

FRONTEND_NAMES = ("treesitter", "clang")


def get_frontend(name: str, options: Optional[Dict[str, Any]] = None) -> Frontend:
    """Get a frontend by name."""
    options = options or {}
    name = name.lower()
    if name in ("treesitter", "tree-sitter"):
        return TreeSitterFrontend()
    if name in ("clang", "libclang"):
        try:
            from cycloscan.frontend.libclang import ClangFrontend
        except ImportError as exc:
            raise FrontendError(
                "The clang frontend requires the libclang bindings. "
                "Install them with: pip install cycloscan[clang]"
            ) from exc
        return ClangFrontend(args=options.get("clang_args", []))
    raise FrontendError(f"Unknown frontend: {name}")
