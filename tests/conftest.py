"""
Shared fixtures and in-memory syntax trees for the test suite.
"""

import os
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cycloscan.core.config import Config
from cycloscan.core.engine import AnalysisEngine
from cycloscan.frontend.base import (
    FunctionDecl,
    LocationError,
    NodeKind,
    SourceLocation,
    SyntaxNode,
)


class FakeNode(SyntaxNode):
    """A hand-built syntax node."""

    def __init__(self, kind=NodeKind.OTHER, children=None, function=None):
        self._kind = kind
        self._children = list(children or [])
        self._function = function

    @property
    def kind(self):
        return self._kind

    def children(self):
        return self._children

    def as_function(self):
        return self._function


class FakeFunction(FunctionDecl):
    """A hand-built function declaration."""

    def __init__(self, name, body=None, path="main.c", line=1, is_definition=True,
                 in_system_header=False, location_error=False):
        self._name = name
        self._body = body
        self._location = SourceLocation(path, line, 1, in_system_header)
        self._is_definition = is_definition
        self._location_error = location_error

    @property
    def name(self):
        return self._name

    @property
    def location(self):
        if self._location_error:
            raise LocationError(f"no location for {self._name}")
        return self._location

    @property
    def body(self):
        return self._body

    @property
    def is_definition(self):
        return self._is_definition


def function_node(name, body=None, **kwargs):
    """A declaration node wrapping a FakeFunction; the body is also its child."""
    children = [body] if body is not None else []
    return FakeNode(children=children, function=FakeFunction(name, body=body, **kwargs))


def block(*children):
    return FakeNode(NodeKind.OTHER, children)


@pytest.fixture
def quiet_config():
    """Config with no report file and no diagnostic output."""
    return Config.from_dict({"report": {"path": None}, "diagnostics": {"enabled": False}})


@pytest.fixture
def engine(quiet_config):
    return AnalysisEngine(quiet_config)


@pytest.fixture
def complexities(engine):
    """Analyze a snippet and return its complexity map as a dict."""
    def analyze(code, path="main.c"):
        return engine.analyze_source(code, path).complexities.to_dict()
    return analyze
