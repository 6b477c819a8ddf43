"""
Tests for the translation unit walker and declaration eligibility.
"""

from conftest import FakeFunction, FakeNode, block, function_node

from cycloscan.analysis.eligibility import EligibilityPolicy
from cycloscan.analysis.walker import REMARK_TEMPLATE, ComplexityWalker
from cycloscan.core.diagnostics import DiagnosticsEngine, Level
from cycloscan.core.results import ComplexityMap
from cycloscan.frontend.base import NodeKind, TranslationUnit


def unit(*children):
    return TranslationUnit(path="main.c", language="c", root=block(*children))


class TestEligibilityPolicy:
    """Tests for header and system-header exclusion."""

    def test_primary_source_is_eligible(self):
        policy = EligibilityPolicy()
        decl = FakeFunction("main", path="src/main.c")
        assert not policy.is_excluded(decl)
        assert policy.eligible_location(decl).path == "src/main.c"

    def test_header_extensions_are_excluded(self):
        policy = EligibilityPolicy()
        for path in ("util.h", "widget.hpp", "inline.hh", "gen.hxx", "tables.inc"):
            assert policy.is_excluded(FakeFunction("f", path=path)), path

    def test_system_header_flag_excludes(self):
        policy = EligibilityPolicy()
        decl = FakeFunction("f", path="/opt/sdk/impl.c", in_system_header=True)
        assert policy.is_excluded(decl)

    def test_system_include_dirs_exclude(self):
        policy = EligibilityPolicy(system_include_dirs=["/opt/sdk/include/"])
        assert policy.is_excluded(FakeFunction("f", path="/opt/sdk/include/impl.c"))
        assert not policy.is_excluded(FakeFunction("f", path="/opt/sdk/includes.c"))

    def test_unresolvable_location_is_excluded(self):
        policy = EligibilityPolicy()
        assert policy.is_excluded(FakeFunction("f", location_error=True))

    def test_custom_header_extensions(self):
        policy = EligibilityPolicy(header_extensions=[".h"])
        assert not policy.is_excluded(FakeFunction("f", path="widget.hpp"))
        assert policy.is_excluded(FakeFunction("f", path="widget.h"))


class TestComplexityWalker:
    """Tests for ComplexityWalker."""

    def test_records_each_definition(self):
        complexity_map = ComplexityMap()
        outcome = ComplexityWalker().walk(
            unit(
                function_node("plain", body=block(FakeNode())),
                function_node("branchy", body=block(FakeNode(NodeKind.IF), FakeNode(NodeKind.FOR))),
            ),
            complexity_map,
        )
        assert complexity_map.to_dict() == {"branchy": 3, "plain": 1}
        assert [f.name for f in outcome.functions] == ["plain", "branchy"]

    def test_skips_declarations_without_body(self):
        complexity_map = ComplexityMap()
        outcome = ComplexityWalker().walk(
            unit(function_node("proto", is_definition=False)),
            complexity_map,
        )
        assert len(complexity_map) == 0
        assert outcome.declarations == 1
        assert outcome.anomalies == 0

    def test_empty_body_is_anomaly(self):
        """A definition with no body is logged and left out of the map."""
        diagnostics = DiagnosticsEngine()
        complexity_map = ComplexityMap()
        outcome = ComplexityWalker(diagnostics=diagnostics).walk(
            unit(function_node("broken", body=None), function_node("ok", body=block())),
            complexity_map,
        )
        assert complexity_map.to_dict() == {"ok": 1}
        assert outcome.anomalies == 1
        assert diagnostics.count() == 1

    def test_malformed_location_does_not_stop_walk(self):
        complexity_map = ComplexityMap()
        outcome = ComplexityWalker().walk(
            unit(
                function_node("lost", body=block(), location_error=True),
                function_node("found", body=block(FakeNode(NodeKind.WHILE))),
            ),
            complexity_map,
        )
        assert complexity_map.to_dict() == {"found": 2}
        assert outcome.excluded == 1

    def test_headers_never_reach_the_map(self):
        complexity_map = ComplexityMap()
        ComplexityWalker().walk(
            unit(
                function_node("from_header", body=block(), path="util.h"),
                function_node("from_system", body=block(), path="x.c", in_system_header=True),
                function_node("mine", body=block()),
            ),
            complexity_map,
        )
        assert list(complexity_map) == ["mine"]

    def test_nested_functions_are_recorded_separately(self):
        """A function declared inside another body is its own entry."""
        inner = function_node("inner", body=block(FakeNode(NodeKind.IF)))
        outer_body = block(FakeNode(NodeKind.OTHER, [inner]))
        complexity_map = ComplexityMap()
        ComplexityWalker().walk(unit(function_node("outer", body=outer_body)), complexity_map)
        assert complexity_map["inner"] == 2
        assert "outer" in complexity_map

    def test_duplicate_names_keep_last_value(self):
        complexity_map = ComplexityMap()
        outcome = ComplexityWalker().walk(
            unit(
                function_node("f", body=block(FakeNode(NodeKind.IF))),
                function_node("f", body=block()),
            ),
            complexity_map,
        )
        assert complexity_map.to_dict() == {"f": 1}
        assert len(outcome.functions) == 2

    def test_emits_one_remark_per_function(self):
        diagnostics = DiagnosticsEngine()
        walker = ComplexityWalker(diagnostics=diagnostics)
        walker.walk(
            unit(
                function_node("a", body=block(FakeNode(NodeKind.SWITCH)), line=3),
                function_node("b", body=block(), line=9),
            ),
            ComplexityMap(),
        )
        remarks = diagnostics.diagnostics
        assert [d.message for d in remarks] == [
            "Cyclomatic Complexity: 2",
            "Cyclomatic Complexity: 1",
        ]
        assert all(d.level is Level.REMARK for d in remarks)
        assert [d.location.line for d in remarks] == [3, 9]
        assert remarks[0].diag_id == walker.remark_id
        assert REMARK_TEMPLATE.format(2) == remarks[0].message

    def test_walk_does_not_share_state(self):
        walker = ComplexityWalker()
        first, second = ComplexityMap(), ComplexityMap()
        walker.walk(unit(function_node("a", body=block())), first)
        walker.walk(unit(function_node("b", body=block())), second)
        assert list(first) == ["a"]
        assert list(second) == ["b"]
