"""
Tests for the diagnostics engine and source discovery.
"""

import io

import pytest

from cycloscan.core.diagnostics import Colors, DiagnosticsEngine, Level
from cycloscan.frontend.base import SourceLocation
from cycloscan.utils.files import iter_translation_units


LOCATION = SourceLocation("src/main.c", 12, 5)


class TestDiagnosticsEngine:
    """Tests for DiagnosticsEngine."""

    def test_custom_ids_are_reused(self):
        engine = DiagnosticsEngine()
        first = engine.custom_diag_id(Level.REMARK, "Cyclomatic Complexity: {0}")
        again = engine.custom_diag_id(Level.REMARK, "Cyclomatic Complexity: {0}")
        other = engine.custom_diag_id(Level.WARNING, "Cyclomatic Complexity: {0}")
        assert first == again
        assert other != first

    def test_report_formats_arguments(self):
        engine = DiagnosticsEngine()
        diag_id = engine.custom_diag_id(Level.REMARK, "Cyclomatic Complexity: {0}")
        diagnostic = engine.report(LOCATION, diag_id, 7)
        assert str(diagnostic) == "src/main.c:12:5: remark: Cyclomatic Complexity: 7"
        assert engine.count(Level.REMARK) == 1
        assert engine.count(Level.ERROR) == 0

    def test_unknown_id(self):
        with pytest.raises(ValueError):
            DiagnosticsEngine().report(LOCATION, 3)

    def test_stream_output_without_tty_is_plain(self):
        stream = io.StringIO()
        engine = DiagnosticsEngine(stream=stream)
        diag_id = engine.custom_diag_id(Level.REMARK, "value {0}")
        engine.report(LOCATION, diag_id, 1)
        assert stream.getvalue() == "src/main.c:12:5: remark: value 1\n"
        assert Colors.RESET not in stream.getvalue()

    def test_no_stream_collects_silently(self):
        engine = DiagnosticsEngine()
        engine.report(LOCATION, engine.custom_diag_id(Level.NOTE, "n"))
        assert len(engine.diagnostics) == 1


class TestTranslationUnitDiscovery:
    """Tests for iter_translation_units."""

    def test_file_is_yielded_as_is(self, tmp_path):
        path = tmp_path / "anything.h"
        path.write_text("")
        assert list(iter_translation_units(str(path), [".h"])) == [str(path)]

    def test_directory_walk(self, tmp_path):
        for rel in ("b.c", "a.cpp", "inc/a.h", "notes.md", ".git/x.c", "vendor/v.c", "lib/z.cc"):
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("")
        found = list(iter_translation_units(str(tmp_path), [".h"]))
        assert found == [str(tmp_path / name) for name in ("a.cpp", "b.c", "lib/z.cc")]
