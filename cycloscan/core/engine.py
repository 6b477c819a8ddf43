"""
Analysis engine.

Runs the parse → walk → report sequence for one translation unit at a
time. Every run gets a fresh ``ComplexityMap`` and its own
``DiagnosticsEngine``; nothing is carried over between units.
"""

import logging
import sys
from typing import Iterable, List, Optional, TextIO, Union

from cycloscan.analysis.eligibility import EligibilityPolicy
from cycloscan.analysis.walker import ComplexityWalker
from cycloscan.core.config import Config
from cycloscan.core.diagnostics import DiagnosticsEngine
from cycloscan.core.errors import FrontendError
from cycloscan.core.results import AnalysisResult, ComplexityMap
from cycloscan.frontend import Frontend, get_frontend
from cycloscan.reporting.report import ReportWriter, report_path_for


logger = logging.getLogger(__name__)


class AnalysisEngine:
    """
    Computes per-function cyclomatic complexity for C and C++ sources.

    ``diagnostics_stream`` receives one remark per analyzed function when
    diagnostics are enabled in the configuration (stderr if not given).
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        frontend: Optional[Frontend] = None,
        diagnostics_stream: Optional[TextIO] = None,
        report_writer: Optional[ReportWriter] = None,
    ):
        self.config = config or Config.default()
        self.frontend = frontend or get_frontend(
            self.config.frontend_name(), self.config.frontend_options()
        )
        self.diagnostics_stream = diagnostics_stream
        self.report_writer = report_writer or ReportWriter()
        self.eligibility = EligibilityPolicy(
            header_extensions=self.config.header_extensions(),
            system_include_dirs=self.config.system_include_dirs(),
        )

    def _new_diagnostics(self) -> DiagnosticsEngine:
        if not self.config.diagnostics_enabled():
            return DiagnosticsEngine()
        stream = self.diagnostics_stream or sys.stderr
        return DiagnosticsEngine(stream=stream, use_color=self.config.diagnostics_color())

    def analyze(self, path: str, source: Optional[Union[str, bytes]] = None) -> AnalysisResult:
        """Analyze one translation unit and write its report."""
        if isinstance(source, str):
            source = source.encode("utf-8")
        result = AnalysisResult(unit_path=path)

        try:
            unit = self.frontend.parse(path, source)
        except FrontendError as exc:
            logger.error("Skipping %s: %s", path, exc)
            result.error = str(exc)
            return result

        diagnostics = self._new_diagnostics()
        walker = ComplexityWalker(diagnostics=diagnostics, eligibility=self.eligibility)
        complexity_map = ComplexityMap()
        outcome = walker.walk(unit, complexity_map)

        result.complexities = complexity_map
        result.functions = outcome.functions
        result.excluded = outcome.excluded
        result.anomalies = outcome.anomalies
        result.diagnostics = list(diagnostics.diagnostics)

        template = self.config.report_path()
        if template:
            result.report_path = report_path_for(template, unit.path)
            result.report_written = self.report_writer.write(complexity_map, result.report_path)
        return result

    def analyze_source(self, source: Union[str, bytes], path: str) -> AnalysisResult:
        """Analyze in-memory source; ``path`` names the unit and picks the language."""
        return self.analyze(path, source)

    def analyze_paths(self, paths: Iterable[str]) -> List[AnalysisResult]:
        """Analyze several translation units, each as an independent run."""
        return [self.analyze(path) for path in paths]
