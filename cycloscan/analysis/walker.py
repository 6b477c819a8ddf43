"""
Translation unit walker.

Visits every node of a translation unit once, picks out function
declarations, and records the complexity of each eligible definition in the
run's ``ComplexityMap``. Nested declarations (local class methods, lambdas)
are found by the same descent and recorded as functions of their own.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from cycloscan.analysis.calculator import NO_BODY, ComplexityCalculator
from cycloscan.analysis.eligibility import EligibilityPolicy
from cycloscan.core.diagnostics import DiagnosticsEngine, Level
from cycloscan.core.results import ComplexityMap, FunctionResult
from cycloscan.frontend.base import TranslationUnit


logger = logging.getLogger(__name__)

REMARK_TEMPLATE = "Cyclomatic Complexity: {0}"


@dataclass
class WalkOutcome:
    functions: List[FunctionResult] = field(default_factory=list)
    excluded: int = 0
    declarations: int = 0
    anomalies: int = 0


class ComplexityWalker:
    def __init__(
        self,
        diagnostics: Optional[DiagnosticsEngine] = None,
        eligibility: Optional[EligibilityPolicy] = None,
        calculator: Optional[ComplexityCalculator] = None,
    ):
        self.diagnostics = diagnostics
        self.eligibility = eligibility or EligibilityPolicy()
        self.calculator = calculator or ComplexityCalculator()
        self.remark_id = None
        if diagnostics is not None:
            self.remark_id = diagnostics.custom_diag_id(Level.REMARK, REMARK_TEMPLATE)

    def walk(self, unit: TranslationUnit, complexity_map: ComplexityMap) -> WalkOutcome:
        """Analyze every eligible function definition in ``unit``."""
        outcome = WalkOutcome()
        stack = [unit.root]
        while stack:
            node = stack.pop()
            decl = node.as_function()
            if decl is not None:
                self._visit_function(decl, complexity_map, outcome)
            stack.extend(reversed(list(node.children())))
        return outcome

    def _visit_function(self, decl, complexity_map: ComplexityMap, outcome: WalkOutcome) -> None:
        location = self.eligibility.eligible_location(decl)
        if location is None:
            outcome.excluded += 1
            return
        if not decl.is_definition:
            outcome.declarations += 1
            logger.debug("Skipping declaration without body: %s", decl.name)
            return

        complexity = self.calculator.calculate(decl.body)
        if complexity == NO_BODY:
            outcome.anomalies += 1
            logger.info("Function %s at %s has an empty body; not recorded", decl.name, location)
            return

        complexity_map.record(decl.name, complexity)
        outcome.functions.append(FunctionResult(name=decl.name, complexity=complexity, location=location))
        if self.diagnostics is not None:
            self.diagnostics.report(location, self.remark_id, complexity)
