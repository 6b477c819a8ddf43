"""Complexity analysis: decision counting, eligibility and the unit walker."""

from cycloscan.analysis.calculator import BASE_COMPLEXITY, NO_BODY, ComplexityCalculator
from cycloscan.analysis.eligibility import EligibilityPolicy
from cycloscan.analysis.walker import REMARK_TEMPLATE, ComplexityWalker, WalkOutcome

__all__ = [
    "BASE_COMPLEXITY",
    "NO_BODY",
    "REMARK_TEMPLATE",
    "ComplexityCalculator",
    "ComplexityWalker",
    "EligibilityPolicy",
    "WalkOutcome",
]
