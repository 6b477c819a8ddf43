"""
cycloscan

Static cyclomatic complexity analyzer for C and C++ translation units.
Reports one value per user-defined function: 1 plus the number of
if/switch/for/while/do-while/ternary constructs in its body.
"""

__version__ = "1.0.0"
__author__ = "Cycloscan Team"

from cycloscan.core.config import Config
from cycloscan.core.engine import AnalysisEngine
from cycloscan.core.results import AnalysisResult, ComplexityMap, FunctionResult

__all__ = [
    "AnalysisEngine",
    "AnalysisResult",
    "ComplexityMap",
    "Config",
    "FunctionResult",
]
