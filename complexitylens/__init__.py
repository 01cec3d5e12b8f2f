"""
Function complexity analysis for JavaScript and TypeScript.

Computes McCabe cyclomatic complexity per function and maps each score
onto a colour scale for inline hints and background highlights.
"""

__version__ = "1.0.0"
__author__ = "complexitylens contributors"

from complexitylens.core.engine import AnalysisEngine
from complexitylens.core.results import FunctionSpan, ScanResult
from complexitylens.config import ComplexityConfig, ScanConfig

__all__ = [
    "AnalysisEngine",
    "FunctionSpan",
    "ScanResult",
    "ComplexityConfig",
    "ScanConfig",
]
