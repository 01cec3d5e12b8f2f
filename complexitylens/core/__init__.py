"""Core analysis: function location, scoring and intensity mapping."""

from complexitylens.core.results import FunctionSpan, FileReport, ScanResult
from complexitylens.core.locator import locate_all, locate_enclosing
from complexitylens.core.scorer import score, branch_kinds
from complexitylens.core.intensity import Intensity, intensity, intensity_factor
from complexitylens.core.engine import AnalysisEngine, create_engine

__all__ = [
    "FunctionSpan",
    "FileReport",
    "ScanResult",
    "locate_all",
    "locate_enclosing",
    "score",
    "branch_kinds",
    "Intensity",
    "intensity",
    "intensity_factor",
    "AnalysisEngine",
    "create_engine",
]
