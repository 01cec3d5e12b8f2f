"""
Presentation records handed to an editor or other front end.

Batch mode produces one inline hint per function, anchored at column 0
of the function's first line. Interactive mode produces a single
highlight covering the function under the cursor.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from complexitylens.config import ComplexityConfig
from complexitylens.core.intensity import Intensity, intensity
from complexitylens.core.results import FunctionSpan


@dataclass(frozen=True)
class InlineHint:
    line: int
    label: str
    column: int = 0


@dataclass(frozen=True)
class Highlight:
    """Background highlight for one function."""
    start_line: int
    end_line: int
    complexity: int
    tooltip: str
    intensity: Intensity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_line": self.start_line,
            "end_line": self.end_line,
            "complexity": self.complexity,
            "tooltip": self.tooltip,
            "intensity": self.intensity.factor,
            "color": self.intensity.hex,
        }


def build_hints(spans: Iterable[FunctionSpan]) -> List[InlineHint]:
    """One hint per function with a location, in document order."""
    return [InlineHint(line=span.start_line, label=span.label) for span in spans if span.has_location]


def build_highlight(span: FunctionSpan, config: ComplexityConfig) -> Highlight:
    return Highlight(
        start_line=span.start_line,
        end_line=span.end_line,
        complexity=span.complexity,
        tooltip=f"Function complexity: {span.complexity}",
        intensity=intensity(span.complexity, config),
    )
