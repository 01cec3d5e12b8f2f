"""
CLI output formatter for human-readable results.
"""

import sys
from typing import List, Optional

from complexitylens.config import ComplexityConfig
from complexitylens.core.intensity import intensity
from complexitylens.core.presentation import Highlight
from complexitylens.core.results import FileReport, FunctionSpan, ScanResult


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    CYAN = "\033[96m"
    BLACK = "\033[30m"


def supports_color() -> bool:
    """Check if the terminal supports color output."""
    if not hasattr(sys.stdout, "isatty"):
        return False
    if not sys.stdout.isatty():
        return False
    return True


def background(rgb) -> str:
    """24-bit ANSI background escape for an RGB triple."""
    return "\033[48;2;{};{};{}m".format(*rgb)


class CLIFormatter:
    """
    Formats analysis results for human-readable CLI output.

    With color enabled, each complexity label is tinted with the same
    intensity colour an editor highlight would use.
    """

    def __init__(self, use_color: bool = True, verbose: bool = False,
                 config: Optional[ComplexityConfig] = None):
        self.use_color = use_color and supports_color()
        self.verbose = verbose
        self.config = config or ComplexityConfig()

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_color:
            return f"{color}{text}{Colors.RESET}"
        return text

    def _tinted_label(self, func: FunctionSpan) -> str:
        level = intensity(func.complexity, self.config)
        if level.factor == 0:
            return self._color(func.label, Colors.DIM)
        return self._color(f" {func.label} ", background(level.rgb) + Colors.BLACK)

    def format_result(self, result: ScanResult) -> str:
        """Format a complete scan result."""
        lines = []

        # Header
        lines.append("")
        lines.append(self._color("=" * 70, Colors.DIM))
        lines.append(self._color(" FUNCTION COMPLEXITY ", Colors.BOLD))
        lines.append(self._color("=" * 70, Colors.DIM))
        lines.append("")

        # Summary
        lines.append(self._color("Summary", Colors.BOLD))
        lines.append(self._color("-" * 40, Colors.DIM))
        lines.append(f"  Files scanned:     {result.files_scanned}")
        lines.append(f"  Languages:         {', '.join(result.languages_detected)}")
        lines.append(f"  Functions:         {result.total_functions}")
        lines.append(f"  Highest:           {result.max_complexity}")
        lines.append(f"  Scan time:         {result.scan_time_seconds:.2f}s")
        lines.append("")

        for report in result.files:
            if not report.functions and not self.verbose:
                continue
            lines.extend(self._format_file(report))
            lines.append("")

        # Errors
        if result.errors:
            lines.append(self._color("=" * 70, Colors.DIM))
            lines.append(self._color(" ERRORS ", Colors.RED))
            lines.append(self._color("=" * 70, Colors.DIM))
            for error in result.errors:
                lines.append(f"  - {error}")
            lines.append("")

        return "\n".join(lines)

    def _format_file(self, report: FileReport) -> List[str]:
        lines = [self._color(report.file_path, Colors.CYAN)]
        if not report.functions:
            lines.append(self._color("  no functions", Colors.DIM))
        for func in report.functions:
            # 1-based for display
            location = f"{func.start_line + 1}-{func.end_line + 1}" if func.has_location else "?"
            name = func.name or "<anonymous>"
            lines.append(f"  {location:>9}  {self._tinted_label(func)}  {name}")
        return lines

    def format_highlight(self, file_path: str, highlight: Highlight) -> str:
        """Format the interactive-mode result for one function."""
        label = self._color(
            f" {highlight.tooltip} ",
            background(highlight.intensity.rgb) + Colors.BLACK,
        )
        return "\n".join([
            f"{file_path}:{highlight.start_line + 1}-{highlight.end_line + 1}",
            f"  {label}",
            f"  Intensity: {highlight.intensity.factor:.2f} ({highlight.intensity.hex})",
        ])
