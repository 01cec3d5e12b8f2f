"""
JSON output formatter for machine-readable results.
"""

import json

from complexitylens.core.presentation import Highlight
from complexitylens.core.results import ScanResult


class JSONFormatter:
    """
    Formats analysis results as JSON for machine consumption.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format_result(self, result: ScanResult) -> str:
        """Format a complete scan result as JSON."""
        return json.dumps(result.to_dict(), indent=self.indent, default=str)

    def format_highlight(self, file_path: str, highlight: Highlight) -> str:
        data = {"file_path": file_path, **highlight.to_dict()}
        return json.dumps(data, indent=self.indent)
