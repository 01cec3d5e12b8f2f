"""
Output formatters for analysis results.

Provides:
- Human-readable CLI output
- JSON for machine processing
"""

from complexitylens.formatters.cli import CLIFormatter
from complexitylens.formatters.json_formatter import JSONFormatter

__all__ = [
    "CLIFormatter",
    "JSONFormatter",
    "get_formatter",
]


def get_formatter(format_name: str, **options):
    """Get a formatter by name."""
    formatters = {
        "text": CLIFormatter,
        "cli": CLIFormatter,
        "json": JSONFormatter,
    }

    formatter_class = formatters.get(format_name.lower())
    if formatter_class is None:
        raise ValueError(f"Unknown format: {format_name}")
    if formatter_class is JSONFormatter:
        return formatter_class()
    return formatter_class(**options)
