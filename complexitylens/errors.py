"""
Exception types raised by complexitylens.

Analysis entry points never let these escape to the caller; they are
converted into empty results at the engine boundary.
"""

from typing import Optional


class ComplexityLensError(Exception):
    """Base class for all complexitylens errors."""


class ParseError(ComplexityLensError):
    """Raised when source text is not syntactically valid."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class ConfigError(ComplexityLensError, ValueError):
    """Raised for configuration values of the wrong type."""
