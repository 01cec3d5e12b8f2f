"""
Shared fixtures for the complexitylens tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from complexitylens.core.engine import AnalysisEngine
from complexitylens.parsers import get_parser


EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture
def engine():
    return AnalysisEngine()


@pytest.fixture
def parse_js():
    """Parse JavaScript source into a generic tree."""
    parser = get_parser("javascript")
    return parser.parse


@pytest.fixture
def parse_ts():
    parser = get_parser("typescript")
    return parser.parse


@pytest.fixture
def example_file():
    return EXAMPLES_DIR / "complex_functions.js"
