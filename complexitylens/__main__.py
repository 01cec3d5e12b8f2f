"""
Entry point for running complexitylens as a module.

Usage:
    python -m complexitylens scan ./src
    python -m complexitylens --help
"""

import sys
from complexitylens.cli import main

if __name__ == "__main__":
    sys.exit(main())
