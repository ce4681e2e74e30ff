"""
gentr Command-Line Package.

Requires Python 3.11+.
"""

from cli.main import main
from cli.options import Options

__all__ = ["main", "Options"]
