"""
gentr Diff Package.

LCS line diffing with modification coalescing.
Requires Python 3.11+.
"""

from differ.lcs import apply_changes, combine_modifications, diff_lines
from differ.models import ChangeKind, DiffChange

__all__ = [
    "apply_changes",
    "combine_modifications",
    "diff_lines",
    "ChangeKind",
    "DiffChange",
]
