"""
gentr Diff Data Models.

Defines the line-level change records produced by the diff engine.
Requires Python 3.11+.
"""

from dataclasses import dataclass, field
from enum import Enum


class ChangeKind(str, Enum):
    """Classification of a single line change."""

    ADD = "ADD"
    REMOVE = "REM"
    MODIFY = "MOD"


@dataclass(frozen=True, slots=True)
class DiffChange:
    """
    A single line-level change.

    Line numbers are 1-based. REMOVE numbers point into the old content,
    ADD numbers into the new content, MODIFY at the edited position.
    `text` is truncated for display; `source` keeps the full line so the
    change can be replayed.
    """

    line_number: int
    kind: ChangeKind
    text: str
    source: str = field(default="", repr=False, compare=False)

    def describe(self) -> str:
        """Plain one-line description, e.g. '3 ADD: foo'."""
        return f"{self.line_number} {self.kind.value}: {self.text}"
