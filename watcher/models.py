"""
gentr Watcher Data Models.

Requires Python 3.11+.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class EventKind(str, Enum):
    """Kind of change a poller observed."""

    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A change observed on one watched path."""

    path: Path
    kind: EventKind


@dataclass(slots=True)
class WatchedFile:
    """Last known state of a watched file."""

    path: Path
    mtime_ns: int
    lines: list[str] = field(default_factory=list)
