"""
gentr Error Types.

Failures that the watch loop distinguishes. Only StartupError is fatal;
the others are logged and the loop keeps going.
"""

from pathlib import Path


class GentrError(Exception):
    """Base class for all gentr errors."""


class StartupError(GentrError):
    """No files could be resolved, or no command was given."""


class StatFailure(GentrError):
    """A watched path could not be stat'ed for a reason other than deletion."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Error stating file {path}: {reason}")
        self.path = path
        self.reason = reason


class ReadFailure(GentrError):
    """A changed file could not be read when its cycle ran."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Error reading file {path}: {reason}")
        self.path = path
        self.reason = reason


class ExecutionFailure(GentrError):
    """The shell could not be launched."""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"Error running command {command!r}: {reason}")
        self.command = command
        self.reason = reason


class LogWriteFailure(GentrError):
    """The session log could not be written."""
