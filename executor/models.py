"""
gentr Command Result Models.

Requires Python 3.11+.
"""

from dataclasses import dataclass
from enum import Enum


class CommandStatus(str, Enum):
    """How a command run ended."""

    SUCCESS = "success"
    NONZERO_EXIT = "nonzero-exit"
    SIGNALED = "signaled"
    EXECUTION_FAILURE = "execution-failure"


# Shells report a child killed by signal N as exit status 128 + N
SIGNAL_STATUS_BASE = 128

# Status recorded when the shell could not be started at all
LAUNCH_FAILED_STATUS = -1


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one command execution."""

    output: str
    status: int
    category: CommandStatus
    command: str
    signal: int | None = None

    @property
    def succeeded(self) -> bool:
        """Check if the command exited with status 0."""
        return self.category is CommandStatus.SUCCESS


def classify_returncode(returncode: int) -> tuple[int, CommandStatus, int | None]:
    """
    Map a subprocess return code to (status, category, signal).

    A negative return code means the shell itself died from signal -N;
    it is re-encoded the way the shell would have reported it (128 + N).
    Codes above 128 are the shell's report of a child killed by a signal.
    """
    if returncode == 0:
        return 0, CommandStatus.SUCCESS, None
    if returncode < 0:
        signum = -returncode
        return SIGNAL_STATUS_BASE + signum, CommandStatus.SIGNALED, signum
    if returncode > SIGNAL_STATUS_BASE:
        return returncode, CommandStatus.SIGNALED, returncode - SIGNAL_STATUS_BASE
    return returncode, CommandStatus.NONZERO_EXIT, None
