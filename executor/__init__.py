"""
gentr Command Executor Package.

Requires Python 3.11+.
"""

from executor.models import CommandResult, CommandStatus, classify_returncode
from executor.runner import CommandRunner, substitute_placeholder

__all__ = [
    "CommandResult",
    "CommandStatus",
    "classify_returncode",
    "CommandRunner",
    "substitute_placeholder",
]
