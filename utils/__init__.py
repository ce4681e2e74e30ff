"""
gentr Utilities Package.

Common utilities shared across all modules.
Requires Python 3.11+.
"""

from utils.config import Settings, get_settings
from utils.errors import (
    ExecutionFailure,
    GentrError,
    LogWriteFailure,
    ReadFailure,
    StartupError,
    StatFailure,
)
from utils.logger import configure_logging, get_logger, LoggerMixin
from utils.text import split_lines, strip_ansi, truncate_line

__all__ = [
    "Settings",
    "get_settings",
    "GentrError",
    "StartupError",
    "StatFailure",
    "ReadFailure",
    "ExecutionFailure",
    "LogWriteFailure",
    "configure_logging",
    "get_logger",
    "LoggerMixin",
    "split_lines",
    "strip_ansi",
    "truncate_line",
]
