"""
gentr Reporting Package.

Console output and the per-run session log.
Requires Python 3.11+.
"""

from reporting.console import ConsoleReporter, limit_output_lines, render_output_line
from reporting.session_log import SessionLog, SessionLogRecord
from reporting.sink import ResultSink

__all__ = [
    "ConsoleReporter",
    "limit_output_lines",
    "render_output_line",
    "SessionLog",
    "SessionLogRecord",
    "ResultSink",
]
