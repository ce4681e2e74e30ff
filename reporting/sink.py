"""
gentr Result Sink.

Single place the coordinator hands its results to: the console, plus the
session log when logging is enabled.
Requires Python 3.11+.
"""

from collections.abc import Sequence
from pathlib import Path

from differ.models import DiffChange
from executor.models import LAUNCH_FAILED_STATUS, CommandResult
from reporting.console import ConsoleReporter
from reporting.session_log import SessionLog, SessionLogRecord
from utils.errors import LogWriteFailure
from utils.logger import LoggerMixin

DELETED_STATUS = LAUNCH_FAILED_STATUS


class ResultSink(LoggerMixin):
    """Routes cycle results to the console and the optional session log."""

    def __init__(
        self,
        reporter: ConsoleReporter,
        session_log: SessionLog | None = None,
    ) -> None:
        self.reporter = reporter
        self.session_log = session_log

    def report_cycle_start(self, path: Path) -> None:
        self.reporter.print_cycle_start(path)

    def report_cycle(
        self,
        path: Path,
        result: CommandResult,
        changes: Sequence[DiffChange],
    ) -> None:
        """
        Report one finished cycle.

        Prints the command output and status, then every diff entry.
        Each diff entry becomes one session log row.
        """
        self.reporter.print_result(result)
        for change in changes:
            entry = self.reporter.diff_entry(path, change)
            self.reporter.print_change(entry)
            self._write(SessionLogRecord(description=entry.plain, status=result.status))

    def report_deletion(self, path: Path) -> None:
        """Report that a watched file disappeared."""
        self.reporter.print_deletion(path)
        self._write(SessionLogRecord(description=f"{path}: DELETED", status=DELETED_STATUS))

    def report_read_failure(self, path: Path, error: Exception) -> None:
        self.report_error(str(error))

    def report_error(self, message: str) -> None:
        self.reporter.print_error(message)

    def report_discovery(self, path: Path) -> None:
        self.reporter.print_discovery(path)

    def _write(self, record: SessionLogRecord) -> None:
        if self.session_log is None:
            return
        try:
            self.session_log.append(record)
        except LogWriteFailure as e:
            self.log.warning("log_write_failed", path=str(self.session_log.path), error=str(e))
            self.reporter.print_error(f"Error writing log: {e}")
