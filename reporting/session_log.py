"""
gentr Session Log.

Append-only, tab-separated record of every reported change for one run.
Requires Python 3.11+.
"""

import csv
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from utils.errors import LogWriteFailure
from utils.logger import LoggerMixin
from utils.text import strip_ansi

SEPARATOR = "-" * 80
FILENAME_FORMAT = "%Y-%m-%dT%H-%M-%S"
TSV_HEADER = ("Output", "ExitStatus")
STATUS_PREFIX = "ExitStatus: "


@dataclass(frozen=True, slots=True)
class SessionLogRecord:
    """One row of the session log."""

    description: str
    status: int

    def as_row(self) -> list[str]:
        return [strip_ansi(self.description), f"{STATUS_PREFIX}{self.status}"]


class SessionLog(LoggerMixin):
    """
    Per-run log file named after the start timestamp.

    The file opens with '# '-prefixed metadata, then a TSV table.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def create(
        cls,
        log_dir: Path,
        options: str,
        command: str,
        started_at: datetime | None = None,
    ) -> "SessionLog":
        """
        Create (or truncate) the log file and write its header.

        Args:
            log_dir: Directory the log file is created in
            options: Captured configuration, already rendered as text
            command: Command template
            started_at: Start time of the run (defaults to now)

        Raises:
            LogWriteFailure: If the file cannot be created
        """
        started_at = started_at or datetime.now().astimezone()
        path = log_dir / f"{started_at.strftime(FILENAME_FORMAT)}.log"

        header = (
            f"# Options: {strip_ansi(options)}\n"
            f"# Command: {command}\n"
            f"# Timestamp: {started_at.isoformat(timespec='seconds')}\n"
            f"{SEPARATOR}\n"
            f"{TSV_HEADER[0]}\t{TSV_HEADER[1]}\n"
            f"{SEPARATOR}\n"
        )
        try:
            path.write_text(header, encoding="utf-8")
        except OSError as e:
            raise LogWriteFailure(f"failed to create session log file: {e}") from e

        log = cls(path)
        log.log.info("session_log_created", path=str(path))
        return log

    def append(self, record: SessionLogRecord) -> None:
        """
        Append one row.

        Raises:
            LogWriteFailure: If the file cannot be opened or written
        """
        try:
            with self.path.open("a", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, delimiter="\t", lineterminator="\n")
                writer.writerow(record.as_row())
        except OSError as e:
            raise LogWriteFailure(f"failed to write log entry: {e}") from e

    def records(self) -> list[SessionLogRecord]:
        """
        Read back the rows written so far.

        This is the inverse of append(): '# ' metadata, separator lines and
        the column header are skipped, and every remaining line is parsed
        as an 'Output<TAB>ExitStatus: N' row.

        Raises:
            ValueError: If a row does not have the two expected columns
        """
        with self.path.open(encoding="utf-8", newline="") as f:
            lines = f.read().splitlines()

        header = "\t".join(TSV_HEADER)
        body = [
            line
            for line in lines
            if line and not line.startswith("# ") and line not in (SEPARATOR, header)
        ]

        rows: list[SessionLogRecord] = []
        for row in csv.reader(body, delimiter="\t"):
            if len(row) != 2 or not row[1].startswith(STATUS_PREFIX):
                raise ValueError(f"malformed session log row: {row!r}")
            rows.append(
                SessionLogRecord(description=row[0], status=int(row[1][len(STATUS_PREFIX) :]))
            )
        return rows
