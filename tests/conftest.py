"""
gentr Test Configuration.

Pytest fixtures and configuration.
Requires Python 3.11+.
"""

import asyncio
import io
import os
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from differ.models import DiffChange
from executor.models import CommandResult, CommandStatus
from executor.runner import CommandRunner, substitute_placeholder
from presentation.spinner import NullSpinner
from reporting.console import ConsoleReporter
from reporting.sink import ResultSink


class RecordingSink(ResultSink):
    """ResultSink that also remembers everything it was given."""

    def __init__(self, reporter: ConsoleReporter) -> None:
        super().__init__(reporter)
        self.cycles: list[tuple[Path, CommandResult, list[DiffChange]]] = []
        self.deletions: list[Path] = []
        self.read_failures: list[Path] = []
        self.discoveries: list[Path] = []

    def report_cycle(self, path, result, changes) -> None:
        self.cycles.append((path, result, list(changes)))
        super().report_cycle(path, result, changes)

    def report_deletion(self, path) -> None:
        self.deletions.append(path)
        super().report_deletion(path)

    def report_read_failure(self, path, error) -> None:
        self.read_failures.append(path)
        super().report_read_failure(path, error)

    def report_discovery(self, path) -> None:
        self.discoveries.append(path)
        super().report_discovery(path)


class FakeRunner(CommandRunner):
    """Runner that records calls instead of starting a shell."""

    def __init__(self, status: int = 0) -> None:
        super().__init__(shell="/bin/sh")
        self.calls: list[tuple[str, Path]] = []
        self._status = status

    async def run(self, template, path) -> CommandResult:
        self.calls.append((template, path))
        return CommandResult(
            output=f"ran {path}\n",
            status=self._status,
            category=CommandStatus.SUCCESS if self._status == 0 else CommandStatus.NONZERO_EXIT,
            command=substitute_placeholder(template, path),
        )


@pytest.fixture
def console() -> Console:
    """Rich console writing plain text into a buffer."""
    return Console(file=io.StringIO(), force_terminal=False, width=200, highlight=False)


@pytest.fixture
def reporter(console: Console) -> ConsoleReporter:
    return ConsoleReporter(console=console)


@pytest.fixture
def sink(reporter: ConsoleReporter) -> RecordingSink:
    return RecordingSink(reporter)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def spinner() -> NullSpinner:
    return NullSpinner()


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """A three-line text file."""
    file_path = tmp_path / "sample.txt"
    file_path.write_text("a\nb\nc")
    return file_path


@pytest.fixture
def rewrite() -> Callable[[Path, str], None]:
    """Write new content and push the mtime clearly forward."""

    def _rewrite(path: Path, content: str) -> None:
        before = path.stat().st_mtime_ns
        path.write_text(content)
        bumped = before + 1_000_000_000
        os.utime(path, ns=(bumped, bumped))

    return _rewrite


@pytest.fixture
def wait_for() -> Callable:
    """Poll a condition until it holds or the timeout passes."""

    async def _wait_for(condition: Callable[[], bool], timeout: float = 3.0) -> bool:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while loop.time() < deadline:
            if condition():
                return True
            await asyncio.sleep(0.02)
        return condition()

    return _wait_for
