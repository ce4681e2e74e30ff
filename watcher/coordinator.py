"""
gentr Debounce Coordinator.

Single consumer of the event queue. Each modification waits out a fixed
quiet window, then the file is re-read, diffed against the stored copy,
the command is run and everything is handed to the result sink.
Requires Python 3.11+.
"""

import asyncio
from collections import deque
from pathlib import Path

from differ.lcs import combine_modifications, diff_lines
from executor.runner import CommandRunner
from presentation.spinner import Spinner
from reporting.sink import ResultSink
from utils.config import get_settings
from utils.errors import ReadFailure
from utils.logger import LoggerMixin
from utils.text import split_lines
from watcher.models import ChangeEvent, EventKind, WatchedFile
from watcher.poller import ModTimeRegistry


def read_lines(path: Path) -> list[str]:
    """
    Read a file as lines.

    Raises:
        ReadFailure: If the file cannot be read
    """
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ReadFailure(path, str(e)) from e
    return split_lines(content)


class Coordinator(LoggerMixin):
    """
    Turns change events into diff/execute/report cycles.

    The debounce window is armed once per cycle from the moment the event
    is taken off the queue and is not extended by later events. Events for
    the same file that queue up during the window are folded into the
    cycle. Stored file contents are only ever written here.
    """

    def __init__(
        self,
        command: str,
        queue: asyncio.Queue[ChangeEvent],
        registry: ModTimeRegistry,
        sink: ResultSink,
        spinner: Spinner,
        runner: CommandRunner | None = None,
        debounce_delay_ms: int | None = None,
    ) -> None:
        """
        Initialize the coordinator.

        Args:
            command: Command template to run on every change
            queue: Event queue filled by the pollers
            registry: Shared modification time baselines
            sink: Where results are reported
            spinner: Paused while a cycle runs
            runner: Command runner (creates one from settings if not provided)
            debounce_delay_ms: Quiet window (defaults to WATCHER_DEBOUNCE_DELAY_MS)
        """
        if debounce_delay_ms is None:
            debounce_delay_ms = get_settings().watcher.debounce_delay_ms

        self._command = command
        self._queue = queue
        self._registry = registry
        self._sink = sink
        self._spinner = spinner
        self._runner = runner or CommandRunner()
        self._delay = debounce_delay_ms / 1000.0
        self._files: dict[Path, WatchedFile] = {}
        self._backlog: deque[ChangeEvent] = deque()
        self._cycles = 0

    def track(self, path: Path) -> WatchedFile | None:
        """
        Start tracking a file: seed its baseline and content, no event.

        Returns:
            The new WatchedFile, or None if the file could not be stat'ed or read
        """
        try:
            mtime_ns = path.stat().st_mtime_ns
            lines = read_lines(path)
        except (OSError, ReadFailure) as e:
            self.log.warning("track_failed", path=str(path), error=str(e))
            return None

        self._registry.seed(path, mtime_ns)
        watched = WatchedFile(path=path, mtime_ns=mtime_ns, lines=lines)
        self._files[path] = watched
        self.log.debug("file_tracked", path=str(path), lines=len(lines))
        return watched

    def is_tracked(self, path: Path) -> bool:
        return path in self._files

    def snapshot(self, path: Path) -> list[str] | None:
        """Stored content for a path, or None if it is not tracked."""
        watched = self._files.get(path)
        return list(watched.lines) if watched else None

    @property
    def tracked_paths(self) -> list[Path]:
        return list(self._files)

    @property
    def cycles(self) -> int:
        """Number of diff/execute cycles that ran to completion."""
        return self._cycles

    async def run(self) -> None:
        """Process events forever."""
        while True:
            event = await self.next_event()
            await self.process(event)

    async def next_event(self) -> ChangeEvent:
        """Events set aside while debouncing come first, then the queue."""
        if self._backlog:
            return self._backlog.popleft()
        return await self._queue.get()

    async def process(self, event: ChangeEvent) -> None:
        """Handle one event."""
        if event.kind is EventKind.DELETED:
            self._handle_deletion(event.path)
        else:
            await self._handle_modification(event.path)

    def _handle_deletion(self, path: Path) -> None:
        self._files.pop(path, None)
        self._registry.forget(path)
        self._sink.report_deletion(path)

    async def _handle_modification(self, path: Path) -> None:
        self._spinner.pause()
        try:
            await asyncio.sleep(self._delay)
            self._absorb(path)
            await self._run_cycle(path)
        finally:
            self._spinner.resume()

    async def _run_cycle(self, path: Path) -> None:
        self._sink.report_cycle_start(path)

        try:
            lines = read_lines(path)
        except ReadFailure as e:
            self.log.warning("read_failed", path=str(path), error=e.reason)
            self._sink.report_read_failure(path, e)
            return

        watched = self._files.get(path)
        previous = watched.lines if watched is not None else []
        changes = combine_modifications(diff_lines(previous, lines))

        result = await self._runner.run(self._command, path)
        self._sink.report_cycle(path, result, changes)

        mtime_ns = self._registry.get(path) or 0
        if watched is None:
            self._files[path] = WatchedFile(path=path, mtime_ns=mtime_ns, lines=lines)
        else:
            watched.lines = lines
            watched.mtime_ns = mtime_ns

        self._cycles += 1
        self.log.debug(
            "cycle_completed",
            path=str(path),
            changes=[change.describe() for change in changes],
        )

    def _absorb(self, path: Path) -> None:
        """Fold modification events for path that arrived during the window."""
        kept: deque[ChangeEvent] = deque()
        pending = list(self._backlog)
        while True:
            try:
                pending.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                break

        for event in pending:
            if event.kind is EventKind.MODIFIED and event.path == path:
                self.log.debug("event_absorbed", path=str(path))
            else:
                kept.append(event)
        self._backlog = kept
