"""
gentr File Watcher.

Wires pollers, the optional rescanner, the coordinator and the spinner
into one running watch session.
Requires Python 3.11+.
"""

import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from executor.runner import CommandRunner
from presentation.spinner import NullSpinner, Spinner
from reporting.sink import ResultSink
from utils.config import get_settings
from utils.errors import StartupError
from utils.logger import LoggerMixin
from watcher.coordinator import Coordinator
from watcher.models import ChangeEvent
from watcher.poller import FilePoller, ModTimeRegistry
from watcher.rescanner import Rescanner
from watcher.resolver import without_paths


class FileWatcher(LoggerMixin):
    """
    Watches a set of files and runs a command whenever one changes.

    Polls every file on its own task; in recursive mode a rescanner also
    picks up files created under the root directories.
    """

    def __init__(
        self,
        paths: Sequence[Path],
        command: str,
        sink: ResultSink,
        spinner: Spinner | None = None,
        runner: CommandRunner | None = None,
        roots: Sequence[Path] = (),
        recursive: bool = False,
        poll_interval: float | None = None,
        rescan_interval: float | None = None,
        debounce_delay_ms: int | None = None,
        queue_size: int | None = None,
        exclude: Sequence[Path] = (),
    ) -> None:
        """
        Initialize the file watcher.

        Args:
            paths: Files to watch from the start
            command: Command template to run on every change
            sink: Where results are reported
            spinner: Presentation collaborator (a NullSpinner if not provided)
            runner: Command runner
            roots: Directories rescanned in recursive mode
            recursive: Whether to rescan roots for new files
            poll_interval: Seconds between polls of one file
            rescan_interval: Seconds between directory rescans
            debounce_delay_ms: Quiet window before a cycle runs
            queue_size: Event queue capacity
            exclude: Files never watched, even when they sit under a root
        """
        settings = get_settings()

        self._exclude = list(exclude)
        self._paths = without_paths(paths, self._exclude)
        self._sink = sink
        self._spinner = spinner or NullSpinner()
        self._roots = list(roots)
        self._recursive = recursive
        self._poll_interval = poll_interval or settings.watcher.poll_interval_seconds
        self._rescan_interval = rescan_interval or settings.watcher.rescan_interval_seconds

        self._queue: asyncio.Queue[ChangeEvent] = asyncio.Queue(
            maxsize=queue_size or settings.watcher.queue_size
        )
        self._registry = ModTimeRegistry()
        self._coordinator = Coordinator(
            command=command,
            queue=self._queue,
            registry=self._registry,
            sink=sink,
            spinner=self._spinner,
            runner=runner,
            debounce_delay_ms=debounce_delay_ms,
        )

        self._pollers: dict[Path, asyncio.Task[None]] = {}
        self._tasks: list[asyncio.Task[None]] = []
        self._running = False

    @property
    def coordinator(self) -> Coordinator:
        return self._coordinator

    @property
    def registry(self) -> ModTimeRegistry:
        return self._registry

    @property
    def is_running(self) -> bool:
        """Check if the watcher is running."""
        return self._running

    @property
    def watched_paths(self) -> list[Path]:
        """Paths that currently have a live poller."""
        return [path for path, task in self._pollers.items() if not task.done()]

    async def start(self) -> None:
        """
        Seed every file and start all tasks.

        Raises:
            StartupError: If none of the paths could be tracked
        """
        if self._running:
            return

        for path in self._paths:
            if self._coordinator.track(path) is None:
                self._sink.report_error(f"Skipping {path}: file cannot be read")
        if not self._coordinator.tracked_paths:
            raise StartupError("No files provided via STDIN or --input flag")

        for path in self._coordinator.tracked_paths:
            self._start_poller(path)

        self._tasks.append(asyncio.create_task(self._coordinator.run(), name="coordinator"))

        if self._recursive and self._roots:
            rescanner = Rescanner(
                roots=self._roots,
                is_tracked=self._coordinator.is_tracked,
                on_discovered=self.add_path,
                interval=self._rescan_interval,
                exclude=self._exclude,
            )
            self._tasks.append(asyncio.create_task(rescanner.run(), name="rescanner"))

        self._spinner.start()
        self._running = True

        self.log.info(
            "file_watcher_started",
            files=len(self._pollers),
            recursive=self._recursive,
            roots=[str(r) for r in self._roots],
        )

    async def stop(self) -> None:
        """Cancel every task without draining pending work."""
        if not self._running:
            return

        tasks = [*self._tasks, *self._pollers.values()]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        self._tasks.clear()
        self._pollers.clear()
        self._spinner.stop()
        self._running = False
        self.log.info("file_watcher_stopped")

    async def run(self) -> None:
        """Start and watch until cancelled."""
        await self.start()
        try:
            await self._tasks[0]
        finally:
            await self.stop()

    def add_path(self, path: Path) -> bool:
        """
        Track and poll a file discovered after startup.

        Returns:
            True if the file is now watched
        """
        if self._coordinator.track(path) is None:
            return False
        self._sink.report_discovery(path)
        self._start_poller(path)
        return True

    def _start_poller(self, path: Path) -> None:
        poller = FilePoller(path, self._registry, self._queue, self._poll_interval)
        self._pollers[path] = asyncio.create_task(poller.run(), name=f"poll:{path}")

    async def __aenter__(self) -> "FileWatcher":
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.stop()
