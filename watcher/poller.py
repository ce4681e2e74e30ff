"""
gentr File Poller.

One asyncio task per watched path stats the file on a fixed interval and
queues a change event whenever its modification time moves forward.
Requires Python 3.11+.
"""

import asyncio
import threading
from pathlib import Path

from utils.config import get_settings
from utils.errors import StatFailure
from utils.logger import LoggerMixin
from watcher.models import ChangeEvent, EventKind


class ModTimeRegistry:
    """
    Last seen modification time per path.

    Pollers and the coordinator share this map, so every access holds the lock.
    """

    def __init__(self) -> None:
        self._mtimes: dict[Path, int] = {}
        self._lock = threading.Lock()

    def seed(self, path: Path, mtime_ns: int) -> None:
        """Record a baseline without signalling a change."""
        with self._lock:
            self._mtimes[path] = mtime_ns

    def advance(self, path: Path, mtime_ns: int) -> bool:
        """
        Move the baseline forward.

        Returns:
            True if mtime_ns is newer than the baseline (or there was none)
        """
        with self._lock:
            last = self._mtimes.get(path)
            if last is not None and mtime_ns <= last:
                return False
            self._mtimes[path] = mtime_ns
            return True

    def get(self, path: Path) -> int | None:
        with self._lock:
            return self._mtimes.get(path)

    def forget(self, path: Path) -> None:
        with self._lock:
            self._mtimes.pop(path, None)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._mtimes

    def __len__(self) -> int:
        with self._lock:
            return len(self._mtimes)


class FilePoller(LoggerMixin):
    """
    Polls a single path until it is deleted.

    Modification events are offered without waiting: when the queue is
    full the event is dropped, since the coordinator always re-reads the
    file. The deletion event is always delivered and ends the poller.
    """

    def __init__(
        self,
        path: Path,
        registry: ModTimeRegistry,
        queue: asyncio.Queue[ChangeEvent],
        interval: float | None = None,
    ) -> None:
        """
        Initialize the poller.

        Args:
            path: File to watch
            registry: Shared modification time baselines
            queue: Event queue drained by the coordinator
            interval: Seconds between polls (defaults to WATCHER_POLL_INTERVAL_SECONDS)
        """
        self._path = path
        self._registry = registry
        self._queue = queue
        self._interval = interval or get_settings().watcher.poll_interval_seconds

    async def run(self) -> None:
        """Poll until the file disappears."""
        self.log.debug("poller_started", path=str(self._path), interval=self._interval)

        while True:
            if not await self.poll_once():
                return
            await asyncio.sleep(self._interval)

    async def poll_once(self) -> bool:
        """
        Perform a single stat.

        Returns:
            False once the file is gone and the poller should end
        """
        try:
            mtime_ns = self._stat()
        except FileNotFoundError:
            self._registry.forget(self._path)
            self.log.info("file_deleted", path=str(self._path))
            await self._queue.put(ChangeEvent(self._path, EventKind.DELETED))
            return False
        except StatFailure as e:
            self.log.warning("stat_failed", path=str(e.path), error=e.reason)
            return True

        if self._registry.advance(self._path, mtime_ns):
            self._offer(ChangeEvent(self._path, EventKind.MODIFIED))
        return True

    def _stat(self) -> int:
        """
        Modification time of the file in nanoseconds.

        Raises:
            FileNotFoundError: If the file no longer exists
            StatFailure: On any other stat error
        """
        try:
            return self._path.stat().st_mtime_ns
        except FileNotFoundError:
            raise
        except OSError as e:
            raise StatFailure(self._path, str(e)) from e

    def _offer(self, event: ChangeEvent) -> None:
        try:
            self._queue.put_nowait(event)
            self.log.debug("file_modified", path=str(event.path))
        except asyncio.QueueFull:
            self.log.debug("event_dropped", path=str(event.path))
