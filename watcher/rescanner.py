"""
gentr Directory Rescanner.

In recursive mode, periodically walks the root directories and hands
files that are not yet watched to a callback.
Requires Python 3.11+.
"""

import asyncio
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from utils.config import get_settings
from utils.logger import LoggerMixin
from watcher.resolver import walk_files


class Rescanner(LoggerMixin):
    """Finds files created under the watched directories after startup."""

    def __init__(
        self,
        roots: Sequence[Path],
        is_tracked: Callable[[Path], bool],
        on_discovered: Callable[[Path], object],
        interval: float | None = None,
        exclude: Iterable[Path] = (),
    ) -> None:
        """
        Initialize the rescanner.

        Args:
            roots: Directories to walk
            is_tracked: Returns True for paths that are already watched
            on_discovered: Called once per new file
            interval: Seconds between scans (defaults to WATCHER_RESCAN_INTERVAL_SECONDS)
            exclude: Files that are never reported, such as the session log
        """
        self._roots = list(roots)
        self._is_tracked = is_tracked
        self._on_discovered = on_discovered
        self._interval = interval or get_settings().watcher.rescan_interval_seconds
        self._exclude = {path.resolve() for path in exclude}

    def scan(self) -> list[Path]:
        """Return files under the roots that are not tracked yet."""
        found = []
        for root in self._roots:
            for path in walk_files(root):
                if self._is_tracked(path):
                    continue
                if self._exclude and path.resolve() in self._exclude:
                    continue
                found.append(path)
        return found

    async def run(self) -> None:
        """Scan on every interval, forever."""
        self.log.debug("rescanner_started", roots=[str(r) for r in self._roots])
        while True:
            await asyncio.sleep(self._interval)
            new_files = self.scan()
            if new_files:
                self.log.info("new_files_found", count=len(new_files))
            for path in new_files:
                self._on_discovered(path)
