"""
gentr File Watcher Package.

Polling change detection, debouncing and the watch loop.
Requires Python 3.11+.
"""

from watcher.coordinator import Coordinator
from watcher.file_watcher import FileWatcher
from watcher.models import ChangeEvent, EventKind, WatchedFile
from watcher.poller import FilePoller, ModTimeRegistry
from watcher.rescanner import Rescanner
from watcher.resolver import read_paths, resolve_files, root_directories

__all__ = [
    "Coordinator",
    "FileWatcher",
    "ChangeEvent",
    "EventKind",
    "WatchedFile",
    "FilePoller",
    "ModTimeRegistry",
    "Rescanner",
    "read_paths",
    "resolve_files",
    "root_directories",
]
