"""
Tests for the File Poller and Rescanner.

Requires Python 3.11+.
"""

import asyncio
from pathlib import Path

import pytest

from utils.errors import StatFailure
from watcher.models import ChangeEvent, EventKind
from watcher.poller import FilePoller, ModTimeRegistry
from watcher.rescanner import Rescanner


class TestModTimeRegistry:
    """Test cases for ModTimeRegistry."""

    def test_advance_only_moves_forward(self):
        registry = ModTimeRegistry()
        path = Path("a.txt")
        registry.seed(path, 100)

        assert registry.advance(path, 100) is False
        assert registry.advance(path, 50) is False
        assert registry.advance(path, 200) is True
        assert registry.get(path) == 200

    def test_advance_without_baseline(self):
        registry = ModTimeRegistry()
        assert registry.advance(Path("new.txt"), 1) is True
        assert Path("new.txt") in registry

    def test_forget(self):
        registry = ModTimeRegistry()
        registry.seed(Path("a.txt"), 1)
        registry.forget(Path("a.txt"))

        assert Path("a.txt") not in registry
        assert len(registry) == 0


def make_poller(path: Path, queue_size: int = 1) -> tuple[FilePoller, ModTimeRegistry, asyncio.Queue]:
    registry = ModTimeRegistry()
    if path.exists():
        registry.seed(path, path.stat().st_mtime_ns)
    queue: asyncio.Queue[ChangeEvent] = asyncio.Queue(maxsize=queue_size)
    return FilePoller(path, registry, queue, interval=0.01), registry, queue


class TestFilePoller:
    """Test cases for FilePoller."""

    @pytest.mark.asyncio
    async def test_unchanged_file_emits_nothing(self, sample_file: Path):
        poller, _, queue = make_poller(sample_file)

        assert await poller.poll_once() is True
        assert queue.empty()

    @pytest.mark.asyncio
    async def test_newer_mtime_emits_modified(self, sample_file: Path, rewrite):
        poller, registry, queue = make_poller(sample_file)
        rewrite(sample_file, "a\nx\nc")

        assert await poller.poll_once() is True
        assert queue.get_nowait() == ChangeEvent(sample_file, EventKind.MODIFIED)
        assert registry.get(sample_file) == sample_file.stat().st_mtime_ns

    @pytest.mark.asyncio
    async def test_full_queue_drops_event(self, sample_file: Path, rewrite):
        """With the queue full the event is dropped but the baseline still moves."""
        poller, registry, queue = make_poller(sample_file)
        queue.put_nowait(ChangeEvent(Path("other.txt"), EventKind.MODIFIED))
        rewrite(sample_file, "changed")

        assert await poller.poll_once() is True
        assert queue.qsize() == 1
        assert queue.get_nowait().path == Path("other.txt")
        assert registry.get(sample_file) == sample_file.stat().st_mtime_ns

    @pytest.mark.asyncio
    async def test_deletion_emits_once_and_ends(self, sample_file: Path):
        poller, registry, queue = make_poller(sample_file)
        sample_file.unlink()

        await asyncio.wait_for(poller.run(), timeout=1.0)

        assert queue.get_nowait() == ChangeEvent(sample_file, EventKind.DELETED)
        assert queue.empty()
        assert sample_file not in registry

    @pytest.mark.asyncio
    async def test_stat_failure_keeps_polling(self, sample_file: Path):
        """Errors other than 'not found' are logged and polling continues."""
        broken = sample_file / "child"
        poller, _, queue = make_poller(broken)

        assert await poller.poll_once() is True
        assert queue.empty()

    def test_stat_error_is_raised_as_stat_failure(self, sample_file: Path):
        broken = sample_file / "child"
        poller, _, _ = make_poller(broken)

        with pytest.raises(StatFailure) as exc_info:
            poller._stat()
        assert exc_info.value.path == broken
        assert exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, NotADirectoryError)


class TestRescanner:
    """Test cases for Rescanner."""

    def test_scan_reports_untracked_files(self, tmp_path: Path):
        known = tmp_path / "known.txt"
        known.write_text("k")
        nested = tmp_path / "sub"
        nested.mkdir()
        fresh = nested / "fresh.txt"
        fresh.write_text("f")

        rescanner = Rescanner(
            roots=[tmp_path],
            is_tracked=lambda p: p == known,
            on_discovered=lambda p: None,
            interval=0.01,
        )

        assert rescanner.scan() == [fresh]

    def test_scan_skips_excluded_files(self, tmp_path: Path, monkeypatch):
        log_file = tmp_path / "session.log"
        log_file.write_text("# Command: cat /_\n")
        other = tmp_path / "other.txt"
        other.write_text("o")
        monkeypatch.chdir(tmp_path)

        rescanner = Rescanner(
            roots=[Path(".")],
            is_tracked=lambda p: False,
            on_discovered=lambda p: None,
            interval=0.01,
            exclude=[log_file],
        )

        assert rescanner.scan() == [Path("other.txt")]

    @pytest.mark.asyncio
    async def test_run_hands_new_files_to_callback(self, tmp_path: Path, wait_for):
        discovered: list[Path] = []
        rescanner = Rescanner(
            roots=[tmp_path],
            is_tracked=lambda p: p in discovered,
            on_discovered=discovered.append,
            interval=0.02,
        )
        task = asyncio.create_task(rescanner.run())
        try:
            new_file = tmp_path / "late.txt"
            new_file.write_text("late")
            assert await wait_for(lambda: discovered == [new_file])
        finally:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
