"""
Tests for the File Watcher.

Runs the full poll -> debounce -> diff -> run -> report loop with short
intervals.
Requires Python 3.11+.
"""

import asyncio
from pathlib import Path

import pytest

from differ.models import ChangeKind, DiffChange
from reporting.session_log import SessionLog
from utils.errors import StartupError
from watcher.file_watcher import FileWatcher


def make_watcher(paths, sink, runner, spinner, **kwargs) -> FileWatcher:
    return FileWatcher(
        paths=paths,
        command="cat /_",
        sink=sink,
        spinner=spinner,
        runner=runner,
        poll_interval=0.02,
        rescan_interval=0.05,
        debounce_delay_ms=20,
        **kwargs,
    )


class TestFileWatcher:
    """Test cases for FileWatcher."""

    @pytest.mark.asyncio
    async def test_modification_triggers_one_cycle(self, sample_file: Path, sink, runner, spinner, rewrite, wait_for):
        async with make_watcher([sample_file], sink, runner, spinner) as watcher:
            assert watcher.is_running
            assert spinner.started
            rewrite(sample_file, "a\nx\nc")

            assert await wait_for(lambda: len(sink.cycles) == 1)

        assert not watcher.is_running
        assert not spinner.started
        assert runner.calls == [("cat /_", sample_file)]
        _, _, changes = sink.cycles[0]
        assert changes == [DiffChange(2, ChangeKind.MODIFY, "b -> x")]

    @pytest.mark.asyncio
    async def test_deletion_is_reported_once(self, sample_file: Path, sink, runner, spinner, wait_for):
        async with make_watcher([sample_file], sink, runner, spinner) as watcher:
            sample_file.unlink()

            assert await wait_for(lambda: sink.deletions == [sample_file])
            assert await wait_for(lambda: watcher.watched_paths == [])

        assert sink.deletions == [sample_file]
        assert runner.calls == []

    @pytest.mark.asyncio
    async def test_recursive_rescan_picks_up_new_files(self, tmp_path: Path, sink, runner, spinner, wait_for):
        first = tmp_path / "first.txt"
        first.write_text("1")

        watcher = make_watcher([first], sink, runner, spinner, roots=[tmp_path], recursive=True)
        async with watcher:
            later = tmp_path / "later.txt"
            later.write_text("2")

            assert await wait_for(lambda: watcher.coordinator.is_tracked(later))
            assert await wait_for(lambda: later in watcher.watched_paths)

        assert sink.discoveries == [later]
        assert runner.calls == []

    @pytest.mark.asyncio
    async def test_start_without_trackable_files(self, tmp_path: Path, sink, runner, spinner):
        watcher = make_watcher([tmp_path / "missing.txt"], sink, runner, spinner)

        with pytest.raises(StartupError):
            await watcher.start()
        assert not watcher.is_running

    @pytest.mark.asyncio
    async def test_session_log_is_never_watched(self, tmp_path: Path, sink, runner, spinner, rewrite, wait_for):
        watched = tmp_path / "a.txt"
        watched.write_text("a")
        session_log = SessionLog.create(tmp_path, options="--recursive true", command="cat /_")
        sink.session_log = session_log

        watcher = make_watcher(
            [watched, session_log.path],
            sink,
            runner,
            spinner,
            roots=[tmp_path],
            recursive=True,
            exclude=[session_log.path],
        )
        async with watcher:
            assert not watcher.coordinator.is_tracked(session_log.path)
            rewrite(watched, "b")

            assert await wait_for(lambda: len(sink.cycles) == 1)
            await asyncio.sleep(0.3)

        assert runner.calls == [("cat /_", watched)]
        assert sink.discoveries == []
        assert not watcher.coordinator.is_tracked(session_log.path)
        assert len(session_log.records()) == 1
