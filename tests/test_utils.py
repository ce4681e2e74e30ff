"""
Tests for the shared utilities.

Requires Python 3.11+.
"""

import utils
from utils.config import LoggingSettings, WatcherSettings
from utils.logger import LoggerMixin


class TestExports:
    """Test cases for the utils package surface."""

    def test_every_export_resolves(self):
        for name in utils.__all__:
            assert hasattr(utils, name), name

    def test_loggers_come_from_get_logger(self):
        assert "logger" not in utils.__all__
        assert not hasattr(utils.logger, "logger")


class TestSettings:
    """Test cases for the settings groups."""

    def test_watcher_env_override(self, monkeypatch):
        monkeypatch.setenv("WATCHER_POLL_INTERVAL_SECONDS", "0.25")
        assert WatcherSettings().poll_interval_seconds == 0.25

    def test_log_level_is_upper_cased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert LoggingSettings().level == "DEBUG"


class TestLoggerMixin:
    """Test cases for LoggerMixin."""

    def test_logger_is_cached_per_instance(self):
        class Worker(LoggerMixin):
            pass

        worker = Worker()
        assert worker.log is worker.log
