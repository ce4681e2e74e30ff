"""
gentr Configuration Module.

Centralizes all configuration settings using Pydantic Settings.
Requires Python 3.11+.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env into os.environ at import time so the nested
# BaseSettings groups can read the values
load_dotenv()


class WatcherSettings(BaseSettings):
    """Polling and debounce settings."""

    model_config = SettingsConfigDict(env_prefix="WATCHER_")

    poll_interval_seconds: float = Field(default=1.0, gt=0.0)
    rescan_interval_seconds: float = Field(default=10.0, gt=0.0)
    debounce_delay_ms: int = Field(default=500, ge=0, le=5000)
    queue_size: int = Field(default=1, ge=1, description="Event queue capacity")


class ExecutorSettings(BaseSettings):
    """Command execution settings."""

    model_config = SettingsConfigDict(env_prefix="EXECUTOR_")

    shell: str = Field(default="/bin/sh", description="Shell used to run the command")
    placeholder: str = Field(default="/_", min_length=1)


class ReportSettings(BaseSettings):
    """Console and session log settings."""

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    max_line_length: int = Field(default=60, ge=1)
    log_dir: Path = Field(default=Path("."))


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="WARNING")
    format: str = Field(default="console")  # "json" or "console"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Accept lower-case level names."""
        return str(v).upper()


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="gentr")
    app_version: str = Field(default="0.1.0")

    # Sub-settings
    watcher: WatcherSettings = Field(default_factory=WatcherSettings)
    executor: ExecutorSettings = Field(default_factory=ExecutorSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns singleton instance of Settings.
    """
    return Settings()
