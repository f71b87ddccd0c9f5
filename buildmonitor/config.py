"""Runtime configuration - env-driven.

Centralized config using pydantic-settings.  Reads from a .env file and
BUILDMONITOR_* environment variables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class MonitorConfig(BaseSettings):
    """Build monitor configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export BUILDMONITOR_LOG_LEVEL=DEBUG
        export BUILDMONITOR_SNAPSHOT_PATH=/data/snapshot.json

    Or via .env file::

        BUILDMONITOR_REFRESH_HZ=0.5
        BUILDMONITOR_DEFAULT_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BUILDMONITOR_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"

    # Data source
    snapshot_path: Path = Path(".buildmonitor/snapshot.json")

    # Display
    refresh_hz: float = 2.0
    default_format: Literal["table", "json"] = "table"


# Module-level singleton - import as `from buildmonitor.config import config`
config = MonitorConfig()
