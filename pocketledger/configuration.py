"""Mini README: Centralised configuration for PocketLedger.

Structure:
    * TrackerSettings - Pydantic settings model read from the environment.
    * get_settings - cached accessor shared by the CLI and the web app.

Usage:
    Every field can be overridden with a ``POCKETLEDGER_`` prefixed
    environment variable or a ``.env`` file, e.g.
    ``POCKETLEDGER_TRANSACTIONS_FILE=~/finance/transactions.json``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerSettings(BaseSettings):
    """Runtime configuration for the finance tracker."""

    environment: str = Field(
        "development",
        description="Environment label; only \"development\" runs the server with auto-reload.",
    )
    transactions_file: Path = Field(
        Path("transactions.json"),
        description="JSON file holding every recorded transaction.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface the web server binds to.",
    )
    interface_port: int = Field(
        8080,
        description="Port the web server listens on.",
        ge=1,
        le=65535,
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level name (DEBUG, INFO, WARNING, ...).",
    )

    model_config = SettingsConfigDict(
        env_prefix="POCKETLEDGER_",
        env_file=".env",
        case_sensitive=False,
    )

    @field_validator("transactions_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Union[str, Path]) -> Path:
        """Expand ``~`` so home-relative paths work from any shell."""

        # Parent directories are created lazily by the store on first load.
        return Path(value).expanduser()


@lru_cache()
def get_settings() -> TrackerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return TrackerSettings()
