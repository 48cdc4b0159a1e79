"""Harvester settings loaded from environment variables.

Uses Pydantic Settings v2 for validated, type-safe configuration.  Every
field has a default, so a plain ``wayback-harvest <url>`` invocation needs no
environment at all; the variables exist for tuning and for tests.

Usage::

    from wayback_harvester.config.settings import get_settings

    settings = get_settings()
    delay = settings.retry_delay
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wayback_harvester.archive.config import WB_CDX_PATH


class Settings(BaseSettings):
    """Harvester configuration with optional ``WAYBACK_HARVEST_*`` overrides.

    Only the process environment is read. No ``.env`` or other config file is
    loaded, so a run with no variables set always uses the defaults below.
    """

    model_config = SettingsConfigDict(
        env_prefix="WAYBACK_HARVEST_",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Archive
    # ------------------------------------------------------------------

    archive_host: str = "https://web.archive.org"
    """Scheme and host of the Wayback Machine, without a trailing slash.

    Both the CDX endpoint and the identity replay URLs are built from it.
    """

    cdx_timeout: float = Field(default=60.0, gt=0)
    """HTTP timeout in seconds for the CDX index query."""

    retention_years: int = Field(default=20, ge=0)
    """Only captures from the most recent ``retention_years`` years are harvested."""

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    max_navigation_attempts: int = Field(default=3, ge=1)
    """Attempts per snapshot before it is skipped."""

    retry_delay: float = Field(default=5.0, ge=0)
    """Fixed pause in seconds between failed navigation attempts."""

    navigation_timeout: float = Field(default=120.0, gt=0)
    """Ceiling in seconds for a single navigation attempt."""

    snapshot_delay: float = Field(default=2.0, ge=0)
    """Pause in seconds between consecutive snapshots."""

    headless: bool = True
    """Run Chromium without a visible window."""

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    output_dir: Path = Path(".")
    """Directory receiving ``output_<hostname>.csv``."""

    log_level: str = "INFO"
    """Logging verbosity.  One of: DEBUG, INFO, WARNING, ERROR, CRITICAL."""

    @property
    def cdx_url(self) -> str:
        return f"{self.archive_host.rstrip('/')}{WB_CDX_PATH}"


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings singleton.

    In tests, call ``get_settings.cache_clear()`` after patching environment
    variables.
    """
    return Settings()
