"""Tests for settings defaults and environment overrides."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from wayback_harvester.config import Settings, get_settings


class TestSettingsDefaults:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.archive_host == "https://web.archive.org"
        assert settings.retention_years == 20
        assert settings.max_navigation_attempts == 3
        assert settings.retry_delay == 5.0
        assert settings.navigation_timeout == 120.0
        assert settings.snapshot_delay == 2.0
        assert settings.headless is True
        assert settings.output_dir == Path(".")

    def test_cdx_url_joins_host_and_path(self) -> None:
        settings = Settings(archive_host="https://web.archive.org/")

        assert settings.cdx_url == "https://web.archive.org/cdx/search/cdx"


class TestSettingsEnvironment:
    def test_env_prefix_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WAYBACK_HARVEST_RETRY_DELAY", "0.5")
        monkeypatch.setenv("WAYBACK_HARVEST_HEADLESS", "false")

        settings = Settings()

        assert settings.retry_delay == 0.5
        assert settings.headless is False

    def test_zero_attempts_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WAYBACK_HARVEST_MAX_NAVIGATION_ATTEMPTS", "0")

        with pytest.raises(ValidationError):
            Settings()

    def test_dotenv_file_is_ignored(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text(
            "WAYBACK_HARVEST_RETENTION_YEARS=1\nWAYBACK_HARVEST_MAX_NAVIGATION_ATTEMPTS=1\n",
            encoding="utf-8",
        )

        settings = Settings()

        assert settings.retention_years == 20
        assert settings.max_navigation_attempts == 3

    def test_get_settings_is_cached(self) -> None:
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
