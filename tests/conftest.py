"""Shared pytest fixtures for Wayback Harvester tests.

Fixture summary
---------------
settings          — Default timings with output under tmp_path.
fixed_now         — Frozen UTC instant used as the run clock.
recording_sleep   — Awaitable sleep replacement that records requested delays.
reporter          — HarvestReporter that records every event.
fake_page         — The FakePage class, for scripting replay URLs.
make_session      — Factory for scripted in-memory rendering sessions.
memory_sink       — RecordSink keeping rows in memory.

Nothing here touches the network or launches a browser.  CDX responses are
mocked per test with ``respx``.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from wayback_harvester.config.settings import Settings
from wayback_harvester.core.exceptions import ExtractionError, NavigationError
from wayback_harvester.core.models import HarvestRow

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


@dataclass
class FakePage:
    """Scripted behaviour of one replay URL.

    Attributes:
        text: ``innerText`` returned after a successful load, or an exception
            to raise from ``inner_text()``.
        failures: Number of navigation attempts that fail before one succeeds.
        hang: Navigation never completes (exercises the timeout ceiling).
    """

    text: str | Exception = ""
    failures: int = 0
    hang: bool = False


class FakeSession:
    """In-memory :class:`RenderingSession` driven by a URL -> FakePage map."""

    def __init__(self, pages: dict[str, FakePage] | None = None) -> None:
        self.pages = pages or {}
        self.navigations: list[str] = []
        self._attempts: dict[str, int] = {}
        self._current: FakePage | None = None
        self._current_url: str | None = None

    async def navigate(self, url: str) -> None:
        self.navigations.append(url)
        self._current = None
        page = self.pages.get(url)
        if page is None:
            raise NavigationError("net::ERR_NAME_NOT_RESOLVED", url=url)
        attempt = self._attempts[url] = self._attempts.get(url, 0) + 1
        if page.hang:
            await asyncio.sleep(3600)
        if attempt <= page.failures:
            raise NavigationError(f"timeout on attempt {attempt}", url=url)
        self._current = page
        self._current_url = url

    async def inner_text(self) -> str:
        if self._current is None:
            raise ExtractionError("no document loaded", url=self._current_url)
        if isinstance(self._current.text, Exception):
            raise self._current.text
        return self._current.text


class FakeSessionFactory:
    """Session factory that counts how often the session is opened and released."""

    def __init__(self, session: FakeSession, fail_on_open: Exception | None = None) -> None:
        self.session = session
        self.fail_on_open = fail_on_open
        self.opened = 0
        self.closed = 0

    def __call__(self) -> Any:
        return self._scope()

    @asynccontextmanager
    async def _scope(self) -> AsyncIterator[FakeSession]:
        if self.fail_on_open is not None:
            raise self.fail_on_open
        self.opened += 1
        try:
            yield self.session
        finally:
            self.closed += 1


class MemorySink:
    """RecordSink keeping written rows in memory."""

    def __init__(self, location: Path = Path("output_memory.csv")) -> None:
        self._location = location
        self.writes: list[list[HarvestRow]] = []

    @property
    def location(self) -> Path:
        return self._location

    def write_rows(self, rows: Sequence[HarvestRow]) -> None:
        self.writes.append(list(rows))


class RecordingSleep:
    """Awaitable stand-in for ``asyncio.sleep`` that returns immediately."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class RecordingReporter:
    """HarvestReporter collecting ``(event_name, payload)`` tuples."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def snapshot_started(self, timestamp: str, replay_url: str) -> None:
        self.events.append(("snapshot_started", {"timestamp": timestamp, "replay_url": replay_url}))

    def navigation_retry(self, replay_url: str, attempt: int, max_attempts: int, error: str) -> None:
        self.events.append(
            ("navigation_retry", {"replay_url": replay_url, "attempt": attempt, "error": error})
        )

    def snapshot_skipped(self, timestamp: str, replay_url: str | None, reason: str) -> None:
        self.events.append(("snapshot_skipped", {"timestamp": timestamp, "reason": reason}))

    def duplicate_skipped(self, timestamp: str) -> None:
        self.events.append(("duplicate_skipped", {"timestamp": timestamp}))

    def row_retained(self, row: HarvestRow) -> None:
        self.events.append(("row_retained", {"row": row}))

    def run_completed(self, output_path: Path, row_count: int) -> None:
        self.events.append(("run_completed", {"output_path": output_path, "rows": row_count}))

    def run_failed(self, error: BaseException) -> None:
        self.events.append(("run_failed", {"error": error}))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings with the default timings; tests pass a recording sleep."""
    return Settings(
        archive_host="https://web.archive.org",
        output_dir=tmp_path,
        retry_delay=5.0,
        snapshot_delay=2.0,
        navigation_timeout=120.0,
        max_navigation_attempts=3,
        retention_years=20,
    )


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture()
def fake_page() -> type[FakePage]:
    return FakePage


@pytest.fixture()
def make_session():
    """Return a factory building :class:`FakeSession` objects."""

    def _make(pages: dict[str, FakePage] | None = None) -> FakeSession:
        return FakeSession(pages)

    return _make


@pytest.fixture()
def make_session_factory():
    """Return a factory wrapping a session in a :class:`FakeSessionFactory`."""

    def _make(session: FakeSession, fail_on_open: Exception | None = None) -> FakeSessionFactory:
        return FakeSessionFactory(session, fail_on_open=fail_on_open)

    return _make


@pytest.fixture()
def memory_sink() -> MemorySink:
    return MemorySink()
