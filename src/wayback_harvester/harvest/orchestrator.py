"""Harvest run orchestration.

A run moves through the states of :class:`HarvestState`::

    INIT -> INDEXING -> PER_SNAPSHOT -> FINALIZING -> DONE
    (any state) -> ABORTED

- ``INIT``: read the clock, resolve the sink, open the rendering session.
- ``INDEXING``: list captures in the retention window.  An unavailable index
  aborts the run before anything is written.
- ``PER_SNAPSHOT``: for each capture, in index order: load the identity
  replay URL (with retries), read its text, drop it if it repeats the last
  retained text, otherwise keep a row.  Failures skip the capture only.
- ``FINALIZING``: write every kept row to the sink in one go.

The rendering session is an async context manager entered once per run; it
is released exactly once on every exit path.

All collaborators are injectable: the HTTP client, the session factory, the
sink factory, the reporter, the clock and the sleep function.  Tests run the
whole pipeline with fakes and no wall-clock waits.
"""

from __future__ import annotations

import asyncio
import enum
import functools
import logging
from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from datetime import datetime, timezone

import httpx

from wayback_harvester.archive.cdx import build_replay_url, fetch_snapshots
from wayback_harvester.archive.config import USER_AGENT
from wayback_harvester.archive.timestamps import format_row_date, parse_wb_timestamp
from wayback_harvester.config.settings import Settings, get_settings
from wayback_harvester.core.events import HarvestReporter, LoggingReporter
from wayback_harvester.core.exceptions import ExtractionError, FormatError
from wayback_harvester.core.logging_config import bind_run_context, clear_run_context
from wayback_harvester.core.models import HarvestResult, HarvestRow, SnapshotRef
from wayback_harvester.harvest.dedup import should_retain
from wayback_harvester.harvest.sink import CsvFileSink, RecordSink
from wayback_harvester.scraper.browser import RenderingSession, open_browser_session
from wayback_harvester.scraper.content_extractor import extract_content
from wayback_harvester.scraper.navigation import load_with_retry

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[RenderingSession]]
SinkFactory = Callable[[str], RecordSink]
Clock = Callable[[], datetime]
SleepFunc = Callable[[float], Awaitable[None]]


class HarvestState(str, enum.Enum):
    """Lifecycle states of a harvest run."""

    INIT = "init"
    INDEXING = "indexing"
    PER_SNAPSHOT = "per_snapshot"
    FINALIZING = "finalizing"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class RunState:
    """Mutable state of a single run.

    Attributes:
        last_retained_text: Normalized text of the most recently kept
            snapshot, ``None`` before the first one.
        rows: Kept rows in processing order.
    """

    last_retained_text: str | None = None
    rows: list[HarvestRow] = field(default_factory=list)

    def retain(self, row: HarvestRow) -> None:
        self.rows.append(row)
        self.last_retained_text = row.text


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HarvestOrchestrator:
    """Runs the snapshot harvest for one target URL at a time.

    Args:
        settings: Harvester settings.  Defaults to :func:`get_settings`.
        http_client: Client for the CDX query.  When omitted, a client is
            created per run and closed with it.
        session_factory: Zero-argument callable returning an async context
            manager that yields a :class:`RenderingSession`.  Defaults to
            :func:`open_browser_session`.
        sink_factory: Maps the target URL to a :class:`RecordSink`.  Defaults
            to a :class:`CsvFileSink` under ``settings.output_dir``.
        reporter: Progress receiver.  Defaults to :class:`LoggingReporter`.
        clock: Returns the current instant; fixes the retention window.
        sleep: Awaitable delay used for retry and inter-snapshot pauses.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        session_factory: SessionFactory | None = None,
        sink_factory: SinkFactory | None = None,
        reporter: HarvestReporter | None = None,
        clock: Clock | None = None,
        sleep: SleepFunc | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._http_client = http_client
        self._session_factory = session_factory or functools.partial(
            open_browser_session, self._settings
        )
        self._sink_factory = sink_factory or (
            lambda url: CsvFileSink.for_target(url, self._settings.output_dir)
        )
        self._reporter: HarvestReporter = reporter or LoggingReporter()
        self._clock = clock or _utc_now
        self._sleep = sleep or asyncio.sleep
        self.state = HarvestState.INIT

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(self, target_url: str) -> HarvestResult:
        """Harvest every distinct snapshot of ``target_url`` into the sink.

        Returns:
            The :class:`HarvestResult` of the run.

        Raises:
            IndexUnavailableError: If the CDX index could not be queried.
            BrowserSessionError: If the rendering session could not start.
        """
        self.state = HarvestState.INIT
        bind_run_context(target_url)
        try:
            now = self._clock()
            sink = self._sink_factory(target_url)
            result = HarvestResult(target_url=target_url, output_path=sink.location)

            async with self._session_factory() as session:
                self.state = HarvestState.INDEXING
                snapshots = await self._list_snapshots(target_url, now)

                self.state = HarvestState.PER_SNAPSHOT
                run_state = RunState()
                await self._process_all(session, target_url, snapshots, run_state, result)

                self.state = HarvestState.FINALIZING
                result.rows = list(run_state.rows)
                sink.write_rows(result.rows)

            self.state = HarvestState.DONE
            self._reporter.run_completed(sink.location, len(result.rows))
            return result
        except Exception as exc:
            self.state = HarvestState.ABORTED
            self._reporter.run_failed(exc)
            raise
        finally:
            clear_run_context()

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def _list_snapshots(self, target_url: str, now: datetime) -> list[SnapshotRef]:
        if self._http_client is not None:
            return await fetch_snapshots(
                target_url, client=self._http_client, now=now, settings=self._settings
            )
        async with httpx.AsyncClient(
            timeout=self._settings.cdx_timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        ) as client:
            return await fetch_snapshots(target_url, client=client, now=now, settings=self._settings)

    async def _process_all(
        self,
        session: RenderingSession,
        target_url: str,
        snapshots: list[SnapshotRef],
        run_state: RunState,
        result: HarvestResult,
    ) -> None:
        logger.debug("harvest: %d snapshots to process for %s", len(snapshots), target_url)
        last_index = len(snapshots) - 1
        for index, snapshot in enumerate(snapshots):
            result.snapshots_seen += 1
            navigated = await self._process_snapshot(
                session, target_url, snapshot, run_state, result
            )
            # Pace replay requests; nothing to wait for after the last one.
            if navigated and index < last_index:
                await self._sleep(self._settings.snapshot_delay)

    async def _process_snapshot(
        self,
        session: RenderingSession,
        target_url: str,
        snapshot: SnapshotRef,
        run_state: RunState,
        result: HarvestResult,
    ) -> bool:
        """Handle one capture.  Returns ``True`` if a navigation was attempted."""
        timestamp = snapshot.timestamp
        try:
            row_date = format_row_date(parse_wb_timestamp(timestamp))
        except FormatError as exc:
            result.snapshots_skipped += 1
            self._reporter.snapshot_skipped(timestamp, None, str(exc))
            return False

        replay_url = build_replay_url(
            timestamp, target_url, archive_host=self._settings.archive_host
        )
        self._reporter.snapshot_started(timestamp, replay_url)

        loaded = await load_with_retry(
            session,
            replay_url,
            max_attempts=self._settings.max_navigation_attempts,
            retry_delay=self._settings.retry_delay,
            navigation_timeout=self._settings.navigation_timeout,
            sleep=self._sleep,
            reporter=self._reporter,
        )
        if not loaded:
            result.snapshots_skipped += 1
            self._reporter.snapshot_skipped(
                timestamp,
                replay_url,
                f"navigation failed after {self._settings.max_navigation_attempts} attempts",
            )
            return True

        try:
            content = await extract_content(session)
        except ExtractionError as exc:
            result.snapshots_skipped += 1
            self._reporter.snapshot_skipped(timestamp, replay_url, str(exc))
            return True

        if not should_retain(content.normalized_text, run_state.last_retained_text):
            result.duplicates_skipped += 1
            self._reporter.duplicate_skipped(timestamp)
            return True

        row = HarvestRow(timestamp=row_date, text=content.normalized_text)
        run_state.retain(row)
        self._reporter.row_retained(row)
        return True


async def harvest(target_url: str, settings: Settings | None = None) -> HarvestResult:
    """Run a harvest of ``target_url`` with the production collaborators."""
    return await HarvestOrchestrator(settings).run(target_url)
