"""Progress reporting for harvest runs.

The pipeline never prints.  It notifies a :class:`HarvestReporter` at each
step of a run; :class:`LoggingReporter` (the default) turns those
notifications into structlog events::

    {"event": "snapshot_skipped", "replay_url": "...", "reason": "navigation failed", ...}

Tests pass their own reporter to assert on the sequence of events without
capturing output.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import structlog

from wayback_harvester.core.models import HarvestRow


class HarvestReporter(Protocol):
    """Receives progress notifications from the harvest pipeline."""

    def snapshot_started(self, timestamp: str, replay_url: str) -> None: ...

    def navigation_retry(
        self, replay_url: str, attempt: int, max_attempts: int, error: str
    ) -> None: ...

    def snapshot_skipped(self, timestamp: str, replay_url: str | None, reason: str) -> None: ...

    def duplicate_skipped(self, timestamp: str) -> None: ...

    def row_retained(self, row: HarvestRow) -> None: ...

    def run_completed(self, output_path: Path, row_count: int) -> None: ...

    def run_failed(self, error: BaseException) -> None: ...


class LoggingReporter:
    """Default reporter: writes every notification as a structlog event."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._log = logger or structlog.get_logger(__name__)

    def snapshot_started(self, timestamp: str, replay_url: str) -> None:
        self._log.info("snapshot_fetching", timestamp=timestamp, replay_url=replay_url)

    def navigation_retry(
        self, replay_url: str, attempt: int, max_attempts: int, error: str
    ) -> None:
        self._log.warning(
            "navigation_failed",
            replay_url=replay_url,
            attempt=attempt,
            max_attempts=max_attempts,
            error=error,
        )

    def snapshot_skipped(self, timestamp: str, replay_url: str | None, reason: str) -> None:
        self._log.warning(
            "snapshot_skipped", timestamp=timestamp, replay_url=replay_url, reason=reason
        )

    def duplicate_skipped(self, timestamp: str) -> None:
        self._log.info("snapshot_duplicate", timestamp=timestamp)

    def row_retained(self, row: HarvestRow) -> None:
        self._log.info(
            "snapshot_retained",
            date=row.timestamp,
            text_length=len(row.text),
        )
        self._log.debug("snapshot_text", date=row.timestamp, text=row.text)

    def run_completed(self, output_path: Path, row_count: int) -> None:
        self._log.info("harvest_complete", output_path=str(output_path), rows=row_count)

    def run_failed(self, error: BaseException) -> None:
        self._log.error("harvest_failed", error=str(error), error_type=type(error).__name__)
