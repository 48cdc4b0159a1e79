"""Wayback Machine CDX index lookup.

Lists every capture of a single page and keeps the ones inside the run's
retention window.

The CDX API returns a 2D JSON array.  With ``fl=timestamp`` it looks like::

    [["timestamp"], ["20050101000000"], ["20050601000000"], ...]

The first row holds field names and is dropped.  The index returns captures
in chronological order; that order is passed through untouched.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from wayback_harvester.archive.config import (
    WB_DEFAULT_FIELDS,
    WB_DEFAULT_OUTPUT,
    WB_PLAYBACK_URL_TEMPLATE,
)
from wayback_harvester.archive.timestamps import format_wb_timestamp, subtract_years
from wayback_harvester.config.settings import Settings
from wayback_harvester.core.exceptions import IndexUnavailableError
from wayback_harvester.core.models import RetentionWindow, SnapshotRef

logger = logging.getLogger(__name__)


def retention_window(now: datetime, years: int = 20) -> RetentionWindow:
    """Build the window of acceptable capture times ending at ``now``."""
    cutoff = subtract_years(now, years)
    return RetentionWindow(now=now, cutoff=cutoff, cutoff_timestamp=format_wb_timestamp(cutoff))


def build_replay_url(timestamp: str, url: str, *, archive_host: str) -> str:
    """Return the identity replay URL for one capture of ``url``.

    Args:
        timestamp: 14-digit CDX timestamp of the capture.
        url: Original page URL.
        archive_host: Scheme and host of the archive, e.g.
            ``"https://web.archive.org"``.
    """
    return WB_PLAYBACK_URL_TEMPLATE.format(
        host=archive_host.rstrip("/"), timestamp=timestamp, url=url
    )


def _parse_rows(data: Any, url: str) -> list[str]:
    """Validate the CDX payload shape and return the timestamp column, header excluded."""
    if not isinstance(data, list):
        raise IndexUnavailableError(
            f"wayback: unexpected CDX payload type {type(data).__name__}", url=url
        )
    timestamps: list[str] = []
    for row in data[1:]:
        if not isinstance(row, list) or not row or not isinstance(row[0], str):
            raise IndexUnavailableError(f"wayback: malformed CDX row {row!r}", url=url)
        timestamps.append(row[0])
    return timestamps


async def fetch_snapshots(
    url: str,
    *,
    client: httpx.AsyncClient,
    now: datetime,
    settings: Settings,
) -> list[SnapshotRef]:
    """Fetch the captures of ``url`` recorded within the retention window.

    Args:
        url: Absolute URL of the page to look up.
        client: Shared async HTTP client.
        now: Current instant; the window ends here and reaches back
            ``settings.retention_years`` years.
        settings: Harvester settings (CDX endpoint, retention span).

    Returns:
        Snapshot references in index order, oldest first.  Empty when the
        page has no captures in the window.

    Raises:
        IndexUnavailableError: On transport errors, non-2xx responses or a
            payload that is not a CDX JSON table.
    """
    window = retention_window(now, settings.retention_years)
    params: dict[str, Any] = {
        "url": url,
        "output": WB_DEFAULT_OUTPUT,
        "fl": WB_DEFAULT_FIELDS,
    }

    try:
        response = await client.get(settings.cdx_url, params=params)
    except httpx.RequestError as exc:
        raise IndexUnavailableError(f"wayback: request error: {exc}", url=url) from exc

    if not response.is_success:
        raise IndexUnavailableError(
            f"wayback: CDX API returned HTTP {response.status_code}",
            url=url,
            status_code=response.status_code,
        )

    # The CDX server answers an empty body (not "[]") for some unknown URLs.
    if not response.text.strip():
        logger.info("wayback: no captures listed for %s", url)
        return []

    try:
        data = response.json()
    except ValueError as exc:
        raise IndexUnavailableError(
            f"wayback: JSON parse error: {exc}",
            url=url,
            status_code=response.status_code,
        ) from exc

    timestamps = _parse_rows(data, url)
    snapshots = [SnapshotRef(timestamp=ts) for ts in timestamps if window.contains(ts)]
    logger.info(
        "wayback: %d captures listed, %d since %s",
        len(timestamps),
        len(snapshots),
        window.cutoff_timestamp,
    )
    return snapshots
