"""Conversions between CDX timestamps and calendar dates.

CDX timestamps are fixed-width ``YYYYMMDDHHmmss`` strings in UTC.  Because
they are zero-padded, two timestamps compare correctly as plain strings,
which is what the retention filter relies on.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from wayback_harvester.archive.config import (
    ROW_DATE_FORMAT,
    WB_TIMESTAMP_FORMAT,
    WB_TIMESTAMP_LENGTH,
)
from wayback_harvester.core.exceptions import FormatError

logger = logging.getLogger(__name__)


def parse_wb_timestamp(raw: str) -> datetime:
    """Parse a 14-digit CDX timestamp into a UTC datetime.

    ``strptime`` alone accepts variable-width fields (``"2023615..."``), so
    the width and the digit-only content are checked first.  Out-of-range
    fields (month 13, 31 February, hour 24) are rejected rather than rolled
    over into a neighbouring date.

    Args:
        raw: Raw CDX ``timestamp`` field value.

    Returns:
        Timezone-aware datetime in UTC.

    Raises:
        FormatError: If ``raw`` is not a valid 14-digit timestamp.
    """
    if not isinstance(raw, str) or len(raw) != WB_TIMESTAMP_LENGTH or not (
        raw.isascii() and raw.isdigit()
    ):
        raise FormatError(f"not a 14-digit timestamp: {raw!r}", raw=raw)
    try:
        parsed = datetime.strptime(raw, WB_TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise FormatError(f"timestamp out of calendar range: {raw!r}", raw=raw) from exc
    return parsed.replace(tzinfo=timezone.utc)


def format_wb_timestamp(value: datetime) -> str:
    """Format a datetime as a 14-digit CDX timestamp.

    Aware datetimes are converted to UTC first; naive ones are taken as UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(WB_TIMESTAMP_FORMAT)


def format_row_date(value: datetime) -> str:
    """Format a capture date as ``MM-DD-YYYY`` for the output file."""
    return f"{value.month:02d}-{value.day:02d}-{value.year:04d}"


def subtract_years(value: datetime, years: int) -> datetime:
    """Move ``value`` back by ``years`` calendar years.

    29 February maps to 1 March when the target year has no leap day.
    """
    try:
        return value.replace(year=value.year - years)
    except ValueError:
        logger.debug("timestamps: %s has no counterpart %d years back", value, years)
        return value.replace(year=value.year - years, month=3, day=1)
