"""Plain data containers passed between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class SnapshotRef:
    """One capture listed by the CDX index.

    Attributes:
        timestamp: Raw 14-digit ``YYYYMMDDHHMMSS`` capture timestamp, exactly
            as returned by the index.
    """

    timestamp: str


@dataclass(frozen=True)
class RetentionWindow:
    """Time range within which snapshots are considered for a run.

    Attributes:
        now: Instant the run was started.
        cutoff: Oldest acceptable capture instant.
        cutoff_timestamp: ``cutoff`` rendered as a 14-digit CDX timestamp,
            comparable as a string against index timestamps.
    """

    now: datetime
    cutoff: datetime
    cutoff_timestamp: str

    def contains(self, timestamp: str) -> bool:
        """Return True if the 14-digit ``timestamp`` is no older than the cutoff."""
        return timestamp >= self.cutoff_timestamp


@dataclass(frozen=True)
class RenderedContent:
    """Text read from a rendered archive page.

    Attributes:
        raw_text: ``innerText`` of the document body, unmodified.
        normalized_text: ``raw_text`` trimmed with whitespace runs collapsed.
    """

    raw_text: str
    normalized_text: str


@dataclass(frozen=True)
class HarvestRow:
    """One output record.

    Attributes:
        timestamp: Capture date formatted as ``MM-DD-YYYY``.
        text: Normalized page text.
    """

    timestamp: str
    text: str


@dataclass
class HarvestResult:
    """Outcome of a completed harvest run."""

    target_url: str
    output_path: Path
    rows: list[HarvestRow] = field(default_factory=list)
    snapshots_seen: int = 0
    snapshots_skipped: int = 0
    duplicates_skipped: int = 0
