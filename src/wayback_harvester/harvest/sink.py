"""Output sinks for harvested rows.

The shipped sink writes a two-column CSV file::

    TIMESTAMP,TEXT
    01-01-2005,hello world
    12-01-2005,goodbye

Rows are written once, at the end of a run, in the order given.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol
from urllib.parse import urlparse

from wayback_harvester.core.models import HarvestRow

logger = logging.getLogger(__name__)

#: Output column headers, in order.
CSV_HEADERS: tuple[str, str] = ("TIMESTAMP", "TEXT")


class RecordSink(Protocol):
    """Destination for the rows of one run."""

    @property
    def location(self) -> Path: ...

    def write_rows(self, rows: Sequence[HarvestRow]) -> None: ...


def output_filename(target_url: str) -> str:
    """Return ``output_<hostname>.csv`` for ``target_url``."""
    hostname = urlparse(target_url).hostname or "unknown"
    return f"output_{hostname}.csv"


class CsvFileSink:
    """Writes rows to a UTF-8 CSV file, replacing any previous content.

    Args:
        path: Destination file.  Parent directories are created on write.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @classmethod
    def for_target(cls, target_url: str, output_dir: Path) -> CsvFileSink:
        return cls(output_dir / output_filename(target_url))

    @property
    def location(self) -> Path:
        return self._path

    def write_rows(self, rows: Sequence[HarvestRow]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8", newline="") as fh:
            writer = csv.writer(fh, lineterminator="\n")
            writer.writerow(CSV_HEADERS)
            for row in rows:
                writer.writerow((row.timestamp, row.text))
        logger.debug("sink: wrote %d rows to %s", len(rows), self._path)
