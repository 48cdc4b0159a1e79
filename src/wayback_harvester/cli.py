"""Command-line entry point.

Usage::

    wayback-harvest https://example.com/
    python -m wayback_harvester https://example.com/

Writes ``output_<hostname>.csv`` with one row per distinct archived
snapshot of the page from the last 20 years.

Exit codes:
    0 — Success.
    1 — The archive index or the browser was unavailable, or the run failed.
    2 — Invalid arguments.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from urllib.parse import urlparse

from wayback_harvester.config.settings import get_settings
from wayback_harvester.core.exceptions import HarvesterError
from wayback_harvester.core.logging_config import configure_logging
from wayback_harvester.harvest.orchestrator import harvest

_PROG = "wayback-harvest"


def _absolute_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise argparse.ArgumentTypeError(
            f"expected an absolute http(s) URL, got {value!r}"
        )
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=_PROG,
        description="Harvest the text of every distinct Wayback Machine snapshot of a page.",
    )
    parser.add_argument("url", type=_absolute_url, help="Absolute URL of the page to harvest.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        result = asyncio.run(harvest(args.url, settings))
    except HarvesterError as exc:
        print(f"[{_PROG}] ERROR: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:  # noqa: BLE001
        print(f"[{_PROG}] ERROR: harvest failed: {exc!r}", file=sys.stderr)
        return 1

    print(f"[{_PROG}] Data written to {result.output_path} ({len(result.rows)} rows).")
    return 0
