"""Application-wide exception hierarchy for Wayback Harvester.

All custom exceptions subclass ``HarvesterError``, enabling consistent error
handling and structured logging across the pipeline.

Hierarchy::

    HarvesterError
    ├── IndexUnavailableError    (fatal: aborts the run)
    ├── BrowserSessionError      (fatal: the rendering session could not start)
    ├── NavigationError          (recoverable: skip the snapshot)
    ├── ExtractionError          (recoverable: skip the snapshot)
    └── FormatError              (recoverable: skip the snapshot)
"""

from __future__ import annotations


class HarvesterError(Exception):
    """Base class for all Wayback Harvester exceptions.

    Callers can catch the entire hierarchy with a single ``except`` clause
    when needed.
    """


# ---------------------------------------------------------------------------
# Fatal errors
# ---------------------------------------------------------------------------


class IndexUnavailableError(HarvesterError):
    """Raised when the CDX index query cannot be completed.

    Covers network failures, non-2xx responses and malformed payloads.  No
    partial snapshot list is usable, so the run is aborted and nothing is
    written.

    Args:
        message: Human-readable description of the failure.
        url: Target page URL whose captures were requested.
        status_code: HTTP status code of the index response, if one arrived.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class BrowserSessionError(HarvesterError):
    """Raised when the headless browser session cannot be acquired."""


# ---------------------------------------------------------------------------
# Per-snapshot errors
# ---------------------------------------------------------------------------


class NavigationError(HarvesterError):
    """Raised by a rendering session when a single navigation attempt fails.

    Args:
        message: Human-readable description of the failure.
        url: Replay URL the session tried to load.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class ExtractionError(HarvesterError):
    """Raised when the rendered document of a loaded page cannot be read.

    Args:
        message: Human-readable description of the failure.
        url: Replay URL of the page being introspected.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class FormatError(HarvesterError, ValueError):
    """Raised when a CDX timestamp is not a valid 14-digit calendar instant.

    Args:
        message: Description of the problem.
        raw: The offending timestamp string.
    """

    def __init__(self, message: str, raw: object = None) -> None:
        super().__init__(message)
        self.raw = raw
