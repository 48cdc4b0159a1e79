"""Constants for talking to the Wayback Machine.

The CDX API is free, unauthenticated and IP-rate-limited.  The Internet
Archive's replay infrastructure can be fragile, which is why page loads are
retried and spaced out (see :mod:`wayback_harvester.config.settings`).

Reference: https://github.com/internetarchive/wayback/tree/master/wayback-cdx-server
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# API constants
# ---------------------------------------------------------------------------

WB_CDX_PATH: str = "/cdx/search/cdx"
"""Path of the CDX search endpoint, appended to ``Settings.archive_host``."""

WB_PLAYBACK_URL_TEMPLATE: str = "{host}/web/{timestamp}id_/{url}"
"""URL pattern for retrieving raw archived page content.

The ``id_`` suffix requests the resource as originally served, without the
Wayback Machine toolbar or URL rewriting.
"""

WB_DEFAULT_OUTPUT: str = "json"
"""CDX output format.

``json`` returns a 2D array: the first row holds field names, subsequent rows
are capture records.
"""

WB_DEFAULT_FIELDS: str = "timestamp"
"""Only the capture timestamp is requested from the index."""

# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------

WB_TIMESTAMP_FORMAT: str = "%Y%m%d%H%M%S"
"""``strftime`` pattern of CDX timestamps (14 digits, UTC)."""

WB_TIMESTAMP_LENGTH: int = 14

ROW_DATE_FORMAT: str = "%m-%d-%Y"
"""Date format of the ``TIMESTAMP`` output column."""

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

USER_AGENT: str = "WaybackHarvester/1.0 (snapshot text harvester; research use)"
"""User-agent string sent with CDX requests."""
