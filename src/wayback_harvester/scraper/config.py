"""Constants for the headless browser session."""

from __future__ import annotations

#: Playwright ``wait_until`` value: the page counts as loaded once no network
#: connections have been open for 500 ms.  Archived pages replay embedded
#: sub-resources asynchronously, so ``"load"`` fires too early.
WAIT_UNTIL: str = "networkidle"

#: Script evaluated in the page to read its rendered text.
INNER_TEXT_SCRIPT: str = "() => document.body.innerText"

#: User-agent string presented by the browser context.
BROWSER_USER_AGENT: str = (
    "Mozilla/5.0 (X11; Linux x86_64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
