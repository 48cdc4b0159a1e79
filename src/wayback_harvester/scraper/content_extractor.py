"""Rendered text extraction from a loaded page.

Change detection across snapshots works on *normalized* text: leading and
trailing whitespace removed and every whitespace run (spaces, tabs,
newlines) collapsed to one space, so layout-only differences between
captures do not register as changes.
"""

from __future__ import annotations

import re

from wayback_harvester.core.models import RenderedContent
from wayback_harvester.scraper.browser import RenderingSession

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(raw: str) -> str:
    """Trim ``raw`` and collapse each whitespace run to a single space."""
    return _WHITESPACE_RUN.sub(" ", raw.strip())


async def extract_content(session: RenderingSession) -> RenderedContent:
    """Read and normalize the rendered text of the session's current page.

    Raises:
        ExtractionError: Propagated from the session when the document
            cannot be introspected.
    """
    raw_text = await session.inner_text()
    return RenderedContent(raw_text=raw_text, normalized_text=normalize_text(raw_text))
