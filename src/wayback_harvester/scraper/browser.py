"""Playwright-backed rendering session.

The pipeline only needs two things from a browser: load a URL and read the
rendered text of the current page.  :class:`RenderingSession` captures that
contract; :class:`PlaywrightSession` implements it on a single Chromium page.

:func:`open_browser_session` is the scoped handle used by the orchestrator.
Browser, context and page are closed in ``finally`` blocks, so they are
released exactly once whichever way the ``async with`` body exits::

    async with open_browser_session(settings) as session:
        await session.navigate("https://web.archive.org/web/2005...id_/https://example.com/")
        text = await session.inner_text()

Install the browser binary once with::

    playwright install chromium
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from wayback_harvester.config.settings import Settings
from wayback_harvester.core.exceptions import (
    BrowserSessionError,
    ExtractionError,
    NavigationError,
)
from wayback_harvester.scraper.config import (
    BROWSER_USER_AGENT,
    INNER_TEXT_SCRIPT,
    WAIT_UNTIL,
)

logger = logging.getLogger(__name__)


class RenderingSession(Protocol):
    """A browser tab that can be pointed at a URL and introspected."""

    async def navigate(self, url: str) -> None:
        """Load ``url`` and wait for network activity to settle.

        Raises:
            NavigationError: If the page could not be loaded.
        """
        ...

    async def inner_text(self) -> str:
        """Return the rendered text of the current document body.

        Raises:
            ExtractionError: If the document cannot be introspected.
        """
        ...


class PlaywrightSession:
    """:class:`RenderingSession` backed by one Playwright page.

    Args:
        page: An open Playwright page.
        navigation_timeout: Seconds before a navigation is abandoned.
    """

    def __init__(self, page: Page, *, navigation_timeout: float) -> None:
        self._page = page
        self._timeout_ms = navigation_timeout * 1000
        self._url: str | None = None

    async def navigate(self, url: str) -> None:
        self._url = url
        try:
            response = await self._page.goto(url, timeout=self._timeout_ms, wait_until=WAIT_UNTIL)
        except PlaywrightError as exc:
            raise NavigationError(f"playwright error: {exc}", url=url) from exc
        if response is not None and response.status >= 400:
            logger.debug("browser: %s answered HTTP %d", url, response.status)

    async def inner_text(self) -> str:
        try:
            text = await self._page.evaluate(INNER_TEXT_SCRIPT)
        except PlaywrightError as exc:
            raise ExtractionError(f"could not evaluate page script: {exc}", url=self._url) from exc
        if not isinstance(text, str):
            raise ExtractionError(
                f"document text is {type(text).__name__}, not a string", url=self._url
            )
        return text


@asynccontextmanager
async def open_browser_session(settings: Settings) -> AsyncIterator[PlaywrightSession]:
    """Launch Chromium and yield a session on a fresh page.

    Raises:
        BrowserSessionError: If Chromium fails to start or the browser
            context or page cannot be opened.
    """
    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(headless=settings.headless)
        except PlaywrightError as exc:
            raise BrowserSessionError(f"could not launch chromium: {exc}") from exc
        logger.debug("browser: chromium launched (headless=%s)", settings.headless)
        try:
            try:
                context = await browser.new_context(user_agent=BROWSER_USER_AGENT)
            except PlaywrightError as exc:
                raise BrowserSessionError(f"could not open browser context: {exc}") from exc
            try:
                page = await context.new_page()
                page.set_default_navigation_timeout(settings.navigation_timeout * 1000)
            except PlaywrightError as exc:
                await context.close()
                raise BrowserSessionError(f"could not open page: {exc}") from exc
            try:
                yield PlaywrightSession(page, navigation_timeout=settings.navigation_timeout)
            finally:
                await page.close()
                await context.close()
        finally:
            await browser.close()
            logger.debug("browser: chromium closed")
