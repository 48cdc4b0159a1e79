"""Bounded retry around a single page navigation.

Archived pages fail to load far more often than live ones: replay servers
time out, sub-resources hang, the archive sheds load.  Each snapshot gets a
fixed number of attempts with a fixed pause between them; a snapshot that
never loads is skipped by the caller rather than aborting the run.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from wayback_harvester.core.events import HarvestReporter
from wayback_harvester.core.exceptions import NavigationError
from wayback_harvester.scraper.browser import RenderingSession

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]

DEFAULT_MAX_ATTEMPTS: int = 3
DEFAULT_RETRY_DELAY: float = 5.0
DEFAULT_NAVIGATION_TIMEOUT: float = 120.0


async def load_with_retry(
    session: RenderingSession,
    target_url: str,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    retry_delay: float = DEFAULT_RETRY_DELAY,
    navigation_timeout: float = DEFAULT_NAVIGATION_TIMEOUT,
    sleep: SleepFunc = asyncio.sleep,
    reporter: HarvestReporter | None = None,
) -> bool:
    """Navigate ``session`` to ``target_url``, retrying on failure.

    An attempt fails when the session raises :class:`NavigationError` or
    does not finish within ``navigation_timeout`` seconds.  After a failed
    attempt the controller awaits ``sleep(retry_delay)`` and tries again,
    except after the last attempt.  The delay is constant between attempts.

    Args:
        session: Rendering session to drive.
        target_url: Replay URL to load.
        max_attempts: Total attempts, at least 1.
        retry_delay: Seconds to wait between attempts.
        navigation_timeout: Ceiling in seconds for one attempt.
        sleep: Awaitable delay function; tests pass a recorder.
        reporter: Receives a ``navigation_retry`` event per failed attempt.

    Returns:
        ``True`` once an attempt succeeds, ``False`` when all attempts
        failed.

    Raises:
        ValueError: If ``max_attempts`` is less than 1.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    for attempt in range(1, max_attempts + 1):
        try:
            await asyncio.wait_for(session.navigate(target_url), timeout=navigation_timeout)
            return True
        except NavigationError as exc:
            error = str(exc)
        except asyncio.TimeoutError:
            error = f"navigation exceeded {navigation_timeout:g}s"

        logger.debug("navigation: attempt %d/%d failed for %s", attempt, max_attempts, target_url)
        if reporter is not None:
            reporter.navigation_retry(target_url, attempt, max_attempts, error)
        if attempt < max_attempts:
            await sleep(retry_delay)

    return False
