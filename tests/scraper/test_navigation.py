"""Tests for the bounded navigation retry controller.

Covers:
- Success on the first attempt: no delay
- Two failures then success: True, 3 attempts, 2 delays of retry_delay
- Three failures: False, 3 attempts, 2 delays (none after the last attempt)
- A hung navigation counts as a failed attempt once the ceiling passes
- Each failed attempt is reported with its attempt number
- max_attempts < 1 → ValueError
"""

from __future__ import annotations

import pytest

from wayback_harvester.scraper.navigation import load_with_retry

REPLAY_URL = "https://web.archive.org/web/20050101000000id_/https://example.com/"


@pytest.mark.asyncio
class TestLoadWithRetry:
    async def test_first_attempt_succeeds(self, make_session, fake_page, recording_sleep) -> None:
        session = make_session({REPLAY_URL: fake_page(text="hi")})

        loaded = await load_with_retry(session, REPLAY_URL, sleep=recording_sleep)

        assert loaded is True
        assert session.navigations == [REPLAY_URL]
        assert recording_sleep.delays == []

    async def test_succeeds_on_third_attempt(
        self, make_session, fake_page, recording_sleep, reporter
    ) -> None:
        session = make_session({REPLAY_URL: fake_page(text="hi", failures=2)})

        loaded = await load_with_retry(
            session, REPLAY_URL, retry_delay=5.0, sleep=recording_sleep, reporter=reporter
        )

        assert loaded is True
        assert len(session.navigations) == 3
        assert recording_sleep.delays == [5.0, 5.0]
        assert [payload["attempt"] for _, payload in reporter.events] == [1, 2]

    async def test_gives_up_after_max_attempts(
        self, make_session, fake_page, recording_sleep, reporter
    ) -> None:
        session = make_session({REPLAY_URL: fake_page(text="hi", failures=3)})

        loaded = await load_with_retry(
            session, REPLAY_URL, max_attempts=3, sleep=recording_sleep, reporter=reporter
        )

        assert loaded is False
        assert len(session.navigations) == 3
        assert recording_sleep.delays == [5.0, 5.0]
        assert reporter.names() == ["navigation_retry"] * 3

    async def test_delay_is_fixed_not_exponential(
        self, make_session, fake_page, recording_sleep
    ) -> None:
        session = make_session({REPLAY_URL: fake_page(failures=10)})

        await load_with_retry(
            session, REPLAY_URL, max_attempts=5, retry_delay=1.5, sleep=recording_sleep
        )

        assert recording_sleep.delays == [1.5, 1.5, 1.5, 1.5]

    async def test_single_attempt_has_no_delay(
        self, make_session, fake_page, recording_sleep
    ) -> None:
        session = make_session({REPLAY_URL: fake_page(failures=1)})

        loaded = await load_with_retry(
            session, REPLAY_URL, max_attempts=1, sleep=recording_sleep
        )

        assert loaded is False
        assert recording_sleep.delays == []

    async def test_hung_navigation_times_out(
        self, make_session, fake_page, recording_sleep, reporter
    ) -> None:
        session = make_session({REPLAY_URL: fake_page(hang=True)})

        loaded = await load_with_retry(
            session,
            REPLAY_URL,
            max_attempts=2,
            navigation_timeout=0.01,
            sleep=recording_sleep,
            reporter=reporter,
        )

        assert loaded is False
        assert len(session.navigations) == 2
        assert "exceeded" in reporter.events[0][1]["error"]

    async def test_rejects_zero_attempts(self, make_session, recording_sleep) -> None:
        with pytest.raises(ValueError):
            await load_with_retry(make_session(), REPLAY_URL, max_attempts=0, sleep=recording_sleep)
