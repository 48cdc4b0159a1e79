"""Consecutive-duplicate suppression over a sequence of snapshots.

A snapshot is kept when its normalized text differs from the most recently
*kept* snapshot.  Only that one item is remembered, so content that returns
after an intervening change is kept again::

    a, a, b, b, b, a  ->  a, b, a
"""

from __future__ import annotations

from collections.abc import Iterable


def should_retain(candidate: str, last_retained: str | None) -> bool:
    """Return ``True`` if ``candidate`` differs from the last retained text.

    ``last_retained`` is ``None`` until something has been retained, so the
    first candidate of a run is always kept.
    """
    return candidate != last_retained


def dedupe_consecutive(texts: Iterable[str]) -> list[str]:
    """Apply :func:`should_retain` across ``texts`` and return the survivors in order."""
    retained: list[str] = []
    last: str | None = None
    for text in texts:
        if should_retain(text, last):
            retained.append(text)
            last = text
    return retained
