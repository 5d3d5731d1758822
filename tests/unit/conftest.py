"""Shared fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from regexly.config import get_settings


class DeferredQueue:
    """Stand-in for the page's next-tick timer.

    Callbacks are held until :meth:`flush`, so tests can observe the state
    between a re-render and the caret restore that follows it.
    """

    def __init__(self) -> None:
        self.pending: list[Callable[[], None]] = []

    def __call__(self, callback: Callable[[], None]) -> None:
        self.pending.append(callback)

    def flush(self) -> int:
        """Run every queued callback; return how many ran."""
        ran = 0
        while self.pending:
            self.pending.pop(0)()
            ran += 1
        return ran


@pytest.fixture
def deferred() -> DeferredQueue:
    return DeferredQueue()


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
