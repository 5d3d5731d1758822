"""E2E test configuration.

Auto-applies the 'e2e' marker to all tests in this directory.
Run with: pytest -m e2e

Provides fixtures for test isolation:
- fresh_page: fresh browser context + page per test
- tester_page: fresh_page opened on the tester with the editor script attached
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator

    from playwright.sync_api import Browser, Page


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Add e2e marker to all tests in this directory."""
    for item in items:
        if "/e2e/" in str(item.fspath):
            item.add_marker(pytest.mark.e2e)


@pytest.fixture
def fresh_page(browser: Browser) -> Generator[Page]:
    """Provide a completely isolated page for each test.

    Creates a fresh browser context and page per test, so no cookies,
    storage or WebSocket connections leak between tests.
    """
    context = browser.new_context()
    page = context.new_page()
    page.goto("about:blank")

    yield page

    page.close()
    context.close()


@pytest.fixture
def tester_page(fresh_page: Page, app_server: str) -> Page:
    """Tester page with the contenteditable wired to the server."""
    fresh_page.goto(app_server)
    fresh_page.wait_for_function(
        "() => {"
        "  const el = document.getElementById('regexly-surface');"
        "  return !!(window.regexly && el && el.dataset.regexlyAttached);"
        "}",
        timeout=10000,
    )
    return fresh_page
