"""Shared test doubles.

Playwright is never launched in the test suite.  ``FakePage`` implements the
small slice of the sync ``Page`` / ``ElementHandle`` API the scraper uses, on
top of BeautifulSoup, so DOM queries and in-place removals behave like the
real thing.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager

import pytest
from bs4 import BeautifulSoup
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

LONG_TEXT = (
    "Playwright renders the page in a real browser so that client-side "
    "documentation sites can be captured exactly as a reader sees them."
)

_BLANK = "<html><head></head><body></body></html>"


def doc_page(body: str, title: str = "Test Page") -> str:
    """Wrap *body* in a minimal HTML document."""
    return f"<html><head><title>{title}</title></head><body>{body}</body></html>"


class FakeResponse:
    def __init__(self, status: int = 200) -> None:
        self.status = status
        self.ok = status < 400


class FakeElement:
    def __init__(self, tag) -> None:
        self._tag = tag

    def query_selector_all(self, selector: str) -> list["FakeElement"]:
        return [FakeElement(t) for t in self._tag.select(selector)]

    def evaluate(self, expression: str) -> None:
        assert "remove()" in expression
        if not self._tag.decomposed:
            self._tag.decompose()

    def inner_html(self) -> str:
        return self._tag.decode_contents()

    def inner_text(self) -> str:
        return self._tag.get_text(" ", strip=True)


class FakePage:
    """In-memory stand-in for ``playwright.sync_api.Page``.

    Args:
        routes: URL → HTML served on navigation.
        timeouts: URL → wait policies that raise a Playwright ``TimeoutError``.
        statuses: URL → HTTP status of the main response (default 200).
        errors: URL → exception raised by ``goto``.
    """

    def __init__(self, routes=None, timeouts=None, statuses=None, errors=None) -> None:
        self.routes = routes or {}
        self.timeouts = timeouts or {}
        self.statuses = statuses or {}
        self.errors = errors or {}
        self.calls: list[tuple[str, str | None]] = []
        self.url = "about:blank"
        self._soup = BeautifulSoup(_BLANK, "html.parser")

    def goto(self, url, wait_until=None, timeout=None):
        self.calls.append((url, wait_until))
        if url == "about:blank":
            self.url = url
            self._soup = BeautifulSoup(_BLANK, "html.parser")
            return None
        if url in self.errors:
            raise self.errors[url]
        if wait_until in self.timeouts.get(url, ()):
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")
        self._soup = BeautifulSoup(self.routes[url], "html.parser")
        self.url = url
        return FakeResponse(self.statuses.get(url, 200))

    def title(self) -> str:
        tag = self._soup.title
        return tag.get_text() if tag is not None else ""

    def query_selector(self, selector: str):
        tag = self._soup.select_one(selector)
        return FakeElement(tag) if tag is not None else None


class FakeBrowser:
    """Counts sessions and hands out a fresh ``FakePage`` for each one."""

    def __init__(self, **page_kwargs) -> None:
        self.page_kwargs = page_kwargs
        self.pages: list[FakePage] = []
        self.opened = 0
        self.closed = 0
        self._lock = threading.Lock()

    @contextmanager
    def session(self, headless=None):
        page = FakePage(**self.page_kwargs)
        with self._lock:
            self.opened += 1
            self.pages.append(page)
        try:
            yield page
        finally:
            with self._lock:
                self.closed += 1


@pytest.fixture
def fake_browser(monkeypatch):
    """Return a factory that installs a :class:`FakeBrowser` into the pipeline."""

    def install(**page_kwargs) -> FakeBrowser:
        browser = FakeBrowser(**page_kwargs)
        monkeypatch.setattr("docharvest.scraper.pipeline.browser_session", browser.session)
        return browser

    return install


@pytest.fixture
def no_sleep(monkeypatch):
    """Record requested delays instead of sleeping."""
    delays: list[float] = []
    monkeypatch.setattr("time.sleep", delays.append)
    return delays
