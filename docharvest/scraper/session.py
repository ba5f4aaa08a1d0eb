"""Headless Chromium session provisioning.

A session is one browser process with one isolated context and one page,
configured with a fixed identity profile and an init script that hides the
usual automation indicators.  :func:`browser_session` guarantees the browser
is closed exactly once, whatever happens inside the ``with`` block.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright

from docharvest.config import settings
from docharvest.scraper.errors import BrowserLaunchError

_LAUNCH_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
    "--no-sandbox",
]

_EXTRA_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

STEALTH_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', { get: () => undefined });
Object.defineProperty(navigator, 'plugins', {
    get: () => [
        { name: 'Chrome PDF Plugin', filename: 'internal-pdf-viewer' },
        { name: 'Chrome PDF Viewer', filename: 'mhjfbmdgcfjbbpaeojofohoefgiehjai' },
        { name: 'Native Client', filename: 'internal-nacl-plugin' },
    ],
});
Object.defineProperty(navigator, 'languages', { get: () => ['en-US', 'en'] });
window.chrome = { runtime: {} };
"""


def context_options() -> dict:
    """Keyword arguments for ``Browser.new_context`` built from ``settings``."""
    return {
        "user_agent": settings.user_agent,
        "viewport": {
            "width": settings.viewport_width,
            "height": settings.viewport_height,
        },
        "locale": settings.locale,
        "extra_http_headers": dict(_EXTRA_HEADERS),
    }


@contextmanager
def browser_session(headless: Optional[bool] = None) -> Iterator[Page]:
    """Launch Chromium and yield a ready-to-use :class:`Page`.

    Playwright is started and stopped inside this context manager, so each
    session owns its own driver and may live on its own thread.

    Raises:
        BrowserLaunchError: If Chromium cannot be launched (e.g. browser
            binaries are not installed).
    """
    if headless is None:
        headless = settings.headless

    with sync_playwright() as pw:
        try:
            browser = pw.chromium.launch(headless=headless, args=_LAUNCH_ARGS)
        except PlaywrightError as exc:
            raise BrowserLaunchError(f"Could not launch Chromium: {exc}") from exc

        try:
            try:
                context = browser.new_context(**context_options())
                context.add_init_script(STEALTH_SCRIPT)
                page = context.new_page()
            except PlaywrightError as exc:
                raise BrowserLaunchError(f"Could not open a browser page: {exc}") from exc
            yield page
        finally:
            browser.close()
