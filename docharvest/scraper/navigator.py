"""Page navigation with a one-shot wait-policy downgrade.

Waiting for the full ``load`` event is reliable for documentation pages but
can hang on pages that keep long-lived connections open.  When the primary
policy times out, navigation is retried once under the relaxed
``domcontentloaded`` policy with the same timeout budget.
"""

from __future__ import annotations

from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, Response
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from docharvest.config import settings
from docharvest.scraper.errors import BrowserLaunchError, NavigationTimeoutError

WAIT_POLICIES = ("load", "domcontentloaded", "networkidle", "commit")

# Least to most demanding; a downgrade must move left.
_STRICTNESS = ("commit", "domcontentloaded", "load", "networkidle")

_WARM_UP_URL = "about:blank"


def check_wait_policy(policy: str) -> str:
    if policy not in WAIT_POLICIES:
        raise ValueError(
            f"Unknown wait policy {policy!r}. Use one of: {', '.join(WAIT_POLICIES)}"
        )
    return policy


def warm_up(page: Page) -> None:
    """Perform a throwaway navigation so cold-start latency is not billed to a real URL.

    Raises:
        BrowserLaunchError: If even a blank page cannot be loaded, i.e. the
            session is unusable.
    """
    try:
        page.goto(_WARM_UP_URL)
    except PlaywrightError as exc:
        raise BrowserLaunchError(f"Browser warm-up failed: {exc}") from exc


def navigate(
    page: Page,
    url: str,
    wait_until: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Optional[Response]:
    """Load *url* in *page* and return the main-frame response.

    Args:
        page: The live page to navigate.
        url: Target address.
        wait_until: Primary wait policy.  Defaults to ``settings.wait_until``.
        timeout: Per-attempt timeout in seconds.  Defaults to
            ``settings.nav_timeout``.

    Returns:
        The Playwright :class:`Response` (``None`` for same-document
        navigations).  HTTP error statuses are reported but not raised.

    Raises:
        NavigationTimeoutError: If both the primary and the relaxed policy
            time out, or the primary times out and the fallback is not
            more relaxed than it.
        ValueError: If a wait policy is not recognised.
        playwright.sync_api.Error: Any non-timeout navigation failure, as-is.
    """
    primary = check_wait_policy(wait_until or settings.wait_until)
    fallback = check_wait_policy(settings.fallback_wait_until)
    seconds = timeout if timeout is not None else settings.nav_timeout
    timeout_ms = int(seconds * 1000)

    try:
        response = page.goto(url, wait_until=primary, timeout=timeout_ms)
    except PlaywrightTimeoutError as exc:
        if _STRICTNESS.index(fallback) >= _STRICTNESS.index(primary):
            raise NavigationTimeoutError(url, seconds, (primary,)) from exc
        print(f"[NAVIGATE] {primary!r} timed out for {url}; retrying with {fallback!r} …")
        try:
            response = page.goto(url, wait_until=fallback, timeout=timeout_ms)
        except PlaywrightTimeoutError as exc2:
            raise NavigationTimeoutError(url, seconds, (primary, fallback)) from exc2

    if response is not None and response.status >= 400:
        print(f"[NAVIGATE] Warning: HTTP {response.status} for {url}")

    return response
