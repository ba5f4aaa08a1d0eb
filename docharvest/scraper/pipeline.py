"""Scrape pipeline — the per-URL run loop.

``scrape_urls`` drives every URL through the same stages:

    navigate → extract → convert → write document → record outcome → pace

Each URL runs inside a failure boundary: any error becomes a failed
:class:`ScrapeOutcome` and the loop moves on.  Only a browser that cannot be
launched aborts the run.
"""

from __future__ import annotations

import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional, Sequence

from playwright.sync_api import Page

from docharvest.config import settings
from docharvest.scraper.converter import html_to_markdown
from docharvest.scraper.errors import BrowserLaunchError, ContentMissingError
from docharvest.scraper.extractor import extract_page
from docharvest.scraper.models import ScrapeOutcome, ScrapeRun
from docharvest.scraper.navigator import check_wait_policy, navigate, warm_up
from docharvest.scraper.retry import with_retry
from docharvest.scraper.session import browser_session
from docharvest.scraper.writer import (
    derive_filename,
    render_document,
    write_document,
    write_summary,
)

_NEVER_RETRY = (ContentMissingError, BrowserLaunchError)


# ---------------------------------------------------------------------------
# Single URL
# ---------------------------------------------------------------------------

def scrape_page(
    page: Page,
    url: str,
    output_dir: Path,
    wait_until: Optional[str] = None,
    timeout: Optional[float] = None,
) -> ScrapeOutcome:
    """Run navigation, extraction, conversion and persistence for one URL.

    Errors propagate; :func:`scrape_urls` turns them into failed outcomes.
    """
    navigate(page, url, wait_until=wait_until, timeout=timeout)
    result = extract_page(page)
    markdown = html_to_markdown(result.html)
    filename = derive_filename(url)
    size = write_document(output_dir, filename, render_document(result, markdown))
    return ScrapeOutcome.ok(url, filename, size)


def pacing_delay() -> float:
    """Fixed base plus uniform random jitter, in seconds."""
    return settings.delay_base + random.uniform(0, settings.delay_jitter)


def _contained(url: str, attempt: Callable[[], ScrapeOutcome], retries: int) -> ScrapeOutcome:
    """Run *attempt* inside the per-URL failure boundary."""
    try:
        if retries > 0:
            outcome = with_retry(
                attempt,
                attempts=retries + 1,
                give_up_on=_NEVER_RETRY,
                label="RETRY",
            )
        else:
            outcome = attempt()
    except BrowserLaunchError:
        raise
    except Exception as exc:
        message = str(exc) or exc.__class__.__name__
        print(f"[SCRAPE] ✗ Failed {url!r}: {message}")
        return ScrapeOutcome.failed(url, message)

    print(f"[SCRAPE] ✓ {url} → {outcome.filename} ({outcome.size_bytes} bytes)")
    return outcome


# ---------------------------------------------------------------------------
# Run modes
# ---------------------------------------------------------------------------

def _scrape_sequential(
    urls: Sequence[str],
    output_dir: Path,
    retries: int,
    wait_until: Optional[str],
    timeout: Optional[float],
    headless: Optional[bool],
) -> list[ScrapeOutcome]:
    outcomes: list[ScrapeOutcome] = []
    total = len(urls)

    with browser_session(headless=headless) as page:
        warm_up(page)
        for index, url in enumerate(urls):
            print(f"[SCRAPE] ({index + 1}/{total}) {url}")
            outcomes.append(
                _contained(
                    url,
                    lambda url=url: scrape_page(page, url, output_dir, wait_until, timeout),
                    retries,
                )
            )
            if index < total - 1:
                time.sleep(pacing_delay())

    return outcomes


def _scrape_concurrent(
    urls: Sequence[str],
    output_dir: Path,
    concurrency: int,
    retries: int,
    wait_until: Optional[str],
    timeout: Optional[float],
    headless: Optional[bool],
) -> list[ScrapeOutcome]:
    results: list[tuple[int, ScrapeOutcome]] = []
    lock = threading.Lock()
    aborted = threading.Event()
    total = len(urls)

    def isolated(url: str) -> ScrapeOutcome:
        with browser_session(headless=headless) as page:
            warm_up(page)
            if aborted.is_set():
                raise BrowserLaunchError("Run aborted after a browser launch failure.")
            return scrape_page(page, url, output_dir, wait_until, timeout)

    def unit(index: int, url: str) -> None:
        if aborted.is_set():
            return
        print(f"[SCRAPE] ({index + 1}/{total}) {url}")
        try:
            outcome = _contained(url, lambda: isolated(url), retries)
        except BrowserLaunchError:
            aborted.set()
            raise
        with lock:
            results.append((index, outcome))
        time.sleep(pacing_delay())

    pool = ThreadPoolExecutor(max_workers=concurrency, thread_name_prefix="scrape")
    try:
        futures = [pool.submit(unit, i, url) for i, url in enumerate(urls)]
        for future in futures:
            future.result()
    except BrowserLaunchError:
        aborted.set()
        pool.shutdown(wait=True, cancel_futures=True)
        raise
    finally:
        pool.shutdown(wait=True)

    results.sort(key=lambda item: item[0])
    return [outcome for _, outcome in results]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def scrape_urls(
    urls: Sequence[str],
    output_dir: Optional[Path] = None,
    concurrency: int = 1,
    retries: int = 0,
    wait_until: Optional[str] = None,
    timeout: Optional[float] = None,
    headless: Optional[bool] = None,
) -> ScrapeRun:
    """Scrape every URL in *urls* and write a summary of the run.

    Args:
        urls: Target addresses, processed in order.
        output_dir: Where documents and the summary go.  Defaults to
            ``settings.output_dir``.
        concurrency: ``1`` reuses one page for every URL; ``N > 1`` runs up
            to N independent browser sessions at once.
        retries: Extra attempts per URL with exponential backoff.
        wait_until: Primary navigation wait policy.
        timeout: Navigation timeout in seconds.
        headless: Override ``settings.headless``.

    Returns:
        A :class:`ScrapeRun` with one outcome per URL, in input order.

    Raises:
        ValueError: If *urls* is empty or *wait_until* is not a known policy.
        BrowserLaunchError: If a browser session cannot be started.
    """
    if not urls:
        raise ValueError("At least one URL is required.")
    if wait_until is not None:
        check_wait_policy(wait_until)

    directory = settings.ensure_output_dir(output_dir)

    if concurrency > settings.max_concurrency:
        print(
            f"[SCRAPE] Concurrency {concurrency} capped at "
            f"{settings.max_concurrency} (SCRAPE_MAX_CONCURRENCY)."
        )
        concurrency = settings.max_concurrency

    if concurrency > 1:
        outcomes = _scrape_concurrent(
            urls, directory, concurrency, retries, wait_until, timeout, headless
        )
    else:
        outcomes = _scrape_sequential(urls, directory, retries, wait_until, timeout, headless)

    summary_path = write_summary(outcomes, directory)
    return ScrapeRun(outcomes=outcomes, summary_path=summary_path)
