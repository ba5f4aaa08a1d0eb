"""Content extraction: isolates the readable region of a live page."""

from __future__ import annotations

from typing import Optional

from playwright.sync_api import ElementHandle, Page

from docharvest.config import settings
from docharvest.scraper.errors import ContentMissingError
from docharvest.scraper.models import ExtractionResult
from docharvest.scraper.selectors import SelectorProfile, profile_for_url

_REMOVE_JS = "el => el.remove()"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _find_region(page: Page, candidates: tuple[str, ...]) -> Optional[ElementHandle]:
    """Return the first element matching *candidates* in order, else ``<body>``."""
    for selector in candidates:
        element = page.query_selector(selector)
        if element is not None:
            return element
    return page.query_selector("body")


def _strip_noise(region: ElementHandle, noise: tuple[str, ...]) -> int:
    """Remove every element inside *region* matching *noise*; return the count."""
    removed = 0
    for selector in noise:
        for element in region.query_selector_all(selector):
            element.evaluate(_REMOVE_JS)
            removed += 1
    return removed


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_page(
    page: Page,
    profile: Optional[SelectorProfile] = None,
    min_chars: Optional[int] = None,
) -> ExtractionResult:
    """Capture the title, resolved URL, and cleaned content markup of *page*.

    Noise removal mutates the live DOM, so it happens before the markup is
    captured and cannot be undone for this page.

    Raises:
        ContentMissingError: If the region holds fewer than *min_chars*
            characters of visible text.
    """
    url = page.url
    profile = profile or profile_for_url(url)
    threshold = settings.min_content_chars if min_chars is None else min_chars

    region = _find_region(page, profile.content)
    if region is None:
        raise ContentMissingError(url, 0, threshold)

    _strip_noise(region, profile.noise)

    text = (region.inner_text() or "").strip()
    if len(text) < threshold:
        raise ContentMissingError(url, len(text), threshold)

    return ExtractionResult(
        title=(page.title() or "").strip(),
        source_url=url,
        html=region.inner_html(),
    )
