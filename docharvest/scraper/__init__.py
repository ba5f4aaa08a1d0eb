"""Scraper package — browser session, extraction, conversion & persistence."""

from docharvest.scraper.converter import html_to_markdown
from docharvest.scraper.errors import (
    BrowserLaunchError,
    ContentMissingError,
    NavigationTimeoutError,
    ScrapeError,
)
from docharvest.scraper.models import ExtractionResult, ScrapeOutcome, ScrapeRun
from docharvest.scraper.pipeline import scrape_urls

__all__ = [
    "scrape_urls",
    "html_to_markdown",
    "ExtractionResult",
    "ScrapeOutcome",
    "ScrapeRun",
    "ScrapeError",
    "BrowserLaunchError",
    "ContentMissingError",
    "NavigationTimeoutError",
]
