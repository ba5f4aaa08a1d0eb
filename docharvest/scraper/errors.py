"""Exceptions raised by the scraper stages."""

from __future__ import annotations


class ScrapeError(Exception):
    """Base class for scraper failures with a specific diagnosis."""


class BrowserLaunchError(ScrapeError):
    """The browser process could not be started.  Fatal to the whole run."""


class NavigationTimeoutError(ScrapeError):
    """Navigation timed out under both the primary and the relaxed wait policy."""

    def __init__(self, url: str, timeout: float, policies: tuple[str, ...]) -> None:
        self.url = url
        self.timeout = timeout
        self.policies = policies
        tried = " → ".join(policies)
        super().__init__(f"Navigation timed out after {timeout:g}s ({tried}): {url}")


class ContentMissingError(ScrapeError):
    """The page loaded but holds too little readable text to be worth saving."""

    def __init__(self, url: str, found_chars: int, min_chars: int) -> None:
        self.url = url
        self.found_chars = found_chars
        self.min_chars = min_chars
        super().__init__(
            f"Content missing: only {found_chars} characters of text found "
            f"(minimum {min_chars}): {url}"
        )
