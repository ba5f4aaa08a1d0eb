"""Selector tables for content extraction.

Each table is ordered and evaluated first-match-wins (content) or in full, in
order (noise).  Per-host profiles replace the defaults by exact hostname.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple
from urllib.parse import urlparse

CONTENT_SELECTORS: Tuple[str, ...] = (
    "main",
    "article",
    "[role='main']",
    ".main-content",
    "#main-content",
    ".markdown-body",
    ".documentation",
    ".content",
    "#content",
)

NOISE_SELECTORS: Tuple[str, ...] = (
    "script",
    "style",
    "noscript",
    "nav",
    "[role='navigation']",
    ".sidebar",
    "aside",
    ".breadcrumb",
    ".breadcrumbs",
    "footer",
    ".toc",
    "#toc",
    ".table-of-contents",
)


@dataclass(frozen=True)
class SelectorProfile:
    content: Tuple[str, ...] = CONTENT_SELECTORS
    noise: Tuple[str, ...] = NOISE_SELECTORS


DEFAULT_PROFILE = SelectorProfile()

HOST_PROFILES: Dict[str, SelectorProfile] = {
    "docs.python.org": SelectorProfile(
        content=("div.body", "[role='main']"),
        noise=NOISE_SELECTORS + (".headerlink",),
    ),
    "developer.mozilla.org": SelectorProfile(
        content=(".main-page-content", "main"),
        noise=NOISE_SELECTORS + (".metadata", ".article-footer"),
    ),
    "github.com": SelectorProfile(
        content=(".markdown-body", "article"),
    ),
    "docs.djangoproject.com": SelectorProfile(
        content=("#docs-content", "main"),
        noise=NOISE_SELECTORS + (".headerlink", "#content-secondary"),
    ),
}


def profile_for_url(url: str) -> SelectorProfile:
    """Return the selector profile for *url*'s exact hostname, else the default."""
    host = (urlparse(url).hostname or "").lower()
    return HOST_PROFILES.get(host, DEFAULT_PROFILE)
