"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional


@dataclass
class ExtractionResult:
    """Readable content captured from a live page after noise removal."""

    title: str
    source_url: str
    html: str


@dataclass(frozen=True)
class ScrapeOutcome:
    """The result of scraping one input URL.

    Exactly one outcome exists per input URL.  Failed outcomes always carry a
    non-empty ``error``; successful ones carry ``filename`` and ``size_bytes``.
    """

    url: str
    success: bool
    filename: Optional[str] = None
    size_bytes: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, url: str, filename: str, size_bytes: int) -> "ScrapeOutcome":
        return cls(url=url, success=True, filename=filename, size_bytes=size_bytes)

    @classmethod
    def failed(cls, url: str, error: str) -> "ScrapeOutcome":
        return cls(url=url, success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Serialise for the run summary, omitting fields that are unset."""
        data: dict[str, Any] = {"url": self.url, "success": self.success}
        if self.filename is not None:
            data["filename"] = self.filename
        if self.size_bytes is not None:
            data["size"] = self.size_bytes
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class ScrapeRun:
    """All outcomes of one run plus the location of its summary file."""

    outcomes: List[ScrapeOutcome] = field(default_factory=list)
    summary_path: Optional[Path] = None

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded
