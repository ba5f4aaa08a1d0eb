"""Persistence: per-URL Markdown documents and the run summary."""

from __future__ import annotations

import json
import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional
from urllib.parse import urlparse

from docharvest.config import settings
from docharvest.scraper.models import ExtractionResult, ScrapeOutcome

DEFAULT_FILENAME = "index.md"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def derive_filename(url: str) -> str:
    """Build a filename from the last two non-empty path segments of *url*.

    ``https://docs.example.com/en/114/topic`` → ``114-topic.md``.
    URLs without path segments map to :data:`DEFAULT_FILENAME`.
    """
    segments = [s for s in urlparse(url).path.split("/") if s]
    if not segments:
        return DEFAULT_FILENAME
    stem = "-".join(segments[-2:])
    return _UNSAFE_CHARS.sub("_", stem) + ".md"


def render_document(
    result: ExtractionResult,
    markdown: str,
    scraped_at: Optional[datetime] = None,
) -> str:
    """Prefix *markdown* with the metadata header block."""
    scraped_at = scraped_at or datetime.now(timezone.utc)
    title = result.title or result.source_url
    return (
        f"# {title}\n"
        "\n"
        f"> Source: {result.source_url}\n"
        f"> Scraped: {scraped_at.isoformat()}\n"
        "\n"
        "---\n"
        "\n"
        f"{markdown.strip()}\n"
    )


def write_document(output_dir: Path, filename: str, content: str) -> int:
    """Write *content* to ``output_dir / filename`` atomically.

    The text goes to a temporary file in the same directory first and is then
    moved over the target, so a failure never leaves a partial document.

    Returns:
        The size of the written file in bytes.
    """
    directory = settings.ensure_output_dir(output_dir)
    target = directory / filename

    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=".md")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    return target.stat().st_size


def write_summary(outcomes: Iterable[ScrapeOutcome], output_dir: Path) -> Path:
    """Serialise *outcomes* in order to ``_scrape-summary.json``."""
    directory = settings.ensure_output_dir(output_dir)
    path = directory / settings.summary_filename
    records = [o.to_dict() for o in outcomes]
    path.write_text(json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path
