"""Centralised settings for the docharvest scraper.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    output_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("SCRAPE_OUTPUT_DIR", "./scraped-docs"))
    )
    summary_filename: str = "_scrape-summary.json"

    @property
    def summary_path(self) -> Path:
        """Path of the run summary inside the default output directory."""
        return self.output_dir / self.summary_filename

    # ------------------------------------------------------------------
    # Browser identity
    # ------------------------------------------------------------------
    headless: bool = field(default_factory=lambda: _env_bool("SCRAPE_HEADLESS", "true"))
    user_agent: str = field(
        default_factory=lambda: os.environ.get("SCRAPE_USER_AGENT", _DEFAULT_USER_AGENT)
    )
    locale: str = field(default_factory=lambda: os.environ.get("SCRAPE_LOCALE", "en-US"))
    viewport_width: int = 1920
    viewport_height: int = 1080

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    wait_until: str = field(
        default_factory=lambda: os.environ.get("SCRAPE_WAIT_UNTIL", "load")
    )
    fallback_wait_until: str = field(
        default_factory=lambda: os.environ.get("SCRAPE_FALLBACK_WAIT_UNTIL", "domcontentloaded")
    )
    nav_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SCRAPE_NAV_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------
    min_content_chars: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPE_MIN_CONTENT_CHARS", "100"))
    )

    # ------------------------------------------------------------------
    # Pacing / concurrency / retry
    # ------------------------------------------------------------------
    delay_base: float = field(
        default_factory=lambda: float(os.environ.get("SCRAPE_DELAY_BASE", "1.0"))
    )
    delay_jitter: float = field(
        default_factory=lambda: float(os.environ.get("SCRAPE_DELAY_JITTER", "2.0"))
    )
    max_concurrency: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPE_MAX_CONCURRENCY", "3"))
    )
    retry_max: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPE_RETRY_MAX", "3"))
    )
    retry_base_delay: float = field(
        default_factory=lambda: float(os.environ.get("SCRAPE_RETRY_BASE_DELAY", "1.0"))
    )

    def ensure_output_dir(self, output_dir: Path | None = None) -> Path:
        """Create the output directory (recursively) if it does not exist."""
        path = Path(output_dir) if output_dir is not None else self.output_dir
        path.mkdir(parents=True, exist_ok=True)
        return path


# Module-level singleton — import this everywhere:
#   from docharvest.config import settings
settings = Settings()
