"""docharvest CLI — scrape documentation pages to Markdown.

Usage:
    python cli/main.py https://docs.example.com/en/114/topic [MORE_URLS ...]

Every URL is rendered in headless Chromium, stripped of navigation chrome,
converted to Markdown and written to the output directory together with a
``_scrape-summary.json`` run summary.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from docharvest.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import List, Optional

import typer

from docharvest.config import settings
from docharvest.scraper import BrowserLaunchError, scrape_urls

app = typer.Typer(
    name="docharvest",
    help="Scrape web pages to Markdown with a headless browser.",
    add_completion=False,
)


@app.command()
def scrape(
    ctx: typer.Context,
    urls: Optional[List[str]] = typer.Argument(None, help="URLs to scrape.", show_default=False),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Output directory (default: SCRAPE_OUTPUT_DIR or ./scraped-docs)."
    ),
    concurrency: int = typer.Option(
        1, "--concurrency", "-c", min=1, help="Browser sessions to run at once."
    ),
    retries: int = typer.Option(0, "--retries", min=0, help="Extra attempts per URL with backoff."),
    wait_until: Optional[str] = typer.Option(
        None, "--wait-until", help="Wait policy: load | domcontentloaded | networkidle | commit."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Navigation timeout in seconds (default: 30)."
    ),
    headless: Optional[bool] = typer.Option(
        None, "--headless/--no-headless", help="Run the browser without a window."
    ),
) -> None:
    """Scrape each URL and save it as Markdown."""
    if not urls:
        typer.echo(ctx.get_usage())
        typer.echo("Error: at least one URL is required.")
        raise typer.Exit(1)

    target_dir = output_dir or settings.output_dir
    typer.echo(f"[docharvest] Scraping {len(urls)} URL(s) into {target_dir} …")

    try:
        run = scrape_urls(
            urls,
            output_dir=target_dir,
            concurrency=concurrency,
            retries=retries,
            wait_until=wait_until,
            timeout=timeout,
            headless=headless,
        )
    except BrowserLaunchError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(1)
    except ValueError as exc:
        typer.echo(f"❌ Error: {exc}")
        raise typer.Exit(1)

    typer.echo("")
    typer.echo(f"[docharvest] Total      : {run.total}")
    typer.echo(f"[docharvest] Successful : {run.succeeded}")
    typer.echo(f"[docharvest] Failed     : {run.failed}")
    typer.echo(f"[docharvest] Summary    : {run.summary_path}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
