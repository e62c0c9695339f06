"""wikicorpus CLI — crawl a list of Wikipedia URLs into an NDJSON corpus.

Usage:
    python cli/main.py <urls.txt> <output.ndjson>
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from wikicorpus.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from dataclasses import replace
from datetime import timedelta
from typing import Optional

import typer

from wikicorpus.config import settings
from wikicorpus.scraper import NdjsonSink, crawl, read_urls

USAGE = "Usage: wikicorpus <urls.txt> <output.ndjson>"

app = typer.Typer(
    name="wikicorpus",
    help="Crawl Wikipedia article URLs into a newline-delimited JSON corpus.",
    add_completion=False,
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


@app.command()
def main(
    input_path: Optional[Path] = typer.Argument(None, help="Text file with one URL per line."),
    output_path: Optional[Path] = typer.Argument(None, help="NDJSON file to create."),
    parallelism: Optional[int] = typer.Option(
        None, "--parallelism", help="Maximum concurrent fetches (default 2)."
    ),
    random_delay: Optional[float] = typer.Option(
        None, "--random-delay", help="Upper bound in seconds of the per-host random delay."
    ),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="User-Agent header."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug diagnostics."),
) -> None:
    """Fetch every URL in INPUT_PATH and write one JSON record per page to OUTPUT_PATH."""
    if input_path is None or output_path is None:
        typer.echo(USAGE)
        raise typer.Exit(1)

    overrides = {
        key: value
        for key, value in (
            ("parallelism", parallelism),
            ("random_delay", random_delay),
            ("user_agent", user_agent),
        )
        if value is not None
    }
    run_settings = replace(settings, **overrides)
    try:
        run_settings.validate()
    except ValueError as exc:
        typer.echo(f"Invalid settings: {exc}", err=True)
        raise typer.Exit(1)
    _configure_logging("DEBUG" if verbose else run_settings.log_level)

    try:
        urls = read_urls(input_path)
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"Error reading URL file: {exc}", err=True)
        raise typer.Exit(1)

    try:
        sink = NdjsonSink(output_path)
    except OSError as exc:
        typer.echo(f"Error creating output file: {exc}", err=True)
        raise typer.Exit(1)

    with sink:
        stats = crawl(urls, sink, run_settings)

    typer.echo(
        f"Crawl completed in {timedelta(seconds=stats.elapsed)}. Output saved to {output_path}"
    )
    typer.echo(f"[wikicorpus] {stats.summary()}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
