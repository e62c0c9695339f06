"""Crawl orchestration: URLs in, NDJSON records out.

``crawl`` runs every URL through the pipeline on a bounded worker pool:

    allow-list → pace → fetch → extract → build record → sink

At most ``settings.parallelism`` fetches are in flight at once.  Per-URL
failures are logged and counted; they never stop the run.  ``crawl``
returns only after every submitted URL has finished.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable

import httpx
import typer

from wikicorpus.config import Settings
from wikicorpus.scraper.extractor import extract_record
from wikicorpus.scraper.fetcher import (
    FetchError,
    HostPacer,
    build_client,
    fetch_url,
    is_allowed,
    url_host,
)
from wikicorpus.scraper.models import CrawlStats
from wikicorpus.scraper.sink import NdjsonSink

logger = logging.getLogger(__name__)

# Outcomes of a single URL, tallied into CrawlStats.
_WRITTEN = "written"
_EMPTY = "empty"
_FAILED = "failed"


def crawl(
    urls: Iterable[str],
    sink: NdjsonSink,
    settings: Settings,
    client: httpx.Client | None = None,
    echo: Callable[[str], None] = typer.echo,
    pacer: HostPacer | None = None,
) -> CrawlStats:
    """Fetch *urls* and append one record per non-empty page to *sink*.

    Args:
        urls: Absolute URLs, dispatched in order.
        sink: Destination for records; left open for the caller to close.
        settings: Politeness limits, allow-list and user agent.
        client: Optional pre-built ``httpx.Client``.  When omitted one is
            built from *settings* and closed before returning.
        echo: Receives one ``Visiting: <URL>`` line per dispatched fetch.
        pacer: Optional :class:`HostPacer`; defaults to one using
            ``settings.random_delay``.

    Returns:
        A :class:`CrawlStats` describing the run.
    """
    settings.validate()
    stats = CrawlStats()
    start = time.monotonic()
    pacer = pacer or HostPacer(settings.random_delay)
    # Held from dispatch until the worker finishes. Pacing and dispatch run
    # on this thread, in list order.
    slots = threading.BoundedSemaphore(settings.parallelism)
    owns_client = client is None
    if client is None:
        client = build_client(settings)

    def _visit(url: str) -> str:
        try:
            raw = fetch_url(client, url, settings.allowed_domains)
            record = extract_record(raw)
            if record is None:
                return _EMPTY
            return _WRITTEN if sink.write(record) else _FAILED
        except (FetchError, httpx.HTTPError) as exc:
            logger.warning("Failed to fetch %s: %s", url, exc)
            return _FAILED
        except Exception:
            logger.exception("Failed to process %s", url)
            return _FAILED
        finally:
            slots.release()

    seen: set[str] = set()
    try:
        with ThreadPoolExecutor(max_workers=settings.parallelism) as pool:
            futures = []
            for url in urls:
                if not is_allowed(url, settings.allowed_domains):
                    logger.warning("Skipping %s: forbidden domain", url)
                    stats.skipped += 1
                    continue
                if url in seen and not settings.allow_revisit:
                    logger.debug("Skipping %s: already visited", url)
                    stats.skipped += 1
                    continue
                seen.add(url)

                slots.acquire()
                pacer.wait(url_host(url))
                echo(f"Visiting: {url}")
                futures.append(pool.submit(_visit, url))
                stats.dispatched += 1

            for future in as_completed(futures):
                outcome = future.result()
                if outcome == _WRITTEN:
                    stats.written += 1
                elif outcome == _EMPTY:
                    stats.empty += 1
                else:
                    stats.failed += 1
    finally:
        if owns_client:
            client.close()

    stats.elapsed = time.monotonic() - start
    return stats
