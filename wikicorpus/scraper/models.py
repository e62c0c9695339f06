"""Data models for the scraper pipeline."""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass


def rfc3339_nano(ns: int | None = None) -> str:
    """Format a nanosecond UNIX timestamp as an RFC 3339 UTC string.

    Always nine fractional digits, e.g. ``2024-01-02T15:04:05.123456789Z``.
    Defaults to the current wall-clock time.
    """
    if ns is None:
        ns = time.time_ns()
    seconds, fraction = divmod(ns, 1_000_000_000)
    stamp = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(seconds))
    return f"{stamp}.{fraction:09d}Z"


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch.

    ``url`` is the final URL after redirects, not necessarily the one asked for.
    """

    url: str
    html: str
    status_code: int


@dataclass
class Record:
    """One NDJSON line: a page's extracted text and where/when it came from."""

    url: str
    text: str
    crawled_at: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class CrawlStats:
    """Counters for a finished crawl."""

    dispatched: int = 0
    written: int = 0
    empty: int = 0
    failed: int = 0
    skipped: int = 0
    elapsed: float = 0.0

    def summary(self) -> str:
        return (
            f"{self.dispatched} fetched, {self.written} written, "
            f"{self.empty} empty, {self.failed} failed, {self.skipped} skipped"
        )
