"""HTTP fetcher with a domain allow-list and per-host politeness pacing."""

from __future__ import annotations

import logging
import random
import threading
import time
from typing import Callable, Iterable
from urllib.parse import urlsplit

import httpx

from wikicorpus.config import Settings
from wikicorpus.scraper.models import RawPage

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """A per-URL failure raised by the fetcher itself (not the transport)."""


class DisallowedDomainError(FetchError):
    """The URL, or a redirect hop, points at a host outside the allow-list."""

    def __init__(self, url: str) -> None:
        super().__init__(f"forbidden domain: {url}")
        self.url = url


# ---------------------------------------------------------------------------
# Allow-list
# ---------------------------------------------------------------------------

def url_host(url: str) -> str:
    """Return the lower-cased host of *url*, or ``""`` if it has none."""
    try:
        return (urlsplit(url).hostname or "").lower()
    except ValueError:
        return ""


def is_allowed(url: str, allowed_domains: Iterable[str]) -> bool:
    """Return ``True`` if *url* is http(s) and its host is exactly an allowed one."""
    try:
        scheme = urlsplit(url).scheme.lower()
    except ValueError:
        return False
    if scheme not in ("http", "https"):
        return False
    host = url_host(url)
    return bool(host) and host in {d.lower() for d in allowed_domains}


def build_client(settings: Settings) -> httpx.Client:
    """Return a thread-safe ``httpx.Client`` configured from *settings*.

    Redirects are followed, but every hop is checked against the allow-list
    before it is sent.
    """
    allowed = tuple(settings.allowed_domains)

    def _check_host(request: httpx.Request) -> None:
        if not is_allowed(str(request.url), allowed):
            raise DisallowedDomainError(str(request.url))

    return httpx.Client(
        headers={"User-Agent": settings.user_agent},
        timeout=settings.request_timeout,
        follow_redirects=True,
        event_hooks={"request": [_check_host]},
    )


# ---------------------------------------------------------------------------
# Politeness
# ---------------------------------------------------------------------------

class HostPacer:
    """Spaces out consecutive dispatches to the same host.

    Each call to :meth:`wait` reserves the host's next slot: the previous
    slot plus a uniform random delay in ``[0, max_delay]``.  Reservation is
    serialised so slots follow call order; the sleep itself happens outside
    the lock so other hosts are not held up.
    """

    def __init__(
        self,
        max_delay: float,
        sleep: Callable[[float], None] = time.sleep,
        uniform: Callable[[float, float], float] = random.uniform,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_delay = max_delay
        self._sleep = sleep
        self._uniform = uniform
        self._clock = clock
        self._lock = threading.Lock()
        self._next_slot: dict[str, float] = {}

    def wait(self, host: str) -> float:
        """Block until *host* may be contacted again; return seconds slept."""
        with self._lock:
            now = self._clock()
            slot = max(now, self._next_slot.get(host, now))
            delay = self._uniform(0.0, self.max_delay) if self.max_delay > 0 else 0.0
            self._next_slot[host] = slot + delay
        pause = slot - now
        if pause > 0:
            self._sleep(pause)
        return pause


# ---------------------------------------------------------------------------
# Fetch
# ---------------------------------------------------------------------------

def fetch_url(client: httpx.Client, url: str, allowed_domains: Iterable[str]) -> RawPage:
    """Fetch *url* and return a :class:`RawPage` for the final response.

    Raises:
        DisallowedDomainError: If *url* (or a redirect target) is not allowed.
            No request is sent for the offending hop.
        httpx.HTTPStatusError: If the server returns a non-2xx status code.
        httpx.RequestError: On DNS, connection or timeout failures.
    """
    if not is_allowed(url, allowed_domains):
        raise DisallowedDomainError(url)

    response = client.get(url)
    response.raise_for_status()

    return RawPage(url=str(response.url), html=response.text, status_code=response.status_code)
