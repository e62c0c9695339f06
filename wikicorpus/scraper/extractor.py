"""Content extraction: turns a :class:`RawPage` into a :class:`Record`."""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup

from wikicorpus.scraper.models import RawPage, Record, rfc3339_nano

logger = logging.getLogger(__name__)

BODY_SELECTOR = "div.mw-parser-output"
TEXT_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6", "p"]

# A control word such as \alpha or \mathcal, plus at most one un-nested
# brace argument directly after it.
_LATEX_PATTERN = re.compile(r"\\[A-Za-z]+(\{[^}]*\})?")
# ASCII whitespace only; non-breaking spaces survive.
_SPACE_PATTERN = re.compile(r"[ \t\n\f\r]+")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _text_parts(html: str) -> list[str]:
    """Return the stripped, non-empty heading/paragraph texts of the article body.

    Only the first ``div.mw-parser-output`` is considered; elements are
    visited in document order, nested ones included.
    """
    soup = BeautifulSoup(html, "lxml")
    body = soup.select_one(BODY_SELECTOR)
    if body is None:
        return []

    parts: list[str] = []
    for el in body.find_all(TEXT_TAGS):
        text = el.get_text().strip()
        if text:
            parts.append(text)
    return parts


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalise_text(text: str) -> str:
    """Strip LaTeX-ish control words, then collapse whitespace runs to one space.

    Leading and trailing whitespace is collapsed, not trimmed.
    """
    text = _LATEX_PATTERN.sub("", text)
    return _SPACE_PATTERN.sub(" ", text)


def extract_text(html: str) -> str | None:
    """Return the normalised article text of *html*, or ``None`` to skip the page.

    ``None`` means there was no article body or no non-empty heading or
    paragraph in it.  A page whose text normalises down to ``""`` or ``" "``
    still returns that string.
    """
    parts = _text_parts(html)
    if not parts:
        return None
    return normalise_text("\n".join(parts))


def build_record(url: str, text: str) -> Record:
    """Pair *text* with *url* and the current time."""
    return Record(url=url, text=text, crawled_at=rfc3339_nano())


def extract_record(raw: RawPage) -> Record | None:
    """Extract *raw* into a :class:`Record`, or ``None`` if it has no text."""
    text = extract_text(raw.html)
    if text is None:
        logger.debug("No article text in %s", raw.url)
        return None
    return build_record(raw.url, text)
