"""URL source: the list of pages to crawl."""

from __future__ import annotations

from pathlib import Path


def read_urls(path: str | Path) -> list[str]:
    """Return the trimmed, non-empty lines of the UTF-8 text file at *path*.

    Order is preserved and no validation beyond non-emptiness is done;
    malformed URLs fail later, at fetch time.

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    urls: list[str] = []
    with open(path, encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if line:
                urls.append(line)
    return urls
