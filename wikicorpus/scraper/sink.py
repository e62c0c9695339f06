"""NDJSON output sink shared by all crawl workers."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import IO

from wikicorpus.scraper.models import Record

logger = logging.getLogger(__name__)


def serialise(record: Record) -> str:
    """Return *record* as one compact JSON object, without the newline."""
    return json.dumps(record.to_dict(), ensure_ascii=False, separators=(",", ":"))


class NdjsonSink:
    """Appends records to one UTF-8 stream, one JSON object per line.

    Writes are serialised with a lock so a record and its newline always
    land contiguously, whichever worker produced it.  Pass a path to have
    the sink create (truncate) and own the file, or an open text stream to
    write into it without taking ownership.
    """

    def __init__(self, target: str | Path | IO[str]) -> None:
        if isinstance(target, (str, Path)):
            self._stream: IO[str] = open(target, "w", encoding="utf-8", newline="\n")
            self._owned = True
        else:
            self._stream = target
            self._owned = False
        self._lock = threading.Lock()
        self.closed = False
        self.written = 0

    def write(self, record: Record) -> bool:
        """Append *record*; return ``False`` if it could not be serialised or written."""
        try:
            line = serialise(record) + "\n"
        except (TypeError, ValueError) as exc:
            logger.error("Dropping record for %s: %s", record.url, exc)
            return False

        with self._lock:
            if self.closed:
                raise ValueError("write to a closed NdjsonSink")
            try:
                self._stream.write(line)
            except OSError as exc:
                logger.error("Dropping record for %s: %s", record.url, exc)
                return False
            self.written += 1
        return True

    def close(self) -> None:
        with self._lock:
            if self.closed:
                return
            self.closed = True
            try:
                if self._owned:
                    self._stream.close()
                else:
                    self._stream.flush()
            except OSError as exc:
                logger.error("Failed to close output stream: %s", exc)

    def __enter__(self) -> NdjsonSink:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
