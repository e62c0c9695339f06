"""Centralised settings for the wikicorpus crawler.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).  The crawl core never
reads the environment itself; it is handed a :class:`Settings` instance.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_domains() -> tuple[str, ...]:
    raw = os.environ.get("WIKICORPUS_ALLOWED_DOMAINS", "en.wikipedia.org")
    return tuple(d.strip().lower() for d in raw.split(",") if d.strip())


def _env_bool(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetch policy
    # ------------------------------------------------------------------
    allowed_domains: tuple[str, ...] = field(default_factory=_env_domains)
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "WIKICORPUS_USER_AGENT", "wikicorpus/1.0 (+offline corpus builder)"
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("WIKICORPUS_REQUEST_TIMEOUT", "30.0"))
    )
    allow_revisit: bool = field(
        default_factory=lambda: _env_bool("WIKICORPUS_ALLOW_REVISIT")
    )

    # ------------------------------------------------------------------
    # Politeness
    # ------------------------------------------------------------------
    parallelism: int = field(
        default_factory=lambda: int(os.environ.get("WIKICORPUS_PARALLELISM", "2"))
    )
    random_delay: float = field(
        default_factory=lambda: float(os.environ.get("WIKICORPUS_RANDOM_DELAY", "2.0"))
    )

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("WIKICORPUS_LOG_LEVEL", "WARNING").upper()
    )

    def validate(self) -> None:
        """Raise ``ValueError`` if any setting is unusable."""
        if self.parallelism < 1:
            raise ValueError(f"parallelism must be >= 1, got {self.parallelism}")
        if self.random_delay < 0:
            raise ValueError(f"random_delay must be >= 0, got {self.random_delay}")
        if not self.allowed_domains:
            raise ValueError("allowed_domains must name at least one host")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"unknown log_level {self.log_level!r}")


# Module-level singleton — import this everywhere:
#   from wikicorpus.config import settings
settings = Settings()
