"""
Scan settings.

API keys are loaded exclusively from environment variables (.env file).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from search.query_gen import MAX_QUERY_VARIANTS

MIN_TIMEOUT_SECONDS = 10.0
MAX_TIMEOUT_SECONDS = 30.0


def _is_placeholder(value: Optional[str]) -> bool:
    """True for unset credentials or template values like 'your_api_key'."""
    return not value or "your_" in value


def _env_bool(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


@dataclass
class ScanSettings:
    """Configuration for search providers and the fallback chain."""

    google_api_key: str = ""
    google_search_cx: str = ""

    # Per-call HTTP timeout in seconds
    timeout: float = 15.0

    # Primary-tier query variants issued per scan
    max_variants: int = 3

    secondary_enabled: bool = True
    synthetic_enabled: bool = True

    log_level: str = "INFO"

    def __post_init__(self):
        self.timeout = min(MAX_TIMEOUT_SECONDS, max(MIN_TIMEOUT_SECONDS, float(self.timeout)))
        if not 1 <= self.max_variants <= MAX_QUERY_VARIANTS:
            raise ValueError(
                f"max_variants must be between 1 and {MAX_QUERY_VARIANTS}, got {self.max_variants}"
            )

    @property
    def has_google_credentials(self) -> bool:
        return not (
            _is_placeholder(self.google_api_key) or _is_placeholder(self.google_search_cx)
        )

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> ScanSettings:
        """Load configuration from environment variables (and a .env file if present)."""
        load_dotenv(dotenv_path)
        return cls(
            google_api_key=os.getenv("GOOGLE_API_KEY", ""),
            google_search_cx=os.getenv("GOOGLE_SEARCH_CX", ""),
            timeout=float(os.getenv("SEARCH_TIMEOUT", "15")),
            max_variants=int(os.getenv("SEARCH_MAX_VARIANTS", "3")),
            secondary_enabled=_env_bool("SECONDARY_SEARCH_ENABLED"),
            synthetic_enabled=_env_bool("SYNTHETIC_FALLBACK_ENABLED"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
