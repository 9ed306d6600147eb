"""
Query Generator — builds site-restricted search queries for a subject.

Variants, in priority order:
  1. Full name
  2. Full name + city/state   (if a location is known)
  3. Email address            (if known)
  4. Phone number             (if known and at least 10 digits)

Only the first ``max_variants`` are issued against the primary provider.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

MAX_QUERY_VARIANTS = 3
MIN_PHONE_DIGITS = 10


@dataclass
class SearchQuery:
    """A generated search query with metadata."""

    query: str
    purpose: str  # "name", "name+location", "email", "phone"
    site_restriction: List[str] = field(default_factory=list)


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    """Digits-only phone number, or None when fewer than 10 digits remain."""
    if not phone:
        return None
    digits = re.sub(r"\D", "", phone)
    if len(digits) < MIN_PHONE_DIGITS:
        return None
    return digits


class QueryGenerator:
    """Generate search queries for one subject against a set of broker domains."""

    def __init__(
        self,
        name: str,
        domains: Sequence[str],
        city_state: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        max_variants: int = MAX_QUERY_VARIANTS,
    ):
        self._name = name.strip()
        self._domains = list(domains)
        self._city_state = (city_state or "").strip() or None
        self._email = (email or "").strip() or None
        self._phone = normalize_phone(phone)
        self._max_variants = max(1, min(max_variants, MAX_QUERY_VARIANTS))

    @property
    def site_filter(self) -> str:
        """``(site:a.com OR site:b.com ...)`` clause for the broker domains."""
        if not self._domains:
            return ""
        joined = " OR ".join(f"site:{d}" for d in self._domains)
        return f"({joined})"

    def _restrict(self, terms: str) -> str:
        clause = self.site_filter
        return f"{terms} {clause}" if clause else terms

    def all_variants(self) -> List[SearchQuery]:
        """Every applicable variant, uncapped."""
        variants: List[SearchQuery] = [
            SearchQuery(
                query=self._restrict(f'"{self._name}"'),
                purpose="name",
                site_restriction=self._domains,
            )
        ]

        if self._city_state:
            variants.append(
                SearchQuery(
                    query=self._restrict(f'"{self._name}" "{self._city_state}"'),
                    purpose="name+location",
                    site_restriction=self._domains,
                )
            )

        if self._email:
            variants.append(
                SearchQuery(
                    query=self._restrict(f'"{self._email}"'),
                    purpose="email",
                    site_restriction=self._domains,
                )
            )

        if self._phone:
            variants.append(
                SearchQuery(
                    query=self._restrict(f'"{self._phone}"'),
                    purpose="phone",
                    site_restriction=self._domains,
                )
            )

        return variants

    def primary_queries(self) -> List[SearchQuery]:
        """Variants for the structured search API, capped to bound call volume."""
        return self.all_variants()[: self._max_variants]

    def secondary_queries(self) -> List[SearchQuery]:
        """The single broad name query used by the document-search fallback."""
        return self.all_variants()[:1]
