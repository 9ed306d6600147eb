"""
Deduplication and enrichment of raw search hits into Exposures.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set

from models.enums import RemovalDifficulty, Severity
from models.schema import Exposure, RawHit

from .broker_registry import BrokerRegistry
from .classifier import classify_content

logger = logging.getLogger(__name__)


def dedupe_hits(hits: List[RawHit]) -> List[RawHit]:
    """Unique by link (case-insensitive); first occurrence wins, order kept."""
    unique: List[RawHit] = []
    seen: Set[str] = set()

    for hit in hits:
        key = hit.link.lower()
        if key not in seen:
            seen.add(key)
            unique.append(hit)

    return unique


class ExposureBuilder:
    """Turn raw hits into Exposures using the broker registry."""

    def __init__(self, registry: Optional[BrokerRegistry] = None):
        self._registry = registry or BrokerRegistry.default()

    def build(self, hit: RawHit, subject_name: Optional[str] = None) -> Exposure:
        info = self._registry.lookup(hit.link)

        if info is not None:
            return Exposure(
                site=hit.source,
                site_name=info.display_name,
                url=hit.link,
                data_found=list(info.data_types),
                severity=info.severity,
                removal_difficulty=info.removal_difficulty,
                removal_url=info.removal_url,
                removal_instructions=self._registry.removal_instructions(hit.link),
                snippet=hit.snippet,
            )

        logger.debug("Unknown site %s, classifying snippet", hit.source)
        return Exposure(
            site=hit.source,
            site_name=hit.source,
            url=hit.link,
            data_found=classify_content(hit.snippet, subject_name),
            severity=Severity.MEDIUM,
            removal_difficulty=RemovalDifficulty.MEDIUM,
            removal_instructions=self._registry.removal_instructions(hit.link),
            snippet=hit.snippet,
        )

    def build_all(self, hits: List[RawHit], subject_name: Optional[str] = None) -> List[Exposure]:
        return [self.build(h, subject_name) for h in hits]
