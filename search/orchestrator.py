"""
Search Fallback Orchestrator.

Walks the provider tiers in a fixed order:

  PRIMARY  ──(0 hits)──▶  SECONDARY  ──(0 hits)──▶  SYNTHETIC  ──▶  DONE
     │                        │
     └──(≥1 hit)──▶ DONE      └──(≥1 hit)──▶ DONE

A tier is never retried and never skipped once reached. Hits from the
queries inside a tier are concatenated in query order.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from errors import ProviderDisabledError
from models.schema import RawHit

from .client import SearchProvider, SearchProvenance
from .query_gen import QueryGenerator, SearchQuery

logger = logging.getLogger(__name__)


class SearchTier(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    SYNTHETIC = "synthetic"
    DONE = "done"


NEXT_TIER: Dict[SearchTier, SearchTier] = {
    SearchTier.PRIMARY: SearchTier.SECONDARY,
    SearchTier.SECONDARY: SearchTier.SYNTHETIC,
    SearchTier.SYNTHETIC: SearchTier.DONE,
}


@dataclass
class SearchRun:
    """Raw outcome of one pass through the fallback chain."""

    hits: List[RawHit] = field(default_factory=list)
    # Tier that produced the hits, or the last one attempted if none did
    tier: Optional[SearchTier] = None
    attempted: List[SearchTier] = field(default_factory=list)
    provenance: List[SearchProvenance] = field(default_factory=list)
    cancelled: bool = False


class FallbackOrchestrator:
    """
    Run the primary → secondary → synthetic search chain.

    Usage:
        orch = FallbackOrchestrator(
            primary=GoogleCSEProvider(api_key="...", cx="..."),
            secondary=DuckDuckGoHTMLProvider(),
            synthetic=SyntheticProvider(name="Jane Smith"),
        )
        run = orch.run(QueryGenerator("Jane Smith", registry.domains))
    """

    def __init__(
        self,
        primary: Optional[SearchProvider],
        secondary: Optional[SearchProvider],
        synthetic: Optional[SearchProvider],
        cancel_event: Optional[threading.Event] = None,
    ):
        self._providers: Dict[SearchTier, Optional[SearchProvider]] = {
            SearchTier.PRIMARY: primary,
            SearchTier.SECONDARY: secondary,
            SearchTier.SYNTHETIC: synthetic,
        }
        self._cancel = cancel_event

    def _cancelled(self) -> bool:
        return self._cancel is not None and self._cancel.is_set()

    def _queries_for(self, tier: SearchTier, qgen: QueryGenerator) -> List[SearchQuery]:
        if tier == SearchTier.PRIMARY:
            return qgen.primary_queries()
        return qgen.secondary_queries()

    def run(self, qgen: QueryGenerator) -> SearchRun:
        """Execute the chain until a tier yields hits, the chain ends, or cancellation."""
        output = SearchRun()
        state = SearchTier.PRIMARY

        while state != SearchTier.DONE:
            if self._cancelled():
                logger.info("Search cancelled before %s tier", state.value)
                output.cancelled = True
                break

            output.attempted.append(state)
            output.tier = state
            tier_hits = self._run_tier(state, self._queries_for(state, qgen), output)
            output.hits.extend(tier_hits)

            if output.cancelled:
                break

            if tier_hits:
                logger.info("%s tier produced %d hits", state.value, len(tier_hits))
                state = SearchTier.DONE
            else:
                logger.info("%s tier produced no hits, falling back", state.value)
                state = NEXT_TIER[state]

        return output

    def _run_tier(
        self,
        tier: SearchTier,
        queries: List[SearchQuery],
        output: SearchRun,
    ) -> List[RawHit]:
        """Issue every query of one tier in order, recording provenance."""
        provider = self._providers[tier]
        if provider is None:
            logger.info("No provider configured for %s tier", tier.value)
            return []

        tier_hits: List[RawHit] = []
        for q in queries:
            if self._cancelled():
                logger.info("Search cancelled during %s tier", tier.value)
                output.cancelled = True
                break

            try:
                results = provider.search(q.query)
            except ProviderDisabledError as e:
                logger.warning("%s tier unavailable: %s", tier.value, e)
                output.provenance.append(
                    SearchProvenance(
                        query=q.query,
                        provider=provider.provider_name,
                        tier=tier.value,
                        error=str(e),
                    )
                )
                break

            output.provenance.append(
                SearchProvenance(
                    query=q.query,
                    provider=provider.provider_name,
                    tier=tier.value,
                    result_count=len(results),
                )
            )
            tier_hits.extend(results)

        return tier_hits
