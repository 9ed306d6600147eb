"""
Search module. Finds the subject on data-broker sites through a
primary → secondary → synthetic fallback chain and turns the hits into
Exposures.
"""

from .client import (
    SearchProvider,
    SearchProvenance,
    GoogleCSEProvider,
    DuckDuckGoHTMLProvider,
    SyntheticProvider,
    get_search_provider,
)
from .broker_registry import BrokerRegistry, DEFAULT_BROKERS
from .classifier import classify_content
from .query_gen import QueryGenerator, SearchQuery, normalize_phone
from .orchestrator import FallbackOrchestrator, SearchRun, SearchTier
from .exposures import ExposureBuilder, dedupe_hits

__all__ = [
    "SearchProvider",
    "SearchProvenance",
    "GoogleCSEProvider",
    "DuckDuckGoHTMLProvider",
    "SyntheticProvider",
    "get_search_provider",
    "BrokerRegistry",
    "DEFAULT_BROKERS",
    "classify_content",
    "QueryGenerator",
    "SearchQuery",
    "normalize_phone",
    "FallbackOrchestrator",
    "SearchRun",
    "SearchTier",
    "ExposureBuilder",
    "dedupe_hits",
]
