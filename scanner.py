"""
Exposure scanner: the pipeline's single entry point.

    query construction → FallbackOrchestrator → dedupe_hits
        → ExposureBuilder → RiskScorer → RiskAssessment

Nothing here persists anything; callers store the assessment (or the
scan records) themselves.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from config.settings import ScanSettings
from errors import InvalidSubjectError
from models.enums import DataSource
from models.schema import RawHit, RiskAssessment, ScanRecord
from scoring.risk import RiskScorer
from search.broker_registry import BrokerRegistry
from search.client import (
    DuckDuckGoHTMLProvider,
    GoogleCSEProvider,
    SearchProvider,
    SyntheticProvider,
)
from search.exposures import ExposureBuilder, dedupe_hits
from search.orchestrator import FallbackOrchestrator, SearchRun, SearchTier
from search.query_gen import QueryGenerator

logger = logging.getLogger(__name__)

TIER_DATA_SOURCE: Dict[SearchTier, DataSource] = {
    SearchTier.PRIMARY: DataSource.LIVE,
    SearchTier.SECONDARY: DataSource.DEGRADED,
    SearchTier.SYNTHETIC: DataSource.SYNTHETIC,
}


@dataclass
class Subject:
    """The person being scanned."""

    name: str
    city_state: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def create(
        cls,
        name: Optional[str],
        city_state: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Subject:
        """Validate and normalize input; blank optionals become None."""
        if name is None or not name.strip():
            raise InvalidSubjectError("Full name is required")
        return cls(
            name=" ".join(name.split()),
            city_state=_blank_to_none(city_state),
            email=_blank_to_none(email),
            phone=_blank_to_none(phone),
        )


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class ScanResult:
    """Assessment plus the deduplicated raw hits and search provenance behind it."""

    assessment: RiskAssessment
    hits: List[RawHit]
    run: SearchRun


class ExposureScanner:
    """
    Discover a subject's data-broker exposures and score them.

    Providers default to the configured Google CSE / DuckDuckGo / synthetic
    chain; pass ``providers`` (primary, secondary, synthetic) to substitute
    your own.
    """

    def __init__(
        self,
        settings: Optional[ScanSettings] = None,
        registry: Optional[BrokerRegistry] = None,
        providers: Optional[Dict[SearchTier, Optional[SearchProvider]]] = None,
    ):
        self._settings = settings or ScanSettings()
        self._registry = registry or BrokerRegistry.default()
        self._providers = providers
        self._builder = ExposureBuilder(self._registry)
        self._scorer = RiskScorer(self._registry)

    def _default_providers(self, subject: Subject) -> Dict[SearchTier, Optional[SearchProvider]]:
        s = self._settings
        return {
            SearchTier.PRIMARY: GoogleCSEProvider(
                api_key=s.google_api_key,
                cx=s.google_search_cx,
                timeout=s.timeout,
            ),
            SearchTier.SECONDARY: DuckDuckGoHTMLProvider(
                enabled=s.secondary_enabled,
                timeout=s.timeout,
            ),
            SearchTier.SYNTHETIC: SyntheticProvider(
                name=subject.name,
                city_state=subject.city_state,
                email=subject.email,
                enabled=s.synthetic_enabled,
            ),
        }

    def scan(
        self,
        name: Optional[str],
        city_state: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> ScanResult:
        """Run the full pipeline and keep the intermediate hits."""
        subject = Subject.create(name, city_state, email, phone)
        logger.info(
            "Scanning for %r (location: %s, email: %s, phone: %s)",
            subject.name,
            subject.city_state or "N/A",
            "yes" if subject.email else "no",
            "yes" if subject.phone else "no",
        )

        if self._providers is None:
            providers = self._default_providers(subject)
        else:
            providers = self._providers
        orchestrator = FallbackOrchestrator(
            primary=providers.get(SearchTier.PRIMARY),
            secondary=providers.get(SearchTier.SECONDARY),
            synthetic=providers.get(SearchTier.SYNTHETIC),
            cancel_event=cancel_event,
        )
        qgen = QueryGenerator(
            name=subject.name,
            domains=self._registry.domains,
            city_state=subject.city_state,
            email=subject.email,
            phone=subject.phone,
            max_variants=self._settings.max_variants,
        )

        run = orchestrator.run(qgen)
        hits = dedupe_hits(run.hits)
        exposures = self._builder.build_all(hits, subject.name)

        if hits and run.tier is not None:
            data_source = TIER_DATA_SOURCE[run.tier]
        else:
            data_source = DataSource.NONE

        assessment = self._scorer.score(exposures, data_source=data_source)
        logger.info(
            "Found %d exposures (score %d, grade %s, source %s)",
            assessment.stats.total_exposures,
            assessment.score,
            assessment.grade.value,
            data_source.value,
        )
        return ScanResult(assessment=assessment, hits=hits, run=run)

    def assess(
        self,
        name: Optional[str],
        city_state: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> RiskAssessment:
        return self.scan(name, city_state, email, phone, cancel_event).assessment


def assess(
    name: Optional[str],
    city_state: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    *,
    settings: Optional[ScanSettings] = None,
    providers: Optional[Dict[SearchTier, Optional[SearchProvider]]] = None,
    registry: Optional[BrokerRegistry] = None,
    cancel_event: Optional[threading.Event] = None,
) -> RiskAssessment:
    """Assess a person's data-broker exposure. Raises InvalidSubjectError on a blank name."""
    scanner = ExposureScanner(settings=settings, registry=registry, providers=providers)
    return scanner.assess(name, city_state, email, phone, cancel_event=cancel_event)


def to_scan_records(
    hits: List[RawHit],
    subject: Subject,
    scan_type: str = "manual",
) -> List[ScanRecord]:
    """Flatten deduplicated hits into "new" scan records for a caller to persist."""
    return [
        ScanRecord(
            title=h.title,
            link=h.link,
            source=h.source,
            snippet=h.snippet,
            query=subject.name,
            city_state=subject.city_state,
            email=subject.email,
            phone=subject.phone,
            scan_type=scan_type,
        )
        for h in hits
    ]
