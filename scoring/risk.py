"""
Risk Scorer. Aggregates Exposures into a 0-100 score, letter grade,
summary and prioritized recommendations.

Scoring:
  - Each exposure adds its broker's registry weight (10 if the site is unknown)
  - The sum is capped at 100
  - Grades: <=10 A, <=25 B, <=50 C, <=75 D, otherwise F
"""

from __future__ import annotations

import logging
from typing import List, Optional

from models.enums import DataSource, Grade, RemovalDifficulty, Severity
from models.schema import Exposure, RiskAssessment, RiskStats
from search.broker_registry import BrokerRegistry

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 10
MAX_SCORE = 100

# (inclusive upper bound, grade)
GRADE_BANDS = [
    (10, Grade.A),
    (25, Grade.B),
    (50, Grade.C),
    (75, Grade.D),
]

REC_CRITICAL_FIRST = (
    "🚨 Priority: Remove your data from critical-risk sites like BeenVerified, "
    "MyLife, and Intelius first"
)
REC_EASY_REMOVALS = (
    "✅ Start with easy removals: Some sites like Spokeo and TruePeopleSearch "
    "have simple opt-out processes"
)
REC_SOCIAL_PRIVACY = (
    "🔒 Review privacy settings on your social media profiles to limit public visibility"
)
REC_EMAIL_ALIASES = (
    "📧 Consider using email aliases for online signups to prevent future data broker listings"
)
REC_PO_BOX = "📍 Use a PO Box or virtual mailbox instead of your home address when possible"
REC_RECURRING_SCANS = "🔄 Set up recurring monthly scans to monitor for new exposures"

RECURRING_SCAN_THRESHOLD = 5
SOCIAL_SITE_MARKERS = ("linkedin", "facebook")

ZERO_RISK_SUMMARY = (
    "Excellent! No significant data exposure found on major data broker sites."
)
ZERO_RISK_RECOMMENDATIONS = [
    "Continue monitoring your digital footprint regularly",
    "Set up Google Alerts for your name",
    "Review privacy settings on social media accounts",
]


def grade_for_score(score: int) -> Grade:
    """Letter grade for a score; band boundaries belong to the lower grade."""
    for upper, grade in GRADE_BANDS:
        if score <= upper:
            return grade
    return Grade.F


def summarize(score: int, stats: RiskStats) -> str:
    """One-paragraph summary selected by score band."""
    total = stats.total_exposures
    if score >= 75:
        return (
            f"Critical exposure level. Your personal information is widely available on "
            f"{total} data broker sites, including {stats.critical_count} critical-risk sources."
        )
    if score >= 50:
        return (
            f"High exposure level. Your data appears on {total} sites. "
            f"Immediate action recommended to reduce your digital footprint."
        )
    if score >= 25:
        return (
            f"Moderate exposure level. Found {total} instances of your data online. "
            f"Consider removing from high-risk sources."
        )
    return (
        f"Low exposure level. Limited data found on {total} sites. "
        f"Good digital hygiene practices detected."
    )


def recommend(exposures: List[Exposure], stats: RiskStats) -> List[str]:
    """Recommendations in fixed priority order."""
    recs: List[str] = []

    if stats.critical_count > 0:
        recs.append(REC_CRITICAL_FIRST)

    if any(e.removal_difficulty == RemovalDifficulty.EASY for e in exposures):
        recs.append(REC_EASY_REMOVALS)

    if any(marker in e.site for e in exposures for marker in SOCIAL_SITE_MARKERS):
        recs.append(REC_SOCIAL_PRIVACY)

    recs.append(REC_EMAIL_ALIASES)
    recs.append(REC_PO_BOX)

    if stats.total_exposures >= RECURRING_SCAN_THRESHOLD:
        recs.append(REC_RECURRING_SCANS)

    return recs


class RiskScorer:
    """Compute a RiskAssessment from a list of Exposures."""

    def __init__(self, registry: Optional[BrokerRegistry] = None):
        self._registry = registry or BrokerRegistry.default()

    def weight_of(self, exposure: Exposure) -> int:
        info = self._registry.lookup(exposure.url)
        return info.weight if info is not None else DEFAULT_WEIGHT

    def score(
        self,
        exposures: List[Exposure],
        data_source: DataSource = DataSource.NONE,
    ) -> RiskAssessment:
        if not exposures:
            return RiskAssessment(
                score=0,
                grade=Grade.A,
                summary=ZERO_RISK_SUMMARY,
                exposures=[],
                recommendations=list(ZERO_RISK_RECOMMENDATIONS),
                stats=RiskStats(),
                data_source=data_source,
            )

        stats = RiskStats.from_exposures(exposures)
        raw_score = sum(self.weight_of(e) for e in exposures)
        score = min(MAX_SCORE, raw_score)
        logger.debug("Raw score %d, capped %d", raw_score, score)

        # sorted() is stable, so discovery order breaks severity ties
        ordered = sorted(exposures, key=lambda e: e.severity.rank)

        return RiskAssessment(
            score=score,
            grade=grade_for_score(score),
            summary=summarize(score, stats),
            exposures=ordered,
            recommendations=recommend(exposures, stats),
            stats=stats,
            data_source=data_source,
        )
