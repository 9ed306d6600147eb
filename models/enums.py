"""
Enumerations for exposure and risk data models.
"""

from enum import Enum


class Severity(str, Enum):
    """Qualitative risk level of a site holding the subject's data."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank, most severe first."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}


class RemovalDifficulty(str, Enum):
    """How hard it is to get a listing taken down."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class BrokerCategory(str, Enum):
    """Kind of site a broker registry entry describes."""
    PEOPLE_SEARCH = "people-search"
    BACKGROUND_CHECK = "background-check"
    SOCIAL = "social"
    SOCIAL_PROFESSIONAL = "social-professional"
    REPUTATION = "reputation"


class Grade(str, Enum):
    """Letter grade for a risk score."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class DataSource(str, Enum):
    """Where the hits behind an assessment came from."""
    LIVE = "live"
    DEGRADED = "degraded"
    SYNTHETIC = "synthetic"
    NONE = "none"
