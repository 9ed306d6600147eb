"""
Pydantic data models for exposure discovery and risk assessment.

Field names are snake_case in Python; every model serializes with the
camelCase keys the dashboard consumes (``model_dump(by_alias=True)``).
"""

from datetime import datetime
from typing import Optional, List, Tuple
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .enums import Severity, RemovalDifficulty, BrokerCategory, Grade, DataSource


def host_from_url(url: str) -> str:
    """Lower-cased hostname of ``url`` without a leading ``www.`` ("" if unparseable)."""
    try:
        host = urlparse(url).hostname or ""
    except (ValueError, TypeError, AttributeError):
        return ""
    host = host.lower()
    if host.startswith("www."):
        host = host[4:]
    return host


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RawHit(_CamelModel):
    """One search result before enrichment."""
    title: str = Field("", description="Result title")
    link: str = Field(..., description="Absolute result URL")
    snippet: str = Field("", description="Result text, may be empty")
    source: str = Field("", description="Hostname without leading www.")

    @field_validator("snippet", "title", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return v or ""

    @model_validator(mode="after")
    def derive_source(self) -> "RawHit":
        """Fill or normalize ``source`` from the link."""
        source = (self.source or host_from_url(self.link)).strip().lower()
        if source.startswith("www."):
            source = source[4:]
        self.source = source
        return self

    @classmethod
    def from_url(cls, title: str, link: str, snippet: str = "") -> "RawHit":
        return cls(title=title, link=link, snippet=snippet, source=host_from_url(link))


class BrokerInfo(_CamelModel):
    """Registry metadata for one known data-broker domain."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    display_name: str = Field(..., description="Human-readable site name")
    category: BrokerCategory
    severity: Severity
    removal_difficulty: RemovalDifficulty
    removal_url: str = Field(..., description="Opt-out / suppression page")
    data_types: Tuple[str, ...] = Field(..., min_length=1, description="Data categories the site publishes")
    weight: int = Field(..., gt=0, description="Contribution to the risk score")


class Exposure(_CamelModel):
    """One confirmed appearance of the subject's data on a site."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    site: str = Field(..., description="Hostname as found")
    site_name: str = Field(..., description="Registry display name, or hostname if unknown")
    url: str
    data_found: List[str] = Field(..., description="Data categories exposed")
    severity: Severity
    removal_difficulty: RemovalDifficulty
    removal_url: Optional[str] = None
    removal_instructions: Optional[str] = None
    snippet: Optional[str] = None

    @field_validator("data_found")
    @classmethod
    def validate_data_found(cls, v: List[str]) -> List[str]:
        """Drop duplicates, keep order, never empty."""
        seen = []
        for tag in v:
            if tag not in seen:
                seen.append(tag)
        if not seen:
            raise ValueError("data_found must contain at least one category")
        return seen


class RiskStats(_CamelModel):
    """Exposure counts by severity."""
    total_exposures: int = Field(0, ge=0)
    critical_count: int = Field(0, ge=0)
    high_count: int = Field(0, ge=0)
    medium_count: int = Field(0, ge=0)
    low_count: int = Field(0, ge=0)

    @model_validator(mode="after")
    def validate_sum(self) -> "RiskStats":
        parts = self.critical_count + self.high_count + self.medium_count + self.low_count
        if parts != self.total_exposures:
            raise ValueError(
                f"Severity counts ({parts}) do not add up to total ({self.total_exposures})"
            )
        return self

    @classmethod
    def from_exposures(cls, exposures: List[Exposure]) -> "RiskStats":
        def count(sev: Severity) -> int:
            return sum(1 for e in exposures if e.severity == sev)

        return cls(
            total_exposures=len(exposures),
            critical_count=count(Severity.CRITICAL),
            high_count=count(Severity.HIGH),
            medium_count=count(Severity.MEDIUM),
            low_count=count(Severity.LOW),
        )


class RiskAssessment(_CamelModel):
    """Terminal output of the exposure pipeline."""
    score: int = Field(..., ge=0, le=100, description="0 = no risk, 100 = highest risk")
    grade: Grade
    summary: str
    exposures: List[Exposure] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    stats: RiskStats = Field(default_factory=RiskStats)
    data_source: DataSource = Field(
        DataSource.NONE,
        description="Which search tier produced the underlying hits",
    )

    @model_validator(mode="after")
    def validate_stats(self) -> "RiskAssessment":
        if self.stats.total_exposures != len(self.exposures):
            raise ValueError(
                f"stats.total_exposures={self.stats.total_exposures} "
                f"but {len(self.exposures)} exposures supplied"
            )
        return self


class ScanRecord(_CamelModel):
    """
    Flattened raw hit as stored by a periodic-scan job.

    The pipeline only builds these; persisting them and moving ``status``
    beyond "new" is the caller's business.
    """
    title: str
    link: str
    source: str
    snippet: str = ""
    status: str = "new"
    query: str
    city_state: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    scan_type: str = "manual"
    timestamp: datetime = Field(default_factory=datetime.utcnow)
