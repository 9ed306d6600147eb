"""
Models package initialization.
"""

from .enums import Severity, RemovalDifficulty, BrokerCategory, Grade, DataSource
from .schema import (
    RawHit,
    BrokerInfo,
    Exposure,
    RiskStats,
    RiskAssessment,
    ScanRecord,
    host_from_url,
)

__all__ = [
    "Severity",
    "RemovalDifficulty",
    "BrokerCategory",
    "Grade",
    "DataSource",
    "RawHit",
    "BrokerInfo",
    "Exposure",
    "RiskStats",
    "RiskAssessment",
    "ScanRecord",
    "host_from_url",
]
