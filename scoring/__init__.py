"""
Risk scoring for discovered exposures.
"""

from .risk import RiskScorer, grade_for_score, summarize, recommend

__all__ = [
    "RiskScorer",
    "grade_for_score",
    "summarize",
    "recommend",
]
