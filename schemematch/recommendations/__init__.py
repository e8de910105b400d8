"""Recommendation engine — ranked, persisted scheme recommendations per user."""

from schemematch.recommendations.engine import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_MIN_SCORE,
    ELIGIBLE_REASON,
    PARTIALLY_ELIGIBLE_REASON,
    RecommendationEngine,
)
from schemematch.schemas.recommendation import RecommendationWithScheme

__all__ = [
    "RecommendationEngine",
    "RecommendationWithScheme",
    "DEFAULT_MAX_RESULTS",
    "DEFAULT_MIN_SCORE",
    "ELIGIBLE_REASON",
    "PARTIALLY_ELIGIBLE_REASON",
]
