"""Pydantic schemas for persisted and enriched recommendations."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from schemematch.models.enums import EligibilityStatus
from schemematch.schemas.eligibility import EligibilityResult, Scheme


class NewRecommendation(BaseModel):
    """A recommendation row ready to be inserted."""

    user_id: str
    scheme_id: str
    score: float = Field(gt=0)
    reason: str | None = None


class Recommendation(NewRecommendation):
    """A stored recommendation row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime


class RecommendationWithScheme(BaseModel):
    """Recommendation joined with its scheme and live eligibility detail.

    `score` is the score at generation time; `eligibility_status` and
    `eligibility_details` reflect the profile as it is now.
    """

    id: str
    user_id: str
    scheme: Scheme
    score: float
    reasoning: str
    eligibility_status: EligibilityStatus
    eligibility_details: EligibilityResult
    generated_at: datetime
