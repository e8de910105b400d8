"""SQLAlchemy ORM models for SchemeMatch.

Import all models here so Base.metadata.create_all() discovers them.
"""

from __future__ import annotations

from schemematch.models.base import Base
from schemematch.models.citizen_profile import CitizenProfileRecord
from schemematch.models.enums import (
    EligibilityStatus,
    Gender,
    SchemeCategory,
    SocialCategory,
)
from schemematch.models.recommendation import RecommendationRecord
from schemematch.models.scheme import SchemeRecord

__all__ = [
    # Base
    "Base",
    # Models
    "CitizenProfileRecord",
    "SchemeRecord",
    "RecommendationRecord",
    # Enums
    "EligibilityStatus",
    "Gender",
    "SchemeCategory",
    "SocialCategory",
]
