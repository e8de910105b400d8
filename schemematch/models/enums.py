"""Domain enums used across SQLAlchemy models and Pydantic schemas.

All enums use the str mixin so values serialize straight to JSON.
"""

from __future__ import annotations

from enum import Enum


class SocialCategory(str, Enum):
    """Closed social-category set collected on the citizen profile."""

    GENERAL = "General"
    OBC = "OBC"
    SC = "SC"
    ST = "ST"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class SchemeCategory(str, Enum):
    """Known catalog categories. Scheme.category itself is free text."""

    AGRICULTURE = "Agriculture"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    HOUSING = "Housing"
    EMPLOYMENT = "Employment"
    SOCIAL_WELFARE = "Social Welfare"
    WOMEN_AND_CHILD = "Women & Child"
    DISABILITY = "Disability"
    FINANCIAL_INCLUSION = "Financial Inclusion"


class EligibilityStatus(str, Enum):
    """Presentation tag attached to every recommendation."""

    ELIGIBLE = "eligible"
    PARTIALLY_ELIGIBLE = "partially_eligible"
