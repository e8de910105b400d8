"""Pydantic schemas for citizen profiles, schemes and eligibility results.

Pure data classes — no DB dependencies. Used as the boundary types between
the store adapters, the evaluator and the recommendation engine.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Citizen profile
# ---------------------------------------------------------------------------


class CitizenProfileBase(BaseModel):
    """Fields a citizen can supply about themselves."""

    full_name: str = Field(min_length=1)
    state: str = Field(min_length=1)
    district: str | None = None
    pincode: str | None = Field(default=None, pattern=r"^\d{6}$")
    annual_income: int | None = Field(default=None, ge=0)
    category: str | None = None         # General, OBC, SC, ST
    occupation: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    education: str | None = None
    family_size: int | None = Field(default=None, ge=1)
    has_disability: bool = False
    disability_type: str | None = None
    language_preference: str = "en"
    additional_details: dict[str, Any] | None = None


class CitizenProfileCreate(CitizenProfileBase):
    """Insert payload. A user owns exactly one profile."""

    user_id: str = Field(min_length=1)


_NON_NULLABLE_PROFILE_FIELDS = frozenset({"full_name", "state", "has_disability", "language_preference"})


class CitizenProfileUpdate(BaseModel):
    """Partial update — only fields explicitly set are applied."""

    full_name: str | None = Field(default=None, min_length=1)
    state: str | None = Field(default=None, min_length=1)
    district: str | None = None
    pincode: str | None = Field(default=None, pattern=r"^\d{6}$")
    annual_income: int | None = Field(default=None, ge=0)
    category: str | None = None
    occupation: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    education: str | None = None
    family_size: int | None = Field(default=None, ge=1)
    has_disability: bool | None = None
    disability_type: str | None = None
    language_preference: str | None = None
    additional_details: dict[str, Any] | None = None

    def changes(self) -> dict[str, Any]:
        """Fields the caller actually sent.

        An explicit null for a non-nullable field is ignored.
        """
        sent = self.model_dump(exclude_unset=True)
        return {k: v for k, v in sent.items() if v is not None or k not in _NON_NULLABLE_PROFILE_FIELDS}


class CitizenProfile(CitizenProfileBase):
    """A stored profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Scheme catalog
# ---------------------------------------------------------------------------


def _coerce_target_set(value: Any) -> list[str] | None:
    """Normalize a target-categories/occupations field.

    Accepts None, a list/tuple/set of strings, or a JSON-encoded list.
    Empty means unrestricted and becomes None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            msg = f"Expected a JSON list of strings, got {value!r}"
            raise ValueError(msg) from exc
    if isinstance(value, set | frozenset):
        value = sorted(value)
    if not isinstance(value, list | tuple):
        msg = f"Expected a list of strings, got {type(value).__name__}"
        raise ValueError(msg)
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            msg = f"Target values must be strings, got {item!r}"
            raise ValueError(msg)
        if item not in items:
            items.append(item)
    return items or None


class SchemeBase(BaseModel):
    """Catalog fields supplied by administrative seeding."""

    name: str = Field(min_length=1)
    description: str
    category: str
    ministry: str
    state: str | None = None           # None = central scheme
    eligibility_criteria: dict[str, Any] = Field(default_factory=dict)
    benefits: str
    application_process: str
    documents: list[str] | None = None
    application_url: str | None = None
    is_active: bool = True

    # Scoring inputs — None means unrestricted
    max_income: int | None = Field(default=None, ge=0)
    min_age: int | None = Field(default=None, ge=0)
    max_age: int | None = Field(default=None, ge=0)
    target_categories: list[str] | None = None
    target_occupations: list[str] | None = None

    @field_validator("target_categories", "target_occupations", mode="before")
    @classmethod
    def validate_target_set(cls, v: Any) -> list[str] | None:
        return _coerce_target_set(v)


class SchemeCreate(SchemeBase):
    """Insert payload for catalog seeding."""


class Scheme(SchemeBase):
    """A stored catalog entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Eligibility
# ---------------------------------------------------------------------------


class EligibilityResult(BaseModel):
    """Outcome of evaluating one profile against one scheme."""

    eligible: bool = False
    score: int = 0
    reasons: list[str] = Field(default_factory=list)
    missing_criteria: list[str] = Field(default_factory=list)
