"""Scoring criteria for the eligibility evaluator.

Each check takes the profile, the scheme and the derived age and returns a
CriterionOutcome. Pure Python, deterministic — no I/O, never raises.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from schemematch.schemas.eligibility import CitizenProfile, Scheme

DISABILITY_KEYWORD = "disability"


class Criterion(StrEnum):
    """The scored criteria, in evaluation order."""

    CATEGORY = "category"
    OCCUPATION = "occupation"
    INCOME = "income"
    MIN_AGE = "min_age"
    MAX_AGE = "max_age"
    DISABILITY = "disability"


CRITERION_WEIGHTS: dict[Criterion, int] = {
    Criterion.CATEGORY: 20,
    Criterion.OCCUPATION: 20,
    Criterion.INCOME: 15,
    Criterion.MIN_AGE: 10,
    Criterion.MAX_AGE: 10,
    Criterion.DISABILITY: 25,
}


@dataclass(frozen=True)
class CriterionOutcome:
    """Result of one criterion check.

    `applicable` is False when the scheme does not define the criterion;
    such outcomes are neither reasons nor missing criteria.
    """

    criterion: Criterion
    applicable: bool
    met: bool = False
    description: str = ""

    @property
    def points(self) -> int:
        return CRITERION_WEIGHTS[self.criterion] if self.applicable and self.met else 0


def _not_applicable(criterion: Criterion) -> CriterionOutcome:
    return CriterionOutcome(criterion=criterion, applicable=False)


# ── Category / occupation ─────────────────────────────────────────────────


def check_category(profile: CitizenProfile, scheme: Scheme, age: int | None) -> CriterionOutcome:
    """Social category must be one the scheme targets."""
    if scheme.target_categories is None:
        return _not_applicable(Criterion.CATEGORY)
    if not profile.category:
        return CriterionOutcome(Criterion.CATEGORY, True, False, "Social category not provided in profile")
    if profile.category in scheme.target_categories:
        return CriterionOutcome(Criterion.CATEGORY, True, True, "Category eligible")
    return CriterionOutcome(
        Criterion.CATEGORY,
        True,
        False,
        f"Category {profile.category} is not covered (scheme targets {', '.join(scheme.target_categories)})",
    )


def check_occupation(profile: CitizenProfile, scheme: Scheme, age: int | None) -> CriterionOutcome:
    """Occupation must be one the scheme targets."""
    if scheme.target_occupations is None:
        return _not_applicable(Criterion.OCCUPATION)
    if not profile.occupation:
        return CriterionOutcome(Criterion.OCCUPATION, True, False, "Occupation not provided in profile")
    if profile.occupation in scheme.target_occupations:
        return CriterionOutcome(Criterion.OCCUPATION, True, True, "Occupation matches")
    return CriterionOutcome(
        Criterion.OCCUPATION,
        True,
        False,
        f"Occupation {profile.occupation} is not covered "
        f"(scheme targets {', '.join(scheme.target_occupations)})",
    )


# ── Income ────────────────────────────────────────────────────────────────


def check_income(profile: CitizenProfile, scheme: Scheme, age: int | None) -> CriterionOutcome:
    """Annual income must not exceed the scheme ceiling."""
    if scheme.max_income is None:
        return _not_applicable(Criterion.INCOME)
    if profile.annual_income is None:
        return CriterionOutcome(Criterion.INCOME, True, False, "Annual income not provided in profile")
    if profile.annual_income <= scheme.max_income:
        return CriterionOutcome(Criterion.INCOME, True, True, "Income matches criteria")
    return CriterionOutcome(
        Criterion.INCOME,
        True,
        False,
        f"Annual income exceeds the limit of {scheme.max_income}",
    )


# ── Age ───────────────────────────────────────────────────────────────────


def check_min_age(profile: CitizenProfile, scheme: Scheme, age: int | None) -> CriterionOutcome:
    if scheme.min_age is None:
        return _not_applicable(Criterion.MIN_AGE)
    if age is None:
        return CriterionOutcome(Criterion.MIN_AGE, True, False, "Date of birth not provided in profile")
    if age >= scheme.min_age:
        return CriterionOutcome(Criterion.MIN_AGE, True, True, "Meets minimum age requirement")
    return CriterionOutcome(Criterion.MIN_AGE, True, False, f"Minimum age is {scheme.min_age}")


def check_max_age(profile: CitizenProfile, scheme: Scheme, age: int | None) -> CriterionOutcome:
    if scheme.max_age is None:
        return _not_applicable(Criterion.MAX_AGE)
    if age is None:
        return CriterionOutcome(Criterion.MAX_AGE, True, False, "Date of birth not provided in profile")
    if age <= scheme.max_age:
        return CriterionOutcome(Criterion.MAX_AGE, True, True, "Within maximum age limit")
    return CriterionOutcome(Criterion.MAX_AGE, True, False, f"Maximum age is {scheme.max_age}")


# ── Disability ────────────────────────────────────────────────────────────


def check_disability(profile: CitizenProfile, scheme: Scheme, age: int | None) -> CriterionOutcome:
    """Applicable only when the scheme description mentions disability."""
    if DISABILITY_KEYWORD not in (scheme.description or "").lower():
        return _not_applicable(Criterion.DISABILITY)
    if profile.has_disability:
        return CriterionOutcome(Criterion.DISABILITY, True, True, "Scheme supports persons with disability")
    return CriterionOutcome(Criterion.DISABILITY, True, False, "Scheme is intended for persons with disability")


CriterionCheck = Callable[[CitizenProfile, Scheme, int | None], CriterionOutcome]

# Evaluation order — reasons and missing criteria are reported in this order.
CRITERION_CHECKS: dict[Criterion, CriterionCheck] = {
    Criterion.CATEGORY: check_category,
    Criterion.OCCUPATION: check_occupation,
    Criterion.INCOME: check_income,
    Criterion.MIN_AGE: check_min_age,
    Criterion.MAX_AGE: check_max_age,
    Criterion.DISABILITY: check_disability,
}
