"""Eligibility evaluator — rule-based scheme scoring for citizen profiles."""

from schemematch.eligibility.criteria import CRITERION_WEIGHTS, Criterion, CriterionOutcome
from schemematch.eligibility.evaluator import (
    DEFAULT_ELIGIBILITY_THRESHOLD,
    EligibilityEvaluator,
    age_from_birth_date,
)
from schemematch.schemas.eligibility import CitizenProfile, EligibilityResult, Scheme

__all__ = [
    "EligibilityEvaluator",
    "age_from_birth_date",
    "DEFAULT_ELIGIBILITY_THRESHOLD",
    "Criterion",
    "CriterionOutcome",
    "CRITERION_WEIGHTS",
    "CitizenProfile",
    "Scheme",
    "EligibilityResult",
]
