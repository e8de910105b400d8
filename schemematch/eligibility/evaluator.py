"""Eligibility evaluator — scores one citizen profile against one scheme.

Pure Python. No DB access, no clock reads beyond the injected `today`.
The recommendation engine calls this for every (profile, scheme) pair.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from schemematch.eligibility.criteria import CRITERION_CHECKS, CRITERION_WEIGHTS, CriterionOutcome
from schemematch.schemas.eligibility import CitizenProfile, EligibilityResult, Scheme

DEFAULT_ELIGIBILITY_THRESHOLD = 0.7


def age_from_birth_date(date_of_birth: date | None, today: date) -> int | None:
    """Age as the difference of calendar years.

    Day and month are ignored, so someone born late in the year is counted
    a year older until their birthday.
    """
    if date_of_birth is None:
        return None
    return today.year - date_of_birth.year


class EligibilityEvaluator:
    """Additive point scoring across independent criteria.

    Args:
        threshold: Share of the scheme's applicable points a profile must
            earn for `eligible` to be True. Anything below, but above zero,
            is "partially eligible" downstream.
        today: Clock used to derive age. Defaults to ``date.today``.
    """

    def __init__(
        self,
        threshold: float = DEFAULT_ELIGIBILITY_THRESHOLD,
        today: Callable[[], date] = date.today,
    ) -> None:
        if not 0 < threshold <= 1:
            msg = f"Eligibility threshold must be in (0, 1], got {threshold}"
            raise ValueError(msg)
        self.threshold = threshold
        self._today = today

    def outcomes(self, profile: CitizenProfile, scheme: Scheme) -> list[CriterionOutcome]:
        """Run every criterion check in order."""
        age = age_from_birth_date(profile.date_of_birth, self._today())
        return [check(profile, scheme, age) for check in CRITERION_CHECKS.values()]

    def evaluate(self, profile: CitizenProfile, scheme: Scheme) -> EligibilityResult:
        outcomes = self.outcomes(profile, scheme)

        score = sum(o.points for o in outcomes)
        applicable_points = sum(CRITERION_WEIGHTS[o.criterion] for o in outcomes if o.applicable)

        return EligibilityResult(
            eligible=score > 0 and score >= self.threshold * applicable_points,
            score=score,
            reasons=[o.description for o in outcomes if o.applicable and o.met],
            missing_criteria=[o.description for o in outcomes if o.applicable and not o.met],
        )
