"""Tests for the eligibility evaluator.

Each test builds a CitizenProfile and a Scheme and asserts score, verdict,
reasons and missing criteria.
"""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from schemematch.eligibility import (
    CRITERION_WEIGHTS,
    Criterion,
    EligibilityEvaluator,
    age_from_birth_date,
)
from schemematch.schemas.eligibility import CitizenProfile, Scheme

TODAY = date(2026, 10, 18)


def _evaluator(threshold: float = 0.7) -> EligibilityEvaluator:
    return EligibilityEvaluator(threshold=threshold, today=lambda: TODAY)


def _profile(**overrides) -> CitizenProfile:
    data = {
        "id": "p-1",
        "user_id": "u-1",
        "full_name": "Ravi Kumar",
        "state": "Karnataka",
        "category": "General",
        "occupation": "Farmer",
        "annual_income": 100000,
        "date_of_birth": date(1990, 1, 1),
        "has_disability": False,
    }
    data.update(overrides)
    return CitizenProfile(**data)


def _scheme(**overrides) -> Scheme:
    data = {
        "id": "s-1",
        "name": "Test Scheme",
        "description": "",
        "category": "Agriculture",
        "ministry": "Ministry of Testing",
        "benefits": "Benefits",
        "application_process": "Apply online",
    }
    data.update(overrides)
    return Scheme(**data)


class TestExampleScenario:
    """Farmer profile against a matching scheme A and a non-matching scheme B."""

    @pytest.fixture()
    def scheme_a(self):
        return _scheme(
            id="a",
            target_categories=["General"],
            target_occupations=["Farmer"],
            max_income=200000,
            min_age=18,
        )

    @pytest.fixture()
    def scheme_b(self):
        return _scheme(
            id="b",
            target_categories=["NonExistentCategory"],
            target_occupations=["NonExistentOccupation"],
            max_income=10,
            min_age=100,
        )

    def test_scheme_a_scores_all_criteria(self, scheme_a):
        result = _evaluator().evaluate(_profile(), scheme_a)
        assert result.score == 65
        assert result.eligible is True

    def test_scheme_a_reasons_in_order(self, scheme_a):
        result = _evaluator().evaluate(_profile(), scheme_a)
        assert result.reasons == [
            "Category eligible",
            "Occupation matches",
            "Income matches criteria",
            "Meets minimum age requirement",
        ]
        assert result.missing_criteria == []

    def test_scheme_b_scores_zero(self, scheme_b):
        result = _evaluator().evaluate(_profile(), scheme_b)
        assert result.score == 0
        assert result.eligible is False
        assert result.reasons == []
        assert len(result.missing_criteria) == 4

    def test_a_ranks_above_b(self, scheme_a, scheme_b):
        evaluator = _evaluator()
        assert evaluator.evaluate(_profile(), scheme_a).score > evaluator.evaluate(_profile(), scheme_b).score


class TestNeutralOnMissing:
    def test_unrestricted_scheme_scores_zero(self):
        result = _evaluator().evaluate(_profile(has_disability=True), _scheme(description="Open to all"))
        assert result.score == 0
        assert result.eligible is False
        assert result.reasons == []
        assert result.missing_criteria == []

    def test_missing_profile_data_is_not_penalised(self):
        scheme = _scheme(target_categories=["General"], max_income=200000)
        with_income = _evaluator().evaluate(_profile(), scheme)
        without_income = _evaluator().evaluate(_profile(annual_income=None), scheme)
        assert with_income.score == 35
        assert without_income.score == 20

    def test_missing_profile_data_is_reported(self):
        scheme = _scheme(max_income=200000, min_age=18, target_occupations=["Farmer"])
        result = _evaluator().evaluate(
            _profile(annual_income=None, date_of_birth=None, occupation=None), scheme
        )
        assert result.missing_criteria == [
            "Occupation not provided in profile",
            "Annual income not provided in profile",
            "Date of birth not provided in profile",
        ]


class TestCriteria:
    def test_category_mismatch(self):
        result = _evaluator().evaluate(_profile(category="General"), _scheme(target_categories=["SC", "ST"]))
        assert result.score == 0
        assert result.missing_criteria == ["Category General is not covered (scheme targets SC, ST)"]

    def test_category_match_is_case_sensitive(self):
        result = _evaluator().evaluate(_profile(category="general"), _scheme(target_categories=["General"]))
        assert result.score == 0

    def test_income_at_ceiling_matches(self):
        result = _evaluator().evaluate(_profile(annual_income=200000), _scheme(max_income=200000))
        assert result.score == CRITERION_WEIGHTS[Criterion.INCOME]

    def test_income_above_ceiling(self):
        result = _evaluator().evaluate(_profile(annual_income=200001), _scheme(max_income=200000))
        assert result.score == 0
        assert result.missing_criteria == ["Annual income exceeds the limit of 200000"]

    def test_zero_max_income_is_a_defined_ceiling(self):
        result = _evaluator().evaluate(_profile(annual_income=0), _scheme(max_income=0))
        assert result.score == 15

    def test_age_window(self):
        scheme = _scheme(min_age=18, max_age=40)
        result = _evaluator().evaluate(_profile(date_of_birth=date(1990, 6, 1)), scheme)
        assert result.score == 20
        assert "Within maximum age limit" in result.reasons

    def test_above_max_age(self):
        result = _evaluator().evaluate(_profile(date_of_birth=date(1950, 1, 1)), _scheme(max_age=60))
        assert result.score == 0
        assert result.missing_criteria == ["Maximum age is 60"]

    def test_disability_keyword_case_insensitive(self):
        scheme = _scheme(description="Pension for persons with DISABILITY")
        result = _evaluator().evaluate(_profile(has_disability=True), scheme)
        assert result.score == 25
        assert result.reasons == ["Scheme supports persons with disability"]

    def test_disability_scheme_without_disability(self):
        scheme = _scheme(description="Support for disability")
        result = _evaluator().evaluate(_profile(has_disability=False), scheme)
        assert result.score == 0
        assert result.missing_criteria == ["Scheme is intended for persons with disability"]

    def test_full_score(self):
        scheme = _scheme(
            description="Disability support for farmers",
            target_categories=["General"],
            target_occupations=["Farmer"],
            max_income=200000,
            min_age=18,
            max_age=60,
        )
        result = _evaluator().evaluate(_profile(has_disability=True), scheme)
        assert result.score == sum(CRITERION_WEIGHTS.values()) == 100
        assert len(result.reasons) == 6


class TestEligibleThreshold:
    def test_partial_match_below_threshold(self):
        # 20 of 65 applicable points
        scheme = _scheme(
            target_categories=["General"],
            target_occupations=["Weaver"],
            max_income=50000,
            min_age=18,
        )
        result = _evaluator().evaluate(_profile(date_of_birth=date(2015, 1, 1)), scheme)
        assert result.score == 20
        assert result.eligible is False

    def test_threshold_is_configurable(self):
        scheme = _scheme(target_categories=["General"], target_occupations=["Weaver"])
        assert _evaluator(threshold=0.5).evaluate(_profile(), scheme).eligible is True
        assert _evaluator(threshold=0.7).evaluate(_profile(), scheme).eligible is False

    def test_invalid_threshold_rejected(self):
        with pytest.raises(ValueError):
            EligibilityEvaluator(threshold=0)


class TestProperties:
    def test_deterministic(self):
        scheme = _scheme(target_categories=["General"], max_income=10, min_age=18)
        evaluator = _evaluator()
        first = evaluator.evaluate(_profile(), scheme)
        for _ in range(5):
            assert evaluator.evaluate(_profile(), scheme) == first

    @pytest.mark.parametrize(
        ("before", "after"),
        [
            ({"category": None}, {"category": "General"}),
            ({"occupation": "Weaver"}, {"occupation": "Farmer"}),
            ({"annual_income": None}, {"annual_income": 1000}),
            ({"date_of_birth": None}, {"date_of_birth": date(1990, 1, 1)}),
            ({"has_disability": False}, {"has_disability": True}),
        ],
    )
    def test_monotonic(self, before, after):
        scheme = _scheme(
            description="Includes disability support",
            target_categories=["General"],
            target_occupations=["Farmer"],
            max_income=200000,
            min_age=18,
            max_age=60,
        )
        evaluator = _evaluator()
        assert evaluator.evaluate(_profile(**after), scheme).score >= evaluator.evaluate(
            _profile(**before), scheme
        ).score


class TestAge:
    def test_calendar_year_difference(self):
        assert age_from_birth_date(date(1990, 12, 31), date(2026, 1, 1)) == 36

    def test_none(self):
        assert age_from_birth_date(None, TODAY) is None

    def test_birthday_not_yet_reached_counts_full_year(self):
        # Turns 18 in December; already counted as 18 in October.
        scheme = _scheme(min_age=18)
        result = _evaluator().evaluate(_profile(date_of_birth=date(2008, 12, 1)), scheme)
        assert result.score == 10


class TestTargetSetValidation:
    def test_json_string_accepted(self):
        scheme = _scheme(target_categories='["SC", "ST"]')
        assert scheme.target_categories == ["SC", "ST"]

    def test_empty_means_unrestricted(self):
        assert _scheme(target_occupations=[]).target_occupations is None
        assert _scheme(target_occupations="").target_occupations is None

    def test_duplicates_removed(self):
        assert _scheme(target_categories=["SC", "SC", "ST"]).target_categories == ["SC", "ST"]

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError):
            _scheme(target_categories=[1, 2])

    def test_object_rejected(self):
        with pytest.raises(ValidationError):
            _scheme(target_categories={"a": "b"})

    def test_bad_json_rejected(self):
        with pytest.raises(ValidationError):
            _scheme(target_categories="SC, ST")
