"""Tests for nearest-donor selection by potential hourly earnings."""

import pytest

from euromatch.engine.nearest import (
    earnings_distance,
    proportional_difference_squared,
    select_nearest_donor,
)
from euromatch.models.common import Gender


@pytest.fixture()
def single(make_person, make_record, build_house):
    def _make(household_id: int, wage: float, gender: Gender = Gender.MALE):
        person = make_person(household_id * 10, household_id=household_id, gender=gender, wage=wage)
        return build_house(make_record(household_id, [person]))

    return _make


@pytest.fixture()
def couple(make_person, make_record, build_house):
    def _make(household_id: int, male_wage: float, female_wage: float):
        male = make_person(
            household_id * 10, household_id=household_id, partner_id=household_id * 10 + 1,
            wage=male_wage, income=100,
        )
        female = make_person(
            household_id * 10 + 1, household_id=household_id, partner_id=household_id * 10,
            gender=Gender.FEMALE, wage=female_wage,
        )
        return build_house(make_record(household_id, [male, female]))

    return _make


class TestProportionalDifference:
    def test_regular(self) -> None:
        assert proportional_difference_squared(10.0, 12.0) == pytest.approx(0.04)

    def test_zero_value_shifts_denominator(self) -> None:
        assert proportional_difference_squared(0.0, 0.5) == pytest.approx(0.25)

    def test_identical(self) -> None:
        assert proportional_difference_squared(8.0, 8.0) == 0.0


class TestEarningsDistance:
    def test_couple_averages_both_adults(self, couple) -> None:
        house = couple(1, male_wage=12.0, female_wage=10.0)
        distance = earnings_distance(
            house, male_potential_earnings=10.0, female_potential_earnings=10.0, policy="UK_2019",
        )
        assert distance == pytest.approx(0.02)

    def test_incompatible_occupancy(self, single) -> None:
        house = single(1, wage=10.0, gender=Gender.FEMALE)
        assert earnings_distance(
            house, male_potential_earnings=10.0, female_potential_earnings=None, policy="UK_2019",
        ) is None

    def test_needs_some_earnings(self, single) -> None:
        with pytest.raises(ValueError, match="At least one"):
            earnings_distance(
                single(1, wage=10.0),
                male_potential_earnings=None, female_potential_earnings=None, policy="UK_2019",
            )


class TestSelectNearestDonor:
    def test_closest_wins(self, single) -> None:
        candidates = [single(1, wage=12.0), single(2, wage=9.5), single(3, wage=20.0)]
        best = select_nearest_donor(candidates, male_potential_earnings=10.0, policy="UK_2019")
        assert best.household_id == 2

    def test_tie_goes_to_lowest_id(self, single) -> None:
        candidates = [single(7, wage=11.0), single(3, wage=9.0)]
        best = select_nearest_donor(candidates, male_potential_earnings=10.0, policy="UK_2019")
        assert best.household_id == 3

    def test_female_single(self, single) -> None:
        candidates = [
            single(1, wage=10.0),
            single(2, wage=15.0, gender=Gender.FEMALE),
            single(3, wage=30.0, gender=Gender.FEMALE),
        ]
        best = select_nearest_donor(candidates, female_potential_earnings=14.0, policy="UK_2019")
        assert best.household_id == 2

    def test_couple(self, couple, single) -> None:
        candidates = [couple(1, 10.0, 30.0), couple(2, 12.0, 12.0), single(3, wage=10.0)]
        best = select_nearest_donor(
            candidates, male_potential_earnings=10.0, female_potential_earnings=12.0, policy="UK_2019",
        )
        assert best.household_id == 2

    def test_no_compatible_candidate(self, single) -> None:
        with pytest.raises(ValueError, match="same occupancy"):
            select_nearest_donor([single(1, wage=10.0)], female_potential_earnings=10.0, policy="UK_2019")

    def test_empty_candidates(self) -> None:
        with pytest.raises(ValueError, match="same occupancy"):
            select_nearest_donor([], male_potential_earnings=10.0, policy="UK_2019")
