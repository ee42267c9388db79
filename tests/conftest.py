"""Shared pytest fixtures for the euromatch test suite.

Provides:
- policies / schedule / uprating: a two-policy run (UK_2019, UK_2020)
- settings: Settings isolated from the environment and any .env file
- make_person: factory for DonorPerson records with flat per-policy values
- make_record: factory for DonorHouseholdRecord
"""

import pytest

from euromatch.config.settings import Settings
from euromatch.models.common import Gender, HealthStatus
from euromatch.models.donor import DonorHouseholdRecord, DonorPerson
from euromatch.models.policy import PolicySchedule, UpratingTable

POLICIES = ["UK_2019", "UK_2020"]


@pytest.fixture()
def policies() -> list[str]:
    return list(POLICIES)


@pytest.fixture()
def schedule() -> PolicySchedule:
    return PolicySchedule(start_years={2019: "UK_2019", 2020: "UK_2020"})


@pytest.fixture()
def uprating() -> UpratingTable:
    return UpratingTable.from_mapping({
        (2019, "UK_2019"): 1.0,
        (2020, "UK_2020"): 1.0,
        (2021, "UK_2020"): 1.02,
        (2022, "UK_2020"): 1.05,
    })


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None)


def _flat(value: float | dict[str, float]) -> dict[str, float]:
    if isinstance(value, dict):
        return dict(value)
    return {p: float(value) for p in POLICIES}


@pytest.fixture()
def make_person():
    """Build a DonorPerson; scalar incomes apply to every policy."""

    def _make(
        person_id: int,
        *,
        household_id: int = 1,
        age: int = 40,
        gender: Gender = Gender.MALE,
        partner_id: int | None = None,
        income: float | dict[str, float] = 0.0,
        disposable: float | dict[str, float] | None = None,
        earnings: float | dict[str, float] | None = None,
        wage: float | dict[str, float] = 10.0,
        hours: float = 40.0,
        health: HealthStatus = HealthStatus.GOOD,
    ) -> DonorPerson:
        return DonorPerson(
            person_id=person_id,
            household_id=household_id,
            age=age,
            gender=gender,
            partner_id=partner_id,
            health_status=health,
            hours_worked_weekly=hours,
            original_income_monthly=_flat(income),
            earnings_monthly_gross=_flat(income if earnings is None else earnings),
            disposable_income_monthly=_flat(income if disposable is None else disposable),
            hourly_wage_gross=_flat(wage),
        )

    return _make


@pytest.fixture()
def make_record():
    def _make(household_id: int, occupants: list[DonorPerson], region: str = "UKC") -> DonorHouseholdRecord:
        return DonorHouseholdRecord(household_id=household_id, region=region, occupants=occupants)

    return _make
