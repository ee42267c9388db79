"""Donor population — one batch pass from donor records to the donor index.

Steps:
1. Build one DonorHousehold per donor record (head selection, income
   aggregation, child fields).
2. Reject duplicate household ids with diverging fields.
3. Compute the median donor gross income per policy.
4. Build a DonorIndex, once per run or once per simulated year.

Each household is built from its own occupants only; households do not
share mutable state.
"""

import logging
from collections.abc import Iterable, Mapping

import numpy as np

from euromatch.config.settings import Settings
from euromatch.engine.donor_household import (
    DonorHousehold,
    build_donor_household,
    collect_donor_households,
)
from euromatch.engine.donor_index import DonorIndex
from euromatch.engine.policy_map import PolicyMap
from euromatch.models.common import Gender, Labour
from euromatch.models.donor import DonorHouseholdRecord
from euromatch.models.policy import PolicySchedule

logger = logging.getLogger(__name__)


class DonorPopulation:
    """All donor households of a run, keyed by household id."""

    def __init__(
        self,
        *,
        households: Mapping[int, DonorHousehold],
        schedule: PolicySchedule,
        base_policy: str,
    ) -> None:
        self._households = dict(households)
        self._schedule = schedule
        self._base_policy = base_policy
        self._median_gross_income = _median_gross_income(self._households.values(), schedule)

    @property
    def schedule(self) -> PolicySchedule:
        return self._schedule

    @property
    def base_policy(self) -> str:
        return self._base_policy

    @property
    def median_gross_income(self) -> PolicyMap:
        """Median household gross income per policy, not uprated."""
        return self._median_gross_income

    def __len__(self) -> int:
        return len(self._households)

    def __iter__(self):
        return iter(self._households.values())

    def get(self, household_id: int) -> DonorHousehold:
        try:
            return self._households[household_id]
        except KeyError:
            msg = f"Donor household {household_id} is not in the population."
            raise KeyError(msg) from None

    def build_index(
        self,
        *,
        allowed_labour: Mapping[Gender, Iterable[Labour]],
        age_top_code: int,
        year: int | None = None,
    ) -> DonorIndex:
        """Immutable donor index over the whole population."""
        return DonorIndex.build(
            self._households.values(),
            allowed_labour=allowed_labour,
            age_top_code=age_top_code,
            year=year,
        )


def _median_gross_income(
    households: Iterable[DonorHousehold],
    schedule: PolicySchedule,
) -> PolicyMap:
    households = list(households)
    if not households:
        return PolicyMap.zeros(schedule.policy_names())
    return PolicyMap(
        (policy, float(np.median([h.gross_income(policy) for h in households])))
        for policy in schedule.policy_names()
    )


def build_donor_population(
    records: Iterable[DonorHouseholdRecord],
    *,
    schedule: PolicySchedule,
    start_year: int,
    settings: Settings,
) -> DonorPopulation:
    """Aggregate every donor record of the run.

    Args:
        records: Resolved donor households with their occupants.
        schedule: Policy schedule; every policy in it is aggregated.
        start_year: First simulated year; its prevailing policy ranks
            occupants when selecting heads.
        settings: Supplies the age at which occupants stop being children.

    Raises:
        ValueError: On any fatal data inconsistency in the records.
    """
    base_policy = schedule.policy_for_year(start_year)
    policies = schedule.policy_names()
    households = collect_donor_households(
        build_donor_household(
            record,
            policies=policies,
            base_policy=base_policy,
            age_to_become_responsible=settings.AGE_TO_BECOME_RESPONSIBLE,
        )
        for record in records
    )
    logger.info(
        "Aggregated donor population: households=%d, policies=%d, base_policy=%s",
        len(households), len(policies), base_policy,
    )
    return DonorPopulation(households=households, schedule=schedule, base_policy=base_policy)
