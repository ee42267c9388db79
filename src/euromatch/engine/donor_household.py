"""DonorHousehold — the aggregated view of one donor household.

Built once from the full occupant set at load time and never mutated. Stores
base-policy-year figures only; uprating to a simulated year happens when the
values are read (see `income_reader`).
"""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from euromatch.engine.aggregation import IncomeAggregates, aggregate_incomes
from euromatch.engine.children import ChildBands, child_bands, count_children_by_age
from euromatch.engine.head_selection import classify_household
from euromatch.engine.keys import AdultProfile, HouseholdProfile
from euromatch.engine.policy_map import PolicyMap
from euromatch.models.common import Occupancy, labour_from_hours
from euromatch.models.donor import DonorHouseholdRecord, DonorPerson


@dataclass(frozen=True, eq=False)
class DonorHousehold:
    """Aggregated donor household, identified by `household_id`.

    Equality and hashing use the id only, so a household can sit in several
    index buckets at once. `derived_fields()` exposes everything else for
    duplicate-id consistency checks.
    """

    household_id: int
    region: str
    occupancy: Occupancy
    head_id: int
    male: DonorPerson | None
    female: DonorPerson | None
    children_ids: tuple[int, ...]
    other_member_ids: tuple[int, ...]
    occupant_ids: tuple[int, ...]
    child_counts: np.ndarray  # read-only, one entry per age 0-17
    bands: ChildBands
    incomes: IncomeAggregates

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DonorHousehold):
            return NotImplemented
        return self.household_id == other.household_id

    def __hash__(self) -> int:
        return hash(self.household_id)

    def __repr__(self) -> str:
        return (
            f"DonorHousehold(household_id={self.household_id}, "
            f"occupancy={self.occupancy.value}, region={self.region!r})"
        )

    # --- Roles ---

    @property
    def male_id(self) -> int | None:
        return self.male.person_id if self.male is not None else None

    @property
    def female_id(self) -> int | None:
        return self.female.person_id if self.female is not None else None

    @property
    def size(self) -> int:
        return len(self.occupant_ids)

    @property
    def n_children(self) -> int:
        return len(self.children_ids)

    def n_children_aged(self, age: int) -> int:
        return int(self.child_counts[age])

    # --- Per-policy figures, at the policy's own price level ---

    def _per_policy(self, values: PolicyMap, policy: str) -> float:
        if policy not in values:
            msg = (
                f"Donor household {self.household_id} has no figures for policy "
                f"'{policy}'; known policies: {list(values)}."
            )
            raise ValueError(msg)
        return values[policy]

    def disposable_income(self, policy: str) -> float:
        return self._per_policy(self.incomes.disposable_income, policy)

    def gross_earnings(self, policy: str) -> float:
        return self._per_policy(self.incomes.gross_earnings, policy)

    def gross_income(self, policy: str) -> float:
        return self._per_policy(self.incomes.gross_income, policy)

    def disposable_to_gross_income_ratio(self, policy: str) -> float:
        return self._per_policy(self.incomes.disposable_to_gross_income_ratio, policy)

    def disposable_income_to_gross_earnings_ratio(self, policy: str) -> float:
        return self._per_policy(self.incomes.disposable_income_to_gross_earnings_ratio, policy)

    # --- Matching ---

    def profile(self) -> HouseholdProfile:
        """Characteristics used to derive this donor's match keys."""
        return HouseholdProfile(
            occupancy=self.occupancy,
            region=self.region,
            male=_adult_profile(self.male),
            female=_adult_profile(self.female),
            n_children=self.n_children,
        )

    def derived_fields(self) -> tuple:
        return (
            self.region,
            self.occupancy,
            self.head_id,
            self.male_id,
            self.female_id,
            self.children_ids,
            self.other_member_ids,
            self.occupant_ids,
            tuple(int(c) for c in self.child_counts),
            self.bands,
            self.incomes,
        )


def _adult_profile(person: DonorPerson | None) -> AdultProfile | None:
    if person is None:
        return None
    return AdultProfile(
        age=person.age,
        health_status=person.health_status,
        labour=labour_from_hours(person.hours_worked_weekly),
    )


def build_donor_household(
    record: DonorHouseholdRecord,
    *,
    policies: Iterable[str],
    base_policy: str,
    age_to_become_responsible: int,
) -> DonorHousehold:
    """Classify occupants and aggregate incomes for one donor household.

    Args:
        record: The household's resolved occupants and region.
        policies: Every policy of the run, in schedule order.
        base_policy: Policy whose original income selects the head.
        age_to_become_responsible: Occupants younger than this are children.

    Raises:
        ValueError: On any fatal data inconsistency (see `classify_household`,
            `count_children_by_age`, `aggregate_incomes`).
    """
    # One occupant order for every derived field and every income sum
    occupants = sorted(record.occupants, key=lambda p: p.person_id)
    roles = classify_household(
        record.household_id,
        occupants,
        base_policy=base_policy,
        age_to_become_responsible=age_to_become_responsible,
    )
    counts = count_children_by_age(
        (c.age for c in roles.children), household_id=record.household_id,
    )
    return DonorHousehold(
        household_id=record.household_id,
        region=record.region,
        occupancy=roles.occupancy,
        head_id=roles.head.person_id,
        male=roles.male,
        female=roles.female,
        children_ids=tuple(c.person_id for c in roles.children),
        other_member_ids=tuple(p.person_id for p in roles.other_members),
        occupant_ids=tuple(p.person_id for p in occupants),
        child_counts=counts,
        bands=child_bands(counts),
        incomes=aggregate_incomes(occupants, policies),
    )


def collect_donor_households(households: Iterable[DonorHousehold]) -> dict[int, DonorHousehold]:
    """Key households by id, rejecting inconsistent duplicates.

    A repeated id with identical derived fields is kept once. A repeated id
    whose fields differ means the input data is corrupt.

    Raises:
        ValueError: If two households share an id but not their fields.
    """
    by_id: dict[int, DonorHousehold] = {}
    for house in households:
        existing = by_id.get(house.household_id)
        if existing is None:
            by_id[house.household_id] = house
        elif existing.derived_fields() != house.derived_fields():
            msg = (
                f"There are multiple donor households with id {house.household_id} "
                f"but different fields."
            )
            raise ValueError(msg)
    return by_id
