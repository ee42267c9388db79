"""Head-of-household selection and occupant classification.

The head is the occupant with the highest original income at the run's
base policy; ties go to the strictly older occupant, then to the lower
person id. The order is total, so the head does not depend on the order
occupants are listed in.

Partner links are stored as ids and resolved here against the occupants
of the same household only.
"""

import logging
from collections.abc import Collection
from dataclasses import dataclass

from euromatch.models.common import Gender, Occupancy
from euromatch.models.donor import DonorPerson

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HouseholdRoles:
    """Role assignment of every occupant of one donor household."""

    household_id: int
    head: DonorPerson
    partner: DonorPerson | None
    children: tuple[DonorPerson, ...]
    other_members: tuple[DonorPerson, ...]

    @property
    def male(self) -> DonorPerson | None:
        if self.head.gender == Gender.MALE:
            return self.head
        return self.partner

    @property
    def female(self) -> DonorPerson | None:
        if self.head.gender == Gender.FEMALE:
            return self.head
        return self.partner

    @property
    def occupancy(self) -> Occupancy:
        if self.partner is not None:
            return Occupancy.COUPLE
        if self.head.gender == Gender.FEMALE:
            return Occupancy.SINGLE_FEMALE
        return Occupancy.SINGLE_MALE


def _head_rank(person: DonorPerson, base_policy: str) -> tuple[float, int, int]:
    # Larger is better: income, then age, then the lower id.
    return (person.original_income(base_policy), person.age, -person.person_id)


def select_head(
    occupants: Collection[DonorPerson],
    *,
    base_policy: str,
    household_id: int | None = None,
) -> DonorPerson:
    """Pick the unique head of a household.

    Args:
        occupants: Every person in the household.
        base_policy: Policy whose original income ranks the occupants.
        household_id: Used in error messages only.

    Returns:
        The occupant ranking first by (income, age, lowest id).

    Raises:
        ValueError: If there are no occupants, or an occupant lacks an
            original income for `base_policy`.
    """
    if not occupants:
        msg = f"Cannot select a head for household {household_id}: no occupants."
        raise ValueError(msg)

    head: DonorPerson | None = None
    best: tuple[float, int, int] | None = None
    for person in occupants:
        rank = _head_rank(person, base_policy)
        if best is None or rank > best:
            head, best = person, rank
    return head


def classify_household(
    household_id: int,
    occupants: Collection[DonorPerson],
    *,
    base_policy: str,
    age_to_become_responsible: int,
) -> HouseholdRoles:
    """Select the head, resolve their partner and sort everyone else.

    A partner id that matches no occupant is a data-quality anomaly: the
    link is dropped and the household is treated as single-headed.

    Raises:
        ValueError: On an empty household, a partner whose own partner id
            does not point back at the head, or a partner of the same
            gender as the head.
    """
    head = select_head(occupants, base_policy=base_policy, household_id=household_id)

    partner: DonorPerson | None = None
    children: list[DonorPerson] = []
    other_members: list[DonorPerson] = []

    for person in occupants:
        if person.person_id == head.person_id:
            continue
        if head.partner_id is not None and person.person_id == head.partner_id:
            if person.partner_id != head.person_id:
                msg = (
                    f"Household {household_id}: partner identities do not match. "
                    f"Head {head.person_id} has partner_id {head.partner_id}, but "
                    f"person {person.person_id} has partner_id {person.partner_id}."
                )
                raise ValueError(msg)
            if person.gender == head.gender:
                msg = (
                    f"Household {household_id}: head {head.person_id} and partner "
                    f"{person.person_id} are both {head.gender}."
                )
                raise ValueError(msg)
            partner = person
        elif person.age < age_to_become_responsible:
            children.append(person)
        else:
            other_members.append(person)

    if head.partner_id is not None and partner is None:
        logger.warning(
            "Household %d: partner %d of head %d is not an occupant; "
            "treating household as single-headed",
            household_id, head.partner_id, head.person_id,
        )

    return HouseholdRoles(
        household_id=household_id,
        head=head,
        partner=partner,
        children=tuple(children),
        other_members=tuple(other_members),
    )
