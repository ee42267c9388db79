"""Choose one donor from the candidates returned by the donor index.

Candidates are compared on the gap between each simulated adult's potential
hourly earnings and the corresponding donor adult's gross hourly wage,
measured as a squared proportional difference. For couples the two adults'
differences are averaged. Remaining ties go to the lowest household id.
"""

from collections.abc import Iterable

from euromatch.engine.donor_household import DonorHousehold
from euromatch.models.common import Occupancy

# Denominators below this are incremented by one (zero earnings)
_SMALL_DENOMINATOR = 1.0e-2


def proportional_difference_squared(value: float, donor_value: float) -> float:
    """((donor_value - value) / value)², with small denominators shifted by one."""
    denominator = value
    if value < _SMALL_DENOMINATOR:
        denominator += 1.0
    diff = (donor_value - value) / denominator
    return diff * diff


def earnings_distance(
    house: DonorHousehold,
    *,
    male_potential_earnings: float | None,
    female_potential_earnings: float | None,
    policy: str,
) -> float | None:
    """Distance of a donor from the simulated adults, or None if not comparable.

    Only households of the same occupancy are comparable.
    """
    if male_potential_earnings is not None and female_potential_earnings is not None:
        if house.occupancy != Occupancy.COUPLE:
            return None
        return (
            proportional_difference_squared(male_potential_earnings, house.male.hourly_wage(policy))
            + proportional_difference_squared(female_potential_earnings, house.female.hourly_wage(policy))
        ) / 2.0
    if male_potential_earnings is not None:
        if house.occupancy != Occupancy.SINGLE_MALE:
            return None
        return proportional_difference_squared(male_potential_earnings, house.male.hourly_wage(policy))
    if female_potential_earnings is not None:
        if house.occupancy != Occupancy.SINGLE_FEMALE:
            return None
        return proportional_difference_squared(female_potential_earnings, house.female.hourly_wage(policy))
    raise ValueError("At least one of male/female potential earnings is required.")


def select_nearest_donor(
    candidates: Iterable[DonorHousehold],
    *,
    male_potential_earnings: float | None = None,
    female_potential_earnings: float | None = None,
    policy: str,
) -> DonorHousehold:
    """The candidate closest in hourly earnings to the simulated household.

    Raises:
        ValueError: If no candidate has the simulated household's occupancy.
    """
    best: DonorHousehold | None = None
    best_rank: tuple[float, int] | None = None
    for house in candidates:
        distance = earnings_distance(
            house,
            male_potential_earnings=male_potential_earnings,
            female_potential_earnings=female_potential_earnings,
            policy=policy,
        )
        if distance is None:
            continue
        rank = (distance, house.household_id)
        if best_rank is None or rank < best_rank:
            best, best_rank = house, rank
    if best is None:
        raise ValueError("No donor candidate has the same occupancy as the simulated household.")
    return best
