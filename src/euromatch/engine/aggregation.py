"""Per-policy income aggregation for one donor household.

Every occupant's income counts, whatever their role. Sums and ratios are
computed separately for each policy in the schedule because EUROMOD output
differs per policy for the same occupants.
"""

from collections.abc import Collection, Iterable
from dataclasses import dataclass

from euromatch.engine.policy_map import PolicyMap
from euromatch.models.donor import DonorPerson


@dataclass(frozen=True)
class IncomeAggregates:
    """Household sums and ratios, one entry per policy."""

    disposable_income: PolicyMap
    gross_earnings: PolicyMap
    gross_income: PolicyMap  # original income: earnings plus other market income
    disposable_to_gross_income_ratio: PolicyMap
    disposable_income_to_gross_earnings_ratio: PolicyMap


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is zero.

    A 0.0 ratio tells consumers to use the disposable income level instead
    of converting gross income with the ratio.
    """
    if denominator == 0.0:
        return 0.0
    return numerator / denominator


def aggregate_incomes(
    occupants: Collection[DonorPerson],
    policies: Iterable[str],
) -> IncomeAggregates:
    """Sum disposable income, earnings and original income per policy.

    Args:
        occupants: All household members.
        policies: Every policy name of the run, in schedule order.

    Returns:
        IncomeAggregates keyed by policy name in the order given.

    Raises:
        ValueError: If an occupant has no value for one of the policies.
    """
    policies = list(policies)
    disposable: dict[str, float] = {}
    earnings: dict[str, float] = {}
    original: dict[str, float] = {}

    for policy in policies:
        disposable[policy] = 0.0
        earnings[policy] = 0.0
        original[policy] = 0.0
        for occupant in occupants:
            disposable[policy] += occupant.disposable_income(policy)
            earnings[policy] += occupant.earnings(policy)
            original[policy] += occupant.original_income(policy)

    return IncomeAggregates(
        disposable_income=PolicyMap(disposable),
        gross_earnings=PolicyMap(earnings),
        gross_income=PolicyMap(original),
        disposable_to_gross_income_ratio=PolicyMap(
            (p, safe_ratio(disposable[p], original[p])) for p in policies
        ),
        disposable_income_to_gross_earnings_ratio=PolicyMap(
            (p, safe_ratio(disposable[p], earnings[p])) for p in policies
        ),
    )
