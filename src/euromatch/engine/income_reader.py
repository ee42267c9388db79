"""Read donor household figures in a simulated year's terms.

Stored values are at the price level of the policy they were computed under.
An `IncomeReader` is bound to one simulated year: it resolves the policy
prevailing in that year and multiplies values by the uprating factor for
(year, policy) when they are read.
"""

from dataclasses import dataclass

from euromatch.engine.donor_household import DonorHousehold
from euromatch.models.policy import PolicySchedule, UpratingTable


@dataclass(frozen=True)
class HouseholdIncome:
    """All five figures of one donor household for one policy."""

    policy: str
    disposable_income: float
    gross_earnings: float
    gross_income: float
    disposable_to_gross_income_ratio: float
    disposable_income_to_gross_earnings_ratio: float


class IncomeReader:
    """Donor household read API for one simulated year."""

    def __init__(
        self,
        *,
        schedule: PolicySchedule,
        uprating: UpratingTable,
        year: int,
    ) -> None:
        self._schedule = schedule
        self._uprating = uprating
        self._year = year
        self._current_policy = schedule.policy_for_year(year)

    @property
    def year(self) -> int:
        return self._year

    @property
    def current_policy(self) -> str:
        return self._current_policy

    def _policy(self, policy: str | None) -> str:
        if policy is None:
            return self._current_policy
        return self._schedule.require(policy)

    def uprating_factor(self, policy: str | None = None) -> float:
        return self._uprating.factor(self._year, self._policy(policy))

    def _level(self, value: float, policy: str, uprated: bool) -> float:
        if not uprated:
            return value
        return value * self._uprating.factor(self._year, policy)

    def disposable_income(
        self, house: DonorHousehold, policy: str | None = None, *, uprated: bool = True,
    ) -> float:
        policy = self._policy(policy)
        return self._level(house.disposable_income(policy), policy, uprated)

    def gross_earnings(
        self, house: DonorHousehold, policy: str | None = None, *, uprated: bool = True,
    ) -> float:
        policy = self._policy(policy)
        return self._level(house.gross_earnings(policy), policy, uprated)

    def gross_income(
        self, house: DonorHousehold, policy: str | None = None, *, uprated: bool = True,
    ) -> float:
        policy = self._policy(policy)
        return self._level(house.gross_income(policy), policy, uprated)

    def disposable_to_gross_income_ratio(
        self, house: DonorHousehold, policy: str | None = None,
    ) -> float:
        # Ratios are price-level free; never uprated.
        return house.disposable_to_gross_income_ratio(self._policy(policy))

    def disposable_income_to_gross_earnings_ratio(
        self, house: DonorHousehold, policy: str | None = None,
    ) -> float:
        return house.disposable_income_to_gross_earnings_ratio(self._policy(policy))

    def read(
        self, house: DonorHousehold, policy: str | None = None, *, uprated: bool = True,
    ) -> HouseholdIncome:
        policy = self._policy(policy)
        return HouseholdIncome(
            policy=policy,
            disposable_income=self.disposable_income(house, policy, uprated=uprated),
            gross_earnings=self.gross_earnings(house, policy, uprated=uprated),
            gross_income=self.gross_income(house, policy, uprated=uprated),
            disposable_to_gross_income_ratio=self.disposable_to_gross_income_ratio(house, policy),
            disposable_income_to_gross_earnings_ratio=(
                self.disposable_income_to_gross_earnings_ratio(house, policy)
            ),
        )
