"""Donor records as resolved from EUROMOD output.

A record carries every policy-dependent figure the engine needs, keyed by
policy name. Records are immutable once validated; households reference
persons by id only.
"""

from pydantic import Field, model_validator

from euromatch.models.common import EuromatchBase, Gender, HealthStatus


class DonorPerson(EuromatchBase, frozen=True):
    """Per-year snapshot of one individual observed in the donor data."""

    person_id: int
    household_id: int
    age: int = Field(..., ge=0)
    gender: Gender
    partner_id: int | None = None
    health_status: HealthStatus = HealthStatus.GOOD
    hours_worked_weekly: float = Field(default=0.0, ge=0.0)

    # Policy name -> monthly amount
    earnings_monthly_gross: dict[str, float] = Field(default_factory=dict)
    original_income_monthly: dict[str, float] = Field(
        default_factory=dict,
        description="Earnings plus all other market income, before taxes and benefits.",
    )
    disposable_income_monthly: dict[str, float] = Field(default_factory=dict)
    hourly_wage_gross: dict[str, float] = Field(default_factory=dict)

    def _policy_value(self, values: dict[str, float], field: str, policy: str) -> float:
        try:
            return values[policy]
        except KeyError:
            msg = (
                f"DonorPerson {self.person_id} has no {field} for policy "
                f"'{policy}'."
            )
            raise ValueError(msg) from None

    def earnings(self, policy: str) -> float:
        return self._policy_value(self.earnings_monthly_gross, "earnings_monthly_gross", policy)

    def original_income(self, policy: str) -> float:
        return self._policy_value(self.original_income_monthly, "original_income_monthly", policy)

    def disposable_income(self, policy: str) -> float:
        return self._policy_value(
            self.disposable_income_monthly, "disposable_income_monthly", policy,
        )

    def hourly_wage(self, policy: str) -> float:
        return self._policy_value(self.hourly_wage_gross, "hourly_wage_gross", policy)


class DonorHouseholdRecord(EuromatchBase, frozen=True):
    """All occupants sharing one donor household id, with household attributes."""

    household_id: int
    region: str = Field(..., min_length=1)
    occupants: list[DonorPerson] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_occupants(self) -> "DonorHouseholdRecord":
        seen: set[int] = set()
        for person in self.occupants:
            if person.household_id != self.household_id:
                raise ValueError(
                    f"DonorPerson {person.person_id} belongs to household "
                    f"{person.household_id}, not {self.household_id}."
                )
            if person.person_id in seen:
                raise ValueError(
                    f"DonorPerson {person.person_id} appears twice in household "
                    f"{self.household_id}."
                )
            seen.add(person.person_id)
        return self
