"""Policy schedule and uprating factors consumed by the engine.

The schedule maps the first simulated year a policy applies to its
EUROMOD policy name. Uprating factors convert a figure stored at a
policy's price level into a simulated year's price level.
"""

from pydantic import Field, field_validator, model_validator

from euromatch.models.common import EuromatchBase


class PolicySchedule(EuromatchBase, frozen=True):
    """Ordered mapping from policy start year to policy name."""

    start_years: dict[int, str] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _validate_names(self) -> "PolicySchedule":
        names = list(self.start_years.values())
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(
                f"Policy names must be unique in the schedule, duplicated: {duplicates}"
            )
        if any(not n for n in names):
            raise ValueError("Policy names must be non-empty.")
        return self

    def policy_names(self) -> list[str]:
        """All policy names ordered by start year."""
        return [self.start_years[y] for y in sorted(self.start_years)]

    def policy_for_year(self, year: int) -> str:
        """Policy prevailing in a simulated year.

        The policy starting in `year` if any, otherwise the latest one that
        started before it. Years before the first start year fall back to
        the earliest policy so that there is always a policy to apply.
        """
        started = [y for y in sorted(self.start_years) if y <= year]
        if started:
            return self.start_years[started[-1]]
        return self.start_years[min(self.start_years)]

    def require(self, policy: str) -> str:
        """Return `policy` unchanged, or raise if the schedule does not know it."""
        if policy not in self.start_years.values():
            msg = (
                f"Policy '{policy}' is not in the policy schedule "
                f"{self.policy_names()}."
            )
            raise ValueError(msg)
        return policy


class UpratingFactor(EuromatchBase, frozen=True):
    """One (simulated year, policy) → factor entry."""

    year: int
    policy: str = Field(..., min_length=1)
    factor: float = Field(..., gt=0)


class UpratingTable(EuromatchBase, frozen=True):
    """Multiplicative uprating factors keyed by simulated year and policy name."""

    entries: list[UpratingFactor] = Field(default_factory=list)

    @field_validator("entries")
    @classmethod
    def _unique_entries(cls, entries: list[UpratingFactor]) -> list[UpratingFactor]:
        seen: set[tuple[int, str]] = set()
        for entry in entries:
            key = (entry.year, entry.policy)
            if key in seen:
                raise ValueError(f"Duplicate uprating factor for {key}.")
            seen.add(key)
        return entries

    @classmethod
    def from_mapping(cls, factors: dict[tuple[int, str], float]) -> "UpratingTable":
        return cls(entries=[
            UpratingFactor(year=year, policy=policy, factor=factor)
            for (year, policy), factor in factors.items()
        ])

    def factor(self, year: int, policy: str) -> float:
        """Uprating factor for a simulated year and the policy applied in it."""
        for entry in self.entries:
            if entry.year == year and entry.policy == policy:
                return entry.factor
        msg = f"No uprating factor for simulated year {year} and policy '{policy}'."
        raise ValueError(msg)
