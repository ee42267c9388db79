"""Match keys shared by donor and simulated households.

A single builder derives the keys for both sides of the match, from a
`HouseholdProfile`. Keys in decreasing priority:

- labour_key: (male labour, female labour). Never relaxed.
- key1: region.
- key2: health status of the head(s).
- key3: number of children.
- key4: age of the head(s), top-coded. Relaxed first.

Paired values always list the male first. A single-occupant household puts
ABSENT in the partner slot of the labour key.
"""

from dataclasses import dataclass, replace
from typing import Any

from euromatch.models.common import ABSENT, HealthStatus, Labour, Occupancy

MAX_DEPTH = 4

LabourKey = tuple[Labour | None, Labour | None]


@dataclass(frozen=True)
class AdultProfile:
    """Characteristics of one responsible adult relevant to matching."""

    age: int
    health_status: HealthStatus
    labour: Labour


@dataclass(frozen=True)
class HouseholdProfile:
    """Characteristics of a donor or simulated household relevant to matching."""

    occupancy: Occupancy
    region: str
    male: AdultProfile | None
    female: AdultProfile | None
    n_children: int

    def __post_init__(self) -> None:
        if self.occupancy == Occupancy.COUPLE and (self.male is None or self.female is None):
            raise ValueError("A couple profile needs both a male and a female adult.")
        if self.occupancy == Occupancy.SINGLE_MALE and (self.male is None or self.female is not None):
            raise ValueError("A single-male profile needs exactly a male adult.")
        if self.occupancy == Occupancy.SINGLE_FEMALE and (self.female is None or self.male is not None):
            raise ValueError("A single-female profile needs exactly a female adult.")
        if self.n_children < 0:
            raise ValueError(f"n_children must be non-negative, got {self.n_children}.")

    def with_labour(self, male: Labour | None = None, female: Labour | None = None) -> "HouseholdProfile":
        """The same household under a hypothetical labour-supply choice."""
        return replace(
            self,
            male=replace(self.male, labour=male) if self.male is not None and male is not None else self.male,
            female=replace(self.female, labour=female) if self.female is not None and female is not None else self.female,
        )


@dataclass(frozen=True)
class MatchKey:
    """Labour key plus four relaxable refinements."""

    labour_key: LabourKey
    key1: Any
    key2: Any
    key3: Any
    key4: Any

    def prefix(self, depth: int) -> tuple:
        """Cumulative key tuple used at a relaxation depth (0 = labour key only)."""
        if not 0 <= depth <= MAX_DEPTH:
            msg = f"depth must be between 0 and {MAX_DEPTH}, got {depth}."
            raise ValueError(msg)
        return (self.labour_key, self.key1, self.key2, self.key3, self.key4)[:depth + 1]

    def prefixes(self) -> tuple[tuple, ...]:
        return tuple(self.prefix(d) for d in range(MAX_DEPTH + 1))


def labour_key_for(profile: HouseholdProfile) -> LabourKey:
    male = profile.male.labour if profile.male is not None else ABSENT
    female = profile.female.labour if profile.female is not None else ABSENT
    return (male, female)


def build_match_key(profile: HouseholdProfile, *, age_top_code: int) -> MatchKey:
    """Derive the match key of a household.

    Args:
        profile: Donor or simulated household characteristics.
        age_top_code: Ages above this are treated as equal to it.
    """
    if profile.occupancy == Occupancy.COUPLE:
        health: Any = (profile.male.health_status, profile.female.health_status)
        age: Any = (
            min(age_top_code, profile.male.age),
            min(age_top_code, profile.female.age),
        )
    else:
        single = profile.male if profile.occupancy == Occupancy.SINGLE_MALE else profile.female
        health = single.health_status
        age = min(age_top_code, single.age)

    return MatchKey(
        labour_key=labour_key_for(profile),
        key1=profile.region,
        key2=health,
        key3=profile.n_children,
        key4=age,
    )
