"""Shared enums and base model used across euromatch domain models."""

from enum import StrEnum
from typing import Final

from pydantic import BaseModel

# Partner slot of a single-occupant household in any paired key. Distinct
# from every Labour, HealthStatus and age value.
ABSENT: Final = None


# --- Shared enums ---


class Gender(StrEnum):
    """Gender as recorded in the donor data."""

    MALE = "MALE"
    FEMALE = "FEMALE"


class Occupancy(StrEnum):
    """Who heads a benefit unit."""

    COUPLE = "COUPLE"
    SINGLE_MALE = "SINGLE_MALE"
    SINGLE_FEMALE = "SINGLE_FEMALE"


class HealthStatus(StrEnum):
    """Self-reported health of an adult."""

    POOR = "POOR"
    FAIR = "FAIR"
    GOOD = "GOOD"
    VERY_GOOD = "VERY_GOOD"
    EXCELLENT = "EXCELLENT"


class Labour(StrEnum):
    """Discretised weekly hours of work supplied by an adult."""

    ZERO = "ZERO"
    TEN = "TEN"
    TWENTY = "TWENTY"
    THIRTY = "THIRTY"
    FORTY = "FORTY"

    @property
    def hours(self) -> int:
        """Weekly hours represented by the category."""
        return _LABOUR_HOURS[self]


_LABOUR_HOURS: dict[Labour, int] = {
    Labour.ZERO: 0,
    Labour.TEN: 20,
    Labour.TWENTY: 30,
    Labour.THIRTY: 36,
    Labour.FORTY: 40,
}

# (inclusive upper bound of observed hours, category), checked in order
_HOURS_BANDS: tuple[tuple[float, Labour], ...] = (
    (5, Labour.ZERO),
    (15, Labour.TEN),
    (25, Labour.TWENTY),
    (35, Labour.THIRTY),
)


def labour_from_hours(hours_worked: float) -> Labour:
    """Map observed weekly hours onto a labour-supply category.

    The same banding applies to both genders.
    """
    for upper, labour in _HOURS_BANDS:
        if hours_worked <= upper:
            return labour
    return Labour.FORTY


# --- Base model ---


class EuromatchBase(BaseModel):
    """Base model with common configuration for all euromatch Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }
