"""Per-age child counts and child-presence indicators.

Counts cover single years of age 0–17. The six indicators are a pure
function of the counts and are recomputed from scratch whenever the counts
change.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

N_CHILD_AGES = 18

# Indicator name -> (first age, last age), inclusive
CHILD_BANDS: dict[str, tuple[int, int]] = {
    "d_children_3under": (0, 2),
    "d_children_4_12": (4, 12),
    "d_children_2under": (0, 1),
    "d_children_3_6": (3, 6),
    "d_children_7_12": (7, 12),
    "d_children_13_17": (13, 17),
}


@dataclass(frozen=True)
class ChildBands:
    """Presence of at least one child in each age band."""

    d_children_3under: bool
    d_children_4_12: bool
    d_children_2under: bool
    d_children_3_6: bool
    d_children_7_12: bool
    d_children_13_17: bool


def count_children_by_age(ages: Iterable[int], *, household_id: int | None = None) -> np.ndarray:
    """Number of children at each single year of age 0–17.

    Raises:
        ValueError: If any age falls outside 0–17.
    """
    ages_arr = np.asarray(list(ages), dtype=np.int64)
    bad = ages_arr[(ages_arr < 0) | (ages_arr >= N_CHILD_AGES)]
    if bad.size:
        msg = (
            f"Household {household_id}: unsupported child age {int(bad[0])}; "
            f"children must be aged 0-{N_CHILD_AGES - 1}."
        )
        raise ValueError(msg)
    counts = np.bincount(ages_arr, minlength=N_CHILD_AGES)
    counts.flags.writeable = False
    return counts


def child_bands(counts: np.ndarray) -> ChildBands:
    """Derive the six band indicators from per-age counts."""
    counts = np.asarray(counts)
    if counts.shape != (N_CHILD_AGES,):
        msg = f"Expected {N_CHILD_AGES} per-age counts, got shape {counts.shape}."
        raise ValueError(msg)
    return ChildBands(**{
        name: bool(counts[first:last + 1].sum() > 0)
        for name, (first, last) in CHILD_BANDS.items()
    })
