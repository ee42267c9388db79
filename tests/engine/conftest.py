"""Engine test fixtures."""

import pytest

from euromatch.engine.donor_household import DonorHousehold, build_donor_household


@pytest.fixture()
def build_house(policies):
    """Aggregate a DonorHouseholdRecord with UK_2019 as base policy."""

    def _build(record, base_policy: str = "UK_2019") -> DonorHousehold:
        return build_donor_household(
            record, policies=policies, base_policy=base_policy, age_to_become_responsible=18,
        )

    return _build
