"""DonorIndex — layered donor lookup with criteria relaxation.

Each donor household is stored under five cumulative key prefixes:

    depth 0: (labour_key,)
    depth 1: (labour_key, key1)
    ...
    depth 4: (labour_key, key1, key2, key3, key4)

so that a query can be answered at any relaxation depth with a single
dictionary lookup. A lookup tries depth 4 first and drops the lowest
priority key until a non-empty bucket is found. The build checks that every
reachable labour key has donors at depth 0, so relaxation always ends with
candidates.

The index is immutable once built; concurrent lookups need no locking.
"""

import hashlib
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from uuid import UUID

from uuid_extensions import uuid7

from euromatch.engine.donor_household import DonorHousehold, collect_donor_households
from euromatch.engine.keys import (
    MAX_DEPTH,
    HouseholdProfile,
    LabourKey,
    MatchKey,
    build_match_key,
)
from euromatch.engine.layered_map import LayeredMap
from euromatch.models.common import ABSENT, Gender, Labour

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexSnapshot:
    """Identity of one built index."""

    index_id: UUID
    year: int | None
    household_count: int
    checksum: str  # sha256 over every household id and its keys


@dataclass(frozen=True)
class LookupResult:
    """Candidates returned by a lookup and the depth they were found at."""

    depth: int
    candidates: frozenset[DonorHousehold]

    def ordered(self) -> list[DonorHousehold]:
        """Candidates sorted by household id."""
        return sorted(self.candidates, key=lambda h: h.household_id)


def reachable_labour_keys(allowed_labour: Mapping[Gender, Iterable[Labour]]) -> list[LabourKey]:
    """Every labour key a simulated household can ask for.

    Couples combine each male choice with each female choice; singles pair
    their own choice with ABSENT (male first).
    """
    male_choices = list(allowed_labour.get(Gender.MALE, ()))
    female_choices = list(allowed_labour.get(Gender.FEMALE, ()))
    keys: list[LabourKey] = []
    for male in male_choices:
        keys.append((male, ABSENT))
        for female in female_choices:
            keys.append((male, female))
    for female in female_choices:
        keys.append((ABSENT, female))
    return keys


def _checksum(keys_by_id: Mapping[int, MatchKey]) -> str:
    digest = hashlib.sha256()
    for household_id in sorted(keys_by_id):
        digest.update(f"{household_id}:{keys_by_id[household_id]!r}\n".encode())
    return f"sha256:{digest.hexdigest()}"


class DonorIndex:
    """Read-only donor lookup built from the full donor household collection."""

    def __init__(
        self,
        *,
        layers: LayeredMap[tuple, DonorHousehold],
        keys_by_id: Mapping[int, MatchKey],
        age_top_code: int,
        snapshot: IndexSnapshot,
    ) -> None:
        self._layers = layers
        self._keys_by_id = dict(keys_by_id)
        self._age_top_code = age_top_code
        self._snapshot = snapshot

    @classmethod
    def build(
        cls,
        households: Iterable[DonorHousehold],
        *,
        allowed_labour: Mapping[Gender, Iterable[Labour]],
        age_top_code: int,
        year: int | None = None,
    ) -> "DonorIndex":
        """Index every donor household at every relaxation depth.

        Args:
            households: All donor households of the run (or year).
            allowed_labour: Labour choices simulated households may make,
                per gender.
            age_top_code: Top-code applied to ages in key4.
            year: Simulated year the index serves, if built per year.

        Raises:
            ValueError: If two households share an id but not their fields,
                or a reachable labour key has no donor at all.
        """
        by_id = collect_donor_households(households)
        layers: LayeredMap[tuple, DonorHousehold] = LayeredMap(MAX_DEPTH + 1)
        keys_by_id: dict[int, MatchKey] = {}

        for household_id, house in by_id.items():
            key = build_match_key(house.profile(), age_top_code=age_top_code)
            keys_by_id[household_id] = key
            for depth, prefix in enumerate(key.prefixes()):
                layers.add(depth, prefix, house)

        uncovered = [
            labour_key for labour_key in reachable_labour_keys(allowed_labour)
            if not layers.get(0, (labour_key,))
        ]
        if uncovered:
            msg = (
                f"There are no donor households for labour keys {uncovered}; "
                f"every allowed labour-supply combination needs at least one donor."
            )
            raise ValueError(msg)

        layers.freeze()
        snapshot = IndexSnapshot(
            index_id=uuid7(),
            year=year,
            household_count=len(by_id),
            checksum=_checksum(keys_by_id),
        )
        logger.info(
            "Built donor index: households=%d, labour_keys=%d, year=%s",
            snapshot.household_count, layers.bucket_count(0), year,
        )
        return cls(
            layers=layers,
            keys_by_id=keys_by_id,
            age_top_code=age_top_code,
            snapshot=snapshot,
        )

    @property
    def snapshot(self) -> IndexSnapshot:
        return self._snapshot

    @property
    def age_top_code(self) -> int:
        return self._age_top_code

    def __len__(self) -> int:
        return len(self._keys_by_id)

    def labour_keys(self) -> list[LabourKey]:
        """Labour keys with at least one donor."""
        return [prefix[0] for prefix in self._layers.keys(0)]

    def key_of(self, household_id: int) -> MatchKey:
        """Match key a donor household was indexed under."""
        try:
            return self._keys_by_id[household_id]
        except KeyError:
            msg = f"Donor household {household_id} is not in the index."
            raise KeyError(msg) from None

    def query_key(self, profile: HouseholdProfile) -> MatchKey:
        """Match key of a simulated household, derived exactly as for donors."""
        return build_match_key(profile, age_top_code=self._age_top_code)

    def donors_for_labour(self, labour_key: LabourKey) -> frozenset[DonorHousehold]:
        """Every donor indexed under a labour key (the depth-0 bucket)."""
        return self._layers.get(0, (labour_key,))

    def candidates_at(self, key: MatchKey, depth: int) -> frozenset[DonorHousehold]:
        """Donors sharing `key` up to `depth`; empty when there are none."""
        return self._layers.get(depth, key.prefix(depth))

    def lookup_with_depth(self, key: MatchKey) -> LookupResult:
        """Relaxation search returning the candidates and the depth reached.

        Raises:
            ValueError: If no donor shares the query's labour key.
        """
        for depth in range(MAX_DEPTH, -1, -1):
            candidates = self.candidates_at(key, depth)
            if candidates:
                if depth < MAX_DEPTH:
                    logger.debug(
                        "Relaxed donor match to depth %d for labour key %s (%d candidates)",
                        depth, key.labour_key, len(candidates),
                    )
                return LookupResult(depth=depth, candidates=candidates)
        msg = f"There are no donor households that match the labour key {key.labour_key}."
        raise ValueError(msg)

    def lookup(self, key: MatchKey) -> frozenset[DonorHousehold]:
        """Closest-matching donor households; never empty for a reachable labour key."""
        return self.lookup_with_depth(key).candidates
