"""Standalone donor population validation script.

Loads resolved donor records from JSON, aggregates every household, builds
the donor index and prints labour-key coverage.

Usage:
    python -m scripts.validate_donors data/donors_2019.json
    python -m scripts.validate_donors --year 2021 data/donors_2019.json

The JSON payload holds the policy schedule, the first simulated year and the
donor households:

    {"policy_schedule": {"2019": "UK_2019"}, "start_year": 2019,
     "households": [{"household_id": 1, "region": "UKC", "occupants": [...]}]}
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import Field, ValidationError

from euromatch.config.settings import get_settings
from euromatch.engine.donor_index import DonorIndex, reachable_labour_keys
from euromatch.engine.population import DonorPopulation, build_donor_population
from euromatch.models.common import EuromatchBase
from euromatch.models.donor import DonorHouseholdRecord
from euromatch.models.policy import PolicySchedule
from euromatch.observability.logging_setup import configure_logging


class DonorPayload(EuromatchBase):
    """Top-level JSON document accepted by the script."""

    policy_schedule: dict[int, str] = Field(..., min_length=1)
    start_year: int
    households: list[DonorHouseholdRecord] = Field(default_factory=list)


def load_payload(path: Path) -> DonorPayload:
    return DonorPayload.model_validate_json(path.read_text(encoding="utf-8"))


def _labour_label(labour_key: tuple) -> str:
    male, female = labour_key
    return f"{male or '-'}/{female or '-'}"


def _print_header(path: Path, population: DonorPopulation) -> None:
    w = 60
    print("=" * w)
    print("  euromatch Donor Validation")
    print(f"  {path}")
    print("=" * w)
    print(f"  Households:  {len(population)}")
    print(f"  Base policy: {population.base_policy}")


def _print_medians(population: DonorPopulation) -> None:
    print()
    print(f"  {'Policy':<20} {'Median gross income':>20}")
    print(f"  {'--------------------':<20} {'--------------------':>20}")
    for policy, median in population.median_gross_income.items():
        print(f"  {policy:<20} {median:>20,.2f}")


def _print_coverage(index: DonorIndex, labour_keys: list[tuple]) -> None:
    print()
    print(f"  {'Labour (M/F)':<16} {'Donors':>8}")
    print(f"  {'----------------':<16} {'--------':>8}")
    for labour_key in labour_keys:
        count = len(index.donors_for_labour(labour_key))
        print(f"  {_labour_label(labour_key):<16} {count:>8}")


def main(argv: list[str] | None = None) -> int:
    """Run donor validation; returns the process exit code."""
    parser = argparse.ArgumentParser(
        description="Validate a euromatch donor population JSON file",
    )
    parser.add_argument("donors_path", type=Path, help="Path to donor JSON")
    parser.add_argument(
        "--year", type=int, default=None,
        help="Simulated year the index is built for",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    log = configure_logging(settings)

    try:
        payload = load_payload(args.donors_path)
        schedule = PolicySchedule(start_years=payload.policy_schedule)
        population = build_donor_population(
            payload.households,
            schedule=schedule,
            start_year=payload.start_year,
            settings=settings,
        )
    except (ValidationError, ValueError) as exc:
        log.error("donor_data_invalid", path=str(args.donors_path), error=str(exc))
        print()
        print("  RESULT: FAIL (donor data invalid)")
        return 1

    _print_header(args.donors_path, population)
    _print_medians(population)

    try:
        index = population.build_index(
            allowed_labour=settings.allowed_labour,
            age_top_code=settings.AGE_TOP_CODE,
            year=args.year,
        )
    except ValueError as exc:
        log.error("donor_index_incomplete", error=str(exc))
        print()
        print("=" * 60)
        print("  RESULT: FAIL (labour-supply coverage incomplete)")
        print("=" * 60)
        return 1

    _print_coverage(index, reachable_labour_keys(settings.allowed_labour))
    print()
    print(f"  Index checksum: {index.snapshot.checksum}")
    print("=" * 60)
    print("  RESULT: PASS")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
