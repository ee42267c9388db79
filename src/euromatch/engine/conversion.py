"""Convert a simulated household's gross income into disposable income.

The donor's disposable-to-gross ratio is applied to the simulated gross
income when the donor is a reliable reference. Otherwise the donor's
disposable income level is imputed directly: when the donor's gross income
is small relative to the donor median, when the ratio exceeds a ceiling, or
when the ratio was stored as 0.0 because its denominator was zero.
"""

from dataclasses import dataclass

from euromatch.engine.donor_household import DonorHousehold
from euromatch.engine.income_reader import IncomeReader


@dataclass(frozen=True)
class DisposableIncome:
    """Converted income and how it was obtained."""

    value: float
    imputed_from_donor: bool  # True when the donor's level was used, not the ratio
    ratio: float


def convert_gross_to_disposable(
    donor: DonorHousehold,
    gross_income: float,
    *,
    reader: IncomeReader,
    median_gross_income: float,
    percentage_of_median: float,
    max_ratio: float,
) -> DisposableIncome:
    """Disposable income of a simulated household matched to `donor`.

    Args:
        donor: The selected donor household.
        gross_income: Simulated gross income, in the reader's year terms.
        reader: Resolves the current policy and uprating factor.
        median_gross_income: Median donor gross income for the current
            policy, not uprated.
        percentage_of_median: Share of the median a donor's gross income
            must exceed for its ratio to be used.
        max_ratio: Largest ratio that may be applied.
    """
    donor_gross = reader.gross_income(donor)
    ratio = reader.disposable_to_gross_income_ratio(donor)
    threshold = percentage_of_median * median_gross_income * reader.uprating_factor()

    if donor_gross != 0.0 and donor_gross > threshold and ratio <= max_ratio:
        return DisposableIncome(value=ratio * gross_income, imputed_from_donor=False, ratio=ratio)
    return DisposableIncome(
        value=reader.disposable_income(donor),
        imputed_from_donor=True,
        ratio=ratio,
    )
