"""Progressive annual income tax (FBR salaried slabs)"""

from typing import List, Optional, Tuple

from university_erp.domain.exceptions import ValidationError
from university_erp.domain.models import TaxCalculation
from university_erp.utils.numbers import round_amount

# (lower bound, upper bound, marginal rate); None means unbounded
TAX_BRACKETS: List[Tuple[float, Optional[float], float]] = [
    (0, 600_000, 0.0),
    (600_000, 1_200_000, 0.025),
    (1_200_000, 2_400_000, 0.125),
    (2_400_000, 3_600_000, 0.20),
    (3_600_000, 6_000_000, 0.25),
    (6_000_000, None, 0.325),
]


def calculate_income_tax(annual_income: float) -> int:
    """Tax on an annual income, rounded to a whole amount"""
    if annual_income < 0:
        raise ValidationError("Annual income cannot be negative")

    tax = 0.0
    for lower, upper, rate in TAX_BRACKETS:
        if annual_income <= lower:
            break
        taxable = (annual_income if upper is None else min(annual_income, upper)) - lower
        tax += taxable * rate
    return round_amount(tax)


def calculate_monthly_tax(annual_tax: float) -> int:
    return round_amount(annual_tax / 12)


def tax_summary(annual_income: float) -> TaxCalculation:
    annual_tax = calculate_income_tax(annual_income)
    return TaxCalculation(
        annual_income=annual_income,
        annual_tax=annual_tax,
        monthly_tax=calculate_monthly_tax(annual_tax),
    )
