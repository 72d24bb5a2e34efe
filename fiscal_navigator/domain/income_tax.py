"""Progressive income tax - marginal bracket computation"""

from typing import Sequence

from fiscal_navigator.domain.models import TaxBracket
from fiscal_navigator.domain.rates import INCOME_TAX_BRACKETS
from fiscal_navigator.utils.money import round_currency


def compute_income_tax(
    taxable_income: float,
    brackets: Sequence[TaxBracket] = INCOME_TAX_BRACKETS,
) -> float:
    """
    Income tax for a single fiscal part using marginal brackets.

    Each slice of income between two consecutive limits is taxed at that
    bracket's rate; zero, negative or NaN income yields 0.

    Example:
        33000 → (28797 - 11294) * 0.11 + (33000 - 28797) * 0.30 = 3186.23
    """
    if not taxable_income > 0:
        return 0.0

    tax = 0.0
    previous_limit = 0.0

    for bracket in brackets:
        if taxable_income <= previous_limit:
            break
        taxable_in_bracket = min(taxable_income, bracket.upper_limit) - previous_limit
        tax += taxable_in_bracket * bracket.marginal_rate
        previous_limit = bracket.upper_limit

    return round_currency(tax)
