"""Micro and Réel regime calculators - core business logic for the comparison"""

import math
from typing import Mapping, Sequence

from fiscal_navigator.domain.exceptions import CalculationError, ConfigurationError
from fiscal_navigator.domain.income_tax import compute_income_tax
from fiscal_navigator.domain.models import (
    ActivityType,
    MicroRegimeResult,
    RateTable,
    ReelRegimeResult,
    Regime,
    TaxBracket,
)
from fiscal_navigator.domain.rates import INCOME_TAX_BRACKETS, RATE_TABLES, REEL_SOCIAL_CONTRIBUTION_FACTOR
from fiscal_navigator.utils.money import clamp_non_negative, round_currency


def get_rate_table(
    activity_type: ActivityType,
    rate_tables: Mapping[ActivityType, RateTable] = RATE_TABLES,
) -> RateTable:
    """Look up micro rates; unknown activity types are a configuration problem"""
    try:
        return rate_tables[ActivityType(activity_type)]
    except (KeyError, ValueError) as e:
        raise ConfigurationError(f"No rate table for activity type {activity_type!r}") from e


def compute_micro(
    revenue: float,
    expenses: float,
    activity_type: ActivityType,
    rate_tables: Mapping[ActivityType, RateTable] = RATE_TABLES,
    brackets: Sequence[TaxBracket] = INCOME_TAX_BRACKETS,
) -> MicroRegimeResult:
    """
    Régime Micro-Entreprise.

    Rules:
    - Income tax base: revenue minus the flat allowance, where the allowance is
      the percentage allowance floored at min_allowance and capped at revenue
    - Social contributions and CFP: percentage of gross revenue
    - Net income subtracts real expenses so both regimes compare on equal footing
    """
    revenue = clamp_non_negative(revenue)
    expenses = clamp_non_negative(expenses)
    rates = get_rate_table(activity_type, rate_tables)

    percentage_allowance = revenue * rates.allowance_rate
    effective_allowance = min(revenue, max(percentage_allowance, rates.min_allowance))
    taxable_income = max(0.0, revenue - effective_allowance)
    tax_amount = compute_income_tax(taxable_income, brackets)

    # Contributions ignore the allowance
    social_contributions = revenue * rates.social_contribution_rate
    cfp_contribution = revenue * rates.cfp_rate
    total_contributions = social_contributions + cfp_contribution

    net_income = revenue - expenses - tax_amount - total_contributions

    if not math.isfinite(net_income):
        raise CalculationError(f"Micro calculation overflowed for revenue={revenue}, expenses={expenses}")

    return MicroRegimeResult(
        taxable_income=round_currency(taxable_income),
        tax_amount=tax_amount,
        allowance_applied=round_currency(effective_allowance),
        allowance_rate=rates.allowance_rate,
        social_contributions_rate=rates.social_contribution_rate,
        cfp_rate=rates.cfp_rate,
        social_contributions=round_currency(social_contributions),
        cfp_contribution=round_currency(cfp_contribution),
        total_contributions=round_currency(total_contributions),
        net_income_after_all=round_currency(net_income),
    )


def estimate_reel_contributions(profit: float, factor: float = REEL_SOCIAL_CONTRIBUTION_FACTOR) -> float:
    """
    Social contributions assessed on profit net of themselves.

    C = f * (P - C)  =>  C = P * f / (1 + f)
    """
    return profit * factor / (1.0 + factor)


def compute_reel(
    revenue: float,
    expenses: float,
    contribution_factor: float = REEL_SOCIAL_CONTRIBUTION_FACTOR,
    brackets: Sequence[TaxBracket] = INCOME_TAX_BRACKETS,
) -> ReelRegimeResult:
    """
    Régime Réel simplifié.

    Profit is revenue minus real expenses; estimated social contributions are
    deducted before income tax, so net income is taxable income minus tax.
    """
    revenue = clamp_non_negative(revenue)
    expenses = clamp_non_negative(expenses)

    profit = max(0.0, revenue - expenses)
    contributions = estimate_reel_contributions(profit, contribution_factor)
    taxable_income = max(0.0, profit - contributions)
    tax_amount = compute_income_tax(taxable_income, brackets)
    net_income = taxable_income - tax_amount

    if not math.isfinite(net_income):
        raise CalculationError(f"Réel calculation overflowed for revenue={revenue}, expenses={expenses}")

    return ReelRegimeResult(
        taxable_income=round_currency(taxable_income),
        tax_amount=tax_amount,
        estimated_social_contributions_rate=contribution_factor,
        estimated_social_contributions=round_currency(contributions),
        net_income_after_all_contributions=round_currency(net_income),
    )


def compare_regimes(micro: MicroRegimeResult, reel: ReelRegimeResult) -> Regime:
    """Regime leaving the higher net income; within one cent counts as equal"""
    difference = micro.net_income_after_all - reel.net_income_after_all_contributions
    if abs(difference) < 0.01:
        return "equal"
    return "micro" if difference > 0 else "reel"
