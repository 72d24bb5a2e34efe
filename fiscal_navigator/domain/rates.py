"""
Fiscal parameters: income-tax brackets and micro regime rate tables.

Values apply to 2023 income taxed in 2024, one fiscal part. They are data only;
calculators take them as arguments so a new year is a new table, not new code.
"""

import math
from types import MappingProxyType
from typing import Mapping, Sequence

from fiscal_navigator.domain.exceptions import ConfigurationError
from fiscal_navigator.domain.models import ActivityType, RateTable, TaxBracket


def validate_brackets(brackets: Sequence[TaxBracket]) -> tuple[TaxBracket, ...]:
    """
    Check a bracket table and freeze it.

    Limits must strictly increase and end unbounded, rates must be in [0, 1]
    and never decrease.
    """
    if not brackets:
        raise ConfigurationError("Bracket table is empty")

    previous_limit = 0.0
    previous_rate = 0.0
    for bracket in brackets:
        if bracket.upper_limit <= previous_limit:
            raise ConfigurationError(f"Bracket limits must increase: {bracket.upper_limit} after {previous_limit}")
        if not 0.0 <= bracket.marginal_rate <= 1.0:
            raise ConfigurationError(f"Marginal rate out of range: {bracket.marginal_rate}")
        if bracket.marginal_rate < previous_rate:
            raise ConfigurationError(f"Marginal rates must not decrease: {bracket.marginal_rate} after {previous_rate}")
        previous_limit = bracket.upper_limit
        previous_rate = bracket.marginal_rate

    if not math.isinf(brackets[-1].upper_limit):
        raise ConfigurationError("Last bracket must be unbounded")

    return tuple(brackets)


def validate_rate_tables(tables: Mapping[ActivityType, RateTable]) -> Mapping[ActivityType, RateTable]:
    """Check every activity type has rates in [0, 1] and return a read-only view"""
    missing = [activity.value for activity in ActivityType if activity not in tables]
    if missing:
        raise ConfigurationError(f"No rate table for: {', '.join(missing)}")

    for activity, table in tables.items():
        for name in ("allowance_rate", "social_contribution_rate", "cfp_rate"):
            value = getattr(table, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{activity.value}.{name} out of range: {value}")
        if table.min_allowance < 0:
            raise ConfigurationError(f"{activity.value}.min_allowance must be >= 0")

    return MappingProxyType(dict(tables))


INCOME_TAX_BRACKETS = validate_brackets([
    TaxBracket(upper_limit=11_294, marginal_rate=0.00),
    TaxBracket(upper_limit=28_797, marginal_rate=0.11),
    TaxBracket(upper_limit=82_341, marginal_rate=0.30),
    TaxBracket(upper_limit=177_106, marginal_rate=0.41),
    TaxBracket(upper_limit=math.inf, marginal_rate=0.45),
])

MIN_ALLOWANCE = 305.0

RATE_TABLES = validate_rate_tables({
    ActivityType.VENTE_BIC: RateTable(
        allowance_rate=0.71, min_allowance=MIN_ALLOWANCE, social_contribution_rate=0.123, cfp_rate=0.001
    ),
    # CFP for artisans is 0.3%; commercial services rate kept
    ActivityType.SERVICE_BIC: RateTable(
        allowance_rate=0.50, min_allowance=MIN_ALLOWANCE, social_contribution_rate=0.212, cfp_rate=0.001
    ),
    ActivityType.LIBERAL_BNC_AUTRE: RateTable(
        allowance_rate=0.34, min_allowance=MIN_ALLOWANCE, social_contribution_rate=0.231, cfp_rate=0.002
    ),
    ActivityType.LIBERAL_BNC_CIPAV: RateTable(
        allowance_rate=0.34, min_allowance=MIN_ALLOWANCE, social_contribution_rate=0.232, cfp_rate=0.002
    ),
})

# Réel: contributions are 45% of profit net of the contributions themselves
REEL_SOCIAL_CONTRIBUTION_FACTOR = 0.45

DEFAULT_ACTIVITY_TYPE = ActivityType.LIBERAL_BNC_AUTRE
