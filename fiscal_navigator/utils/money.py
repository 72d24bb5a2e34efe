"""Currency amount helpers"""

import math

from fiscal_navigator.domain.exceptions import CalculationError


def round_currency(amount: float) -> float:
    """Round to currency minor-unit precision (2 decimals)"""
    return round(amount, 2)


def clamp_non_negative(amount: float) -> float:
    """Treat negative amounts as zero; reject NaN and infinities"""
    value = float(amount)
    if not math.isfinite(value):
        raise CalculationError(f"Amount must be a finite number, got {amount!r}")
    return max(0.0, value)
