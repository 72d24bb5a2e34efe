"""Simulation orchestrator - composes both regime calculators and the advisory text"""

import asyncio
import logging
from typing import Any, Optional, Protocol

from fiscal_navigator.domain.exceptions import SimulationInputError
from fiscal_navigator.domain.models import (
    ActivityType,
    MicroRegimeResult,
    RecommendationRequest,
    ReelRegimeResult,
    SimulationResult,
)
from fiscal_navigator.domain.rates import DEFAULT_ACTIVITY_TYPE, RATE_TABLES, REEL_SOCIAL_CONTRIBUTION_FACTOR
from fiscal_navigator.domain.regimes import compare_regimes, compute_micro, compute_reel
from fiscal_navigator.domain.validation import parse_simulation_input, submitted_activity_type

ADVISORY_FALLBACK = "La recommandation IA n'a pas pu être générée."
CALCULATION_ERROR_MESSAGE = "Une erreur est survenue lors du calcul des impôts."


class AdvisoryGenerator(Protocol):
    """Anything able to write a regime recommendation"""

    async def generate_recommendation(self, request: RecommendationRequest) -> str: ...


def neutral_micro_result() -> MicroRegimeResult:
    """Zeroed micro result carrying the default activity's rates"""
    rates = RATE_TABLES[DEFAULT_ACTIVITY_TYPE]
    return MicroRegimeResult(
        taxable_income=0.0,
        tax_amount=0.0,
        allowance_applied=0.0,
        allowance_rate=rates.allowance_rate,
        social_contributions_rate=rates.social_contribution_rate,
        cfp_rate=rates.cfp_rate,
        social_contributions=0.0,
        cfp_contribution=0.0,
        total_contributions=0.0,
        net_income_after_all=0.0,
    )


def neutral_reel_result() -> ReelRegimeResult:
    """Zeroed réel result"""
    return ReelRegimeResult(
        taxable_income=0.0,
        tax_amount=0.0,
        estimated_social_contributions_rate=REEL_SOCIAL_CONTRIBUTION_FACTOR,
        estimated_social_contributions=0.0,
        net_income_after_all_contributions=0.0,
    )


def failed_result(error: str, activity_type: Optional[ActivityType]) -> SimulationResult:
    return SimulationResult(
        micro=neutral_micro_result(),
        reel=neutral_reel_result(),
        activity_type=activity_type or DEFAULT_ACTIVITY_TYPE,
        recommendation=None,
        error=error,
    )


async def fetch_recommendation(
    advisory: AdvisoryGenerator,
    request: RecommendationRequest,
    timeout: Optional[float] = None,
) -> str:
    """
    Ask the advisory generator for prose, never raising.

    Any failure, including the timeout expiring, yields the fixed fallback text.
    """
    try:
        return await asyncio.wait_for(advisory.generate_recommendation(request), timeout=timeout)
    except asyncio.TimeoutError:
        logging.error(f"Advisory recommendation timed out after {timeout}s")
    except Exception as e:
        logging.error(f"Advisory recommendation error: {e}")
    return ADVISORY_FALLBACK


async def simulate(
    raw_input: Any,
    advisory: AdvisoryGenerator,
    *,
    advisory_timeout: Optional[float] = None,
) -> SimulationResult:
    """
    Main entry point: validate, run both regimes, attach a recommendation.

    Flow:
    1. Validate the raw payload (invalid → in-band error + neutral results)
    2. Compute Micro and Réel results
    3. Fetch the advisory recommendation (failure → fallback text)

    The returned result always has micro and reel populated.
    """
    try:
        simulation_input = parse_simulation_input(raw_input)
    except SimulationInputError as e:
        logging.warning(f"Simulation input rejected: {e}")
        return failed_result(str(e), submitted_activity_type(raw_input))

    activity_type = simulation_input.activity_type

    try:
        micro = compute_micro(simulation_input.annual_revenue, simulation_input.annual_expenses, activity_type)
        reel = compute_reel(simulation_input.annual_revenue, simulation_input.annual_expenses)
    except Exception as e:
        logging.error(f"Tax calculation error: {e}", extra={"activity_type": activity_type.value})
        return failed_result(CALCULATION_ERROR_MESSAGE, activity_type)

    recommendation = await fetch_recommendation(
        advisory,
        RecommendationRequest(
            annual_revenue=simulation_input.annual_revenue,
            annual_expenses=simulation_input.annual_expenses,
            activity_type=activity_type,
            micro=micro,
            reel=reel,
        ),
        timeout=advisory_timeout,
    )

    return SimulationResult(
        micro=micro,
        reel=reel,
        activity_type=activity_type,
        recommendation=recommendation,
        advantageous_regime=compare_regimes(micro, reel),
    )
