"""POST /v1/simulation - Micro vs Réel regime comparison endpoint"""

import time
from typing import Any
from fastapi import APIRouter, Body, Depends, Request

from fiscal_navigator.api.v1.schemas import ActivityRatesSchema, ActivityTypesResponse, SimulationResponse
from fiscal_navigator.api.dependencies import get_advisory_client, get_request_id
from fiscal_navigator.config import settings
from fiscal_navigator.domain.rates import RATE_TABLES
from fiscal_navigator.domain.simulation import CALCULATION_ERROR_MESSAGE, simulate
from fiscal_navigator.infrastructure.clients.advisory import AdvisoryClient
from fiscal_navigator.infrastructure.observability.metrics import record_simulation, record_simulation_error
from fiscal_navigator.infrastructure.observability.logging import log_simulation

router = APIRouter()


@router.post("/simulation", response_model=SimulationResponse)
async def create_simulation(
    request: Request,
    payload: Any = Body(...),
    advisory_client: AdvisoryClient = Depends(get_advisory_client),
):
    """
    Compare Micro and Réel outcomes for a business.

    Flow:
    1. Validate the payload (errors are reported in-band, status stays 200)
    2. Compute both regimes
    3. Fetch the advisory recommendation (fallback text on failure)
    4. Record metrics and logs
    """
    start_time = time.time()
    request_id = get_request_id(request)

    result = await simulate(payload, advisory_client, advisory_timeout=settings.advisory_timeout_seconds)

    if result.error is None:
        record_simulation(result.advantageous_regime, result.activity_type.value)
    else:
        record_simulation_error("calculation" if result.error == CALCULATION_ERROR_MESSAGE else "validation")

    duration_ms = (time.time() - start_time) * 1000
    log_simulation(request_id, result.activity_type.value, result.advantageous_regime, result.error, duration_ms)

    return SimulationResponse.from_result(result)


@router.get("/activity-types", response_model=ActivityTypesResponse)
def list_activity_types():
    """Micro regime rates for every supported activity type"""
    return ActivityTypesResponse(
        activity_types=[
            ActivityRatesSchema(
                activity_type=activity_type,
                allowance_rate=rates.allowance_rate,
                min_allowance=rates.min_allowance,
                social_contribution_rate=rates.social_contribution_rate,
                cfp_rate=rates.cfp_rate,
            )
            for activity_type, rates in RATE_TABLES.items()
        ]
    )
