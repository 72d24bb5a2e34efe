"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

from fiscal_navigator.domain.models import ActivityType, SimulationResult


class CamelModel(BaseModel):
    """Serializes with camelCase keys, accepts either case"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MicroRegimeSchema(CamelModel):
    """Micro-Entreprise figures"""

    taxable_income: float
    tax_amount: float
    allowance_applied: float
    allowance_rate: float
    social_contributions_rate: float
    cfp_rate: float
    social_contributions: float
    cfp_contribution: float
    total_contributions: float
    net_income_after_all: float


class ReelRegimeSchema(CamelModel):
    """Régime Réel figures"""

    taxable_income: float
    tax_amount: float
    estimated_social_contributions_rate: float
    estimated_social_contributions: float
    net_income_after_all_contributions: float


class SimulationResponse(CamelModel):
    """Response for POST /v1/simulation"""

    micro: MicroRegimeSchema
    reel: ReelRegimeSchema
    activity_type: ActivityType
    recommendation: Optional[str] = None
    error: Optional[str] = None
    advantageous_regime: Optional[Literal["micro", "reel", "equal"]] = None

    @classmethod
    def from_result(cls, result: SimulationResult) -> "SimulationResponse":
        return cls(
            micro=MicroRegimeSchema.model_validate(result.micro),
            reel=ReelRegimeSchema.model_validate(result.reel),
            activity_type=result.activity_type,
            recommendation=result.recommendation,
            error=result.error,
            advantageous_regime=result.advantageous_regime,
        )


class FeedbackRequest(CamelModel):
    """Request body for POST /v1/feedback"""

    feedback_text: str = Field(..., min_length=1, max_length=2000, description="Free-text feedback")


class FeedbackResponse(BaseModel):
    """Response for POST /v1/feedback"""

    success: bool
    message: str


class ActivityRatesSchema(CamelModel):
    """Micro rates for one activity type"""

    activity_type: ActivityType
    allowance_rate: float
    min_allowance: float
    social_contribution_rate: float
    cfp_rate: float


class ActivityTypesResponse(CamelModel):
    """Response for GET /v1/activity-types"""

    activity_types: List[ActivityRatesSchema]
