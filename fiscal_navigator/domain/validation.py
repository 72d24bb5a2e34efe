"""Simulation input validation"""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fiscal_navigator.domain.exceptions import SimulationInputError
from fiscal_navigator.domain.models import ActivityType, SimulationInput

# User-facing messages, keyed by wire field name
_FIELD_MESSAGES = {
    "annualRevenue": "Le chiffre d'affaires annuel doit être positif ou nul.",
    "annualExpenses": "Les charges annuelles doivent être positives ou nulles.",
    "activityType": "Veuillez sélectionner un type d'activité valide.",
}

_MISSING_MESSAGES = {
    "annualRevenue": "Le chiffre d'affaires annuel est requis.",
    "annualExpenses": "Les charges annuelles sont requises.",
    "activityType": "Le type d'activité est requis.",
}

_ALIASES = {
    "annual_revenue": "annualRevenue",
    "annual_expenses": "annualExpenses",
    "activity_type": "activityType",
}


class SimulationInputSchema(BaseModel):
    """Raw simulation payload; accepts camelCase or snake_case keys"""

    model_config = ConfigDict(populate_by_name=True)

    annual_revenue: float = Field(..., ge=0, strict=True, allow_inf_nan=False, alias="annualRevenue")
    annual_expenses: float = Field(..., ge=0, strict=True, allow_inf_nan=False, alias="annualExpenses")
    activity_type: ActivityType = Field(..., alias="activityType")


def _message_for(error: dict) -> str:
    field = str(error["loc"][0]) if error["loc"] else ""
    field = _ALIASES.get(field, field)
    if error["type"] == "missing" and field in _MISSING_MESSAGES:
        return _MISSING_MESSAGES[field]
    return _FIELD_MESSAGES.get(field, error["msg"])


def parse_simulation_input(raw_input: Any) -> SimulationInput:
    """
    Validate a raw payload.

    Raises:
        SimulationInputError: With one French message per invalid field
    """
    try:
        parsed = SimulationInputSchema.model_validate(raw_input)
    except ValidationError as e:
        messages: list[str] = []
        for error in e.errors():
            message = _message_for(error)
            if message not in messages:
                messages.append(message)
        raise SimulationInputError(messages) from e

    return SimulationInput(
        annual_revenue=parsed.annual_revenue,
        annual_expenses=parsed.annual_expenses,
        activity_type=parsed.activity_type,
    )


def submitted_activity_type(raw_input: Any) -> Optional[ActivityType]:
    """Activity type from an otherwise invalid payload, when it is itself valid"""
    if not isinstance(raw_input, Mapping):
        return None
    value = raw_input.get("activityType", raw_input.get("activity_type"))
    try:
        return ActivityType(value)
    except (TypeError, ValueError):
        return None
