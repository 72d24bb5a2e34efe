"""Domain models - pure Python dataclasses representing tax simulation entities"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional


class ActivityType(str, Enum):
    """Micro-entrepreneur activity category"""

    VENTE_BIC = "VENTE_BIC"  # Ventes de marchandises
    SERVICE_BIC = "SERVICE_BIC"  # Prestations de services commerciales et artisanales
    LIBERAL_BNC_AUTRE = "LIBERAL_BNC_AUTRE"  # Autres prestations de services BNC
    LIBERAL_BNC_CIPAV = "LIBERAL_BNC_CIPAV"  # Professions libérales réglementées (Cipav)


Regime = Literal["micro", "reel", "equal"]


@dataclass(frozen=True)
class RateTable:
    """Micro regime rates for one activity type"""

    allowance_rate: float
    min_allowance: float
    social_contribution_rate: float
    cfp_rate: float


@dataclass(frozen=True)
class TaxBracket:
    """Marginal income-tax bracket, applies up to upper_limit"""

    upper_limit: float
    marginal_rate: float


@dataclass(frozen=True)
class MicroRegimeResult:
    """Output of the Micro-Entreprise calculation"""

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


@dataclass(frozen=True)
class ReelRegimeResult:
    """Output of the Régime Réel calculation"""

    taxable_income: float
    tax_amount: float
    estimated_social_contributions_rate: float
    estimated_social_contributions: float
    net_income_after_all_contributions: float


@dataclass(frozen=True)
class SimulationInput:
    """Validated simulation request"""

    annual_revenue: float
    annual_expenses: float
    activity_type: ActivityType


@dataclass(frozen=True)
class RecommendationRequest:
    """Data handed to the advisory text generator"""

    annual_revenue: float
    annual_expenses: float
    activity_type: ActivityType
    micro: Optional[MicroRegimeResult] = None
    reel: Optional[ReelRegimeResult] = None


@dataclass
class SimulationResult:
    """Aggregate returned to the caller; micro and reel are always populated"""

    micro: MicroRegimeResult
    reel: ReelRegimeResult
    activity_type: ActivityType
    recommendation: Optional[str] = None
    error: Optional[str] = None
    advantageous_regime: Optional[Regime] = None


@dataclass(frozen=True)
class FeedbackOutcome:
    """Result of a feedback submission"""

    success: bool
    message: str
