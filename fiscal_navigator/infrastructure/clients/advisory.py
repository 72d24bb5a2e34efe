"""Advisory HTTP client - asks a generative text API for a regime recommendation"""

import httpx
from typing import Optional

from fiscal_navigator.config import settings
from fiscal_navigator.domain.exceptions import AdvisoryUnavailableError
from fiscal_navigator.domain.models import ActivityType, RecommendationRequest
from fiscal_navigator.domain.rates import RATE_TABLES, REEL_SOCIAL_CONTRIBUTION_FACTOR
from fiscal_navigator.infrastructure.observability.metrics import advisory_failure_counter, advisory_latency_histogram

ACTIVITY_LABELS = {
    ActivityType.VENTE_BIC: "Ventes de marchandises (BIC)",
    ActivityType.SERVICE_BIC: "Prestations de services commerciales et artisanales (BIC)",
    ActivityType.LIBERAL_BNC_AUTRE: "Autres prestations de services (BNC)",
    ActivityType.LIBERAL_BNC_CIPAV: "Professions libérales réglementées relevant de la Cipav (BNC)",
}


def _decimal(value: float) -> str:
    return f"{value:.2f}".replace(".", ",")


def _percent(rate: float) -> str:
    return f"{rate * 100:.1f}".rstrip("0").rstrip(".").replace(".", ",") + " %"


def _euros(amount: float) -> str:
    return f"{amount:,.2f}".replace(",", " ").replace(".", ",") + " €"


def build_prompt(request: RecommendationRequest) -> str:
    """French prompt comparing both regimes for the requested activity"""
    rates = RATE_TABLES[request.activity_type]
    factor = REEL_SOCIAL_CONTRIBUTION_FACTOR

    lines = [
        "Compte tenu des informations financières suivantes et du type d'activité, fournissez une brève "
        "recommandation EN FRANÇAIS pour déterminer si le 'Régime Réel' ou le 'Régime Micro' est probablement "
        "plus avantageux. Expliquez votre raisonnement en comparant les résultats finaux (revenu net après "
        "impôts et toutes cotisations sociales).",
        "",
        f"Chiffre d'affaires annuel : {_euros(request.annual_revenue)}",
        f"Charges annuelles réelles : {_euros(request.annual_expenses)}",
        f"Type d'activité : {ACTIVITY_LABELS[request.activity_type]}",
        "",
        "Régime Micro-Entreprise :",
        f"- Abattement forfaitaire pour l'impôt sur le revenu : {_percent(rates.allowance_rate)} "
        f"(minimum {_euros(rates.min_allowance)}).",
        f"- Cotisations sociales {_percent(rates.social_contribution_rate)} et CFP {_percent(rates.cfp_rate)}, "
        "calculées sur le chiffre d'affaires brut.",
        "",
        "Régime Réel simplifié :",
        "- Bénéfice avant cotisations = chiffre d'affaires - charges réelles.",
        f"- Cotisations sociales estimées à {_percent(factor)} du bénéfice après déduction de ces mêmes "
        f"cotisations, soit bénéfice / {_decimal(1 + factor)} * {_decimal(factor)}.",
        "- L'impôt sur le revenu porte sur le bénéfice diminué des cotisations.",
    ]

    if request.micro is not None and request.reel is not None:
        lines += [
            "",
            "Résultats calculés :",
            f"- Micro : impôt {_euros(request.micro.tax_amount)}, cotisations "
            f"{_euros(request.micro.total_contributions)}, revenu net {_euros(request.micro.net_income_after_all)}.",
            f"- Réel : impôt {_euros(request.reel.tax_amount)}, cotisations "
            f"{_euros(request.reel.estimated_social_contributions)}, revenu net "
            f"{_euros(request.reel.net_income_after_all_contributions)}.",
        ]

    lines += [
        "",
        "Indiquez clairement quel régime semble le plus avantageux globalement et pourquoi. "
        "La réponse doit être uniquement en français.",
    ]
    return "\n".join(lines)


class AdvisoryClient:
    """Client for the external generative text API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.advisory_api_base
        self.api_key = api_key or settings.advisory_api_key
        self.model = model or settings.advisory_model
        self.timeout = settings.advisory_timeout_seconds if timeout is None else timeout
        self.transport = transport

    async def generate_recommendation(self, request: RecommendationRequest) -> str:
        """
        Generate a French recommendation for the given simulation.

        Raises:
            AdvisoryUnavailableError: When unconfigured, on timeout, HTTP errors, or invalid response
        """
        try:
            return await self._generate(request)
        except AdvisoryUnavailableError:
            advisory_failure_counter.inc()
            raise

    async def _generate(self, request: RecommendationRequest) -> str:
        if not self.api_key:
            raise AdvisoryUnavailableError("Advisory API key is not configured")

        payload = {"contents": [{"role": "user", "parts": [{"text": build_prompt(request)}]}]}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with advisory_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/v1beta/models/{self.model}:generateContent",
                        headers={"x-goog-api-key": self.api_key},
                        json=payload,
                    )
                response.raise_for_status()
                data = response.json()

                text = data["candidates"][0]["content"]["parts"][0]["text"].strip()

            except httpx.TimeoutException as e:
                raise AdvisoryUnavailableError(f"Advisory API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise AdvisoryUnavailableError(f"Advisory API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise AdvisoryUnavailableError(f"Advisory API unreachable: {e}") from e
            except (KeyError, IndexError, ValueError, TypeError, AttributeError) as e:
                raise AdvisoryUnavailableError(f"Invalid advisory response: {e}") from e

        if not text:
            raise AdvisoryUnavailableError("Advisory API returned an empty recommendation")
        return text
