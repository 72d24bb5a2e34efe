"""Unit tests for the advisory HTTP client"""

import httpx
import pytest
from prometheus_client import REGISTRY
from fiscal_navigator.config import settings
from fiscal_navigator.domain.exceptions import AdvisoryUnavailableError
from fiscal_navigator.domain.models import ActivityType, RecommendationRequest
from fiscal_navigator.domain.regimes import compute_micro, compute_reel
from fiscal_navigator.infrastructure.clients.advisory import AdvisoryClient, build_prompt


@pytest.fixture
def recommendation_request() -> RecommendationRequest:
    return RecommendationRequest(
        annual_revenue=50000,
        annual_expenses=10000,
        activity_type=ActivityType.LIBERAL_BNC_AUTRE,
        micro=compute_micro(50000, 10000, ActivityType.LIBERAL_BNC_AUTRE),
        reel=compute_reel(50000, 10000),
    )


def gemini_response(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def make_client(handler, api_key: str = "secret") -> AdvisoryClient:
    return AdvisoryClient(
        base_url="http://advisory.test",
        api_key=api_key,
        model="gemini-test",
        timeout=2.0,
        transport=httpx.MockTransport(handler),
    )


async def test_generate_recommendation_success(recommendation_request):
    """Posts the prompt and returns the first candidate's text"""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["api_key"] = request.headers["x-goog-api-key"]
        seen["body"] = request.read().decode()
        return httpx.Response(200, json=gemini_response("  Le Régime Réel est préférable.  "))

    text = await make_client(handler).generate_recommendation(recommendation_request)

    assert text == "Le Régime Réel est préférable."
    assert seen["url"] == "http://advisory.test/v1beta/models/gemini-test:generateContent"
    assert seen["api_key"] == "secret"
    assert "Autres prestations de services (BNC)" in seen["body"]


async def test_http_error_status(recommendation_request):
    client = make_client(lambda request: httpx.Response(503, json={"error": "overloaded"}))

    with pytest.raises(AdvisoryUnavailableError, match="503"):
        await client.generate_recommendation(recommendation_request)


async def test_timeout(recommendation_request):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(AdvisoryUnavailableError, match="timeout"):
        await make_client(handler).generate_recommendation(recommendation_request)


async def test_unreachable(recommendation_request):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AdvisoryUnavailableError, match="unreachable"):
        await make_client(handler).generate_recommendation(recommendation_request)


@pytest.mark.parametrize(
    "body",
    [{"candidates": []}, {"promptFeedback": {"blockReason": "SAFETY"}}, {"candidates": [{"content": {}}]}],
)
async def test_malformed_response(body, recommendation_request):
    client = make_client(lambda request: httpx.Response(200, json=body))

    with pytest.raises(AdvisoryUnavailableError, match="Invalid advisory response"):
        await client.generate_recommendation(recommendation_request)


async def test_empty_text(recommendation_request):
    client = make_client(lambda request: httpx.Response(200, json=gemini_response("   ")))

    with pytest.raises(AdvisoryUnavailableError, match="empty"):
        await client.generate_recommendation(recommendation_request)


async def test_missing_api_key(monkeypatch, recommendation_request):
    """No key configured: fail fast without any HTTP call"""
    monkeypatch.setattr(settings, "advisory_api_key", None)

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(AdvisoryUnavailableError, match="not configured"):
        await make_client(handler, api_key=None).generate_recommendation(recommendation_request)


def test_timeout_defaults_to_settings():
    assert AdvisoryClient(api_key="k").timeout == settings.advisory_timeout_seconds
    assert AdvisoryClient(api_key="k", timeout=0).timeout == 0
    assert AdvisoryClient(api_key="k", timeout=2.5).timeout == 2.5


async def test_failures_are_counted(recommendation_request):
    before = REGISTRY.get_sample_value("advisory_failures_total") or 0.0
    client = make_client(lambda request: httpx.Response(500))

    with pytest.raises(AdvisoryUnavailableError):
        await client.generate_recommendation(recommendation_request)

    assert REGISTRY.get_sample_value("advisory_failures_total") == before + 1


def test_build_prompt_uses_activity_rates(recommendation_request):
    prompt = build_prompt(recommendation_request)

    assert "50 000,00 €" in prompt
    assert "10 000,00 €" in prompt
    assert "34 %" in prompt  # allowance
    assert "23,1 %" in prompt  # social contributions
    assert "0,2 %" in prompt  # CFP
    assert "minimum 305,00 €" in prompt
    assert "bénéfice / 1,45 * 0,45" in prompt
    assert "revenu net 25 163,77 €" in prompt
    assert "revenu net 25 794,07 €" in prompt


def test_build_prompt_without_results():
    prompt = build_prompt(
        RecommendationRequest(annual_revenue=80000, annual_expenses=0, activity_type=ActivityType.VENTE_BIC)
    )

    assert "71 %" in prompt
    assert "12,3 %" in prompt
    assert "Résultats calculés" not in prompt
