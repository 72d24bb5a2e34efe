"""Pytest fixtures for testing"""

import asyncio
import pytest
from fastapi.testclient import TestClient
from fiscal_navigator.api.main import create_app
from fiscal_navigator.api.dependencies import get_advisory_client, get_feedback_client
from fiscal_navigator.domain.exceptions import AdvisoryUnavailableError
from fiscal_navigator.domain.models import RecommendationRequest
from fiscal_navigator.infrastructure.clients.feedback import FeedbackClient

STUB_RECOMMENDATION = "Le Régime Réel semble plus avantageux au vu de vos charges."


class StubAdvisory:
    """Advisory generator returning fixed prose and remembering its requests"""

    def __init__(self, text: str = STUB_RECOMMENDATION):
        self.text = text
        self.requests: list[RecommendationRequest] = []

    async def generate_recommendation(self, request: RecommendationRequest) -> str:
        self.requests.append(request)
        return self.text


class FailingAdvisory:
    """Advisory generator that is always down"""

    def __init__(self, error: Exception | None = None):
        self.error = error or AdvisoryUnavailableError("Advisory API error: 503")

    async def generate_recommendation(self, request: RecommendationRequest) -> str:
        raise self.error


class SlowAdvisory:
    """Advisory generator slower than any reasonable timeout"""

    async def generate_recommendation(self, request: RecommendationRequest) -> str:
        await asyncio.sleep(5)
        return "trop tard"


@pytest.fixture
def stub_advisory() -> StubAdvisory:
    return StubAdvisory()


@pytest.fixture
def scenario_a() -> dict:
    """Liberal profession with moderate expenses"""
    return {"annualRevenue": 50000, "annualExpenses": 10000, "activityType": "LIBERAL_BNC_AUTRE"}


@pytest.fixture
def client(stub_advisory: StubAdvisory) -> TestClient:
    """Create FastAPI test client with a stub advisory generator"""
    app = create_app()
    app.dependency_overrides[get_advisory_client] = lambda: stub_advisory
    app.dependency_overrides[get_feedback_client] = lambda: FeedbackClient(delay=0)
    return TestClient(app)


@pytest.fixture
def failing_advisory() -> FailingAdvisory:
    return FailingAdvisory()


@pytest.fixture
def slow_advisory() -> SlowAdvisory:
    return SlowAdvisory()
