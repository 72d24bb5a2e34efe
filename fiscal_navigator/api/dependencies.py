"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from fiscal_navigator.infrastructure.clients.advisory import AdvisoryClient
from fiscal_navigator.infrastructure.clients.feedback import FeedbackClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_advisory_client() -> AdvisoryClient:
    """Provide advisory text API client instance"""
    return AdvisoryClient()


def get_feedback_client() -> FeedbackClient:
    """Provide feedback client instance"""
    return FeedbackClient()
