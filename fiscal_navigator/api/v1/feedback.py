"""POST /v1/feedback - User feedback submission"""

from fastapi import APIRouter, Depends

from fiscal_navigator.api.v1.schemas import FeedbackRequest, FeedbackResponse
from fiscal_navigator.api.dependencies import get_feedback_client
from fiscal_navigator.infrastructure.clients.feedback import FeedbackClient

router = APIRouter()


@router.post("/feedback", response_model=FeedbackResponse)
async def submit_feedback(
    request_body: FeedbackRequest,
    feedback_client: FeedbackClient = Depends(get_feedback_client),
):
    """Store free-text feedback (1 to 2000 characters)"""
    outcome = await feedback_client.submit(request_body.feedback_text)
    return FeedbackResponse(success=outcome.success, message=outcome.message)
