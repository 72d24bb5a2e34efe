"""Unit tests for the feedback stub"""

from unittest.mock import AsyncMock, patch
from fiscal_navigator.infrastructure.clients.feedback import FEEDBACK_FAILURE, FEEDBACK_THANKS, FeedbackClient


async def test_submit_feedback_success():
    outcome = await FeedbackClient(delay=0).submit("Très utile, merci !")

    assert outcome.success is True
    assert outcome.message == FEEDBACK_THANKS


async def test_submit_feedback_waits_for_simulated_write():
    with patch("fiscal_navigator.infrastructure.clients.feedback.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        await FeedbackClient(delay=0.5).submit("Ajoutez le versement libératoire")

    mock_sleep.assert_awaited_once_with(0.5)


async def test_submit_feedback_store_failure():
    client = FeedbackClient(delay=0)

    with patch.object(client, "_store", AsyncMock(side_effect=RuntimeError("sheet unavailable"))):
        outcome = await client.submit("Bug sur le formulaire")

    assert outcome.success is False
    assert outcome.message == FEEDBACK_FAILURE
