"""Feedback client - stub for an external feedback store"""

import asyncio
import logging

from fiscal_navigator.config import settings
from fiscal_navigator.domain.models import FeedbackOutcome
from fiscal_navigator.infrastructure.observability.metrics import feedback_counter

FEEDBACK_THANKS = "Merci pour votre retour ! Il a bien été pris en compte."
FEEDBACK_FAILURE = "Une erreur est survenue lors du traitement de votre retour."


class FeedbackClient:
    """
    Records user feedback.

    No real store is wired yet: feedback is logged and the external write is
    simulated with a non-blocking delay.
    """

    def __init__(self, delay: float | None = None):
        self.delay = settings.feedback_delay_seconds if delay is None else delay

    async def _store(self, feedback_text: str) -> None:
        logging.info("User feedback received", extra={"feedback_text": feedback_text})
        await asyncio.sleep(self.delay)

    async def submit(self, feedback_text: str) -> FeedbackOutcome:
        """Store feedback and report the outcome to the user"""
        try:
            await self._store(feedback_text)
        except Exception as e:
            feedback_counter.labels(outcome="failed").inc()
            logging.error(f"Feedback processing error: {e}")
            return FeedbackOutcome(success=False, message=FEEDBACK_FAILURE)

        feedback_counter.labels(outcome="stored").inc()
        return FeedbackOutcome(success=True, message=FEEDBACK_THANKS)
