"""Interface to the grading authority plus the offline practice implementation."""

from __future__ import annotations

import logging
from typing import Protocol

from quiz_client.core.models import AttemptSubmission, Credential, GradingResponse, NoGrading

logger = logging.getLogger(__name__)


class SubmissionClient(Protocol):
    """Sends a completed attempt to whoever grades it.

    Implementations raise :class:`~quiz_client.core.errors.SubmissionError`
    when no response could be obtained.
    """

    async def submit(
        self,
        submission: AttemptSubmission,
        credential: Credential | None = None,
    ) -> GradingResponse: ...


class OfflineSubmissionClient:
    """Practice mode: nothing is sent, the result is computed locally."""

    def __init__(self) -> None:
        self.submissions: list[AttemptSubmission] = []

    async def submit(
        self,
        submission: AttemptSubmission,
        credential: Credential | None = None,
    ) -> GradingResponse:
        self.submissions.append(submission)
        logger.info("Offline attempt for quiz %s graded locally", submission.quiz_id)
        return NoGrading()
