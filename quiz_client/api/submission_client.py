"""Submission client delivering completed attempts to the quiz REST API."""

from __future__ import annotations

import logging

from quiz_client.api.quiz_api_client import QuizApiClient, QuizApiError
from quiz_client.core.errors import SubmissionError
from quiz_client.core.models import AttemptSubmission, Credential, GradingResponse

logger = logging.getLogger(__name__)


class HttpSubmissionClient:
    """Creates the server-side attempt record once, then posts the answers.

    The attempt id is remembered per quiz and participant so that retrying a
    failed submission does not open a second attempt on the server.
    """

    def __init__(self, api: QuizApiClient) -> None:
        self._api = api
        self._attempt_ids: dict[tuple[int, str, str], int] = {}

    async def submit(
        self,
        submission: AttemptSubmission,
        credential: Credential | None = None,
    ) -> GradingResponse:
        key = (
            submission.quiz_id,
            submission.participant.first_name,
            submission.participant.last_name,
        )
        try:
            attempt_id = self._attempt_ids.get(key)
            if attempt_id is None:
                attempt_id = await self._api.create_attempt(
                    submission.quiz_id,
                    submission.participant,
                    credential,
                )
                self._attempt_ids[key] = attempt_id
            return await self._api.submit_answers(attempt_id, submission, credential)
        except QuizApiError as exc:
            logger.warning("Submission for quiz %s failed: %s", submission.quiz_id, exc)
            raise SubmissionError(str(exc), exc.status_code) from exc
