"""Turn a join request or a practice file into a ready-to-run ``QuizAttempt``.

Loading happens strictly before an attempt exists: if the quiz cannot be
found or its questions cannot be fetched, the caller receives a
``QuizLoadError`` and stays on the join screen.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging
import re

from quiz_client.api.quiz_api_client import QuizApiClient, QuizLoadError
from quiz_client.api.submission_client import HttpSubmissionClient
from quiz_client.core.attempt_manager import QuizAttempt
from quiz_client.core.errors import NoContentError
from quiz_client.core.models import Credential, Participant, Question, QuizInfo
from quiz_client.core.quiz_importer import ImportedQuiz
from quiz_client.core.submission import OfflineSubmissionClient, SubmissionClient

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_NAME_MAX_LENGTH = 50


def normalize_access_code(access_code: str) -> str:
    return access_code.strip().upper()


def normalize_name(value: str) -> str:
    return _WHITESPACE.sub(" ", value.strip())


def build_participant(first_name: str, last_name: str) -> Participant:
    """Validate and clean the names typed on the join screen.

    Raises ``ValueError`` with a message suitable for display.
    """
    first = normalize_name(first_name)
    last = normalize_name(last_name)
    if not first or not last:
        raise ValueError("Please enter both your first and last name.")
    if len(first) > _NAME_MAX_LENGTH or len(last) > _NAME_MAX_LENGTH:
        raise ValueError(f"Names are limited to {_NAME_MAX_LENGTH} characters.")
    return Participant(first_name=first, last_name=last)


async def start_online_attempt(
    api: QuizApiClient,
    access_code: str,
    participant: Participant,
    credential: Credential | None = None,
    submission_client: SubmissionClient | None = None,
) -> QuizAttempt:
    code = normalize_access_code(access_code)
    quiz = await api.find_quiz_by_code(code)
    if not quiz.is_active:
        raise QuizLoadError("This quiz is not active at the moment.", 409)

    questions = await api.load_questions(quiz.id, credential)
    attempt = _build_attempt(
        quiz,
        participant,
        questions,
        submission_client or HttpSubmissionClient(api),
        credential,
    )
    logger.info(
        "Started attempt on quiz %s (%s) for %s with %d questions",
        quiz.id,
        quiz.access_code,
        participant.display_name,
        attempt.total,
    )
    return attempt


def start_practice_attempt(imported: ImportedQuiz, participant: Participant) -> QuizAttempt:
    quiz = QuizInfo(id=0, title=imported.title)
    attempt = _build_attempt(quiz, participant, imported.questions, OfflineSubmissionClient(), None)
    logger.info("Started practice attempt from %s", imported.source_path)
    return attempt


def _build_attempt(
    quiz: QuizInfo,
    participant: Participant,
    questions: Sequence[Question],
    submission_client: SubmissionClient,
    credential: Credential | None,
) -> QuizAttempt:
    if not questions:
        raise NoContentError("This quiz has no questions yet.")
    try:
        return QuizAttempt(quiz, participant, questions, submission_client, credential)
    except ValueError as exc:
        raise QuizLoadError(f"The quiz content is invalid: {exc}", 422) from exc
