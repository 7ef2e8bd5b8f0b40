"""Business logic for one participant's run through a quiz, shared by the UI
and the tests.

The attempt owns the selection store, the navigation controller and the
submission client. It is created only once the quiz and its questions are
loaded; if loading fails no attempt exists and the caller goes back to the
join screen.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum, auto
from threading import Lock

from quiz_client.core.errors import AttemptStateError
from quiz_client.core.models import (
    AttemptSubmission,
    Credential,
    Question,
    QuizInfo,
    Participant,
    ReconciledResult,
    Selection,
)
from quiz_client.core.services.navigation_controller import NavigationController
from quiz_client.core.services.question_set import QuestionSet
from quiz_client.core.services.scoring_reconciler import reconcile
from quiz_client.core.services.selection_store import AnswerSelectionStore
from quiz_client.core.submission import SubmissionClient

logger = logging.getLogger(__name__)


class AttemptState(Enum):
    IN_PROGRESS = auto()
    SUBMITTED = auto()
    DISCARDED = auto()


class QuizAttempt:
    """Facade over store, controller, submission and reconciliation."""

    def __init__(
        self,
        quiz: QuizInfo,
        participant: Participant,
        questions: Sequence[Question],
        submission_client: SubmissionClient,
        credential: Credential | None = None,
    ) -> None:
        self._lock = Lock()

        self.quiz = quiz
        self.participant = participant
        self._credential = credential
        self._submission_client = submission_client

        # Services
        self._questions = QuestionSet(questions)
        self._store = AnswerSelectionStore(self._questions.questions)
        self._navigation = NavigationController(self._questions.questions, self._store)

        self._state = AttemptState.IN_PROGRESS
        self._submitting = False
        self._result: ReconciledResult | None = None

    # --- Read access ---

    @property
    def state(self) -> AttemptState:
        with self._lock:
            return self._state

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions.questions

    @property
    def result(self) -> ReconciledResult | None:
        with self._lock:
            return self._result

    @property
    def current_question(self) -> Question:
        with self._lock:
            return self._navigation.current_question

    @property
    def position(self) -> int:
        with self._lock:
            return self._navigation.position

    @property
    def total(self) -> int:
        return self._navigation.total

    @property
    def progress(self) -> float:
        with self._lock:
            return self._navigation.progress

    def is_first(self) -> bool:
        with self._lock:
            return self._navigation.is_first

    def is_last(self) -> bool:
        with self._lock:
            return self._navigation.is_last

    def is_completed(self) -> bool:
        with self._lock:
            return self._navigation.is_completed

    def is_selected(self, option_id: int) -> bool:
        with self._lock:
            return self._store.is_selected(self._navigation.current_question.id, option_id)

    def current_is_answered(self) -> bool:
        with self._lock:
            return self._navigation.current_is_answered()

    def answered_count(self) -> int:
        with self._lock:
            return self._store.answered_count()

    def selections(self) -> dict[int, Selection]:
        with self._lock:
            return dict(self._store.snapshot())

    def can_finish(self) -> bool:
        with self._lock:
            return self._state is AttemptState.IN_PROGRESS and self._navigation.can_finish()

    # --- Participant input ---

    def choose(self, option_id: int) -> None:
        with self._lock:
            if self._state is not AttemptState.IN_PROGRESS:
                return
            self._navigation.choose(option_id)

    def next(self) -> bool:
        with self._lock:
            if self._state is not AttemptState.IN_PROGRESS:
                return False
            return self._navigation.next()

    def previous(self) -> bool:
        with self._lock:
            if self._state is not AttemptState.IN_PROGRESS:
                return False
            return self._navigation.previous()

    def discard(self) -> None:
        """Abandon the attempt. Nothing is submitted afterwards."""
        with self._lock:
            if self._state is AttemptState.IN_PROGRESS:
                self._state = AttemptState.DISCARDED
                logger.info("Attempt on quiz %s discarded", self.quiz.id)

    # --- Submission ---

    async def finish(self) -> ReconciledResult:
        """Complete, submit and reconcile.

        Raises ``IncompleteAttemptError`` when questions are unanswered and
        ``SubmissionError`` when grading could not be obtained. In both cases
        every selection is kept and ``finish`` can be called again.
        """
        with self._lock:
            self._ensure_submittable()
            if not self._navigation.is_completed:
                self._navigation.finish()
            submission = AttemptSubmission(
                quiz_id=self.quiz.id,
                participant=self.participant,
                answers=self._store.to_payload(),
            )
            self._submitting = True

        try:
            grading = await self._submission_client.submit(submission, self._credential)
        finally:
            with self._lock:
                self._submitting = False

        with self._lock:
            if self._state is not AttemptState.IN_PROGRESS:
                raise AttemptStateError("The attempt was discarded while it was being submitted.")
            self._state = AttemptState.SUBMITTED
            self._result = reconcile(
                self._questions.questions,
                self._store.snapshot(),
                grading,
                passing_score=self.quiz.passing_score,
            )
            logger.info(
                "Attempt on quiz %s scored %s/%s (%s)",
                self.quiz.id,
                self._result.score,
                self._result.total_questions,
                self._result.source.name.lower(),
            )
            return self._result

    async def retry_submission(self) -> ReconciledResult:
        with self._lock:
            if not self._navigation.is_completed:
                raise AttemptStateError("Nothing to retry: the attempt was never finished.")
        return await self.finish()

    def _ensure_submittable(self) -> None:
        if self._state is AttemptState.SUBMITTED:
            raise AttemptStateError("The attempt has already been submitted.")
        if self._state is AttemptState.DISCARDED:
            raise AttemptStateError("The attempt was discarded.")
        if self._submitting:
            raise AttemptStateError("The attempt is already being submitted.")
